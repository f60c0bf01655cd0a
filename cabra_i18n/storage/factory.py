"""Storage backend factory."""

from typing import Optional

from cabra_i18n.configuration import StorageSettings
from cabra_i18n.logging import get_module_logger
from cabra_i18n.storage.base import KeyValueStorage
from cabra_i18n.storage.file import JsonFileStorage
from cabra_i18n.storage.memory import InMemoryStorage

logger = get_module_logger()


def create_storage(storage_settings: Optional[StorageSettings] = None) -> KeyValueStorage:
    """Create the storage backend selected by configuration.

    Args:
        storage_settings: Storage section. Defaults to a fresh StorageSettings
            read from the environment.

    Returns:
        InMemoryStorage or JsonFileStorage.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    storage_settings = storage_settings or StorageSettings()
    backend = storage_settings.backend.lower()

    if backend == "memory":
        storage: KeyValueStorage = InMemoryStorage()
    elif backend == "file":
        storage = JsonFileStorage(storage_settings.file_path)
    else:
        raise ValueError(f"Unknown storage backend: {storage_settings.backend}")

    logger.info("initialized_storage", backend=backend)
    return storage
