"""Key-value storage backends (the localStorage stand-in)."""

from cabra_i18n.storage.base import KeyValueStorage
from cabra_i18n.storage.factory import create_storage
from cabra_i18n.storage.file import JsonFileStorage
from cabra_i18n.storage.memory import DisabledStorage, InMemoryStorage

__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "DisabledStorage",
    "JsonFileStorage",
    "create_storage",
]
