"""In-process storage backends."""

from typing import Dict, Optional

from cabra_i18n.errors import StorageError
from cabra_i18n.storage.base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed storage for development and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class DisabledStorage(KeyValueStorage):
    """Storage that refuses every operation.

    Stands in for a browser with storage disabled (private mode, quota
    exhausted); every call raises StorageError.
    """

    def get_item(self, key: str) -> Optional[str]:
        raise StorageError("Storage is disabled", key=key)

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("Storage is disabled", key=key)

    def remove_item(self, key: str) -> None:
        raise StorageError("Storage is disabled", key=key)

    def clear(self) -> None:
        raise StorageError("Storage is disabled")
