"""Key-value storage abstract base class."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """Abstract base class for persisted string storage.

    Mirrors the browser's localStorage contract: string keys, string values,
    and any backend failure surfaces as StorageError.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Get the stored value for a key.

        Args:
            key: Storage key.

        Returns:
            Stored string, or None if the key is absent.

        Raises:
            StorageError: If the backend is unavailable.
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key.

        Raises:
            StorageError: If the backend is unavailable or full.
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass
