"""Time-limited translation cache persisted to key-value storage.

The whole cache lives under one storage key as a JSON object of
``{locale: {"data": <bundle document>, "timestamp": <epoch seconds>}}``.
Expired entries are dropped when read.
"""

import json
import time
from typing import Any, Callable, Dict, Optional

from cabra_i18n.errors import StorageError
from cabra_i18n.i18n.models import TranslationBundle
from cabra_i18n.logging import get_module_logger
from cabra_i18n.storage import KeyValueStorage

logger = get_module_logger()


class TranslationCache:
    """Per-locale bundle cache with a fixed time-to-live.

    Storage problems never propagate: an unreadable blob is treated as an
    empty cache and a failed write only costs the next visit a fetch.

    Attributes:
        storage: Backend holding the serialized cache.
        storage_key: Key of the cache blob.
        ttl_seconds: Lifetime of an entry.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ):
        self.storage = storage
        self.storage_key = storage_key
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Dict[str, Any]] = self._read_blob()

    def _read_blob(self) -> Dict[str, Dict[str, Any]]:
        try:
            raw = self.storage.get_item(self.storage_key)
        except StorageError as e:
            logger.warning("translation_cache_unavailable", error=str(e))
            return {}
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("translation_cache_corrupt", error=str(e))
            return {}
        if not isinstance(data, dict):
            return {}
        return {
            locale: entry
            for locale, entry in data.items()
            if isinstance(entry, dict) and "data" in entry and "timestamp" in entry
        }

    def _write_blob(self) -> None:
        try:
            self.storage.set_item(
                self.storage_key, json.dumps(self._entries, ensure_ascii=False)
            )
        except StorageError as e:
            logger.warning("translation_cache_write_failed", error=str(e))

    def is_fresh(self, locale: str) -> bool:
        entry = self._entries.get(locale)
        if entry is None:
            return False
        try:
            age = self._clock() - float(entry["timestamp"])
        except (TypeError, ValueError):
            return False
        return age < self.ttl_seconds

    def get(self, locale: str) -> Optional[TranslationBundle]:
        """Return the cached bundle if it has not expired."""
        if locale not in self._entries:
            return None

        if not self.is_fresh(locale):
            logger.debug("translation_cache_expired", locale=locale)
            del self._entries[locale]
            self._write_blob()
            return None

        try:
            return TranslationBundle.from_document(locale, self._entries[locale]["data"])
        except ValueError as e:
            logger.warning("translation_cache_entry_invalid", locale=locale, error=str(e))
            del self._entries[locale]
            return None

    def set(self, bundle: TranslationBundle) -> None:
        self._entries[bundle.locale] = {
            "data": bundle.to_document(),
            "timestamp": self._clock(),
        }
        self._write_blob()

    def clear(self) -> None:
        self._entries.clear()
        try:
            self.storage.remove_item(self.storage_key)
        except StorageError as e:
            logger.warning("translation_cache_clear_failed", error=str(e))

    def __contains__(self, locale: str) -> bool:
        return self.is_fresh(locale)

    def __len__(self) -> int:
        return len(self._entries)
