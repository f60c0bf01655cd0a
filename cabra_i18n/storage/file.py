"""JSON file storage backend."""

import json
import os
from pathlib import Path
from typing import Dict, Optional

from cabra_i18n.errors import StorageError
from cabra_i18n.logging import get_module_logger
from cabra_i18n.storage.base import KeyValueStorage

logger = get_module_logger()


class JsonFileStorage(KeyValueStorage):
    """Storage persisted as a single JSON object on disk.

    The whole file is read on each access and rewritten on each change, so
    several processes see each other's writes (last writer wins).
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read storage file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not hold an object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write storage file {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        self._write(data)
        logger.debug("storage_item_written", key=key, path=str(self.path))

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        self._write({})
