"""Tests for cabra_i18n.storage backends and factory."""

import json

import pytest

from cabra_i18n.configuration import StorageSettings
from cabra_i18n.errors import StorageError
from cabra_i18n.storage import (
    DisabledStorage,
    InMemoryStorage,
    JsonFileStorage,
    create_storage,
)

pytestmark = pytest.mark.unit


class TestInMemoryStorage:
    def test_set_get_remove(self):
        storage = InMemoryStorage()
        storage.set_item("locale", "ar")
        assert storage.get_item("locale") == "ar"
        storage.remove_item("locale")
        assert storage.get_item("locale") is None

    def test_values_stored_as_strings(self):
        storage = InMemoryStorage()
        storage.set_item("count", 3)
        assert storage.get_item("count") == "3"

    def test_initial_data_and_clear(self):
        storage = InMemoryStorage({"a": "1", "b": "2"})
        assert len(storage) == 2
        storage.clear()
        assert len(storage) == 0

    def test_remove_missing_key_is_noop(self):
        InMemoryStorage().remove_item("missing")


class TestDisabledStorage:
    """DisabledStorage raises StorageError on every call."""

    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.get_item("locale"),
            lambda s: s.set_item("locale", "en"),
            lambda s: s.remove_item("locale"),
            lambda s: s.clear(),
        ],
    )
    def test_every_operation_raises(self, call):
        with pytest.raises(StorageError):
            call(DisabledStorage())


class TestJsonFileStorage:
    def test_missing_file_reads_as_empty(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "prefs.json"))
        assert storage.get_item("locale") is None

    def test_values_persist_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        JsonFileStorage(str(path)).set_item("locale", "ja")

        assert JsonFileStorage(str(path)).get_item("locale") == "ja"
        assert json.loads(path.read_text(encoding="utf-8")) == {"locale": "ja"}

    def test_remove_and_clear(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "prefs.json"))
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.remove_item("a")
        assert storage.get_item("a") is None
        assert storage.get_item("b") == "2"
        storage.clear()
        assert storage.get_item("b") is None

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStorage(str(path)).get_item("locale")

    def test_non_object_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStorage(str(path)).get_item("locale")

    def test_no_temporary_file_left_behind(self, tmp_path):
        JsonFileStorage(str(tmp_path / "prefs.json")).set_item("locale", "es")
        assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]


class TestCreateStorage:
    def test_memory_backend(self):
        storage = create_storage(StorageSettings(STORAGE_BACKEND="memory"))
        assert isinstance(storage, InMemoryStorage)

    def test_file_backend(self, tmp_path):
        path = str(tmp_path / "prefs.json")
        storage = create_storage(StorageSettings(STORAGE_BACKEND="file", STORAGE_FILE_PATH=path))
        assert isinstance(storage, JsonFileStorage)
        assert str(storage.path) == path

    def test_unknown_backend_raises(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_storage(StorageSettings(STORAGE_BACKEND="redis"))
