"""Unit tests for local key-value storage."""

import sqlite3

import pytest

from zacksrank.data.exceptions import StorageError
from zacksrank.data.storage import LocalStorage


class TestLocalStorage:
    """Tests for LocalStorage."""

    def test_get_set(self, storage: LocalStorage) -> None:
        """Test basic get/set operations."""
        assert storage.get_item("key") is None

        storage.set_item("key", "value")
        assert storage.get_item("key") == "value"

        storage.set_item("key", "other")
        assert storage.get_item("key") == "other"

    def test_remove_item(self, storage: LocalStorage) -> None:
        """Test removing present and absent keys."""
        storage.set_item("key", "value")
        storage.remove_item("key")
        storage.remove_item("missing")
        assert storage.get_item("key") is None

    def test_all_items(self, storage: LocalStorage) -> None:
        """Test listing every stored entry."""
        storage.set_item("b", "2")
        storage.set_item("a", "1")
        assert storage.all_items() == {"a": "1", "b": "2"}

    def test_persists_across_instances(self, tmp_path) -> None:
        """Test values survive reopening the same file."""
        path = tmp_path / "nested" / "store.db"
        LocalStorage(path).set_item("key", "value")
        assert LocalStorage(path).get_item("key") == "value"

    def test_read_error_raises_storage_error(self, storage: LocalStorage) -> None:
        """Test a broken database surfaces as StorageError."""
        with sqlite3.connect(storage.storage_path) as conn:
            conn.execute("DROP TABLE local_storage")
            conn.commit()

        with pytest.raises(StorageError):
            storage.get_item("key")

    def test_expands_home_directory(self, tmp_path, monkeypatch) -> None:
        """Test a leading ~ resolves to the user's home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))

        storage = LocalStorage("~/state/store.db")
        storage.set_item("key", "value")

        assert storage.storage_path == tmp_path / "state" / "store.db"
        assert storage.storage_path.exists()
