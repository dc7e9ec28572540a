"""Tests for qrdeck.storage."""

import json

import pytest

from qrdeck.errors import PersistenceError
from qrdeck.storage import LocalStorage


def test_new_storage_does_not_exist(storage):
    assert not storage.exists()
    assert storage.get_item("anything") is None


def test_set_and_get_item(storage):
    storage.set_item("k", {"a": [1, 2]})
    assert storage.exists()
    assert storage.get_item("k") == {"a": [1, 2]}


def test_keys_are_independent(storage):
    storage.set_item("one", 1)
    storage.set_item("two", 2)
    assert storage.get_item("one") == 1
    assert storage.get_item("two") == 2


def test_remove_item(storage):
    storage.set_item("k", "v")
    storage.remove_item("k")
    assert storage.get_item("k") is None
    storage.remove_item("missing")  # no-op


def test_creates_parent_directories(tmp_path):
    storage = LocalStorage(tmp_path / "nested" / "dir" / "storage.json")
    storage.set_item("k", True)
    assert storage.path.exists()


def test_no_temp_file_left_behind(storage):
    storage.set_item("k", "v")
    assert not storage.path.with_suffix(".tmp").exists()


def test_invalid_json_reads_as_empty(storage):
    storage.path.write_text("{not json")
    assert storage.get_item("k") is None


def test_non_object_reads_as_empty(storage):
    storage.path.write_text(json.dumps([1, 2, 3]))
    assert storage.get_item("k") is None


def test_write_over_garbage_replaces_it(storage):
    storage.path.write_text("garbage")
    storage.set_item("k", "v")
    assert json.loads(storage.path.read_text()) == {"k": "v"}


def test_unserialisable_value_raises_persistence_error(storage):
    with pytest.raises(PersistenceError):
        storage.set_item("k", object())


def test_unwritable_location_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    storage = LocalStorage(blocker / "storage.json")
    with pytest.raises(PersistenceError):
        storage.set_item("k", "v")
