from __future__ import annotations

import json

import pytest

from sync_client.local_storage import DiskLocalStorage, MemoryLocalStorage


@pytest.fixture(params=["memory", "disk"])
def storage(request, tmp_path):
    if request.param == "memory":
        return MemoryLocalStorage()
    return DiskLocalStorage(tmp_path / "local-storage.json")


def test_basic_item_operations(storage):
    assert storage.get_item("config") is None

    storage.set_item("config", '{"a": 1}')
    storage.set_item("contactRequests", "[]")
    assert storage.get_item("config") == '{"a": 1}'

    storage.remove_item("config")
    storage.remove_item("never-set")
    assert storage.get_item("config") is None
    assert storage.get_item("contactRequests") == "[]"

    storage.clear()
    assert storage.get_item("contactRequests") is None


def test_disk_storage_survives_new_instance(tmp_path):
    path = tmp_path / "nested" / "local-storage.json"
    DiskLocalStorage(path).set_item("config", '{"theme": "dark"}')

    assert DiskLocalStorage(path).get_item("config") == '{"theme": "dark"}'
    assert json.loads(path.read_text(encoding="utf-8")) == {"config": '{"theme": "dark"}'}


def test_disk_storage_ignores_non_string_values(tmp_path):
    path = tmp_path / "local-storage.json"
    path.write_text(json.dumps({"config": {"not": "a string"}}), encoding="utf-8")

    assert DiskLocalStorage(path).get_item("config") is None
