from __future__ import annotations

from pathlib import Path
from typing import Protocol

from persistence.disk_store import DiskJsonDocumentStore


class LocalStorage(Protocol):
    """
    Browser-style local storage: string keys mapped to string values.
    """

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryLocalStorage(LocalStorage):
    """Process-local storage; lost when the process exits."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class DiskLocalStorage(LocalStorage):
    """
    Keeps every key in one JSON object file:
      { "<key>": "<string value>", ... }

    Non-string values found in the file are ignored on read.
    """

    def __init__(self, path: Path):
        self._store = DiskJsonDocumentStore(path)

    @property
    def path(self) -> Path:
        return self._store.path

    def get_item(self, key: str) -> str | None:
        value = self._store.load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._store.load()
        data[key] = str(value)
        self._store.save(data)

    def remove_item(self, key: str) -> None:
        data = self._store.load()
        if key not in data:
            return
        data.pop(key, None)
        self._store.save(data)

    def clear(self) -> None:
        self._store.save({})
