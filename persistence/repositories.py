from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Protocol

from .document_state import DiskSharedDocumentRepository


class AsyncSharedDocumentRepository(Protocol):
    """
    Async persistence interface for the single shared document.
    Every write returns the document as it was persisted.
    """

    async def read(self) -> dict[str, Any]: ...
    async def replace(self, doc: dict[str, Any]) -> dict[str, Any]: ...
    async def update_section(self, section: str, value: Any) -> dict[str, Any]: ...


class AsyncDiskSharedDocumentRepository(AsyncSharedDocumentRepository):
    """
    Async wrapper around the disk-backed shared document repository.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._repo = DiskSharedDocumentRepository(path)

    @property
    def path(self) -> Path:
        return self._repo.path

    async def read(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._repo.read)

    async def replace(self, doc: dict[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._repo.replace, doc)

    async def update_section(self, section: str, value: Any) -> dict[str, Any]:
        return await asyncio.to_thread(self._repo.update_section, section, value)
