from __future__ import annotations

from .disk_store import DiskJsonDocumentStore
from .document_state import (
    AppConfig,
    CounterConfig,
    DiskSharedDocumentRepository,
    SharedDocument,
    SharedDocumentRepository,
    StatsConfig,
)
from .repositories import AsyncDiskSharedDocumentRepository, AsyncSharedDocumentRepository

__all__ = [
    "DiskJsonDocumentStore",
    "AppConfig",
    "CounterConfig",
    "StatsConfig",
    "SharedDocument",
    "SharedDocumentRepository",
    "DiskSharedDocumentRepository",
    "AsyncSharedDocumentRepository",
    "AsyncDiskSharedDocumentRepository",
]
