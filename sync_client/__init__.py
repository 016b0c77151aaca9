from __future__ import annotations

from .client import CONFIG_KEY, CONTACT_REQUESTS_KEY, ConnectionStatus, SharedStateClient
from .local_storage import DiskLocalStorage, LocalStorage, MemoryLocalStorage

__all__ = [
    "CONFIG_KEY",
    "CONTACT_REQUESTS_KEY",
    "ConnectionStatus",
    "SharedStateClient",
    "LocalStorage",
    "MemoryLocalStorage",
    "DiskLocalStorage",
]
