from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Protocol

from pydantic import BaseModel, ConfigDict, Field

from settings import get_settings

from . import paths
from .disk_store import DiskJsonDocumentStore

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class StatsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    heritageYears: int = 0
    masterCraftsmen: int = 1
    exclusivePieces: int = 3
    globalPresence: int = 1
    satisfiedCustomers: int = 0
    farmsBuilt: int = 0


class CounterConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    current: int = 0
    maxType: str = "none"
    maxValue: int | None = None


class AppConfig(BaseModel):
    """
    Typed view of the `config` section. Unknown settings are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    stats: StatsConfig = Field(default_factory=StatsConfig)
    melonCounter: CounterConfig = Field(default_factory=CounterConfig)
    masterpieces: list[Any] = Field(default_factory=list)
    statsBackgrounds: list[Any] = Field(default_factory=list)
    farms: list[Any] = Field(default_factory=list)
    particleImage: str | None = None
    textColors: list[Any] | dict[str, Any] = Field(default_factory=list)


class SharedDocument(BaseModel):
    """
    Mirrors the on-disk shared document:
      {
        "config": { ... },
        "contactRequests": [ ... newest first ... ],
        "lastModified": "<ISO-8601>"
      }

    Any other top-level key is carried through as an extra field.
    """

    model_config = ConfigDict(extra="allow")

    config: dict[str, Any] = Field(default_factory=dict)
    contactRequests: list[Any] = Field(default_factory=list)
    lastModified: str | None = None

    @classmethod
    def default(cls) -> "SharedDocument":
        return cls(config=AppConfig().model_dump(mode="json"), lastModified=utc_now_iso())

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "SharedDocument":
        return cls.model_validate(dict(doc))

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def app_config(self) -> AppConfig:
        return AppConfig.model_validate(self.config)


class SharedDocumentRepository(Protocol):
    def read(self) -> dict[str, Any]:
        ...

    def replace(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        ...

    def update_section(self, section: str, value: Any) -> dict[str, Any]:
        ...


class DiskSharedDocumentRepository(SharedDocumentRepository):
    """
    Stores the shared document as one pretty-printed JSON file.

    Writes pass the caller's document through verbatim except for stamping
    `lastModified`. There is no locking: update_section is a plain
    read-modify-write and concurrent writers can lose each other's updates.
    """

    def __init__(self, path: Path | None = None):
        if path is None:
            path = paths.store_file(paths.data_dir(), get_settings().store_data_file)
        self._store = DiskJsonDocumentStore(path)

    @property
    def path(self) -> Path:
        return self._store.path

    def read(self) -> dict[str, Any]:
        doc = self._store.load()
        if not doc:
            # Missing, empty or corrupt files are all treated as uninitialized.
            doc = SharedDocument.default().to_disk_doc()
            self._store.save(doc)
            logger.info("SHARED DOC: initialized default document at %s", self._store.path)
        return doc

    def replace(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        stamped = dict(doc)
        stamped["lastModified"] = utc_now_iso()
        self._store.save(stamped)
        return stamped

    def update_section(self, section: str, value: Any) -> dict[str, Any]:
        doc = self.read()
        doc[section] = value
        doc["lastModified"] = utc_now_iso()
        self._store.save(doc)
        return doc
