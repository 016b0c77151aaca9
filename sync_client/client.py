"""
Async client for the shared-state store.

Reads and writes go to the store's HTTP endpoint. When the endpoint cannot be
reached the client marks itself offline and, if local fallback is enabled,
serves reads from local storage and mirrors failed full saves into it.

Online/offline is decided only by the outcome of the latest call (including
the periodic connectivity check): there is no backoff and no hysteresis.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from persistence.document_state import AppConfig, utc_now_iso
from settings import Settings, get_settings

from .local_storage import DiskLocalStorage, LocalStorage, MemoryLocalStorage

logger = logging.getLogger(__name__)

CONFIG_KEY = "config"
CONTACT_REQUESTS_KEY = "contactRequests"

# Failures that flip the client offline: transport errors, non-2xx statuses
# (raise_for_status) and bodies that are not the expected JSON.
SYNC_ERRORS = (httpx.HTTPError, ValueError)


class ConnectionStatus(BaseModel):
    isOnline: bool
    usingSharedData: bool
    usingLocalStorage: bool
    apiEndpoint: str
    # Exposed for callers but never advanced by the client.
    lastSyncTime: float = 0


class SharedStateClient:
    """Shared-state client with local storage fallback.

    Construct one per application and pass it to whatever needs the shared
    data. Use it as an async context manager, or call start() and aclose(),
    to run the periodic connectivity check for the application's lifetime.

    Args:
        settings: Client configuration; defaults to get_settings().
        local_storage: Fallback storage; defaults to a DiskLocalStorage when
            SYNC_LOCAL_STORAGE_FILE is set, else in-memory storage.
        http_client: Injected httpx client. An injected client is not closed
            by aclose().
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        local_storage: LocalStorage | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = settings or get_settings()

        self.api_endpoint = settings.sync_api_endpoint
        self.fallback_to_local_storage = settings.sync_fallback_to_local
        self.sync_interval = settings.sync_interval_seconds
        self.last_sync_time: float = 0
        self.is_online = True

        if local_storage is None:
            if settings.sync_local_storage_file:
                local_storage = DiskLocalStorage(Path(settings.sync_local_storage_file))
            else:
                local_storage = MemoryLocalStorage()
        self._local = local_storage

        self._owns_http_client = http_client is None
        if http_client is None:
            if settings.sync_http_timeout is None:
                http_client = httpx.AsyncClient()
            else:
                http_client = httpx.AsyncClient(timeout=settings.sync_http_timeout)
        self._http = http_client

        self._sync_task: asyncio.Task[None] | None = None

    @property
    def local_storage(self) -> LocalStorage:
        return self._local

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    async def __aenter__(self) -> "SharedStateClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def start(self) -> None:
        """Run one connectivity check, then keep checking every sync_interval seconds."""
        if self._sync_task is not None:
            return
        await self.check_connectivity()
        self._sync_task = asyncio.create_task(self._sync_loop())

    async def stop(self) -> None:
        """Cancel the periodic connectivity check."""
        if self._sync_task:
            self._sync_task.cancel()
            try:
                await self._sync_task
            except asyncio.CancelledError:
                pass
            self._sync_task = None

    async def aclose(self) -> None:
        await self.stop()
        if self._owns_http_client:
            await self._http.aclose()

    async def _sync_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sync_interval)
            try:
                await self.check_connectivity()
            except Exception as e:
                logger.warning("SYNC CHECK: unexpected error: %r", e)

    # -------------------------------------------------------------------
    # Remote access
    # -------------------------------------------------------------------
    async def _fetch_shared_data(self) -> dict[str, Any]:
        # Timestamp query parameter defeats intermediate caches.
        response = await self._http.get(self.api_endpoint, params={"t": int(time.time() * 1000)})
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    async def check_connectivity(self) -> bool:
        """Probe the endpoint without local fallback and record the result."""
        try:
            await self._fetch_shared_data()
        except SYNC_ERRORS as e:
            if self.is_online:
                logger.warning("SYNC CHECK: cannot reach %s, using local storage: %r", self.api_endpoint, e)
            self.is_online = False
            return False
        if not self.is_online:
            logger.info("SYNC CHECK: reconnected to %s", self.api_endpoint)
        self.is_online = True
        return True

    async def load_shared_data(self) -> dict[str, Any]:
        try:
            data = await self._fetch_shared_data()
        except SYNC_ERRORS as e:
            logger.warning("SYNC LOAD: failed to load %s: %r", self.api_endpoint, e)
            self.is_online = False
            if self.fallback_to_local_storage:
                return self.load_local_data()
            raise
        self.is_online = True
        logger.debug("SYNC LOAD: loaded %d top-level keys", len(data))
        return data

    async def save_shared_data(self, data: Mapping[str, Any]) -> bool:
        """Replace the whole shared document.

        On failure the stamped data is mirrored into local storage (when
        fallback is enabled) and the error is re-raised.
        """
        payload = dict(data)
        payload["lastModified"] = utc_now_iso()
        try:
            response = await self._http.post(self.api_endpoint, json=payload)
            response.raise_for_status()
            result = response.json()
        except SYNC_ERRORS as e:
            logger.warning("SYNC SAVE: failed to save to %s: %r", self.api_endpoint, e)
            self.is_online = False
            if self.fallback_to_local_storage:
                self.save_local_data(payload)
            raise
        logger.debug("SYNC SAVE: %s", result)
        self.is_online = True
        return True

    async def update_section(self, section: str, value: Any) -> bool:
        try:
            response = await self._http.put(self.api_endpoint, json={"section": section, "value": value})
            response.raise_for_status()
            result = response.json()
        except SYNC_ERRORS as e:
            logger.warning("SYNC UPDATE: failed to update section %r: %r", section, e)
            self.is_online = False
            raise
        logger.debug("SYNC UPDATE: section %r: %s", section, result)
        self.is_online = True
        return True

    async def save_section(self, section: str, value: Any) -> None:
        """
        Save one top-level section, degrading to a full load/modify/save when
        the partial update fails. Errors from the full save propagate.
        """
        try:
            await self.update_section(section, value)
        except SYNC_ERRORS:
            data = await self.load_shared_data()
            data[section] = value
            await self.save_shared_data(data)

    # -------------------------------------------------------------------
    # Local fallback
    # -------------------------------------------------------------------
    def _read_local(self, key: str, default: Any) -> Any:
        raw = self._local.get_item(key)
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except ValueError as e:
            logger.warning("LOCAL LOAD: ignoring corrupt %r: %r", key, e)
            return default
        return default if value is None else value

    def load_local_data(self) -> dict[str, Any]:
        data = {
            CONFIG_KEY: self._read_local(CONFIG_KEY, {}),
            CONTACT_REQUESTS_KEY: self._read_local(CONTACT_REQUESTS_KEY, []),
            "lastModified": utc_now_iso(),
        }
        logger.info("LOCAL LOAD: serving shared data from local storage")
        return data

    def save_local_data(self, data: Mapping[str, Any]) -> None:
        self._local.set_item(CONFIG_KEY, json.dumps(data.get(CONFIG_KEY) or {}))
        self._local.set_item(CONTACT_REQUESTS_KEY, json.dumps(data.get(CONTACT_REQUESTS_KEY) or []))
        logger.info("LOCAL SAVE: mirrored shared data to local storage")

    # -------------------------------------------------------------------
    # Section accessors
    # -------------------------------------------------------------------
    async def get_config(self) -> dict[str, Any]:
        data = await self.load_shared_data()
        return data.get(CONFIG_KEY) or {}

    async def get_config_model(self) -> AppConfig:
        return AppConfig.model_validate(await self.get_config())

    async def save_config(self, config: Mapping[str, Any] | AppConfig) -> None:
        if isinstance(config, AppConfig):
            config = config.model_dump(mode="json")
        await self.save_section(CONFIG_KEY, dict(config))

    async def get_contact_requests(self) -> list[Any]:
        data = await self.load_shared_data()
        return data.get(CONTACT_REQUESTS_KEY) or []

    async def save_contact_requests(self, requests: list[Any]) -> None:
        await self.save_section(CONTACT_REQUESTS_KEY, list(requests))

    async def add_contact_request(self, request: Any) -> list[Any]:
        """Insert a request at the head of the list and save the whole list back."""
        requests = list(await self.get_contact_requests())
        requests.insert(0, request)
        await self.save_contact_requests(requests)
        return requests

    def get_connection_status(self) -> ConnectionStatus:
        return ConnectionStatus(
            isOnline=self.is_online,
            usingSharedData=self.is_online,
            usingLocalStorage=not self.is_online or self.fallback_to_local_storage,
            apiEndpoint=self.api_endpoint,
            lastSyncTime=self.last_sync_time,
        )
