from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float | None) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    # Deployment / URLs
    local_base_url: str
    store_path: str

    # Store service
    store_data_file: str

    # Sync client
    sync_api_endpoint: str
    sync_interval_seconds: float
    sync_fallback_to_local: bool
    sync_local_storage_file: str
    # None inherits the HTTP client's own default timeout
    sync_http_timeout: float | None

    # Debug
    debug_log_requests: bool


def get_settings() -> Settings:
    local_base_url = (os.getenv("LOCAL_BASE_URL", "http://127.0.0.1:8000")).rstrip("/")

    store_path = "/" + os.getenv("STORE_PATH", "/api/shared-data").strip().strip("/")
    store_data_file = os.getenv("STORE_DATA_FILE", "shared-data.json").strip() or "shared-data.json"

    sync_api_endpoint = (os.getenv("SYNC_API_ENDPOINT", "")).strip() or f"{local_base_url}{store_path}"
    sync_interval_seconds = _env_float("SYNC_INTERVAL_SECONDS", 3.0) or 3.0
    if sync_interval_seconds <= 0:
        sync_interval_seconds = 3.0
    sync_fallback_to_local = _env_bool("SYNC_FALLBACK_TO_LOCAL", True)
    sync_local_storage_file = (os.getenv("SYNC_LOCAL_STORAGE_FILE", "")).strip()
    sync_http_timeout = _env_float("SYNC_HTTP_TIMEOUT", None)

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", True)

    return Settings(
        local_base_url=local_base_url,
        store_path=store_path,
        store_data_file=store_data_file,
        sync_api_endpoint=sync_api_endpoint,
        sync_interval_seconds=sync_interval_seconds,
        sync_fallback_to_local=sync_fallback_to_local,
        sync_local_storage_file=sync_local_storage_file,
        sync_http_timeout=sync_http_timeout,
        debug_log_requests=debug_log_requests,
    )
