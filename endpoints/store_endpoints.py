# store_endpoints.py
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from persistence import repositories as persistence_repositories
from settings import get_settings

router = APIRouter(tags=["store"])
logger = logging.getLogger(__name__)

# Centralized settings
SETTINGS = get_settings()

STORE_PATH = SETTINGS.store_path
DEBUG_LOG_REQUESTS = SETTINGS.debug_log_requests

# Sent on every store response, error envelopes included.
STORE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_ALLOW_HEADERS = ["Content-Type"]

MSG_SAVED = "Shared data saved successfully"
MSG_UPDATED = "Shared data section updated successfully"
MSG_INVALID_DATA = "Invalid data"
MSG_INVALID_UPDATE = "Invalid update data"
MSG_METHOD_NOT_ALLOWED = "Method not allowed"

STORE_REPO = persistence_repositories.AsyncDiskSharedDocumentRepository()


def store_response(payload: Any, status_code: int = 200, headers: Mapping[str, str] | None = None) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers={**STORE_HEADERS, **(headers or {})})


def envelope(
    success: bool, message: str, status_code: int = 200, headers: Mapping[str, str] | None = None
) -> JSONResponse:
    return store_response({"success": success, "message": message}, status_code=status_code, headers=headers)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; once stored they cannot be rendered back.
    raise ValueError(f"invalid JSON constant {name}")


async def _read_json_body(request: Request) -> Any | None:
    """
    Parse the request body as JSON.

    Returns None for an empty body or invalid JSON, same as a literal `null`.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return None


@router.get(STORE_PATH)
async def read_shared_data():
    doc = await STORE_REPO.read()
    if DEBUG_LOG_REQUESTS:
        logger.info("STORE GET: %d top-level keys", len(doc))
    return store_response(doc)


@router.post(STORE_PATH)
async def replace_shared_data(request: Request):
    data = await _read_json_body(request)
    if not isinstance(data, dict) or not data:
        logger.warning("STORE POST: rejected body of type %s", type(data).__name__)
        return envelope(False, MSG_INVALID_DATA, status_code=400)

    saved = await STORE_REPO.replace(data)
    if DEBUG_LOG_REQUESTS:
        logger.info("STORE POST: replaced document (lastModified=%s)", saved.get("lastModified"))
    return envelope(True, MSG_SAVED)


@router.put(STORE_PATH)
async def update_shared_section(request: Request):
    data = await _read_json_body(request)
    section = data.get("section") if isinstance(data, dict) else None
    if not isinstance(section, str):
        logger.warning("STORE PUT: missing or invalid section")
        return envelope(False, MSG_INVALID_UPDATE, status_code=400)

    saved = await STORE_REPO.update_section(section, data.get("value"))
    if DEBUG_LOG_REQUESTS:
        logger.info("STORE PUT: updated section %r (lastModified=%s)", section, saved.get("lastModified"))
    return envelope(True, MSG_UPDATED)


@router.get("/healthz")
async def healthz():
    return JSONResponse({"status": "ok"})
