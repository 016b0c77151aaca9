from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    load_dotenv("local.env")

    from endpoints.store_endpoints import (
        CORS_ALLOW_HEADERS,
        CORS_ALLOW_METHODS,
        MSG_METHOD_NOT_ALLOWED,
        envelope,
        router as store_router,
    )

    app = FastAPI(title="Shared State Store")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        # Unsupported methods on the store path get the same envelope as other store errors.
        if exc.status_code == 405:
            logger.info("STORE %s: method not allowed on %s", request.method, request.url.path)
            return envelope(False, MSG_METHOD_NOT_ALLOWED, status_code=405, headers=exc.headers)
        return await http_exception_handler(request, exc)

    app.include_router(store_router)

    return app


app = create_app()
