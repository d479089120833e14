"""FastAPI application factory.

Run with: uvicorn src.main:create_app --factory --port 8080
or:       python -m src.app_cli serve

Settings and the user store are built once here and kept on app.state;
handlers reach them through dependencies.
"""

import logging
import os
import platform
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import Settings, load_settings
from src.app_common.errors import AppError, StoreError, ValidationFailedError
from src.app_common.logging_setup import configure_logging
from src.app_common.request_log import RequestLogMiddleware
from src.app_common.response import ApiResponse, error_response, success_response
from src.app_users.api.router import router as users_router
from src.app_users.domain.repository import UserStore
from src.app_users.infrastructure.store import build_user_store

logger = logging.getLogger(__name__)

# Read by create_app() when no Settings are passed (uvicorn --factory, workers)
CONFIG_FILE_ENV = "APP_CONFIG_FILE"


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # Drop the leading "body"/"path" segment of the location
        loc = ".".join(str(p) for p in err["loc"][1:]) or "request"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(message).model_dump(),
    )


def create_app(
    settings: Settings | None = None,
    store: UserStore | None = None,
) -> FastAPI:
    if settings is None:
        settings = load_settings(os.environ.get(CONFIG_FILE_ENV))
    if store is None:
        store = build_user_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: apply the logging settings. Shutdown: dispose the store."""
        configure_logging(settings.logging)
        yield
        await app.state.user_store.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_store = store

    app.add_middleware(RequestLogMiddleware)
    if settings.features.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error_json(exc.http_status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        err = ValidationFailedError(_validation_message(exc))
        return _error_json(err.http_status, err.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_json(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _error_json(500, "Internal server error")

    endpoints = ["/health", "/ready", "/version"]
    if settings.features.api_enabled:
        app.include_router(users_router, prefix="/api")
        endpoints.append("/api/users")

    @app.get("/health")
    async def health() -> ApiResponse:
        return success_response("healthy")

    @app.get("/ready")
    async def ready(request: Request) -> ApiResponse:
        try:
            await request.app.state.user_store.ping()
        except StoreError as exc:
            raise StoreError(f"Database not ready: {exc.message}") from exc
        return success_response("ready")

    @app.get("/")
    async def root() -> ApiResponse:
        data: dict[str, Any] = {
            "name": settings.app_name,
            "version": settings.version,
            "endpoints": endpoints,
        }
        return success_response(data)

    @app.get("/version")
    async def version() -> ApiResponse:
        return success_response({
            "version": settings.version,
            "python_version": platform.python_version(),
        })

    return app
