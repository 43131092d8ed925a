from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from server.api.deps import get_settings, get_third_party_client
from server.api.errors import ApiError
from server.api.middleware import (
    build_api_error_handler,
    build_exception_handler,
    build_request_id_middleware,
    build_validation_error_handler,
)
from server.api.routers.health import router as health_router
from server.api.routers.movies import router as movies_router

_settings = get_settings()


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # cliente efectivo (incluye dependency_overrides)
    provider = app.dependency_overrides.get(get_third_party_client, get_third_party_client)
    provider().close()


def create_app() -> FastAPI:
    app = FastAPI(title="Movie Catalog API", version="1.0.0", lifespan=_lifespan)

    app.add_middleware(GZipMiddleware, minimum_size=max(0, _settings.gzip_min_size))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.cors_allow_origins(),
        allow_credentials=_settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(build_request_id_middleware(_settings))
    app.add_exception_handler(ApiError, build_api_error_handler(_settings))
    app.add_exception_handler(RequestValidationError, build_validation_error_handler(_settings))
    app.add_exception_handler(Exception, build_exception_handler(_settings))

    app.include_router(health_router)
    app.include_router(movies_router)

    return app


app = create_app()
