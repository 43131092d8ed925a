# exception handlers (error_id)
from __future__ import annotations

import uuid
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from server.api.errors import ApiError
from server.api.logging_config import configure_logging
from server.api.services import metrics
from server.api.settings import Settings


def build_api_error_handler(settings: Settings):
    logger = configure_logging(settings)

    async def handler(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            metrics.inc("http_errors_5xx_total", 1)
        logger.debug(
            "api_error",
            extra={"status": exc.status_code, "path": request.url.path, "error": exc.message},
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    return handler


def build_validation_error_handler(settings: Settings):
    logger = configure_logging(settings)

    async def handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("invalid_request", extra={"path": request.url.path, "errors": exc.errors()})
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    return handler


def build_exception_handler(settings: Settings):
    logger = configure_logging(settings)

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        error_id = uuid.uuid4().hex
        req_id = getattr(request.state, "request_id", None)

        logger.exception(
            "unhandled_exception",
            extra={"error_id": error_id, "request_id": req_id, "path": request.url.path},
        )
        metrics.inc("http_errors_5xx_total", 1)

        payload: dict[str, Any] = {"error": "Internal Server Error", "error_id": error_id}
        if isinstance(req_id, str) and req_id:
            payload["request_id"] = req_id

        return JSONResponse(status_code=500, content=payload)

    return handler
