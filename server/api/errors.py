from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    """Error de negocio con status HTTP; se serializa como {"error": message}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, status_code: int | None = None, message: str | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        if message:
            self.message = message
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"
