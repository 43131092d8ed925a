# handlers + formato de logs del server
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final

from server.api.settings import Settings, _env_bool, _env_int, _env_str

LOGGER_NAME = "movie_catalog_api"

_HANDLER_TAG: Final[str] = "_movie_catalog_api_handler"

SERVER_DIR = Path(__file__).resolve().parents[1]

# Campos de `extra` que se añaden al final de la línea (middleware / handlers de error)
CONTEXT_FIELDS: Final[tuple[str, ...]] = (
    "request_id",
    "method",
    "path",
    "status",
    "duration_ms",
    "error_id",
    "error",
)

_BASE_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ContextFormatter(logging.Formatter):
    """Formatter estándar + `k=v` para los campos de contexto presentes en el record."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        parts = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not parts:
            return base
        return f"{base} | {' '.join(parts)}"


def _resolve_file_path() -> Path | None:
    if not _env_bool("LOGGER_FILE_ENABLED", False):
        return None

    p = Path(_env_str("LOGGER_FILE_PATH", "logs/api.log")).expanduser()
    if not p.is_absolute():
        p = SERVER_DIR / p
    return p.resolve()


def _tagged(root: logging.Logger, kind: str) -> logging.Handler | None:
    for handler in root.handlers:
        if getattr(handler, _HANDLER_TAG, None) == kind:
            return handler
    return None


def _ensure_console_handler(root: logging.Logger, *, level: str) -> None:
    existing = _tagged(root, "console")
    if existing is not None:
        existing.setLevel(level)
        return

    # si quien arranca el proceso ya configuró el root, se respeta
    if root.handlers or not _env_bool("LOGGER_CONSOLE_ENABLED", True):
        return

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(ContextFormatter(_BASE_FORMAT))
    setattr(handler, _HANDLER_TAG, "console")
    root.addHandler(handler)


def _ensure_file_handler(root: logging.Logger, *, level: str) -> None:
    existing = _tagged(root, "file")
    if existing is not None:
        existing.setLevel(level)
        return

    path = _resolve_file_path()
    if path is None:
        return

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=max(0, _env_int("LOGGER_FILE_MAX_BYTES", 5_000_000)),
            backupCount=max(0, _env_int("LOGGER_FILE_BACKUPS", 3)),
            encoding="utf-8",
            delay=True,
        )
    except OSError as exc:
        logging.getLogger(LOGGER_NAME).warning("log file unavailable (%s): %r", path, exc)
        return

    handler.setLevel(level)
    handler.setFormatter(ContextFormatter(_BASE_FORMAT))
    setattr(handler, _HANDLER_TAG, "file")
    root.addHandler(handler)


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Idempotente (se llama desde cada middleware/handler al construirse).

    - Consola: solo si nadie más ha configurado el root (uvicorn deja el root libre).
    - Fichero rotativo opcional: LOGGER_FILE_ENABLED / LOGGER_FILE_PATH.
    - El nivel sale de settings.log_level.
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level)
    _ensure_file_handler(root, level=settings.log_level)
    _ensure_console_handler(root, level=settings.log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)
    return logger
