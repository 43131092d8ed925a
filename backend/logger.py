from __future__ import annotations

"""
backend/logger.py

Logger central del dominio (fachada sobre `logging`).

API estable
-----------
- debug / info / warning / error
- get_logger()

Política
--------
- SILENT_MODE=1: suprime debug/info/warning (salvo always=True). `error()` siempre emite.
- DEBUG_MODE=1: baja el nivel a DEBUG si LOG_LEVEL no está definido.
- El logging nunca debe romper una request.

Los flags se leen del entorno en la primera llamada (inicialización idempotente).
"""

import logging
import os
import threading
from types import TracebackType
from typing import Final, Mapping, TypedDict

from typing_extensions import TypeAlias

_ExcInfoTuple: TypeAlias = tuple[type[BaseException], BaseException, TracebackType | None]
ExcInfo: TypeAlias = bool | _ExcInfoTuple | BaseException | None


class LogKwargs(TypedDict, total=False):
    exc_info: ExcInfo
    stack_info: bool
    stacklevel: int
    extra: Mapping[str, object] | None


def _filter_log_kwargs(kwargs: Mapping[str, object]) -> LogKwargs:
    """Filtra kwargs no tipados a un conjunto seguro para logging."""
    out: LogKwargs = {}

    if "exc_info" in kwargs:
        v = kwargs.get("exc_info")
        if v is None or isinstance(v, (bool, BaseException, tuple)):
            out["exc_info"] = v  # type: ignore[typeddict-item]

    if "stack_info" in kwargs:
        v = kwargs.get("stack_info")
        if isinstance(v, bool):
            out["stack_info"] = v

    if "stacklevel" in kwargs:
        v = kwargs.get("stacklevel")
        if isinstance(v, int):
            out["stacklevel"] = v

    if "extra" in kwargs:
        v = kwargs.get("extra")
        if v is None or isinstance(v, Mapping):
            out["extra"] = v  # type: ignore[typeddict-item]

    return out


LOGGER_NAME: Final[str] = "movie_catalog"

_LOGGER: logging.Logger | None = None
_LOCK = threading.Lock()

_TRUE_SET: Final[set[str]] = {"1", "true", "t", "yes", "y", "on"}

_LEVELS: Final[dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in _TRUE_SET


def is_silent_mode() -> bool:
    return _env_flag("SILENT_MODE")


def is_debug_mode() -> bool:
    return _env_flag("DEBUG_MODE")


def _resolve_level() -> int:
    """
    Prioridad:
      1) LOG_LEVEL explícito
      2) DEBUG_MODE
      3) INFO
    """
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    mapped = _LEVELS.get(raw)
    if mapped is not None:
        return mapped
    if is_debug_mode():
        return logging.DEBUG
    return logging.INFO


def _configure_external_loggers() -> None:
    if _env_flag("HTTP_DEBUG"):
        return
    for name in ("urllib3", "urllib3.connectionpool", "requests"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    with _LOCK:
        if _LOGGER is None:
            log = logging.getLogger(LOGGER_NAME)
            log.setLevel(_resolve_level())
            _configure_external_loggers()
            _LOGGER = log
    return _LOGGER


def _should_emit(always: bool) -> bool:
    return always or not is_silent_mode()


def debug(msg: object, *, always: bool = False, **kwargs: object) -> None:
    if _should_emit(always):
        get_logger().debug(str(msg), **_filter_log_kwargs(kwargs))


def info(msg: object, *, always: bool = False, **kwargs: object) -> None:
    if _should_emit(always):
        get_logger().info(str(msg), **_filter_log_kwargs(kwargs))


def warning(msg: object, *, always: bool = False, **kwargs: object) -> None:
    if _should_emit(always):
        get_logger().warning(str(msg), **_filter_log_kwargs(kwargs))


def error(msg: object, **kwargs: object) -> None:
    get_logger().error(str(msg), **_filter_log_kwargs(kwargs))
