from __future__ import annotations

"""
frontend/config_front_base.py

Config del FRONTEND (desacoplado del server).

- Carga variables SOLAMENTE desde .env.front (sin fallback a .env).
- Después env real del proceso y, por último, defaults.
- No importa nada de backend/ ni de server/.
"""

import os
from pathlib import Path
from typing import Final

from dotenv import dotenv_values

FRONTEND_DIR: Final[Path] = Path(__file__).resolve().parent
PROJECT_DIR: Final[Path] = FRONTEND_DIR.parent

_ENV_FRONT_PATH: Final[Path] = PROJECT_DIR / ".env.front"

_ENV: Final[dict[str, str]] = {
    k: v for k, v in (dotenv_values(_ENV_FRONT_PATH).items() if _ENV_FRONT_PATH.exists() else []) if v is not None
}

_TRUE_SET: Final[set[str]] = {"1", "true", "t", "yes", "y", "on"}
_FALSE_SET: Final[set[str]] = {"0", "false", "f", "no", "n", "off"}


def _clean(v: object | None) -> str | None:
    if v is None:
        return None
    s = str(v).strip()
    if not s:
        return None
    if len(s) >= 2 and (s[0] == s[-1]) and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    return s or None


def _get_env_str(name: str, default: str | None = None) -> str | None:
    v = _clean(_ENV.get(name))
    if v is not None:
        return v
    v2 = _clean(os.getenv(name))
    if v2 is not None:
        return v2
    return default


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env_str(name, None)
    if raw is None:
        return default
    s = raw.lower()
    if s in _TRUE_SET:
        return True
    if s in _FALSE_SET:
        return False
    return default


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env_str(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env_str(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


FRONT_DEBUG: bool = _get_env_bool("FRONT_DEBUG", False)

FRONT_API_BASE_URL: str = _get_env_str("FRONT_API_BASE_URL", "http://127.0.0.1:4000") or "http://127.0.0.1:4000"
FRONT_API_TIMEOUT_S: float = max(0.5, _get_env_float("FRONT_API_TIMEOUT_S", 15.0))

FRONT_PAGE_SIZE_OPTIONS: Final[tuple[int, ...]] = (5, 12, 25)
_page_size = _get_env_int("FRONT_PAGE_SIZE", 12)
FRONT_PAGE_SIZE: int = _page_size if _page_size in FRONT_PAGE_SIZE_OPTIONS else 12

# Rango que exige el formulario de alta (el server solo valida que sea número)
FRONT_YEAR_MIN: Final[int] = 1888
FRONT_YEAR_MAX: Final[int] = 2100
