# lectura de env vars + defaults
from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_SET = {"1", "true", "t", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "f", "no", "n", "off"}


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip()
    return val if val else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    s = raw.strip().lower()
    if s in _TRUE_SET:
        return True
    if s in _FALSE_SET:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    """
    Settings centralizados (env vars).

    Notas:
    - CORS: si CORS_ORIGINS="*" -> allow_credentials=False para compatibilidad browser.
    - STRICT_SOURCE=0 recupera el comportamiento legacy: `source` desconocido -> "all".
    - MOVIE_CACHE_MAX_ENTRIES<=0 deja la caché de terceros sin límite.
    - RANDOM_MAX_COUNT<=0 (default): sin límite para /movies/random/{count}.
    """

    log_level: str

    cors_origins_raw: str
    cors_allow_credentials: bool

    gzip_min_size: int

    default_page_size: int
    max_page_size: int
    strict_source: bool

    third_party_base_url: str
    third_party_timeout_s: float
    third_party_retry_total: int
    third_party_retry_backoff: float
    third_party_user_agent: str

    movie_cache_max_entries: int

    random_max_count: int
    recommendations_count: int

    def cors_allow_origins(self) -> list[str]:
        raw = self.cors_origins_raw.strip()
        if raw == "*":
            return ["*"]
        parts = [p.strip() for p in raw.split(",")]
        return [p for p in parts if p]

    @staticmethod
    def from_env() -> "Settings":
        cors_raw = _env_str("CORS_ORIGINS", "*")
        cors_allow_credentials = cors_raw.strip() != "*"

        max_page_size = max(1, _env_int("MAX_PAGE_SIZE", 50))
        default_page_size = min(max_page_size, max(1, _env_int("DEFAULT_PAGE_SIZE", 12)))

        return Settings(
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
            cors_origins_raw=cors_raw,
            cors_allow_credentials=cors_allow_credentials,
            gzip_min_size=_env_int("GZIP_MIN_SIZE", 800),
            default_page_size=default_page_size,
            max_page_size=max_page_size,
            strict_source=_env_bool("STRICT_SOURCE", True),
            third_party_base_url=_env_str("THIRD_PARTY_BASE_URL", "https://jsonfakery.com/movies"),
            third_party_timeout_s=max(0.5, _env_float("THIRD_PARTY_TIMEOUT_S", 10.0)),
            third_party_retry_total=max(0, _env_int("THIRD_PARTY_RETRY_TOTAL", 0)),
            third_party_retry_backoff=max(0.0, _env_float("THIRD_PARTY_RETRY_BACKOFF", 0.5)),
            third_party_user_agent=_env_str("THIRD_PARTY_USER_AGENT", "Movie-Catalog/1.0"),
            movie_cache_max_entries=_env_int("MOVIE_CACHE_MAX_ENTRIES", 5000),
            random_max_count=_env_int("RANDOM_MAX_COUNT", 0),
            recommendations_count=max(1, _env_int("RECOMMENDATIONS_COUNT", 3)),
        )
