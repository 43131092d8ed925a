from __future__ import annotations

from backend.local_store import LocalMovieStore
from backend.third_party_client import ThirdPartyClient
from server.api import paths
from server.api.caching.movie_cache import MovieCache
from server.api.settings import Settings

_SETTINGS = Settings.from_env()
_LOCAL_STORE = LocalMovieStore(paths.MOVIES_PATH)
_THIRD_PARTY_CLIENT = ThirdPartyClient(
    base_url=_SETTINGS.third_party_base_url,
    timeout_s=_SETTINGS.third_party_timeout_s,
    retry_total=_SETTINGS.third_party_retry_total,
    retry_backoff_factor=_SETTINGS.third_party_retry_backoff,
    user_agent=_SETTINGS.third_party_user_agent,
)
_MOVIE_CACHE = MovieCache(_SETTINGS.movie_cache_max_entries)


def get_settings() -> Settings:
    return _SETTINGS


def get_local_store() -> LocalMovieStore:
    return _LOCAL_STORE


def get_third_party_client() -> ThirdPartyClient:
    return _THIRD_PARTY_CLIENT


def get_movie_cache() -> MovieCache:
    return _MOVIE_CACHE
