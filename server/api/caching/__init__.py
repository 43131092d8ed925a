from __future__ import annotations

from server.api.caching.movie_cache import MovieCache

__all__ = ["MovieCache"]
