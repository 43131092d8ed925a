# LRU acotada id -> Movie para películas del proveedor externo
from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable
from threading import RLock

from backend.movie_model import Movie
from server.api.services import metrics


class MovieCache:
    """
    Caché LRU de películas de terceros, indexada por id normalizado (tp_<id>).

    - Se rellena con cada página/random normalizada.
    - Permite resolver /movies/{id} para ids vistos previamente en este proceso.
    - max_entries <= 0: sin límite (comportamiento legacy).
    """

    def __init__(self, max_entries: int) -> None:
        self._max_entries = int(max_entries)
        self._lock = RLock()
        self._entries: "OrderedDict[str, Movie]" = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, movie_id: str) -> Movie | None:
        with self._lock:
            movie = self._entries.get(movie_id)
            if movie is None:
                metrics.inc("movie_cache_miss_total", 1)
                return None
            self._entries.move_to_end(movie_id)
            metrics.inc("movie_cache_hit_total", 1)
            return movie

    def put(self, movie: Movie) -> None:
        with self._lock:
            self._entries[movie.id] = movie
            self._entries.move_to_end(movie.id)
            if self._max_entries <= 0:
                return
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
                metrics.inc("movie_cache_evictions_total", 1)

    def put_many(self, movies: Iterable[Movie]) -> None:
        with self._lock:
            for movie in movies:
                self.put(movie)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
