from backend.movie_model import Movie
from server.api.caching.movie_cache import MovieCache
from server.api.services import metrics


def _movie(n: int) -> Movie:
    return Movie(id=f"tp_{n}", title=f"Movie {n}", year=2000 + n, source="api")


def test_cache_get_put_and_counters():
    cache = MovieCache(10)
    before = metrics.snapshot()

    assert cache.get("tp_1") is None
    cache.put(_movie(1))
    assert cache.get("tp_1") == _movie(1)

    after = metrics.snapshot()
    assert after["movie_cache_miss_total"] - before["movie_cache_miss_total"] == 1
    assert after["movie_cache_hit_total"] - before["movie_cache_hit_total"] == 1


def test_cache_evicts_least_recently_used():
    cache = MovieCache(2)
    before = metrics.snapshot()["movie_cache_evictions_total"]

    cache.put(_movie(1))
    cache.put(_movie(2))
    assert cache.get("tp_1") is not None  # tp_1 pasa a ser el más reciente
    cache.put(_movie(3))

    assert len(cache) == 2
    assert cache.get("tp_2") is None
    assert cache.get("tp_1") is not None
    assert cache.get("tp_3") is not None
    assert metrics.snapshot()["movie_cache_evictions_total"] - before == 1


def test_cache_unbounded_when_max_entries_not_positive():
    cache = MovieCache(0)
    cache.put_many(_movie(n) for n in range(500))

    assert len(cache) == 500
    assert cache.max_entries == 0


def test_cache_put_overwrites_same_id():
    cache = MovieCache(5)
    cache.put(_movie(1))
    cache.put(Movie(id="tp_1", title="Renamed", year=1990, source="api"))

    assert len(cache) == 1
    assert cache.get("tp_1").title == "Renamed"  # type: ignore[union-attr]

    cache.clear()
    assert len(cache) == 0
