# listado/merge + detalle + alta + random sobre store local y proveedor externo
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Final

from backend.local_store import LocalMovieStore
from backend.movie_model import Movie, filter_by_title
from backend.third_party_client import ThirdPartyClient, ThirdPartyError
from server.api.caching.movie_cache import MovieCache
from server.api.errors import BadRequest, NotFound
from server.api.services import metrics
from server.api.settings import Settings

SOURCE_ALL: Final[str] = "all"
SOURCE_LOCAL: Final[str] = "local"
SOURCE_THIRD_PARTY: Final[str] = "third_party"
SOURCES: Final[tuple[str, ...]] = (SOURCE_ALL, SOURCE_LOCAL, SOURCE_THIRD_PARTY)


@dataclass(frozen=True)
class ListQuery:
    page: int
    page_size: int
    source: str
    search: str

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size


# ============================================================
# Coerción de query params
# ============================================================


def _to_int(raw: object) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def coerce_page(raw: object) -> int:
    value = _to_int(raw)
    return 1 if value is None else max(1, value)


def coerce_page_size(raw: object, *, default: int, max_size: int) -> int:
    value = _to_int(raw)
    if value is None:
        value = default
    return min(max_size, max(1, value))


def parse_source(raw: object, *, strict: bool) -> str:
    value = str(raw).strip() if raw is not None else SOURCE_ALL
    if not value:
        value = SOURCE_ALL
    if value in SOURCES:
        return value
    if strict:
        raise BadRequest(message="Invalid source")
    return SOURCE_ALL


def build_list_query(
    *,
    page: object,
    page_size: object,
    source: object,
    search: object,
    settings: Settings,
) -> ListQuery:
    return ListQuery(
        page=coerce_page(page),
        page_size=coerce_page_size(
            page_size, default=settings.default_page_size, max_size=settings.max_page_size
        ),
        source=parse_source(source, strict=settings.strict_source),
        search=str(search).strip() if search is not None else "",
    )


# ============================================================
# Proveedor externo (+ caché)
# ============================================================


def fetch_third_party_page(*, client: ThirdPartyClient, cache: MovieCache, page: int) -> list[Movie]:
    metrics.inc("third_party_requests_total", 1)
    try:
        movies = client.fetch_page(page)
    except ThirdPartyError:
        metrics.inc("third_party_failures_total", 1)
        raise
    cache.put_many(movies)
    return movies


def fetch_third_party_random(*, client: ThirdPartyClient, cache: MovieCache, count: int) -> list[Movie]:
    metrics.inc("third_party_requests_total", 1)
    try:
        movies = client.fetch_random(count)
    except ThirdPartyError:
        metrics.inc("third_party_failures_total", 1)
        raise
    cache.put_many(movies)
    return movies


# ============================================================
# Operaciones
# ============================================================


def list_movies(
    *,
    store: LocalMovieStore,
    client: ThirdPartyClient,
    cache: MovieCache,
    query: ListQuery,
) -> dict[str, Any]:
    """
    Listado paginado que mezcla locales y terceros.

    - local: slice de los locales filtrados.
    - third_party: una página upstream (misma `page`), filtrada solo dentro de esa página.
    - all: slice local y, si no llena la página, se completa con la página upstream.
      Los locales siempre van antes que los de terceros.

    Local y upstream comparten número de página sobre dos órdenes independientes,
    así que avanzar `page` no produce una unión global consistente.
    """
    needle = query.search.lower()
    filtered_local = filter_by_title(store.read_all(), needle)
    start = query.start
    end = start + query.page_size

    meta: dict[str, Any] = {"source": query.source, "search": query.search}

    if query.source == SOURCE_LOCAL:
        items = filtered_local[start:end]
        meta["localCount"] = len(filtered_local)

    elif query.source == SOURCE_THIRD_PARTY:
        api_movies = fetch_third_party_page(client=client, cache=cache, page=query.page)
        items = filter_by_title(api_movies, needle)[: query.page_size]

    else:
        local_slice = filtered_local[start:end]
        remaining = query.page_size - len(local_slice)

        api_slice: list[Movie] = []
        if remaining > 0:
            api_movies = fetch_third_party_page(client=client, cache=cache, page=query.page)
            api_slice = filter_by_title(api_movies, needle)[:remaining]

        items = local_slice + api_slice
        meta["localCount"] = len(filtered_local)

    return {
        "page": query.page,
        "pageSize": query.page_size,
        "items": [m.to_dict() for m in items],
        "meta": meta,
    }


def get_movie(*, store: LocalMovieStore, cache: MovieCache, movie_id: str) -> Movie:
    local = store.find_by_id(movie_id)
    if local is not None:
        return local

    cached = cache.get(movie_id)
    if cached is not None:
        return cached

    raise NotFound(message="Movie not found")


def _is_valid_year(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return True


def validate_create_payload(payload: object) -> tuple[str, int]:
    """
    title: string no vacío (se guarda sin espacios extremos).
    year: número JSON finito (no bool); los decimales se truncan (2020.5 -> 2020).
    Sin comprobación de rango (eso lo hace el cliente).
    """
    if not isinstance(payload, dict):
        raise BadRequest(message="title and year are required")

    title = payload.get("title")
    year = payload.get("year")

    if not isinstance(title, str) or not title.strip() or not _is_valid_year(year):
        raise BadRequest(message="title and year are required")

    return title.strip(), int(year)  # type: ignore[arg-type]


def create_movie(*, store: LocalMovieStore, title: str, year: int) -> Movie:
    movie = store.create(title, year)
    metrics.inc("local_movies_created_total", 1)
    return movie


def parse_random_count(raw: str, *, max_count: int) -> int:
    """Entero > 0. Con max_count > 0, los valores por encima se rechazan (nunca se recortan)."""
    try:
        count = int(str(raw).strip())
    except ValueError:
        raise BadRequest(message="Invalid count") from None
    if count <= 0 or (max_count > 0 and count > max_count):
        raise BadRequest(message="Invalid count")
    return count


def random_movies(*, client: ThirdPartyClient, cache: MovieCache, count: int) -> list[dict[str, Any]]:
    movies = fetch_third_party_random(client=client, cache=cache, count=count)
    return [m.to_dict() for m in movies]


def recommendations(*, client: ThirdPartyClient, cache: MovieCache, settings: Settings) -> dict[str, Any]:
    movies = fetch_third_party_random(client=client, cache=cache, count=settings.recommendations_count)
    return {"items": [m.to_dict() for m in movies]}
