from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from backend.local_store import LocalMovieStore
from backend.third_party_client import ThirdPartyClient
from server.api.caching.movie_cache import MovieCache
from server.api.deps import get_local_store, get_movie_cache, get_settings, get_third_party_client
from server.api.errors import ApiError
from server.api.logging_config import LOGGER_NAME
from server.api.services import catalog
from server.api.settings import Settings

router = APIRouter(prefix="/movies", tags=["movies"])

_logger = logging.getLogger(LOGGER_NAME)


@contextmanager
def _fail_as(message: str) -> Iterator[None]:
    """Cualquier error no-ApiError se registra con detalle y sale como 500 genérico."""
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:
        _logger.exception("%s: %r", message, exc)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message) from exc


# Rutas fijas antes de /{id}


@router.get("/recommendations")
def read_recommendations(
    client: ThirdPartyClient = Depends(get_third_party_client),
    cache: MovieCache = Depends(get_movie_cache),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    with _fail_as("Failed to fetch recommendations"):
        return catalog.recommendations(client=client, cache=cache, settings=settings)


@router.get("/random/{count}")
def read_random(
    count: str,
    client: ThirdPartyClient = Depends(get_third_party_client),
    cache: MovieCache = Depends(get_movie_cache),
    settings: Settings = Depends(get_settings),
) -> list[dict[str, Any]]:
    n = catalog.parse_random_count(count, max_count=settings.random_max_count)
    with _fail_as("Failed to fetch random movies"):
        return catalog.random_movies(client=client, cache=cache, count=n)


@router.get("")
@router.get("/", include_in_schema=False)
def read_movies(
    page: str | None = Query(None, description="Página (>= 1)"),
    page_size: str | None = Query(None, alias="pageSize", description="Tamaño de página (1..50)"),
    source: str | None = Query(None, description="all | local | third_party"),
    search: str | None = Query(None, description="Filtro por título (contiene, case-insensitive)"),
    store: LocalMovieStore = Depends(get_local_store),
    client: ThirdPartyClient = Depends(get_third_party_client),
    cache: MovieCache = Depends(get_movie_cache),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    query = catalog.build_list_query(
        page=page, page_size=page_size, source=source, search=search, settings=settings
    )
    with _fail_as("Failed to load movies"):
        return catalog.list_movies(store=store, client=client, cache=cache, query=query)


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_movie(
    payload: Any = Body(None),
    store: LocalMovieStore = Depends(get_local_store),
) -> JSONResponse:
    title, year = catalog.validate_create_payload(payload)
    with _fail_as("Failed to create movie"):
        movie = catalog.create_movie(store=store, title=title, year=year)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=movie.to_dict())


# KEEP AT THE BOTTOM
@router.get("/{movie_id}")
def read_movie(
    movie_id: str,
    store: LocalMovieStore = Depends(get_local_store),
    cache: MovieCache = Depends(get_movie_cache),
) -> dict[str, Any]:
    with _fail_as("Failed to fetch movie"):
        return catalog.get_movie(store=store, cache=cache, movie_id=movie_id).to_dict()
