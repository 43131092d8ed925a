from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Response

from backend.local_store import LocalMovieStore
from server.api.caching.movie_cache import MovieCache
from server.api.deps import get_local_store, get_movie_cache
from server.api.errors import ApiError
from server.api.services import metrics

router = APIRouter()


@router.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok", "ts": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
def ready(
    store: LocalMovieStore = Depends(get_local_store),
    cache: MovieCache = Depends(get_movie_cache),
) -> dict[str, Any]:
    """
    Readiness:
    - el documento local puede no existir todavía (se crea al primer POST),
      pero su directorio (o el primer ancestro existente) debe ser escribible.
    - no llama al proveedor externo.
    """
    path = store.path
    existing = path.parent
    while not existing.exists() and existing != existing.parent:
        existing = existing.parent

    if not os.access(existing, os.W_OK):
        raise ApiError(503, f"Local movies directory not writable: {existing}")

    return {
        "ready": True,
        "ts": datetime.now(timezone.utc).isoformat(),
        "local_movies": len(store.read_all()),
        "movie_cache_entries": len(cache),
    }


@router.get("/metrics")
def metrics_endpoint() -> Response:
    body = metrics.render_prometheus()
    return Response(content=body, media_type="text/plain; version=0.0.4")
