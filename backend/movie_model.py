from __future__ import annotations

"""
backend/movie_model.py

Forma normalizada de una película, común a todas las fuentes.

- Movie: id / title / year / source.
- Normalización de registros del proveedor externo (RawMovie -> Movie).
- Búsqueda por título (substring, case-insensitive).
- Generación de ids locales `local_<epoch ms>`.
"""

import math
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Final, Literal

from dateutil import parser as date_parser

MovieSource = Literal["local", "api"]

LOCAL_ID_PREFIX: Final[str] = "local_"
THIRD_PARTY_ID_PREFIX: Final[str] = "tp_"
UNTITLED: Final[str] = "Untitled"
UNKNOWN_YEAR: Final[int] = 0


@dataclass(frozen=True)
class Movie:
    id: str
    title: str
    year: int
    source: MovieSource

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "title": self.title, "year": self.year, "source": self.source}

    @staticmethod
    def from_dict(obj: object) -> "Movie | None":
        """
        Parseo tolerante de un registro persistido.

        Devuelve None si no es un dict o le faltan id/title.
        """
        if not isinstance(obj, Mapping):
            return None

        mid = obj.get("id")
        title = obj.get("title")
        if not isinstance(mid, str) or not mid or not isinstance(title, str):
            return None

        year_raw = obj.get("year")
        year = UNKNOWN_YEAR
        if isinstance(year_raw, (int, float)) and not isinstance(year_raw, bool) and math.isfinite(year_raw):
            year = int(year_raw)

        source_raw = obj.get("source")
        source: MovieSource = "api" if source_raw == "api" else "local"

        return Movie(id=mid, title=title, year=year, source=source)


# ============================================================
# Normalización del proveedor externo
# ============================================================


_DEFAULT_A: Final[datetime] = datetime(2000, 1, 1)
_DEFAULT_B: Final[datetime] = datetime(2001, 2, 2)


def parse_release_year(value: object) -> int:
    """Año de `release_date` (p.ej. "Wed, 11/19/1958"); 0 si falta o no se puede parsear."""
    if not isinstance(value, str) or not value.strip():
        return UNKNOWN_YEAR
    # dateutil rellena lo que falta con `default`: si el año cambia con el default, no venía en el texto
    text = value.strip()
    try:
        first = date_parser.parse(text, default=_DEFAULT_A)
        second = date_parser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return UNKNOWN_YEAR
    if first.year != second.year:
        return UNKNOWN_YEAR
    return first.year


def _pick_title(raw: Mapping[str, object]) -> str:
    # None y clave ausente caen al siguiente; "" se respeta
    for key in ("original_title", "title"):
        v = raw.get(key)
        if v is not None:
            return str(v)
    return UNTITLED


def normalize_third_party(raw: Mapping[str, object]) -> Movie:
    return Movie(
        id=f"{THIRD_PARTY_ID_PREFIX}{raw.get('movie_id')}",
        title=_pick_title(raw),
        year=parse_release_year(raw.get("release_date")),
        source="api",
    )


# ============================================================
# Búsqueda
# ============================================================


def matches_search(title: str, needle: str) -> bool:
    if not needle:
        return True
    return needle.lower() in title.lower()


def filter_by_title(movies: list[Movie], needle: str) -> list[Movie]:
    if not needle:
        return list(movies)
    return [m for m in movies if matches_search(m.title, needle)]


# ============================================================
# Ids locales
# ============================================================

_ID_LOCK = threading.Lock()
_LAST_LOCAL_MS: int = 0


def generate_local_id() -> str:
    """`local_<epoch ms>`, estrictamente creciente dentro del proceso."""
    global _LAST_LOCAL_MS
    with _ID_LOCK:
        now_ms = int(time.time() * 1000)
        if now_ms <= _LAST_LOCAL_MS:
            now_ms = _LAST_LOCAL_MS + 1
        _LAST_LOCAL_MS = now_ms
    return f"{LOCAL_ID_PREFIX}{now_ms}"
