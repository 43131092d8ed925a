from __future__ import annotations

"""
backend/local_store.py

"Base de datos" local: un único documento JSON con la colección completa.

Contrato:
- read_all(): lista en orden de fichero; [] si falta, es ilegible o no es un array.
  Nunca lanza.
- create(title, year): lee, añade y reescribe el documento completo.
- find_by_id(id): primera coincidencia o None.

Escritura:
- Serializada por un RLock por store (un solo escritor por proceso).
- Atómica: temp file en el mismo directorio + fsync + replace.
- Los errores de escritura (OSError) se propagan al caller.

Varios procesos escribiendo el mismo fichero siguen sin coordinarse.
"""

import json
import os
import tempfile
from pathlib import Path
from threading import RLock

from backend import logger
from backend.movie_model import Movie, generate_local_id


class LocalMovieStore:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._write_lock = RLock()

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> list[Movie]:
        try:
            with self._path.open("r", encoding="utf-8") as f:
                parsed = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            logger.warning(f"Local movies unreadable ({self._path}): {exc!r}. Treating as empty.")
            return []

        if not isinstance(parsed, list):
            logger.warning(f"Local movies document is not a JSON array ({self._path}). Treating as empty.")
            return []

        movies: list[Movie] = []
        for idx, raw in enumerate(parsed):
            movie = Movie.from_dict(raw)
            if movie is None:
                logger.debug(f"Skipping invalid local record at index {idx}: {raw!r}")
                continue
            movies.append(movie)
        return movies

    def _write_all(self, movies: list[Movie]) -> None:
        dirpath = self._path.parent
        dirpath.mkdir(parents=True, exist_ok=True)

        temp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", delete=False, dir=str(dirpath), suffix=".tmp"
            ) as tf:
                json.dump([m.to_dict() for m in movies], tf, ensure_ascii=False, indent=2)
                tf.flush()
                try:
                    os.fsync(tf.fileno())
                except OSError:
                    pass
                temp_name = tf.name

            os.replace(temp_name, str(self._path))
        finally:
            if temp_name and os.path.exists(temp_name):
                try:
                    os.remove(temp_name)
                except OSError:
                    pass

    def create(self, title: str, year: int) -> Movie:
        with self._write_lock:
            movies = self.read_all()
            movie = Movie(id=generate_local_id(), title=title, year=year, source="local")
            movies.append(movie)
            self._write_all(movies)

        logger.info(f"Created local movie {movie.id} ({movie.title!r}, {movie.year})")
        return movie

    def find_by_id(self, movie_id: str) -> Movie | None:
        for movie in self.read_all():
            if movie.id == movie_id:
                return movie
        return None
