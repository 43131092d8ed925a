# resolve_path + path del documento de películas locales
from __future__ import annotations

import os
from pathlib import Path

# server/api/paths.py -> repo_root = parents[2] (server/api/*)
BASE_DIR = Path(__file__).resolve().parents[2]


def _first_existing(candidates: list[Path]) -> Path | None:
    for p in candidates:
        try:
            if p.exists() and p.is_file():
                return p
        except OSError:
            continue
    return None


def resolve_path(env_name: str, candidates: list[Path]) -> Path:
    """
    Prioridad:
      1) env var (relativa -> respecto al directorio de trabajo del proceso)
      2) primer candidato existente
      3) primer candidato (aunque no exista; se crea al primer POST)
    """
    raw = (os.getenv(env_name) or "").strip().strip('"').strip("'")
    if raw:
        p = Path(raw).expanduser()
        if not p.is_absolute():
            p = (Path.cwd() / p).resolve()
        return p

    found = _first_existing(candidates)
    if found is None:
        return candidates[0]
    return found


MOVIES_PATH = resolve_path(
    "MOVIES_PATH",
    [
        Path.cwd() / "data" / "movies.json",
        BASE_DIR / "data" / "movies.json",
    ],
)
