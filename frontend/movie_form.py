from __future__ import annotations

"""
frontend/movie_form.py

Validación del formulario "Add local movie" (antes de llamar a POST /movies).
"""

import math

from frontend.config_front_base import FRONT_YEAR_MAX, FRONT_YEAR_MIN


class MovieFormError(ValueError):
    pass


def validate_new_movie(title: str | None, year_raw: object) -> tuple[str, int]:
    clean_title = (title or "").strip()
    if not clean_title:
        raise MovieFormError("Title is required.")

    try:
        year_f = float(str(year_raw).strip())
    except ValueError:
        year_f = math.nan

    if not math.isfinite(year_f) or year_f < FRONT_YEAR_MIN or year_f > FRONT_YEAR_MAX:
        raise MovieFormError(f"Year must be between {FRONT_YEAR_MIN} and {FRONT_YEAR_MAX}.")

    return clean_title, int(year_f)
