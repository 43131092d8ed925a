from __future__ import annotations

"""
components.py

Componentes UI del catálogo (Streamlit + st_aggrid).

- Tabla de películas (AgGrid) con selección de una sola fila.
- Ficha de detalle de una película.
- Badge de origen (local / api).
- Tira de recomendaciones.

Los helpers puros (movies_to_frame, format_year, ...) no tocan Streamlit y se testean aparte.
"""

import math
from collections.abc import Hashable, Mapping, Sequence
from typing import Any, Final, Protocol, cast

import pandas as pd
import streamlit as st
from st_aggrid import GridOptionsBuilder

RowDict = dict[str, Any]

MOVIE_COLUMNS: Final[list[str]] = ["title", "year", "source", "id"]

_SOURCE_BADGES: Final[dict[str, str]] = {
    "local": ":green-background[local]",
    "api": ":gray-background[api]",
}


class AgGridCallable(Protocol):
    def __call__(
        self,
        data: pd.DataFrame,
        *,
        gridOptions: Mapping[str, Any],
        update_on: Sequence[str],
        enable_enterprise_modules: bool,
        height: int,
        key: str,
    ) -> Mapping[str, Any]: ...


# ============================================================================
# Helpers puros
# ============================================================================


def format_year(year: object) -> str:
    """0 (o vacío) es el centinela de "año desconocido"."""
    if isinstance(year, bool) or not isinstance(year, (int, float)):
        return "Unknown"
    if not math.isfinite(year) or int(year) == 0:
        return "Unknown"
    return str(int(year))


def source_badge(source: object) -> str:
    s = str(source or "").strip().lower()
    return _SOURCE_BADGES.get(s, s or "?")


def movies_to_frame(items: Sequence[Mapping[str, object]]) -> pd.DataFrame:
    """DataFrame con columnas fijas (title/year/source/id), tolerante a claves ausentes."""
    rows = [{c: it.get(c) for c in MOVIE_COLUMNS} for it in items]
    df = pd.DataFrame(rows, columns=MOVIE_COLUMNS)
    if not df.empty:
        df["year"] = df["year"].map(format_year)
    return df


def _to_str_key_dict(src: Mapping[Hashable, Any]) -> RowDict:
    return {str(k): v for k, v in src.items()}


def normalize_selected_rows(selected_raw: Any) -> list[RowDict]:
    """
    st_aggrid puede devolver None, list[dict] o pd.DataFrame según versión.
    Devuelve siempre una lista (vacía si no hay selección).
    """
    if selected_raw is None:
        return []

    if isinstance(selected_raw, pd.DataFrame):
        records = selected_raw.to_dict(orient="records")
        return [_to_str_key_dict(cast(Mapping[Hashable, Any], r)) for r in records]

    if isinstance(selected_raw, Mapping):
        return [_to_str_key_dict(cast(Mapping[Hashable, Any], selected_raw))]

    if isinstance(selected_raw, (list, tuple)):
        return [
            _to_str_key_dict(cast(Mapping[Hashable, Any], item))
            for item in selected_raw
            if isinstance(item, Mapping)
        ]

    return []


# ============================================================================
# Tabla principal con selección de fila
# ============================================================================


def aggrid_with_row_click(df: pd.DataFrame, key_suffix: str) -> RowDict | None:
    """
    AgGrid con selección de una sola fila.

    Returns:
        dict con la fila seleccionada o None.
    """
    if df.empty:
        st.info("No movies found.")
        return None

    gb = GridOptionsBuilder.from_dataframe(df)
    gb.configure_selection(selection_mode="single", use_checkbox=False)
    gb.configure_grid_options(domLayout="normal")
    gb.configure_column("id", hide=True)

    grid_options = gb.build()
    grid_options["autoSizeStrategy"] = {"type": "fitGridWidth"}

    import st_aggrid as st_aggrid_mod

    aggrid_fn = cast(AgGridCallable, getattr(st_aggrid_mod, "AgGrid"))

    grid_response = aggrid_fn(
        df,
        gridOptions=grid_options,
        update_on=["selectionChanged"],
        enable_enterprise_modules=False,
        height=420,
        key=f"aggrid_{key_suffix}",
    )

    selected_rows = normalize_selected_rows(grid_response.get("selected_rows"))
    if not selected_rows:
        return None
    return selected_rows[0]


# ============================================================================
# Detalle
# ============================================================================


def render_detail_card(movie: Mapping[str, object] | None) -> None:
    if movie is None:
        st.info("Click a row to see its details.")
        return

    st.markdown(f"### {movie.get('title') or 'Untitled'}")
    st.markdown(f"**Year:** {format_year(movie.get('year'))}")
    st.markdown(f"**Source:** {source_badge(movie.get('source'))}")
    st.caption(f"id: `{movie.get('id')}`")


def render_recommendations(items: Sequence[Mapping[str, object]]) -> None:
    if not items:
        st.caption("No recommendations right now.")
        return

    cols = st.columns(len(items))
    for col, it in zip(cols, items):
        with col:
            st.markdown(f"**{it.get('title') or 'Untitled'}**")
            st.caption(format_year(it.get("year")))
