from __future__ import annotations

# =============================================================================
# frontend/dashboard.py
#
# Dashboard del catálogo (Streamlit), desacoplado del server: todo va por HTTP.
#
# - Sidebar: origen, tamaño de página, búsqueda (aplicar / limpiar).
# - Listado paginado (Prev / Next) + ficha de detalle de la fila seleccionada.
# - Formulario "Add local movie".
# - Recomendaciones.
#
# Ejecutar: streamlit run frontend/dashboard.py
# =============================================================================

import sys
from pathlib import Path
from typing import Final

import streamlit as st

_PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from frontend.components import (  # noqa: E402
    aggrid_with_row_click,
    movies_to_frame,
    render_detail_card,
    render_recommendations,
)
from frontend.config_front_base import (  # noqa: E402
    FRONT_API_BASE_URL,
    FRONT_API_TIMEOUT_S,
    FRONT_PAGE_SIZE,
    FRONT_PAGE_SIZE_OPTIONS,
    FRONT_YEAR_MAX,
    FRONT_YEAR_MIN,
)
from frontend.front_api_client import (  # noqa: E402
    ApiClientError,
    MoviesPage,
    create_movie,
    fetch_movie,
    fetch_movies_page,
    fetch_recommendations,
)
from frontend.front_logger import log_info, log_warning  # noqa: E402
from frontend.movie_form import MovieFormError, validate_new_movie  # noqa: E402

SOURCE_LABELS: Final[dict[str, str]] = {
    "all": "All",
    "local": "Local",
    "third_party": "Third Party",
}


# =============================================================================
# Estado
# =============================================================================


def _init_state() -> None:
    defaults: dict[str, object] = {
        "page": 1,
        "page_size": FRONT_PAGE_SIZE,
        "source": "all",
        "search_text": "",
        "applied_search": "",
        "flash": None,
    }
    for k, v in defaults.items():
        st.session_state.setdefault(k, v)


def _reset_to_first_page() -> None:
    st.session_state["page"] = 1


def _apply_search() -> None:
    st.session_state["applied_search"] = st.session_state.get("search_text", "")
    _reset_to_first_page()


def _clear_search() -> None:
    st.session_state["search_text"] = ""
    st.session_state["applied_search"] = ""
    _reset_to_first_page()


def _apply_pending_reset() -> None:
    # source/search_text son widgets: solo se pueden escribir antes de instanciarlos
    if not st.session_state.pop("pending_reset", False):
        return
    st.session_state["page"] = 1
    st.session_state["source"] = "all"
    st.session_state["search_text"] = ""
    st.session_state["applied_search"] = ""


# =============================================================================
# Secciones
# =============================================================================


def _render_sidebar() -> None:
    st.sidebar.header("Filters")

    st.sidebar.selectbox(
        "Source",
        options=list(SOURCE_LABELS.keys()),
        format_func=lambda s: SOURCE_LABELS.get(s, s),
        key="source",
        on_change=_reset_to_first_page,
    )
    st.sidebar.selectbox(
        "Page size",
        options=list(FRONT_PAGE_SIZE_OPTIONS),
        key="page_size",
        on_change=_reset_to_first_page,
    )
    st.sidebar.text_input("Search title", key="search_text", placeholder="Search by title...")

    c1, c2 = st.sidebar.columns(2)
    c1.button("Search", on_click=_apply_search, use_container_width=True)
    c2.button("Clear", on_click=_clear_search, use_container_width=True)


def _load_page() -> MoviesPage | None:
    try:
        return fetch_movies_page(
            base_url=FRONT_API_BASE_URL,
            timeout_s=FRONT_API_TIMEOUT_S,
            page=int(st.session_state["page"]),
            page_size=int(st.session_state["page_size"]),
            source=str(st.session_state["source"]),
            search=str(st.session_state["applied_search"]),
        )
    except ApiClientError as exc:
        log_warning(f"list failed: {exc}")
        st.error(str(exc))
        return None


def _render_detail(selected: dict[str, object] | None) -> None:
    if selected is None:
        render_detail_card(None)
        return

    movie_id = str(selected.get("id") or "")
    try:
        movie = fetch_movie(base_url=FRONT_API_BASE_URL, timeout_s=FRONT_API_TIMEOUT_S, movie_id=movie_id)
    except ApiClientError as exc:
        log_warning(f"detail failed for {movie_id}: {exc}")
        st.warning(str(exc))
        return
    render_detail_card(movie)


def _render_pagination(loaded: MoviesPage | None) -> None:
    page = int(st.session_state["page"])
    c1, c2, c3 = st.columns([1, 2, 1])
    with c1:
        if st.button("◀ Prev", disabled=page <= 1, use_container_width=True):
            st.session_state["page"] = max(1, page - 1)
            st.rerun()
    with c2:
        local_count = loaded.meta.get("localCount") if loaded is not None else None
        suffix = f" · {local_count} local matches" if isinstance(local_count, int) else ""
        st.caption(f"Page {page}{suffix}")
    with c3:
        if st.button("Next ▶", use_container_width=True):
            st.session_state["page"] = page + 1
            st.rerun()


def _render_create_form() -> None:
    with st.expander("+ Add Local Movie"):
        with st.form("create_movie", clear_on_submit=False):
            title = st.text_input("Title")
            year_raw = st.text_input("Year", placeholder=f"{FRONT_YEAR_MIN}-{FRONT_YEAR_MAX}")
            submitted = st.form_submit_button("Save")

        if not submitted:
            return

        try:
            clean_title, year = validate_new_movie(title, year_raw)
        except MovieFormError as exc:
            st.error(str(exc))
            return

        try:
            created = create_movie(
                base_url=FRONT_API_BASE_URL,
                timeout_s=FRONT_API_TIMEOUT_S,
                title=clean_title,
                year=year,
            )
        except ApiClientError as exc:
            st.error(str(exc))
            return

        log_info(f"created {created.get('id')}")
        st.session_state["flash"] = f"Created “{created.get('title')}”."
        st.session_state["pending_reset"] = True
        st.rerun()


def _render_recommendations() -> None:
    with st.expander("Recommendations"):
        if not st.button("Get 3 recommendations"):
            return
        try:
            items = fetch_recommendations(base_url=FRONT_API_BASE_URL, timeout_s=FRONT_API_TIMEOUT_S)
        except ApiClientError as exc:
            st.error(str(exc))
            return
        render_recommendations(items)


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    st.set_page_config(page_title="Movies", layout="wide")
    _init_state()
    _apply_pending_reset()

    st.title("🎬 Movies")

    flash = st.session_state.get("flash")
    if flash:
        st.success(str(flash))
        st.session_state["flash"] = None

    _render_sidebar()
    _render_create_form()

    loaded = _load_page()
    items = loaded.items if loaded is not None else []

    col_grid, col_detail = st.columns([2, 1])
    with col_grid:
        selected = aggrid_with_row_click(movies_to_frame(items), f"movies_{st.session_state['page']}")
    with col_detail:
        _render_detail(selected)

    _render_pagination(loaded)
    _render_recommendations()


main()
