from __future__ import annotations

# =============================================================================
# frontend/front_api_client.py
#
# Cliente HTTP minimalista (stdlib-only) para consumir la API de películas
# desde el front (Streamlit).
#
# - Sin dependencias externas (no requests/httpx).
# - Los errores HTTP se convierten en ApiClientError con el mensaje `error`
#   del server cuando existe.
# =============================================================================

import json
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field


class ApiClientError(Exception):
    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class MoviesPage:
    page: int
    page_size: int
    items: list[dict[str, object]]
    meta: dict[str, object] = field(default_factory=dict)


def _build_url(base_url: str, path: str, params: dict[str, str | int] | None = None) -> str:
    base = base_url.rstrip("/")
    p = path if path.startswith("/") else f"/{path}"
    url = f"{base}{p}"
    if not params:
        return url
    return f"{url}?{urllib.parse.urlencode(params)}"


def _error_message(raw: bytes, fallback: str) -> str:
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return fallback
    if isinstance(payload, dict):
        msg = payload.get("error")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return fallback


def _request_json(
    url: str,
    *,
    timeout_s: float,
    method: str = "GET",
    body: object | None = None,
) -> object | None:
    data: bytes | None = None
    headers = {"Accept": "application/json"}
    if body is not None:
        data = json.dumps(body).encode("utf-8")
        headers["Content-Type"] = "application/json"

    req = urllib.request.Request(url, data=data, headers=headers, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            raw = resp.read()
    except urllib.error.HTTPError as exc:
        status = int(exc.code)
        try:
            raw_err = exc.read()
        except OSError:
            raw_err = b""
        raise ApiClientError(
            _error_message(raw_err, f"Request failed ({status})"), status=status
        ) from exc
    except urllib.error.URLError as exc:
        raise ApiClientError(f"Connection error for {url}: {exc.reason!r}") from exc

    if not raw:
        return None

    try:
        return json.loads(raw.decode("utf-8"))
    except json.JSONDecodeError as exc:
        raise ApiClientError(f"Non-JSON response from {url}: {exc}") from exc


def _items_of(payload: object, *, context: str) -> list[dict[str, object]]:
    if isinstance(payload, list):
        items_obj: object = payload
    elif isinstance(payload, dict):
        items_obj = payload.get("items")
    else:
        items_obj = None

    if not isinstance(items_obj, list):
        raise ApiClientError(f"Unexpected response shape from {context}")
    return [it for it in items_obj if isinstance(it, dict)]


def fetch_movies_page(
    *,
    base_url: str,
    timeout_s: float,
    page: int,
    page_size: int,
    source: str,
    search: str = "",
) -> MoviesPage:
    params: dict[str, str | int] = {"page": page, "pageSize": page_size, "source": source}
    if search.strip():
        params["search"] = search.strip()

    payload = _request_json(_build_url(base_url, "/movies", params), timeout_s=timeout_s)
    items = _items_of(payload, context="/movies")

    if not isinstance(payload, dict):
        return MoviesPage(page=page, page_size=page_size, items=items)

    meta = payload.get("meta")
    page_obj = payload.get("page")
    size_obj = payload.get("pageSize")
    return MoviesPage(
        page=page_obj if isinstance(page_obj, int) else page,
        page_size=size_obj if isinstance(size_obj, int) else page_size,
        items=items,
        meta=meta if isinstance(meta, dict) else {},
    )


def fetch_movie(*, base_url: str, timeout_s: float, movie_id: str) -> dict[str, object]:
    path = f"/movies/{urllib.parse.quote(movie_id, safe='')}"
    payload = _request_json(_build_url(base_url, path), timeout_s=timeout_s)
    if not isinstance(payload, dict):
        raise ApiClientError("Unexpected response shape from /movies/{id}")
    return payload


def create_movie(*, base_url: str, timeout_s: float, title: str, year: int) -> dict[str, object]:
    payload = _request_json(
        _build_url(base_url, "/movies"),
        timeout_s=timeout_s,
        method="POST",
        body={"title": title, "year": year},
    )
    if not isinstance(payload, dict):
        raise ApiClientError("Unexpected response shape from POST /movies")
    return payload


def fetch_recommendations(*, base_url: str, timeout_s: float) -> list[dict[str, object]]:
    payload = _request_json(_build_url(base_url, "/movies/recommendations"), timeout_s=timeout_s)
    return _items_of(payload, context="/movies/recommendations")
