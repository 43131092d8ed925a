from __future__ import annotations

"""
backend/third_party_client.py

Cliente del proveedor externo de películas (JSON Fakery).

Endpoints:
- GET {base}/paginated?page=N  -> {"data": RawMovie[]}
- GET {base}/random/{count}    -> RawMovie[]

Cada RawMovie se normaliza a Movie antes de salir de este módulo.

HTTP:
- requests.Session compartida (pooling) + Retry de urllib3.
- retry_total=0 por defecto: un fallo upstream falla la request.
- Timeout por request.
"""

from collections.abc import Mapping
from typing import Final

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from backend import logger
from backend.movie_model import Movie, normalize_third_party

DEFAULT_BASE_URL: Final[str] = "https://jsonfakery.com/movies"
DEFAULT_USER_AGENT: Final[str] = "Movie-Catalog/1.0"


class ThirdPartyError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _cap_int(value: int, *, min_v: int, max_v: int) -> int:
    if value < min_v:
        return min_v
    if value > max_v:
        return max_v
    return value


def _cap_float(value: float, *, min_v: float, max_v: float) -> float:
    if value < min_v:
        return min_v
    if value > max_v:
        return max_v
    return value


def build_session(*, retry_total: int, backoff_factor: float, user_agent: str) -> requests.Session:
    session = requests.Session()

    retries = Retry(
        total=_cap_int(int(retry_total), min_v=0, max_v=10),
        backoff_factor=_cap_float(float(backoff_factor), min_v=0.0, max_v=10.0),
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    session.headers.update(
        {
            "User-Agent": user_agent.strip() or DEFAULT_USER_AGENT,
            "Accept": "application/json",
        }
    )
    return session


def _normalize_all(raw_items: list[object]) -> list[Movie]:
    out: list[Movie] = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            logger.debug(f"Skipping non-object third-party record: {raw!r}")
            continue
        out.append(normalize_third_party(raw))
    return out


class ThirdPartyClient:
    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 10.0,
        retry_total: int = 0,
        retry_backoff_factor: float = 0.5,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = _cap_float(float(timeout_s), min_v=0.5, max_v=120.0)
        self._session = session or build_session(
            retry_total=retry_total,
            backoff_factor=retry_backoff_factor,
            user_agent=user_agent,
        )

    def _get_json(self, path: str, *, params: Mapping[str, str | int] | None = None) -> object:
        url = f"{self._base_url}{path}"
        try:
            resp = self._session.get(url, params=dict(params) if params else None, timeout=self._timeout_s)
        except RequestException as exc:
            logger.warning(f"Third-party request failed: GET {url}: {exc!r}")
            raise ThirdPartyError(f"Third-party request failed: {type(exc).__name__}") from exc

        if not resp.ok:
            logger.warning(f"Third-party fetch failed: GET {url} -> {resp.status_code}")
            raise ThirdPartyError(
                f"Third-party fetch failed: {resp.status_code}", status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise ThirdPartyError("Third-party response is not JSON", status_code=resp.status_code) from exc

    def fetch_page(self, page: int) -> list[Movie]:
        payload = self._get_json("/paginated", params={"page": int(page)})

        data = payload.get("data") if isinstance(payload, Mapping) else None
        if not isinstance(data, list):
            raise ThirdPartyError("Unexpected third-party payload: 'data' is not a list")

        movies = _normalize_all(data)
        logger.debug(f"Third-party page {page}: {len(movies)} movies")
        return movies

    def fetch_random(self, count: int) -> list[Movie]:
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValueError(f"count must be a positive integer, got {count!r}")

        payload = self._get_json(f"/random/{count}")
        if not isinstance(payload, list):
            raise ThirdPartyError("Unexpected third-party payload: expected a list")

        return _normalize_all(payload)

    def close(self) -> None:
        self._session.close()
