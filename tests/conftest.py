from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest


@dataclass(slots=True)
class FakeHTTPResponse:
    payload: bytes

    def read(self) -> bytes:
        return self.payload

    def __enter__(self) -> "FakeHTTPResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        return None


@dataclass(slots=True)
class URLCall:
    url: object
    timeout: float | None


class URLOpenMock:
    """
    Minimal urlopen mock with programmable routing.

    Records calls and returns FakeHTTPResponse(payload) per route.
    """

    def __init__(self, router: Callable[[object], bytes]) -> None:
        self._router = router
        self.calls: list[URLCall] = []

    def __call__(self, url: object, timeout: float | None = None) -> FakeHTTPResponse:
        self.calls.append(URLCall(url=url, timeout=timeout))
        payload = self._router(url)
        return FakeHTTPResponse(payload=payload)


@dataclass(slots=True)
class FakeRequestsResponse:
    status_code: int = 200
    payload: object = None
    bad_json: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> object:
        if self.bad_json:
            raise ValueError("not json")
        return self.payload


@dataclass(slots=True)
class SessionCall:
    url: str
    params: dict[str, object] | None
    timeout: float | None


@dataclass
class FakeSession:
    """
    requests.Session stand-in: `router(url, params)` returns a FakeRequestsResponse
    or raises (p.ej. requests.ConnectionError).
    """

    router: Callable[[str, dict[str, object] | None], FakeRequestsResponse]
    calls: list[SessionCall] = field(default_factory=list)
    closed: bool = False

    def get(self, url: str, params=None, timeout=None) -> FakeRequestsResponse:
        self.calls.append(SessionCall(url=url, params=params, timeout=timeout))
        return self.router(url, params)

    def close(self) -> None:
        self.closed = True


def raw_movie(movie_id: int, title: str, *, release_date: str = "Wed, 11/19/1958") -> dict[str, object]:
    return {
        "movie_id": movie_id,
        "original_title": title,
        "title": f"{title} (localized)",
        "release_date": release_date,
        "overview": "...",
    }


@pytest.fixture()
def raw_page() -> list[dict[str, object]]:
    return [
        raw_movie(1, "The Matrix"),
        raw_movie(2, "Vertigo"),
        raw_movie(3, "Matrix Reloaded"),
        raw_movie(4, "Alien"),
    ]


@pytest.fixture()
def make_response() -> type[FakeRequestsResponse]:
    return FakeRequestsResponse


@pytest.fixture()
def make_session() -> type[FakeSession]:
    return FakeSession


class FakeThirdPartyClient:
    """ThirdPartyClient en memoria: páginas por número, random = primeros N del pool."""

    def __init__(self, pages=None, *, pool=None, fail: bool = False) -> None:
        self.pages = pages or {}
        self.pool = pool or []
        self.fail = fail
        self.page_calls: list[int] = []
        self.random_calls: list[int] = []
        self.closed = False

    def fetch_page(self, page: int):
        from backend.third_party_client import ThirdPartyError

        self.page_calls.append(page)
        if self.fail:
            raise ThirdPartyError("Third-party fetch failed: 503", status_code=503)
        return list(self.pages.get(page, []))

    def fetch_random(self, count: int):
        from backend.third_party_client import ThirdPartyError

        self.random_calls.append(count)
        if self.fail:
            raise ThirdPartyError("Third-party fetch failed: 503", status_code=503)
        return list(self.pool[:count])

    def close(self) -> None:
        self.closed = True


def api_movie(n: int, title: str, year: int = 2000):
    from backend.movie_model import Movie

    return Movie(id=f"tp_{n}", title=title, year=year, source="api")


@pytest.fixture()
def api_page():
    return [
        api_movie(1, "The Matrix", 1999),
        api_movie(2, "Vertigo", 1958),
        api_movie(3, "Matrix Reloaded", 2003),
        api_movie(4, "Alien", 1979),
        api_movie(5, "Heat", 1995),
    ]


@pytest.fixture()
def fake_client_factory():
    return FakeThirdPartyClient


def build_settings(**overrides):
    from server.api.settings import Settings

    values = dict(
        log_level="INFO",
        cors_origins_raw="*",
        cors_allow_credentials=False,
        gzip_min_size=0,
        default_page_size=12,
        max_page_size=50,
        strict_source=True,
        third_party_base_url="https://example.test/movies",
        third_party_timeout_s=1.0,
        third_party_retry_total=0,
        third_party_retry_backoff=0.0,
        third_party_user_agent="test",
        movie_cache_max_entries=100,
        random_max_count=0,
        recommendations_count=3,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings_factory():
    return build_settings
