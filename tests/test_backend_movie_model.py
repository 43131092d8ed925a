import re

import pytest

from backend import movie_model
from backend.movie_model import Movie


def test_normalize_third_party_prefers_original_title():
    movie = movie_model.normalize_third_party(
        {"movie_id": 42, "original_title": "Vertigo", "title": "De entre los muertos", "release_date": "Wed, 11/19/1958"}
    )
    assert movie == Movie(id="tp_42", title="Vertigo", year=1958, source="api")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ({"movie_id": 1, "title": "Only Title"}, "Only Title"),
        ({"movie_id": 1, "original_title": None, "title": "Fallback"}, "Fallback"),
        ({"movie_id": 1}, "Untitled"),
        ({"movie_id": 1, "original_title": ""}, ""),
    ],
)
def test_normalize_third_party_title_fallback(raw, expected):
    assert movie_model.normalize_third_party(raw).title == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Wed, 11/19/1958", 1958),
        ("2003-05-15", 2003),
        ("not a date", 0),
        ("11/19", 0),
        ("March", 0),
        ("Wed, 11/19", 0),
        ("1958", 1958),
        ("", 0),
        (None, 0),
        (1999, 0),
    ],
)
def test_parse_release_year(value, expected):
    assert movie_model.parse_release_year(value) == expected


def test_normalize_third_party_missing_date_is_unknown_year():
    movie = movie_model.normalize_third_party({"movie_id": "abc", "original_title": "X"})
    assert movie.id == "tp_abc"
    assert movie.year == 0


def test_from_dict_tolerates_bad_year_and_source():
    movie = Movie.from_dict({"id": "local_1", "title": "T", "year": "1999", "source": "weird"})
    assert movie == Movie(id="local_1", title="T", year=0, source="local")

    api = Movie.from_dict({"id": "tp_1", "title": "T", "year": 2001.0, "source": "api"})
    assert api is not None and api.year == 2001 and api.source == "api"


@pytest.mark.parametrize(
    "obj",
    [None, [], "x", {"title": "no id"}, {"id": "", "title": "T"}, {"id": "a", "title": 3}],
)
def test_from_dict_rejects_invalid_records(obj):
    assert Movie.from_dict(obj) is None


def test_from_dict_rejects_bool_and_non_finite_year():
    assert Movie.from_dict({"id": "a", "title": "T", "year": True}).year == 0  # type: ignore[union-attr]
    assert Movie.from_dict({"id": "a", "title": "T", "year": float("inf")}).year == 0  # type: ignore[union-attr]


def test_to_dict_shape():
    movie = Movie(id="local_1", title="T", year=2000, source="local")
    assert movie.to_dict() == {"id": "local_1", "title": "T", "year": 2000, "source": "local"}


@pytest.mark.parametrize("needle", ["matrix", "MATRIX", "he mat", ""])
def test_matches_search_case_insensitive_substring(needle):
    assert movie_model.matches_search("The Matrix", needle) is True


def test_matches_search_no_match():
    assert movie_model.matches_search("Vertigo", "matrix") is False


def test_filter_by_title_keeps_order():
    movies = [
        Movie(id="a", title="The Matrix", year=1999, source="local"),
        Movie(id="b", title="Alien", year=1979, source="local"),
        Movie(id="c", title="Matrix Reloaded", year=2003, source="api"),
    ]
    assert [m.id for m in movie_model.filter_by_title(movies, "matrix")] == ["a", "c"]
    assert movie_model.filter_by_title(movies, "") == movies


def test_generate_local_id_format_and_strictly_increasing():
    ids = [movie_model.generate_local_id() for _ in range(50)]

    assert all(re.fullmatch(r"local_\d+", i) for i in ids)
    nums = [int(i.removeprefix("local_")) for i in ids]
    assert nums == sorted(nums)
    assert len(set(nums)) == len(nums)
