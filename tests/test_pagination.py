import pytest

from app.application.pagination import normalize_search, page_bounds, parse_positive_int


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3", 3),
        (" 7", 7),
        ("4abc", 4),
        ("+2", 2),
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("0", 10),
        ("-3", 10),
        ("1.9", 1),
    ],
)
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 10) == expected


def test_page_bounds():
    assert page_bounds(1, 10) == (0, 10)
    assert page_bounds(3, 4) == (8, 12)


@pytest.mark.parametrize("raw, expected", [(None, None), ("", None), ("  ", None), (" Aspirin ", "Aspirin")])
def test_normalize_search(raw, expected):
    assert normalize_search(raw) == expected
