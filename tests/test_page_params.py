import pytest
from werkzeug.datastructures import MultiDict

from jsonapi_utils.page_params import PageParams, parse_page_value


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3", 3),
        (" 12 ", 12),
        (7, 7),
        (2.0, 2),
        ("0", None),
        (0, None),
        ("-1", None),
        (-5, None),
        ("", None),
        ("abc", None),
        ("2abc", None),
        ("2.5", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
    ],
)
def test_parse_page_value(raw, expected) -> None:
    assert parse_page_value(raw) == expected


def test_normalize_paged_params() -> None:
    params = PageParams.normalize({"number": "2", "size": "10"})
    assert params == PageParams(number=2, size=10)
    assert params.number_or_first() == 2
    assert params.size_or_default(25) == 10
    assert params.offset_or_zero() == 0
    assert params.limit_or_default(25) == 25


def test_normalize_missing_and_invalid_values_use_defaults() -> None:
    params = PageParams.normalize({"number": "0", "size": "", "offset": "-3", "limit": "x"})
    assert params == PageParams()
    assert params.number_or_first() == 1
    assert params.size_or_default(10) == 10
    assert params.offset_or_zero() == 0
    assert params.limit_or_default(10) == 10
    assert params.to_dict() == {}


def test_normalize_empty() -> None:
    assert PageParams.normalize(None) == PageParams()
    assert PageParams.normalize({}) == PageParams()


def test_normalize_ignores_unknown_keys() -> None:
    assert PageParams.normalize({"offset": "5", "limit": "20", "cursor": "abc"}).to_dict() == {"offset": 5, "limit": 20}


def test_from_args() -> None:
    args = MultiDict({"page[offset]": "5", "page[limit]": "20", "sort": "-id", "filter[title]": "x"})
    assert PageParams.from_args(args) == PageParams(offset=5, limit=20)
