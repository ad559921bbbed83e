import pytest

from fittrack.pagination import MAX_LIMIT, MAX_PAGE, Page, parse_page_args


def test_last_partial_page():
    page = Page.from_sequence(list(range(23)), page=3, limit=10)
    assert page.items == [20, 21, 22]
    assert page.total == 23
    assert page.total_pages == 3
    assert page.has_next is False
    assert page.has_prev is True


def test_first_page():
    page = Page.from_sequence(list(range(23)), page=1, limit=10)
    assert page.items == list(range(10))
    assert page.has_prev is False
    assert page.has_next is True


def test_page_past_the_end_is_empty_but_counted():
    page = Page.from_sequence(list(range(5)), page=4, limit=2)
    assert page.items == []
    assert page.total == 5
    assert page.total_pages == 3
    assert page.has_next is False
    assert page.has_prev is True


def test_empty_collection():
    page = Page.from_sequence([], page=1, limit=20)
    assert page.total_pages == 0
    assert page.has_next is False
    assert page.has_prev is False


def test_to_dict_uses_resource_count_key():
    page = Page.from_sequence(list(range(23)), page=2, limit=10)
    assert page.to_dict("totalWorkouts") == {
        "currentPage": 2,
        "totalPages": 3,
        "totalWorkouts": 23,
        "hasNext": True,
        "hasPrev": True,
    }


@pytest.mark.parametrize(
    "args, expected",
    [
        ({}, (1, 20)),
        ({"page": "3", "limit": "5"}, (3, 5)),
        ({"page": "abc", "limit": "x"}, (1, 20)),
        ({"page": "0", "limit": "-4"}, (1, 1)),
        ({"page": "-2"}, (1, 20)),
        ({"page": "2.5"}, (1, 20)),
        ({"page": "100000000000000000000"}, (MAX_PAGE, 20)),
        ({"limit": "1000"}, (1, MAX_LIMIT)),
    ],
)
def test_parse_page_args(args, expected):
    assert parse_page_args(args, default_limit=20) == expected
