from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

# Make the blog_api package importable for local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog_api.core.errors import ValidationError  # noqa: E402
from blog_api.domain.query import (  # noqa: E402
    PageRequest,
    matches_search,
    page_request,
    paginate,
    search_records,
    sort_records,
)


@pytest.mark.parametrize("total", [0, 1, 5, 6, 7, 12])
@pytest.mark.parametrize("size", [1, 3, 6])
def test_pages_concatenate_to_full_sequence(total, size):
    items = list(range(total))
    pages = max(1, math.ceil(total / size))
    collected = []
    for number in range(1, pages + 1):
        page = paginate(items, PageRequest(page=number, page_size=size))
        assert page.meta.total == total
        assert page.meta.total_pages == math.ceil(total / size)
        collected.extend(page.data)
    assert collected == items


def test_page_boundary_flags():
    items = list(range(25))
    first = paginate(items, PageRequest(1, 10))
    last = paginate(items, PageRequest(3, 10))
    assert first.meta.has_previous_page is False
    assert first.meta.has_next_page is True
    assert last.meta.has_next_page is False
    assert last.meta.has_previous_page is True
    assert last.data == [20, 21, 22, 23, 24]


def test_page_past_the_end_is_empty():
    page = paginate([1, 2, 3], PageRequest(5, 2))
    assert page.data == []
    assert page.meta.total_pages == 2
    assert page.meta.has_next_page is False
    assert page.meta.has_previous_page is True


def test_page_serializes_with_camel_case_meta():
    body = paginate(["a", "b", "c"], PageRequest(1, 2)).to_dict()
    assert body == {
        "data": ["a", "b"],
        "meta": {
            "total": 3,
            "page": 1,
            "pageSize": 2,
            "totalPages": 2,
            "hasNextPage": True,
            "hasPreviousPage": False,
        },
    }


@pytest.mark.parametrize("page,size", [(0, 10), (1, 0), (-1, 5)])
def test_page_request_rejects_non_positive_values(page, size):
    with pytest.raises(ValidationError):
        PageRequest(page, size)


def test_page_request_is_none_when_unpaged():
    assert page_request(None, None, default_size=10) is None
    assert page_request(2, None, default_size=10) == PageRequest(2, 10)
    assert page_request(None, 5, default_size=10) == PageRequest(1, 5)
    with pytest.raises(ValidationError):
        page_request(1, 500, default_size=10, max_size=100)


def test_search_is_case_insensitive_and_covers_lists():
    record = {"title": "Hello World", "tags": ["Python", "APIs"], "views": 3}
    assert matches_search(record, "world", ["title"])
    assert matches_search(record, "pyth", ["tags"])
    assert not matches_search(record, "python", ["title"])
    assert not matches_search(record, "3", ["views"])
    assert matches_search(record, "", ["title"])


def test_search_records_returns_copies():
    records = [{"name": "Tech"}, {"name": "Travel"}, {"name": "Food"}]
    found = search_records(records, "t", ["name"])
    assert [r["name"] for r in found] == ["Tech", "Travel"]
    found[0]["name"] = "changed"
    assert records[0]["name"] == "Tech"


def test_default_sort_is_created_at_descending():
    records = [
        {"id": "a", "createdAt": "2024-01-01T00:00:00.000Z"},
        {"id": "b", "createdAt": "2024-01-03T00:00:00.000Z"},
        {"id": "c", "createdAt": "2024-01-02T00:00:00.000Z"},
    ]
    assert [r["id"] for r in sort_records(records)] == ["b", "c", "a"]


def test_sort_is_stable_for_equal_keys_in_both_directions():
    records = [
        {"id": "a", "author": "Ann"},
        {"id": "b", "author": "bob"},
        {"id": "c", "author": "ann"},
        {"id": "d", "author": "Bob"},
    ]
    assert [r["id"] for r in sort_records(records, "author", "asc")] == ["a", "c", "b", "d"]
    assert [r["id"] for r in sort_records(records, "author", "desc")] == ["b", "d", "a", "c"]


def test_sort_numbers_and_incomparable_values_go_last():
    records = [
        {"id": "a", "score": 10},
        {"id": "b", "score": None},
        {"id": "c", "score": 2},
        {"id": "d", "score": "n/a"},
        {"id": "e"},
    ]
    assert [r["id"] for r in sort_records(records, "score", "asc")] == ["c", "a", "b", "d", "e"]


def test_sort_rejects_unknown_order():
    with pytest.raises(ValidationError):
        sort_records([], "title", "sideways")
