"""
Read-side helpers over a snapshot of collection records.

Nothing here mutates its input: every helper returns a new list (or Page).
Records are plain dicts keyed by persisted field names.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Sequence, TypeVar

from blog_api.core.errors import ValidationError

T = TypeVar("T")
U = TypeVar("U")

SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_FIELD = "createdAt"


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    page_size: int = 10

    def __post_init__(self) -> None:
        if not isinstance(self.page, int) or self.page < 1:
            raise ValidationError("page must be a positive integer")
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValidationError("pageSize must be a positive integer")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def page_request(
    page: Optional[int],
    page_size: Optional[int],
    *,
    default_size: int = 10,
    max_size: Optional[int] = None,
) -> Optional[PageRequest]:
    """Build a PageRequest, or None when neither value was supplied (unpaged)."""
    if page is None and page_size is None:
        return None
    size = page_size if page_size is not None else default_size
    if max_size is not None and size > max_size:
        raise ValidationError(f"pageSize must not exceed {max_size}")
    return PageRequest(page=page if page is not None else 1, page_size=size)


@dataclass(frozen=True)
class PageMeta:
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    data: list[T]
    meta: PageMeta

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(data=[fn(item) for item in self.data], meta=self.meta)

    def to_dict(self, serialize: Optional[Callable[[T], Any]] = None) -> dict[str, Any]:
        items = [serialize(item) for item in self.data] if serialize else list(self.data)
        return {"data": items, "meta": self.meta.to_dict()}


def paginate(items: Sequence[T], request: PageRequest) -> Page[T]:
    total = len(items)
    total_pages = math.ceil(total / request.page_size)
    start = request.offset
    return Page(
        data=list(items[start:start + request.page_size]),
        meta=PageMeta(
            total=total,
            page=request.page,
            page_size=request.page_size,
            total_pages=total_pages,
            has_next_page=request.page < total_pages,
            has_previous_page=request.page > 1,
        ),
    )


def filter_by_field(records: Iterable[Mapping[str, Any]], field: str, value: Any) -> list[dict]:
    return [dict(r) for r in records if field in r and r[field] == value]


def _contains(value: Any, needle: str) -> bool:
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, (list, tuple)):
        return any(isinstance(v, str) and needle in v.lower() for v in value)
    return False


def matches_search(record: Mapping[str, Any], term: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match against any of ``fields``."""
    needle = (term or "").lower()
    if not needle:
        return True
    return any(_contains(record.get(f), needle) for f in fields)


def search_records(records: Iterable[Mapping[str, Any]], term: str, fields: Sequence[str]) -> list[dict]:
    return [dict(r) for r in records if matches_search(r, term, fields)]


def _sort_key(value: Any) -> Optional[tuple[str, Any]]:
    # bool first: it is an int subclass
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (int, float)):
        return ("number", value)
    if isinstance(value, str):
        return ("string", value.casefold())
    return None


def sort_records(
    records: Sequence[Mapping[str, Any]],
    sort_by: Optional[str] = None,
    sort_order: str = "desc",
) -> list[dict]:
    """
    Stable sort by one field; defaults to ``createdAt`` descending.

    Values are compared within one kind (string, number or bool), chosen by the
    first record that has a comparable value. Records with a missing value or a
    value of another kind keep their relative order and come last.
    """
    order = (sort_order or "desc").lower()
    if order not in SORT_ORDERS:
        raise ValidationError("sortOrder must be 'asc' or 'desc'")
    field = sort_by or DEFAULT_SORT_FIELD

    keyed = [(_sort_key(r.get(field)), dict(r)) for r in records]
    kind = next((key[0] for key, _ in keyed if key is not None), None)
    comparable = [(key, r) for key, r in keyed if key is not None and key[0] == kind]
    rest = [r for key, r in keyed if key is None or key[0] != kind]

    ordered = sorted(comparable, key=lambda pair: pair[0][1], reverse=order == "desc")
    return [r for _, r in ordered] + rest
