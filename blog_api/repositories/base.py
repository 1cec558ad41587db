"""Storage contract shared by every backend, plus the typed per-entity accessor."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Generic, Mapping, Optional, Protocol, Sequence, TypeVar, Union

from blog_api.domain.entities import MANAGED_FIELDS, RecordMixin
from blog_api.domain.query import Page, PageRequest

E = TypeVar("E", bound=RecordMixin)


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    """Current instant as a sortable ISO-8601 string, e.g. ``2024-05-01T10:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def strip_managed(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if k not in MANAGED_FIELDS}


class RecordStore(Protocol):
    """Collection-scoped CRUD over plain dict records."""

    def find_all(
        self, collection: str, pagination: Optional[PageRequest] = None
    ) -> Union[list[dict], Page[dict]]: ...

    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]: ...

    def find_by_field(self, collection: str, field: str, value: Any) -> list[dict]: ...

    def search(
        self,
        collection: str,
        term: str,
        fields: Sequence[str],
        pagination: Optional[PageRequest] = None,
    ) -> Union[list[dict], Page[dict]]: ...

    def create(self, collection: str, payload: Mapping[str, Any]) -> dict: ...

    def update(self, collection: str, record_id: str, partial: Mapping[str, Any]) -> Optional[dict]: ...

    def delete(self, collection: str, record_id: str) -> bool: ...

    def delete_by_field(self, collection: str, field: str, value: Any) -> int: ...

    def exists(self, collection: str, record_id: str) -> bool: ...

    def count(self, collection: str) -> int: ...


class EntityRepository(Generic[E]):
    """Typed view of one collection on top of a shared RecordStore."""

    def __init__(self, store: RecordStore, kind: type[E]) -> None:
        self.store = store
        self.kind = kind
        self.collection = kind.COLLECTION

    def _wrap(self, record: Optional[Mapping[str, Any]]) -> Optional[E]:
        return self.kind.from_record(record) if record is not None else None

    def records(self) -> list[dict]:
        """Raw snapshot of the collection, in store order."""
        return self.store.find_all(self.collection)  # type: ignore[return-value]

    def records_where(self, field: str, value: Any) -> list[dict]:
        return self.store.find_by_field(self.collection, field, value)

    def find_all(self, pagination: Optional[PageRequest] = None) -> Union[list[E], Page[E]]:
        result = self.store.find_all(self.collection, pagination)
        if isinstance(result, Page):
            return result.map(self.kind.from_record)
        return [self.kind.from_record(r) for r in result]

    def find_by_id(self, record_id: str) -> Optional[E]:
        return self._wrap(self.store.find_by_id(self.collection, record_id))

    def find_by_field(self, field: str, value: Any) -> list[E]:
        return [self.kind.from_record(r) for r in self.store.find_by_field(self.collection, field, value)]

    def search(
        self, term: str, fields: Sequence[str], pagination: Optional[PageRequest] = None
    ) -> Union[list[E], Page[E]]:
        result = self.store.search(self.collection, term, fields, pagination)
        if isinstance(result, Page):
            return result.map(self.kind.from_record)
        return [self.kind.from_record(r) for r in result]

    def create(self, payload: Mapping[str, Any]) -> E:
        return self.kind.from_record(self.store.create(self.collection, payload))

    def update(self, record_id: str, partial: Mapping[str, Any]) -> Optional[E]:
        return self._wrap(self.store.update(self.collection, record_id, partial))

    def delete(self, record_id: str) -> bool:
        return self.store.delete(self.collection, record_id)

    def delete_by_field(self, field: str, value: Any) -> int:
        return self.store.delete_by_field(self.collection, field, value)

    def exists(self, record_id: str) -> bool:
        return self.store.exists(self.collection, record_id)

    def count(self) -> int:
        return self.store.count(self.collection)
