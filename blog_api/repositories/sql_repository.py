"""
Document-store backend on top of SQLAlchemy.

Every record is one row of the ``documents`` table: the full record as JSON
plus the collection name, its id and both timestamps. Each operation runs in
its own session and commits once, so single-record writes are atomic but a
sequence of calls (e.g. a cascade delete) is not.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, Union

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.core.errors import StorageError
from blog_api.db.models import Document
from blog_api.db.session import Base, make_sessionmaker
from blog_api.domain.query import Page, PageRequest, filter_by_field, paginate, search_records
from blog_api.repositories.base import new_id, strip_managed, utc_now

logger = logging.getLogger(__name__)


class SQLRepository:
    """RecordStore backed by a SQL table of JSON documents."""

    backend_name = "sql"

    def __init__(
        self,
        engine: Engine,
        *,
        clock: Callable[[], str] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.engine = engine
        self._sessionmaker = make_sessionmaker(engine)
        self._clock = clock
        self._id_factory = id_factory

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def _session(self, collection: str) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Database error on %s: %s", collection, exc)
            raise StorageError(f"Failed to access data in {collection}") from exc
        finally:
            session.close()

    def _get(self, session: Session, collection: str, record_id: str) -> Optional[Document]:
        stmt = select(Document).where(Document.collection == collection, Document.doc_id == record_id)
        return session.execute(stmt).scalar_one_or_none()

    def _all(self, collection: str) -> list[dict]:
        with self._session(collection) as session:
            stmt = select(Document).where(Document.collection == collection).order_by(Document.seq)
            return [dict(doc.data) for doc in session.execute(stmt).scalars().all()]

    # ------------------------------ reads ------------------------------
    def find_all(
        self, collection: str, pagination: Optional[PageRequest] = None
    ) -> Union[list[dict], Page[dict]]:
        records = self._all(collection)
        if pagination is None:
            return records
        return paginate(records, pagination)

    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        with self._session(collection) as session:
            doc = self._get(session, collection, record_id)
            return dict(doc.data) if doc else None

    def find_by_field(self, collection: str, field: str, value: Any) -> list[dict]:
        return filter_by_field(self._all(collection), field, value)

    def search(
        self,
        collection: str,
        term: str,
        fields: Sequence[str],
        pagination: Optional[PageRequest] = None,
    ) -> Union[list[dict], Page[dict]]:
        matched = search_records(self._all(collection), term, fields)
        if pagination is None:
            return matched
        return paginate(matched, pagination)

    def exists(self, collection: str, record_id: str) -> bool:
        with self._session(collection) as session:
            stmt = (
                select(Document.seq)
                .where(Document.collection == collection, Document.doc_id == record_id)
                .limit(1)
            )
            return session.execute(stmt).first() is not None

    def count(self, collection: str) -> int:
        with self._session(collection) as session:
            stmt = select(func.count()).select_from(Document).where(Document.collection == collection)
            return int(session.execute(stmt).scalar_one())

    # ---------------------------- mutations ----------------------------
    def create(self, collection: str, payload: Mapping[str, Any]) -> dict:
        timestamp = self._clock()
        with self._session(collection) as session:
            record_id = self._id_factory()
            while self._get(session, collection, record_id) is not None:
                logger.warning("Generated id %s already exists; regenerating", record_id)
                record_id = self._id_factory()
            item = {**strip_managed(payload), "id": record_id, "createdAt": timestamp, "updatedAt": timestamp}
            session.add(
                Document(
                    collection=collection,
                    doc_id=record_id,
                    data=item,
                    created_at=timestamp,
                    updated_at=timestamp,
                )
            )
            session.commit()
        logger.info("Created new item in %s with ID: %s", collection, record_id)
        return dict(item)

    def insert_raw(self, collection: str, record: Mapping[str, Any]) -> None:
        """Store a record as-is, keeping its id and timestamps (used by data migration)."""
        with self._session(collection) as session:
            existing = self._get(session, collection, record["id"])
            if existing is None:
                existing = Document(collection=collection, doc_id=record["id"])
                session.add(existing)
            existing.data = dict(record)
            existing.created_at = record.get("createdAt") or ""
            existing.updated_at = record.get("updatedAt") or existing.created_at
            session.commit()

    def update(self, collection: str, record_id: str, partial: Mapping[str, Any]) -> Optional[dict]:
        with self._session(collection) as session:
            doc = self._get(session, collection, record_id)
            if doc is None:
                return None
            current = dict(doc.data)
            item = {
                **current,
                **strip_managed(partial),
                "updatedAt": max(self._clock(), current.get("updatedAt") or ""),
            }
            # JSON columns only track reassignment
            doc.data = item
            doc.updated_at = item["updatedAt"]
            session.commit()
        logger.info("Updated item in %s with ID: %s", collection, record_id)
        return dict(item)

    def delete(self, collection: str, record_id: str) -> bool:
        with self._session(collection) as session:
            result = session.execute(
                delete(Document).where(Document.collection == collection, Document.doc_id == record_id)
            )
            session.commit()
            deleted = bool(result.rowcount)
        if deleted:
            logger.info("Deleted item from %s with ID: %s", collection, record_id)
        return deleted

    def delete_by_field(self, collection: str, field: str, value: Any) -> int:
        with self._session(collection) as session:
            stmt = select(Document).where(Document.collection == collection)
            seqs = [
                doc.seq
                for doc in session.execute(stmt).scalars().all()
                if field in (doc.data or {}) and doc.data[field] == value
            ]
            if not seqs:
                return 0
            session.execute(delete(Document).where(Document.seq.in_(seqs)))
            session.commit()
        logger.info("Deleted %d items from %s where %s = %s", len(seqs), collection, field, value)
        return len(seqs)
