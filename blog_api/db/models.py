"""SQLAlchemy model storing every collection as JSON documents in one table."""
from __future__ import annotations

from sqlalchemy import JSON, Column, Integer, String, UniqueConstraint

from .session import Base


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),)

    # insertion order; find_all returns documents sorted by it
    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(64), nullable=False, index=True)
    doc_id = Column(String(64), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(String(32), nullable=False)
    updated_at = Column(String(32), nullable=False)
