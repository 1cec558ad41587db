"""Utility script to create the documents table for the SQL backend."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from blog_api.core.config import get_settings
from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(database_url: str | None = None) -> None:
    engine = get_engine(database_url or get_settings().database_url)
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
