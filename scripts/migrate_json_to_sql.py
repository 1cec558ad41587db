#!/usr/bin/env python3
"""
One-off migration: JSON collection files -> SQL documents table.

Ids and timestamps are kept as they are, so running it twice overwrites rather
than duplicates.

Usage:
  DATABASE_URL=postgresql+psycopg://... python scripts/migrate_json_to_sql.py --data-dir ./data
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the blog_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog_api.core.config import get_settings  # noqa: E402
from blog_api.db.session import get_engine  # noqa: E402
from blog_api.domain.entities import Category, Comment, Post  # noqa: E402
from blog_api.repositories.json_storage import JsonStorage  # noqa: E402
from blog_api.repositories.sql_repository import SQLRepository  # noqa: E402

COLLECTIONS = (Category.COLLECTION, Post.COLLECTION, Comment.COLLECTION)


def migrate(data_dir: Path, database_url: str) -> dict[str, int]:
    if not data_dir.exists():
        raise SystemExit(f"Data directory not found: {data_dir}")
    source = JsonStorage(data_dir)
    target = SQLRepository(get_engine(database_url))
    target.create_schema()

    copied: dict[str, int] = {}
    for collection in COLLECTIONS:
        if not source.file_path(collection).exists():
            continue
        records = source.find_all(collection)
        for record in records:  # type: ignore[union-attr]
            target.insert_raw(collection, record)
        copied[collection] = len(records)  # type: ignore[arg-type]
    return copied


def main() -> None:
    ap = argparse.ArgumentParser(description="Copy JSON collections into the SQL backend")
    ap.add_argument("--data-dir", help="Directory holding posts.json, categories.json, comments.json")
    ap.add_argument("--database-url", help="SQLAlchemy URL (default: DATABASE_URL)")
    args = ap.parse_args()

    settings = get_settings()
    data_dir = Path(args.data_dir or settings.data_dir)
    database_url = (args.database_url or settings.database_url or "").strip()
    if not database_url:
        raise SystemExit("DATABASE_URL must be set (or pass --database-url)")

    copied = migrate(data_dir, database_url)
    for collection, count in copied.items():
        print(f"  {collection}: {count}")
    print("JSON data migrated to SQL successfully.")


if __name__ == "__main__":
    main()
