"""
Tests for scripts/migrate_json_to_sql.py against a temp data dir and SQLite file.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the blog_api package and the scripts importable for local test runs
ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "scripts"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import migrate_json_to_sql  # noqa: E402
from blog_api.db import models  # noqa: E402
from blog_api.db import session as db_session  # noqa: E402
from blog_api.repositories.json_storage import JsonStorage  # noqa: E402
from blog_api.repositories.sql_repository import SQLRepository  # noqa: E402


@pytest.fixture()
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    yield url
    engine = db_session.get_engine(url)
    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()


def test_copies_records_keeping_ids_and_timestamps(tmp_path, database_url):
    data_dir = tmp_path / "data"
    source = JsonStorage(data_dir)
    post = source.create("posts", {"title": "Hello"})
    comment = source.create("comments", {"postId": post["id"], "content": "Hi"})

    copied = migrate_json_to_sql.migrate(data_dir, database_url)
    again = migrate_json_to_sql.migrate(data_dir, database_url)

    assert copied == again == {"posts": 1, "comments": 1}
    target = SQLRepository(db_session.get_engine(database_url))
    assert target.find_all("posts") == [post]
    assert target.find_all("comments") == [comment]


def test_missing_collections_are_skipped_and_not_created(tmp_path, database_url):
    data_dir = tmp_path / "data"
    JsonStorage(data_dir).create("categories", {"name": "Tech"})

    copied = migrate_json_to_sql.migrate(data_dir, database_url)

    assert copied == {"categories": 1}
    assert sorted(p.name for p in data_dir.iterdir()) == ["categories.json"]
