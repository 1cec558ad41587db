#!/usr/bin/env python3
"""
Create a demo category, a couple of posts and comments through the services.

Uses the configured backend (STORAGE_BACKEND / DATA_DIR / DATABASE_URL).

Usage:
  python scripts/seed_demo.py
"""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog_api.core.errors import BlogError  # noqa: E402
from blog_api.dependencies import build_services  # noqa: E402


def main() -> None:
    services = build_services()
    category = services.categories.find_by_name("Technology") or services.categories.create(
        {"name": "Technology", "description": "Software and hardware"}
    )
    first = services.posts.create(
        {
            "title": "Atomic writes with os.replace",
            "content": "Write to a temp file, then rename it over the original.",
            "author": "Jane Doe",
            "tags": ["python", "storage"],
            "categoryId": category.id,
        }
    )
    second = services.posts.create(
        {
            "title": "Paginating in memory",
            "content": "Slice the sorted list and report the page metadata.",
            "author": "John Roe",
            "tags": ["python", "api"],
            "categoryId": category.id,
        }
    )
    services.comments.create(first.id, {"author": "Reader", "content": "Nice trick."})
    services.comments.create(second.id, {"author": "Reader", "content": "What about cursors?"})

    print("OK: demo data created")
    print(f"  Category: {category.id}")
    print(f"  Posts: {first.id}, {second.id}")
    print(f"  Tags: {', '.join(services.posts.get_all_tags())}")


if __name__ == "__main__":
    try:
        main()
    except BlogError as exc:
        sys.stderr.write(f"Error: {exc.message}\n")
        raise SystemExit(1)
