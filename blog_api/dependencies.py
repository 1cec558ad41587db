"""
Composition root: build the storage backend, the typed repositories and the
services in dependency order.

Comments need to know whether a post exists; posts need to remove their
comments on delete. Neither service constructs the other: the comment service
gets the posts repository (for ``exists``), and the post service gets the
already-built comment service (for ``remove_by_post_id``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from blog_api.core.config import Settings, get_settings
from blog_api.db.session import get_engine
from blog_api.domain.entities import Category, Comment, Post
from blog_api.repositories.base import EntityRepository, RecordStore
from blog_api.repositories.json_storage import JsonStorage
from blog_api.repositories.sql_repository import SQLRepository
from blog_api.services.category_service import CategoryService
from blog_api.services.comment_service import CommentService
from blog_api.services.post_service import PostService


@dataclass
class Services:
    store: RecordStore
    posts: PostService
    categories: CategoryService
    comments: CommentService


def build_store(settings: Settings) -> RecordStore:
    if settings.storage_backend == "sql":
        repository = SQLRepository(get_engine(settings.database_url))
        repository.create_schema()
        return repository
    storage = JsonStorage(settings.data_dir)
    storage.ensure_data_dir()
    return storage


def build_services(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> Services:
    settings = settings or get_settings()
    store = store or build_store(settings)

    post_repository = EntityRepository(store, Post)
    comments = CommentService(EntityRepository(store, Comment), posts=post_repository)
    posts = PostService(post_repository, comments, default_page_size=settings.default_page_size)
    categories = CategoryService(EntityRepository(store, Category))
    return Services(store=store, posts=posts, categories=categories, comments=comments)
