"""Post use cases: filtered listing, tags, cascade delete of comments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from blog_api.core.errors import BlogError, NotFoundError, StorageError
from blog_api.domain.entities import Post
from blog_api.domain.query import Page, PageRequest, matches_search, paginate, sort_records
from blog_api.repositories.base import EntityRepository

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("title", "content", "author", "tags")


class CommentCleanup(Protocol):
    """What the post service needs from comments to cascade a delete."""

    def remove_by_post_id(self, post_id: str) -> int: ...


@dataclass
class PostFilter:
    page: int = 1
    page_size: Optional[int] = None
    search: Optional[str] = None
    author: Optional[str] = None
    tag: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: str = "desc"

    def matches(self, record: Mapping[str, Any]) -> bool:
        if self.search and not matches_search(record, self.search, SEARCH_FIELDS):
            return False
        if self.author and self.author.lower() not in str(record.get("author") or "").lower():
            return False
        if self.tag:
            wanted = self.tag.lower()
            tags = record.get("tags") or []
            if not any(isinstance(t, str) and t.lower() == wanted for t in tags):
                return False
        return True


class PostService:
    def __init__(
        self,
        repository: EntityRepository[Post],
        comments: CommentCleanup,
        *,
        default_page_size: int = 10,
    ) -> None:
        self.repository = repository
        self.comments = comments
        self.default_page_size = default_page_size

    def create(self, draft: Mapping[str, Any]) -> Post:
        payload = Post.validate(draft)
        logger.info("Creating new post: %s", payload["title"])
        payload.setdefault("tags", [])
        return self.repository.create(payload)

    def find_all(self, filters: Optional[PostFilter] = None) -> Page[Post]:
        filters = filters or PostFilter()
        page_size = self.default_page_size if filters.page_size is None else filters.page_size
        request = PageRequest(page=filters.page, page_size=page_size)
        logger.info(
            "Finding posts - page: %s, pageSize: %s, search: %s",
            request.page,
            request.page_size,
            filters.search or "none",
        )
        matched = [r for r in self.repository.records() if filters.matches(r)]
        ordered = sort_records(matched, filters.sort_by, filters.sort_order)
        return paginate(ordered, request).map(Post.from_record)

    def find_one(self, post_id: str) -> Post:
        post = self.repository.find_by_id(post_id)
        if post is None:
            raise NotFoundError(f'Post with ID "{post_id}" not found')
        return post

    def exists(self, post_id: str) -> bool:
        return self.repository.exists(post_id)

    def update(self, post_id: str, partial: Mapping[str, Any]) -> Post:
        payload = Post.validate(partial, partial=True)
        logger.info("Updating post with ID: %s", post_id)
        updated = self.repository.update(post_id, payload)
        if updated is None:
            raise NotFoundError(f'Post with ID "{post_id}" not found')
        return updated

    def remove(self, post_id: str) -> None:
        """
        Delete a post, then every comment that references it.

        The two steps commit separately. If removing the comments fails the
        post stays deleted and the failure is raised as StorageError; the
        leftover comments are orphans until removed again.
        """
        logger.info("Deleting post with ID: %s", post_id)
        if not self.repository.delete(post_id):
            raise NotFoundError(f'Post with ID "{post_id}" not found')
        try:
            removed = self.comments.remove_by_post_id(post_id)
        except BlogError as exc:
            logger.error("Post %s deleted but its comments could not be removed: %s", post_id, exc)
            raise StorageError(f'Post "{post_id}" was deleted but its comments could not be removed') from exc
        logger.info("Deleted %d comments for post: %s", removed, post_id)

    def get_all_tags(self) -> list[str]:
        tags = {t for r in self.repository.records() for t in (r.get("tags") or []) if isinstance(t, str)}
        return sorted(tags)

    def find_by_author(self, author: str) -> list[Post]:
        wanted = (author or "").lower()
        return [
            Post.from_record(r)
            for r in self.repository.records()
            if wanted in str(r.get("author") or "").lower()
        ]
