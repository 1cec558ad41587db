"""Comment use cases. Comments hang off a post via ``postId``."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol, Union

from blog_api.core.errors import NotFoundError
from blog_api.domain.entities import Comment
from blog_api.domain.query import Page, PageRequest, paginate, sort_records
from blog_api.repositories.base import EntityRepository

logger = logging.getLogger(__name__)


class PostLookup(Protocol):
    """What the comment service needs to know about posts."""

    def exists(self, record_id: str) -> bool: ...


class CommentService:
    def __init__(self, repository: EntityRepository[Comment], posts: PostLookup) -> None:
        self.repository = repository
        self.posts = posts

    def create(self, post_id: str, draft: Mapping[str, Any]) -> Comment:
        logger.info("Creating new comment for post: %s", post_id)
        if not self.posts.exists(post_id):
            raise NotFoundError(f'Post with ID "{post_id}" not found')
        payload = Comment.validate({**draft, "postId": post_id})
        return self.repository.create(payload)

    def find_by_post_id(
        self, post_id: str, pagination: Optional[PageRequest] = None
    ) -> Union[list[Comment], Page[Comment]]:
        """Comments of one post, newest first; paged when ``pagination`` is given."""
        logger.info("Finding comments for post: %s", post_id)
        records = sort_records(self.repository.records_where("postId", post_id))
        comments = [Comment.from_record(r) for r in records]
        if pagination is None:
            return comments
        return paginate(comments, pagination)

    def find_one(self, comment_id: str) -> Comment:
        comment = self.repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError(f'Comment with ID "{comment_id}" not found')
        return comment

    def remove(self, comment_id: str) -> None:
        logger.info("Deleting comment with ID: %s", comment_id)
        if not self.repository.delete(comment_id):
            raise NotFoundError(f'Comment with ID "{comment_id}" not found')

    def remove_by_post_id(self, post_id: str) -> int:
        logger.info("Deleting all comments for post: %s", post_id)
        return self.repository.delete_by_field("postId", post_id)

    def count_by_post_id(self, post_id: str) -> int:
        return len(self.repository.records_where("postId", post_id))
