from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, Response

from blog_api.domain.query import Page, page_request
from blog_api.routers import get_services
from blog_api.routers.schemas import CommentCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["comments"])


@router.post("/posts/{post_id}/comments", status_code=201)
def create_comment(post_id: str, payload: CommentCreate, request: Request):
    logger.info("POST /posts/%s/comments - Creating new comment", post_id)
    return get_services(request).comments.create(post_id, payload.model_dump()).to_record()


@router.get("/posts/{post_id}/comments")
def list_comments(
    post_id: str,
    request: Request,
    page: Optional[int] = Query(None, ge=1),
    pageSize: Optional[int] = Query(None, ge=1),
):
    services = get_services(request)
    services.posts.find_one(post_id)
    settings = request.app.state.settings
    pagination = page_request(
        page,
        pageSize,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )
    result = services.comments.find_by_post_id(post_id, pagination)
    if isinstance(result, Page):
        return result.to_dict(lambda c: c.to_record())
    return [c.to_record() for c in result]


@router.get("/posts/{post_id}/comments/count")
def count_comments(post_id: str, request: Request):
    return {"postId": post_id, "count": get_services(request).comments.count_by_post_id(post_id)}


@router.get("/comments/{comment_id}")
def get_comment(comment_id: str, request: Request):
    return get_services(request).comments.find_one(comment_id).to_record()


@router.delete("/comments/{comment_id}", status_code=204)
def delete_comment(comment_id: str, request: Request) -> Response:
    logger.info("DELETE /comments/%s - Deleting comment", comment_id)
    get_services(request).comments.remove(comment_id)
    return Response(status_code=204)
