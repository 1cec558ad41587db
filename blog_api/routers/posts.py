from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, Response

from blog_api.core.errors import ValidationError
from blog_api.routers import get_services
from blog_api.routers.schemas import PostCreate, PostUpdate
from blog_api.services.post_service import PostFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", status_code=201)
def create_post(payload: PostCreate, request: Request):
    logger.info("POST /posts - Creating new post: %s", payload.title)
    post = get_services(request).posts.create(payload.model_dump(exclude_none=True))
    return post.to_record()


@router.get("")
def list_posts(
    request: Request,
    page: int = Query(1, ge=1),
    pageSize: Optional[int] = Query(None, ge=1),
    search: Optional[str] = None,
    author: Optional[str] = None,
    tag: Optional[str] = None,
    sortBy: Optional[str] = None,
    sortOrder: str = Query("desc", pattern="^(asc|desc)$"),
):
    services = get_services(request)
    settings = request.app.state.settings
    if pageSize is not None and pageSize > settings.max_page_size:
        raise ValidationError(f"pageSize must not exceed {settings.max_page_size}")
    filters = PostFilter(
        page=page,
        page_size=pageSize,
        search=search,
        author=author,
        tag=tag,
        sort_by=sortBy,
        sort_order=sortOrder,
    )
    return services.posts.find_all(filters).to_dict(lambda p: p.to_record())


@router.get("/tags")
def list_tags(request: Request) -> list[str]:
    return get_services(request).posts.get_all_tags()


@router.get("/{post_id}")
def get_post(post_id: str, request: Request):
    return get_services(request).posts.find_one(post_id).to_record()


@router.patch("/{post_id}")
def update_post(post_id: str, payload: PostUpdate, request: Request):
    logger.info("PATCH /posts/%s - Updating post", post_id)
    post = get_services(request).posts.update(post_id, payload.model_dump(exclude_unset=True))
    return post.to_record()


@router.delete("/{post_id}", status_code=204)
def delete_post(post_id: str, request: Request) -> Response:
    logger.info("DELETE /posts/%s - Deleting post", post_id)
    get_services(request).posts.remove(post_id)
    return Response(status_code=204)
