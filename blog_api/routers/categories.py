from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, Response

from blog_api.domain.query import Page, page_request
from blog_api.routers import get_services
from blog_api.routers.schemas import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=201)
def create_category(payload: CategoryCreate, request: Request):
    logger.info("POST /categories - Creating new category: %s", payload.name)
    return get_services(request).categories.create(payload.model_dump()).to_record()


@router.get("")
def list_categories(
    request: Request,
    page: Optional[int] = Query(None, ge=1),
    pageSize: Optional[int] = Query(None, ge=1),
):
    settings = request.app.state.settings
    pagination = page_request(
        page,
        pageSize,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )
    result = get_services(request).categories.find_all(pagination)
    if isinstance(result, Page):
        return result.to_dict(lambda c: c.to_record())
    return [c.to_record() for c in result]


@router.get("/search")
def search_categories(request: Request, q: str = ""):
    logger.info("GET /categories/search - Searching for: %s", q)
    return [c.to_record() for c in get_services(request).categories.search(q)]


@router.get("/{category_id}")
def get_category(category_id: str, request: Request):
    return get_services(request).categories.find_one(category_id).to_record()


@router.patch("/{category_id}")
def update_category(category_id: str, payload: CategoryUpdate, request: Request):
    logger.info("PATCH /categories/%s - Updating category", category_id)
    category = get_services(request).categories.update(category_id, payload.model_dump(exclude_unset=True))
    return category.to_record()


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: str, request: Request) -> Response:
    logger.info("DELETE /categories/%s - Deleting category", category_id)
    get_services(request).categories.remove(category_id)
    return Response(status_code=204)
