"""Category use cases: case-insensitive unique names, search."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from blog_api.core.errors import ConflictError, NotFoundError
from blog_api.domain.entities import Category
from blog_api.domain.query import Page, PageRequest
from blog_api.repositories.base import EntityRepository

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "description")


class CategoryService:
    def __init__(self, repository: EntityRepository[Category]) -> None:
        self.repository = repository

    def create(self, draft: Mapping[str, Any]) -> Category:
        payload = Category.validate(draft)
        logger.info("Creating new category: %s", payload["name"])
        if self.find_by_name(payload["name"]):
            raise ConflictError(f'Category with name "{payload["name"]}" already exists')
        payload.setdefault("description", "")
        return self.repository.create(payload)

    def find_all(self, pagination: Optional[PageRequest] = None) -> Union[list[Category], Page[Category]]:
        logger.info("Finding all categories")
        return self.repository.find_all(pagination)

    def find_one(self, category_id: str) -> Category:
        category = self.repository.find_by_id(category_id)
        if category is None:
            raise NotFoundError(f'Category with ID "{category_id}" not found')
        return category

    def find_by_name(self, name: str) -> Optional[Category]:
        wanted = (name or "").lower()
        for record in self.repository.records():
            if str(record.get("name", "")).lower() == wanted:
                return Category.from_record(record)
        return None

    def update(self, category_id: str, partial: Mapping[str, Any]) -> Category:
        payload = Category.validate(partial, partial=True)
        logger.info("Updating category with ID: %s", category_id)
        if payload.get("name"):
            existing = self.find_by_name(payload["name"])
            if existing and existing.id != category_id:
                raise ConflictError(f'Category with name "{payload["name"]}" already exists')
        updated = self.repository.update(category_id, payload)
        if updated is None:
            raise NotFoundError(f'Category with ID "{category_id}" not found')
        return updated

    def remove(self, category_id: str) -> None:
        logger.info("Deleting category with ID: %s", category_id)
        if not self.repository.delete(category_id):
            raise NotFoundError(f'Category with ID "{category_id}" not found')

    def search(self, term: str) -> list[Category]:
        return self.repository.search(term or "", SEARCH_FIELDS)  # type: ignore[return-value]
