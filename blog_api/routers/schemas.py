"""Request bodies for the HTTP layer. Field names follow the JSON wire format."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

URL_PATTERN = r"^https?://\S+$"


class PostCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=3, max_length=200)
    content: str = Field(min_length=10)
    author: str = Field(min_length=2, max_length=100)
    tags: list[str] = Field(default_factory=list)
    image: Optional[str] = Field(default=None, pattern=URL_PATTERN)
    categoryId: Optional[str] = None


class PostUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    content: Optional[str] = Field(default=None, min_length=10)
    author: Optional[str] = Field(default=None, min_length=2, max_length=100)
    tags: Optional[list[str]] = None
    image: Optional[str] = Field(default=None, pattern=URL_PATTERN)
    categoryId: Optional[str] = None


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=2, max_length=100)
    description: str = Field(default="", max_length=500)


class CategoryUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class CommentCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    author: str = Field(min_length=2, max_length=100)
    content: str = Field(min_length=1, max_length=2000)
