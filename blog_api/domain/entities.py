"""Entity shapes for the three blog collections.

Records are persisted with camelCase keys (``createdAt``, ``postId``); the
dataclasses below expose them as snake_case attributes. Conversion in both
directions goes through ``from_record`` / ``to_record``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Mapping, Optional, TypeVar

from blog_api.core.errors import ValidationError

MANAGED_FIELDS = ("id", "createdAt", "updatedAt")

E = TypeVar("E", bound="RecordMixin")


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class RecordMixin:
    """Conversion and validation helpers shared by every entity dataclass."""

    COLLECTION: ClassVar[str] = ""
    # persisted key -> (min length, max length or None); enforced on drafts
    LENGTHS: ClassVar[dict[str, tuple[int, Optional[int]]]] = {}
    REQUIRED: ClassVar[tuple[str, ...]] = ()
    OPTIONAL_STRINGS: ClassVar[tuple[str, ...]] = ()
    STRING_LISTS: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def from_record(cls: type[E], record: Mapping[str, Any]) -> E:
        values = {}
        for f in fields(cls):  # type: ignore[arg-type]
            key = to_camel(f.name)
            if key in record:
                values[f.name] = record[key]
        return cls(**values)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None and to_camel(f.name) in self.OPTIONAL_STRINGS:
                continue
            record[to_camel(f.name)] = list(value) if isinstance(value, list) else value
        return record

    @classmethod
    def writable_fields(cls) -> set[str]:
        return {to_camel(f.name) for f in fields(cls)} - set(MANAGED_FIELDS)  # type: ignore[arg-type]

    @classmethod
    def validate(cls, payload: Mapping[str, Any], *, partial: bool = False) -> dict[str, Any]:
        """
        Return a cleaned copy of ``payload`` or raise ValidationError.

        Managed fields are dropped silently; unknown fields are rejected. With
        ``partial=True`` required fields may be absent (partial update).
        """
        cleaned = {k: v for k, v in payload.items() if k not in MANAGED_FIELDS}
        unknown = set(cleaned) - cls.writable_fields()
        if unknown:
            raise ValidationError(f"Unknown field(s) for {cls.COLLECTION}: {', '.join(sorted(unknown))}")
        if not partial:
            missing = [key for key in cls.REQUIRED if cleaned.get(key) is None]
            if missing:
                raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        for key, (low, high) in cls.LENGTHS.items():
            if key not in cleaned:
                continue
            value = cleaned[key]
            if value is None and key in cls.OPTIONAL_STRINGS:
                continue
            if not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")
            if len(value) < low or (high is not None and len(value) > high):
                bound = f"{low}-{high}" if high is not None else f"at least {low}"
                raise ValidationError(f"{key} must be {bound} characters long")
        for key in cls.OPTIONAL_STRINGS:
            value = cleaned.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")
        for key in cls.STRING_LISTS:
            if key not in cleaned:
                continue
            value = cleaned[key]
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ValidationError(f"{key} must be a list of strings")
        return cleaned


@dataclass
class Post(RecordMixin):
    COLLECTION: ClassVar[str] = "posts"
    LENGTHS: ClassVar[dict[str, tuple[int, Optional[int]]]] = {
        "title": (3, 200),
        "content": (10, None),
        "author": (2, 100),
    }
    REQUIRED: ClassVar[tuple[str, ...]] = ("title", "content", "author")
    OPTIONAL_STRINGS: ClassVar[tuple[str, ...]] = ("image", "categoryId")
    STRING_LISTS: ClassVar[tuple[str, ...]] = ("tags",)

    title: str
    content: str
    author: str
    tags: list[str] = field(default_factory=list)
    image: Optional[str] = None
    category_id: Optional[str] = None
    id: str = ""
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Category(RecordMixin):
    COLLECTION: ClassVar[str] = "categories"
    LENGTHS: ClassVar[dict[str, tuple[int, Optional[int]]]] = {
        "name": (2, 100),
        "description": (0, 500),
    }
    REQUIRED: ClassVar[tuple[str, ...]] = ("name",)

    name: str
    description: str = ""
    id: str = ""
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Comment(RecordMixin):
    COLLECTION: ClassVar[str] = "comments"
    LENGTHS: ClassVar[dict[str, tuple[int, Optional[int]]]] = {
        "postId": (1, None),
        "author": (2, 100),
        "content": (1, 2000),
    }
    REQUIRED: ClassVar[tuple[str, ...]] = ("postId", "author", "content")

    post_id: str
    author: str
    content: str
    id: str = ""
    created_at: str = ""
    updated_at: str = ""
