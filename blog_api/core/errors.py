"""Error taxonomy shared by the storage layer, services and routers."""

from __future__ import annotations


class BlogError(Exception):
    """Base class for every failure the core reports to its callers."""

    default_code = "error"
    default_status = 500

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status


class NotFoundError(BlogError):
    """Referenced id does not exist in its collection."""

    default_code = "not_found"
    default_status = 404


class ConflictError(BlogError):
    """Uniqueness violation (e.g. category name already taken)."""

    default_code = "conflict"
    default_status = 409


class ValidationError(BlogError):
    """Malformed or out-of-range input rejected by the core."""

    default_code = "validation_failed"
    default_status = 422


class StorageError(BlogError):
    """Read, write or rename against the backing store could not complete."""

    default_code = "storage_failure"
    default_status = 500
