"""
JSON file persistence adapter.

Each collection lives in ``<data_dir>/<collection>.json`` as a list of records
formatted with two-space indentation. Every mutation reads the whole file,
changes it in memory and writes the whole file back: the new contents go to
``<collection>.json.tmp`` first and are moved over the canonical file with
``os.replace``, so readers only ever see the old or the new complete state.

The cost is O(collection size) per mutation. That is fine for a single blog's
posts and comments; it is not a design for high-volume collections.

Only mutations write. A missing file reads as an empty collection and is
created by the first mutation, so lock-free readers never touch the disk.

Mutations on one collection are serialized by a per-collection lock, which only
covers threads of the current process. Several processes writing the same data
directory can still lose updates.
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from blog_api.core.errors import StorageError, ValidationError
from blog_api.domain.query import Page, PageRequest, filter_by_field, paginate, search_records
from blog_api.repositories.base import new_id, strip_managed, utc_now

logger = logging.getLogger(__name__)

COLLECTION_PATTERN = re.compile(r"[a-z0-9_-]{1,64}")


class JsonStorage:
    """RecordStore backed by one JSON file per collection."""

    backend_name = "json"

    def __init__(
        self,
        data_dir: Union[str, Path],
        *,
        clock: Callable[[], str] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.data_dir = Path(data_dir)
        self._clock = clock
        self._id_factory = id_factory
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------ files ------------------------------
    def ensure_data_dir(self) -> None:
        absolute = self.data_dir.resolve()
        if not absolute.exists():
            absolute.mkdir(parents=True, exist_ok=True)
            logger.info("Created data directory: %s", absolute)

    def file_path(self, collection: str) -> Path:
        if not COLLECTION_PATTERN.fullmatch(collection or ""):
            raise ValidationError(f"Invalid collection name: {collection!r}")
        return self.data_dir / f"{collection}.json"

    def _lock(self, collection: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(collection)
            if lock is None:
                lock = self._locks[collection] = threading.Lock()
            return lock

    def _load(self, collection: str) -> list[dict]:
        path = self.file_path(collection)
        # the first locked mutation creates the file
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Error reading file %s: %s", path, exc)
            raise StorageError(f"Failed to read data from {collection}") from exc
        if not isinstance(data, list):
            logger.error("Error reading file %s: expected a JSON array", path)
            raise StorageError(f"Failed to read data from {collection}")
        return data

    def _save(self, collection: str, records: list[dict]) -> None:
        path = self.file_path(collection)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(records, ensure_ascii=False, indent=2)
            with tmp_path.open("w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            logger.error("Error writing file %s: %s", path, exc)
            raise StorageError(f"Failed to write data to {collection}") from exc
        logger.debug("Successfully wrote %d items to %s", len(records), collection)

    def _unique_id(self, records: list[dict]) -> str:
        taken = {r.get("id") for r in records}
        candidate = self._id_factory()
        while candidate in taken:
            logger.warning("Generated id %s already exists; regenerating", candidate)
            candidate = self._id_factory()
        return candidate

    # ------------------------------ reads ------------------------------
    def find_all(
        self, collection: str, pagination: Optional[PageRequest] = None
    ) -> Union[list[dict], Page[dict]]:
        records = self._load(collection)
        if pagination is None:
            return records
        return paginate(records, pagination)

    def find_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        return next((r for r in self._load(collection) if r.get("id") == record_id), None)

    def find_by_field(self, collection: str, field: str, value: Any) -> list[dict]:
        return filter_by_field(self._load(collection), field, value)

    def search(
        self,
        collection: str,
        term: str,
        fields: Sequence[str],
        pagination: Optional[PageRequest] = None,
    ) -> Union[list[dict], Page[dict]]:
        matched = search_records(self._load(collection), term, fields)
        if pagination is None:
            return matched
        return paginate(matched, pagination)

    def exists(self, collection: str, record_id: str) -> bool:
        return self.find_by_id(collection, record_id) is not None

    def count(self, collection: str) -> int:
        return len(self._load(collection))

    # ---------------------------- mutations ----------------------------
    def create(self, collection: str, payload: Mapping[str, Any]) -> dict:
        with self._lock(collection):
            records = self._load(collection)
            timestamp = self._clock()
            item = {
                **strip_managed(payload),
                "id": self._unique_id(records),
                "createdAt": timestamp,
                "updatedAt": timestamp,
            }
            records.append(item)
            self._save(collection, records)
        logger.info("Created new item in %s with ID: %s", collection, item["id"])
        return dict(item)

    def update(self, collection: str, record_id: str, partial: Mapping[str, Any]) -> Optional[dict]:
        with self._lock(collection):
            records = self._load(collection)
            index = next((i for i, r in enumerate(records) if r.get("id") == record_id), None)
            if index is None:
                return None
            current = records[index]
            item = {
                **current,
                **strip_managed(partial),
                "updatedAt": max(self._clock(), current.get("updatedAt") or ""),
            }
            records[index] = item
            self._save(collection, records)
        logger.info("Updated item in %s with ID: %s", collection, record_id)
        return dict(item)

    def delete(self, collection: str, record_id: str) -> bool:
        with self._lock(collection):
            records = self._load(collection)
            remaining = [r for r in records if r.get("id") != record_id]
            if len(remaining) == len(records):
                return False
            self._save(collection, remaining)
        logger.info("Deleted item from %s with ID: %s", collection, record_id)
        return True

    def delete_by_field(self, collection: str, field: str, value: Any) -> int:
        with self._lock(collection):
            records = self._load(collection)
            remaining = [r for r in records if not (field in r and r[field] == value)]
            deleted = len(records) - len(remaining)
            if deleted:
                self._save(collection, remaining)
        if deleted:
            logger.info("Deleted %d items from %s where %s = %s", deleted, collection, field, value)
        return deleted
