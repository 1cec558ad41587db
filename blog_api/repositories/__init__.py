"""
Persistence adapters.

Two interchangeable backends implement the RecordStore contract:
- json_storage.JsonStorage: one JSON file per collection, atomic replace-on-write
- sql_repository.SQLRepository: JSON documents in a SQL table via SQLAlchemy

Services never talk to a backend directly; they go through a typed
EntityRepository bound to one collection.
"""

from .base import EntityRepository, RecordStore
from .json_storage import JsonStorage
from .sql_repository import SQLRepository

__all__ = ["EntityRepository", "RecordStore", "JsonStorage", "SQLRepository"]
