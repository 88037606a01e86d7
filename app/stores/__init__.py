"""Key-value store implementations."""

from app.stores.base import KeyValueStore
from app.stores.memory_store import InMemoryKeyValueStore
from app.stores.sql_store import SQLKeyValueStore

__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "SQLKeyValueStore"]
