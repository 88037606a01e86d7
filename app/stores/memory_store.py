"""In-memory key-value store."""

from typing import Dict

from app.stores.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Contents live only as long as the instance."""

    def __init__(self, initial: Dict[str, bytes] | None = None) -> None:
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
