"""Key-value store persisted through SQLModel."""

import logging

from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.models.storage import KeyValueEntry
from app.stores.base import KeyValueStore

logger = logging.getLogger(__name__)


class SQLKeyValueStore(KeyValueStore):
    """Stores each key as one row of the ``key_value_entries`` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def get(self, key: str) -> bytes | None:
        with Session(self.engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                logger.debug("Key %s not found", key)
                return None
            return entry.value

    def set(self, key: str, value: bytes) -> None:
        with Session(self.engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                entry = KeyValueEntry(key=key, value=value)
            else:
                entry.value = value
            session.add(entry)
            session.commit()
        logger.debug("Wrote %d bytes to key %s", len(value), key)

    def delete(self, key: str) -> None:
        with Session(self.engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                return
            session.delete(entry)
            session.commit()
