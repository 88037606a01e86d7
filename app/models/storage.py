"""Table models for the persistent key-value store."""

from sqlmodel import Field, SQLModel


class KeyValueEntry(SQLModel, table=True):
    """A single key-value slot."""

    __tablename__ = "key_value_entries"

    key: str = Field(primary_key=True)
    value: bytes
