"""Database setup for Flix using SQLModel."""

from sqlmodel import SQLModel, create_engine

from app.core.config import get_settings
from app.models.storage import KeyValueEntry  # noqa: F401 registers the table

settings = get_settings()

# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args={"check_same_thread": False}  # Needed for SQLite
    if settings.database_url.startswith("sqlite")
    else {},
)


def create_db_and_tables(bind=None):
    """Create all database tables."""
    SQLModel.metadata.create_all(bind or engine)
