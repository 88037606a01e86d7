from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from app.api.routes_api import router as api_router
from app.core.database import create_db_and_tables

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    create_db_and_tables()
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Flix",
    description="Favorite movies from the TMDB feed",
    version="0.1.0",
    lifespan=app_lifespan,
)

# Include routers
app.include_router(api_router, prefix="/api")
