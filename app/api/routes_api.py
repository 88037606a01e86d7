"""API routes returning JSON for the favorites list and feed decoding."""

import logging
from functools import lru_cache
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException

from app.core.database import engine
from app.models.media import Movie, MovieDecodeError
from app.services.favorites import (
    CorruptStoreError,
    FavoritesStore,
    create_favorites_store,
)
from app.services.feed import FeedDecodeError, MovieSummary, decode_feed, summarize_movie
from app.stores import SQLKeyValueStore

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def get_favorites_store() -> FavoritesStore:
    """Dependency returning the process-wide favorites store."""
    return create_favorites_store(SQLKeyValueStore(engine))


def _corrupt_store(exc: CorruptStoreError) -> HTTPException:
    logger.error("Favorites store '%s' is corrupt: %s", exc.key, exc)
    return HTTPException(
        status_code=500,
        detail="Stored favorites are corrupt. DELETE /api/favorites to reset.",
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "flix"}


# --- Favorites ---


@router.get("/favorites", response_model=List[Movie], response_model_by_alias=False)
def list_favorites(store: FavoritesStore = Depends(get_favorites_store)):
    """List favorite movies in the order they were added."""
    try:
        return store.load()
    except CorruptStoreError as exc:
        raise _corrupt_store(exc) from exc


@router.post("/favorites", response_model=List[Movie], response_model_by_alias=False)
def add_favorite(
    payload: dict[str, Any] = Body(...),
    store: FavoritesStore = Depends(get_favorites_store),
):
    """Append a movie (feed form, snake_case keys) to the favorites list."""
    try:
        movie = Movie.from_feed(payload)
    except MovieDecodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    try:
        return store.add_to_favorites(movie)
    except CorruptStoreError as exc:
        raise _corrupt_store(exc) from exc


@router.get("/favorites/{movie_id}")
def get_favorite_status(
    movie_id: int, store: FavoritesStore = Depends(get_favorites_store)
):
    """Report whether a movie is in the favorites list."""
    try:
        return {"id": movie_id, "favorite": store.is_favorite(movie_id)}
    except CorruptStoreError as exc:
        raise _corrupt_store(exc) from exc


@router.delete(
    "/favorites/{movie_id}", response_model=List[Movie], response_model_by_alias=False
)
def remove_favorite(
    movie_id: int, store: FavoritesStore = Depends(get_favorites_store)
):
    """Remove every favorite with the given TMDB id."""
    try:
        return store.remove_by_id(movie_id)
    except CorruptStoreError as exc:
        raise _corrupt_store(exc) from exc


@router.delete("/favorites")
def reset_favorites(store: FavoritesStore = Depends(get_favorites_store)):
    """Clear the favorites list, recovering from a corrupt store."""
    store.reset()
    return {"status": "reset", "favorites": []}


# --- Feed ---


@router.post("/feed", response_model=List[MovieSummary])
def decode_movie_feed(payload: Any = Body(...)):
    """Decode a TMDB movie list payload into display summaries."""
    try:
        movies = decode_feed(payload)
    except FeedDecodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return [summarize_movie(movie) for movie in movies]
