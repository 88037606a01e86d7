"""Favorites list persisted in a key-value store."""

import logging
import threading
from typing import Iterable, List, Literal

from pydantic import TypeAdapter, ValidationError

from app.core.config import get_settings
from app.models.media import Movie, describe_validation_error
from app.stores.base import KeyValueStore

logger = logging.getLogger(__name__)

_MOVIE_LIST = TypeAdapter(List[Movie])

DEFAULT_FAVORITES_KEY = "Favorites"


class CorruptStoreError(Exception):
    """Raised when the stored favorites cannot be decoded.

    The store is left untouched; callers may ``reset()`` it to recover.
    """

    def __init__(self, key: str, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.key = key
        self.original_exception = original_exception


class FavoritesStore:
    """Ordered list of favorite movies kept under a single key.

    Every mutation loads the whole list, changes it in memory, and writes
    the whole list back. Mutations through one instance are serialized by a
    lock; separate instances sharing a backing store are not coordinated.
    """

    def __init__(self, kv_store: KeyValueStore, key: str = DEFAULT_FAVORITES_KEY) -> None:
        self.kv_store = kv_store
        self.key = key
        self._lock = threading.Lock()

    def load(self) -> List[Movie]:
        """Return the stored favorites, or an empty list if none were saved."""
        data = self.kv_store.get(self.key)
        if data is None:
            return []
        try:
            return _MOVIE_LIST.validate_json(data, by_alias=True, by_name=False)
        except ValidationError as exc:
            message = (
                f"Stored favorites under '{self.key}' are corrupt "
                f"({describe_validation_error(exc)})"
            )
            logger.error(message)
            raise CorruptStoreError(self.key, message, exc) from exc

    def save(self, movies: Iterable[Movie]) -> None:
        """Overwrite the stored favorites with ``movies``."""
        movies = list(movies)
        self.kv_store.set(self.key, _MOVIE_LIST.dump_json(movies, by_alias=True))
        logger.debug("Saved %d favorites under '%s'", len(movies), self.key)

    def add_to_favorites(self, movie: Movie) -> List[Movie]:
        """Append ``movie``. Adding the same movie twice stores it twice."""
        with self._lock:
            favorites = self.load()
            favorites.append(movie)
            self.save(favorites)
        logger.info("Added movie %s (%s) to favorites", movie.id, movie.title)
        return favorites

    def remove_from_favorites(
        self, movie: Movie, match: Literal["id", "value"] = "value"
    ) -> List[Movie]:
        """Remove every stored entry matching ``movie``.

        ``match="value"`` requires every field to be equal, so entries that
        share the id but differ in any detail are kept.
        ``match="id"`` compares the TMDB id only, so a copy whose rating or
        other details changed since it was saved still matches.
        """
        if match == "id":
            return self.remove_by_id(movie.id)
        if match != "value":
            raise ValueError(f"Unknown match mode: {match!r}")

        with self._lock:
            favorites = [m for m in self.load() if m != movie]
            self.save(favorites)
        logger.info("Removed movie %s (%s) from favorites", movie.id, movie.title)
        return favorites

    def remove_by_id(self, movie_id: int) -> List[Movie]:
        """Remove every stored entry with the given id, keeping order."""
        with self._lock:
            favorites = [m for m in self.load() if m.id != movie_id]
            self.save(favorites)
        logger.info("Removed movie %s from favorites", movie_id)
        return favorites

    def is_favorite(self, movie_id: int) -> bool:
        return any(m.id == movie_id for m in self.load())

    def reset(self) -> None:
        """Replace the stored favorites with an empty list."""
        with self._lock:
            self.save([])
        logger.info("Reset favorites under '%s'", self.key)


def create_favorites_store(kv_store: KeyValueStore) -> FavoritesStore:
    """Build a FavoritesStore using the configured favorites key."""
    return FavoritesStore(kv_store, key=get_settings().favorites_key)
