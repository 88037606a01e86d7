"""TMDB feed decoding and display helpers."""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from app.core.config import get_settings
from app.models.media import Movie, MovieFeed, describe_validation_error

logger = logging.getLogger(__name__)


class FeedDecodeError(ValueError):
    """Domain exception for feed payloads that cannot be decoded."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


class MovieSummary(BaseModel):
    """A movie projected for grid/detail display."""

    id: int
    title: str
    overview: str
    poster_url: Optional[str]
    backdrop_url: Optional[str]
    release_year: Optional[str]
    vote_average: Optional[float] = None


def decode_feed(raw: bytes | str | Mapping[str, Any]) -> List[Movie]:
    """Decode a ``{"results": [...]}`` payload into movies.

    Any invalid element fails the whole feed; no partial results are returned.
    """
    try:
        if isinstance(raw, (bytes, bytearray, str)):
            feed = MovieFeed.model_validate_json(raw, by_alias=False, by_name=True)
        else:
            feed = MovieFeed.model_validate(raw, by_alias=False, by_name=True)
    except ValidationError as exc:
        message = f"Invalid movie feed ({describe_validation_error(exc)})"
        logger.warning(message)
        raise FeedDecodeError(message, exc) from exc

    logger.debug("Decoded feed with %d movies", len(feed.results))
    return feed.results


def encode_feed(movies: Iterable[Movie]) -> dict[str, Any]:
    """Encode movies back into the feed's ``{"results": [...]}`` shape."""
    return {"results": [movie.to_feed() for movie in movies]}


def build_image_url(path: str | None, size: str) -> str | None:
    """Build a TMDB image URL for ``path`` at ``size`` (e.g. ``w500``)."""
    if not path:
        return None
    settings = get_settings()
    return f"{settings.tmdb_image_base}/{size}{path}"


def poster_url(movie: Movie) -> str | None:
    return build_image_url(movie.poster_path, get_settings().poster_size)


def backdrop_url(movie: Movie) -> str | None:
    return build_image_url(movie.backdrop_path, get_settings().backdrop_size)


def summarize_movie(movie: Movie) -> MovieSummary:
    """Project a movie into its display summary."""
    return MovieSummary(
        id=movie.id,
        title=movie.title,
        overview=movie.overview,
        poster_url=poster_url(movie),
        backdrop_url=backdrop_url(movie),
        release_year=str(movie.release_date.year) if movie.release_date else None,
        vote_average=movie.vote_average,
    )
