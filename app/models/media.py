"""Media models for TMDB feed payloads and persisted favorites."""

from datetime import date
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel


class MovieDecodeError(ValueError):
    """Raised when a movie payload is structurally invalid."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


def describe_validation_error(exc: ValidationError) -> str:
    """Return a short description of the first error in a ValidationError."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"


class Movie(BaseModel):
    """A movie from the TMDB feed.

    Attributes follow the feed's snake_case names. The persisted favorites
    list uses the camelCase aliases (``posterPath``, ``releaseDate``, ...).
    ``from_feed`` reads only snake_case keys and ``from_stored`` only
    camelCase keys; keyword construction accepts either.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )

    title: StrictStr
    overview: StrictStr
    poster_path: Optional[str] = None  # Path used to build the poster image URL
    backdrop_path: Optional[str] = None  # Path used to build the backdrop image URL
    vote_average: Optional[float] = None
    release_date: Optional[date] = None
    id: StrictInt

    @field_validator("vote_average", mode="before")
    @classmethod
    def numeric_vote_average(cls, v: Any) -> Any:
        if isinstance(v, (str, bool)):
            raise ValueError("vote_average must be a number")
        return v

    @field_validator("release_date", mode="before")
    @classmethod
    def blank_release_date(cls, v: Any) -> Any:
        # TMDB sends "" for unreleased titles
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def _decode(cls, payload: Any, *, by_alias: bool) -> "Movie":
        try:
            return cls.model_validate(payload, by_alias=by_alias, by_name=not by_alias)
        except ValidationError as exc:
            raise MovieDecodeError(
                f"Invalid movie payload ({describe_validation_error(exc)})", exc
            ) from exc

    @classmethod
    def from_feed(cls, payload: Any) -> "Movie":
        """Decode a movie object from the TMDB feed (snake_case keys)."""
        return cls._decode(payload, by_alias=False)

    @classmethod
    def from_stored(cls, payload: Any) -> "Movie":
        """Decode a movie object from the persisted favorites list (camelCase keys)."""
        return cls._decode(payload, by_alias=True)

    def to_feed(self) -> dict[str, Any]:
        """Encode as a JSON-compatible dict using the feed's snake_case keys."""
        return self.model_dump(mode="json")

    def to_stored(self) -> dict[str, Any]:
        """Encode as a JSON-compatible dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class MovieFeed(BaseModel):
    """Top-level shape of a TMDB movie list response."""

    results: List[Movie]
