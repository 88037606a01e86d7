"""Configuration management for Flix."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database backing the key-value store
    database_url: str = "sqlite:///./flix.db"

    # Key under which the favorites list is persisted
    favorites_key: str = "Favorites"

    # TMDB image CDN
    tmdb_image_base: str = "https://image.tmdb.org/t/p"
    poster_size: str = "w500"
    backdrop_size: str = "w780"

    @field_validator("favorites_key")
    @classmethod
    def validate_favorites_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("favorites_key must not be blank")
        return v

    @field_validator("tmdb_image_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # App settings
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
