"""
Application configuration using Pydantic settings.

Usage:
    from core.config import get_settings
    settings = get_settings()
"""

import os
import warnings
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    NextUp settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars)
        - DATABASE_URL
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "NextUp"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)
    environment: str = Field(default="development", validation_alias="ENV")

    # Database
    database_url: str = Field(default="sqlite:///nextup.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # JWT / Authentication
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24 * 30)

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    # Cache
    cache_backend: Literal["memory", "redis"] = Field(default="memory", validation_alias="CACHE_BACKEND")
    cache_sweep_interval_seconds: int = Field(default=60, validation_alias="CACHE_SWEEP_INTERVAL")
    cache_search_ttl: int = Field(default=5 * 60, validation_alias="CACHE_SEARCH_TTL")
    cache_game_detail_ttl: int = Field(default=24 * 60 * 60, validation_alias="CACHE_GAME_DETAIL_TTL")
    cache_similar_games_ttl: int = Field(default=60 * 60, validation_alias="CACHE_SIMILAR_GAMES_TTL")

    # Redis (only used when CACHE_BACKEND=redis)
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")

    # Affinity matching
    affinity_min_shared_games: int = Field(default=3, ge=1, validation_alias="AFFINITY_MIN_SHARED_GAMES")
    affinity_result_limit: int = Field(default=10, ge=1, validation_alias="AFFINITY_RESULT_LIMIT")

    @property
    def redis_url(self) -> str:
        """Construct Redis URL from components."""
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secret - warns in dev, errors in production."""
        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")

        forbidden_values = ["change_me", "changeme", "secret", "jwt-secret", "development", "test"]
        is_forbidden = v.lower() in forbidden_values
        is_too_short = len(v) < 32

        if is_production:
            if is_forbidden:
                raise ValueError(f"JWT_SECRET_KEY cannot be a default value ('{v}') in production.")
            if is_too_short:
                raise ValueError(
                    f"JWT_SECRET_KEY must be at least 32 characters in production (got {len(v)})."
                )
        elif is_forbidden or is_too_short:
            warnings.warn(
                "JWT_SECRET_KEY is weak or a default value. Set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )

        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
