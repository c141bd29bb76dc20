"""Application configuration using Pydantic Settings."""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from googlelogin.constants import DEFAULT_GOOGLE_SCOPES


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_secret_key: str

    @field_validator("app_secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Ensure secret key is strong enough."""
        if len(v) < 32:
            raise ValueError("APP_SECRET_KEY must be at least 32 characters long")
        if v == "change-me-to-a-secure-random-string":
            raise ValueError("APP_SECRET_KEY must be changed from the default value")
        return v

    app_url: str = "http://localhost:8080"
    app_name: str = "Google Login"

    # Database
    database_url: str = "sqlite+aiosqlite:///./googlelogin.db"

    # Redis (optional, profile cache is skipped when empty)
    redis_url: str = ""

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_scopes: Annotated[list[str], NoDecode] = list(DEFAULT_GOOGLE_SCOPES)

    @field_validator("google_scopes", mode="before")
    @classmethod
    def parse_scopes(cls, v: object) -> object:
        """Accept a JSON list or a comma/space separated string."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [s for s in v.replace(",", " ").split() if s]
        return v

    @field_validator("google_scopes")
    @classmethod
    def validate_scopes(cls, v: list[str]) -> list[str]:
        """At least one scope is needed to read the user's profile."""
        if not v:
            raise ValueError("GOOGLE_SCOPES must name at least one scope")
        return v

    # Where the browser lands after logout
    logout_redirect_url: str = ""

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def google_configured(self) -> bool:
        """Both halves of the OAuth client pair are set."""
        return bool(self.google_client_id and self.google_client_secret)

    @property
    def google_redirect_uri(self) -> str:
        """Callback URL to register in the Google Cloud console."""
        return f"{self.app_url.rstrip('/')}/api/auth/google/callback"

    @property
    def resolved_logout_url(self) -> str:
        """Where the browser goes after logout."""
        return self.logout_redirect_url or "/"

    @property
    def is_sqlite(self) -> bool:
        """Check if the database is SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
