"""Application configuration settings."""

from functools import lru_cache
from typing import Optional
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "shortlinks.db"

    # Application
    app_title: str = "Short Links Service"
    app_version: str = "0.1.0"
    app_description: str = "Bind short aliases to long URLs and redirect through them"
    log_level: str = "INFO"

    # Alias assignment
    alias_length: int = Field(6, gt=0)
    max_retries: int = Field(5, gt=0)
    min_alias_length: int = Field(3, gt=0)
    max_alias_length: int = Field(20, gt=0)

    # Basic auth for link creation, disabled unless both are set
    auth_username: Optional[str] = None
    auth_password: Optional[str] = None

    @model_validator(mode="after")
    def check_alias_bounds(self) -> "Settings":
        # Generated aliases must pass the same checks as requested ones
        if not self.min_alias_length <= self.alias_length <= self.max_alias_length:
            raise ValueError(
                f"alias_length ({self.alias_length}) must be between "
                f"min_alias_length ({self.min_alias_length}) and "
                f"max_alias_length ({self.max_alias_length})"
            )
        return self

    @model_validator(mode="after")
    def check_auth_pair(self) -> "Settings":
        if bool(self.auth_username) != bool(self.auth_password):
            raise ValueError(
                "auth_username and auth_password must be set together"
            )
        return self

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_username and self.auth_password)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
