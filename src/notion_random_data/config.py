"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notion_random_data.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Notion configuration
    notion_token: str = Field(alias="NOTION_TOKEN")
    base_parent_page_id: str = Field(alias="BASE_PARENT_PAGE_ID")
    request_timeout: float = Field(default=30.0, alias="REQUEST_TIMEOUT")

    # Example databases
    source_database_id: str | None = Field(default=None, alias="SOURCE_DATABASE_ID")
    update_database_id: str | None = Field(default=None, alias="UPDATE_DATABASE_ID")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(str(error["loc"][0]) for error in e.errors())
        raise ConfigurationError(f"Invalid or missing settings: {missing}") from e
