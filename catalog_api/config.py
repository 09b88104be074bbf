from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    APP_NAME: str = "Product Catalog API"
    APP_VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite:///./catalog.db"

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    # Include exception text in 500 responses
    EXPOSE_ERROR_DETAILS: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
