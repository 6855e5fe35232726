from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Product Catalog Page"
    APP_VERSION: str = "1.0.0"

    # Storage slot (browser local storage equivalent)
    REDIS_URL: str = "redis://localhost:6379/0"
    STORAGE_KEY: str = Field(default="products_v1", description="Versioned key of the catalog slot")

    # Page timing
    LOAD_DELAY_MS: int = Field(default=600, ge=0, description="Simulated initial load delay")
    SEARCH_DEBOUNCE_MS: int = Field(default=300, ge=0, description="Search input idle interval")

    PLACEHOLDER_IMAGE: str = "https://placehold.co/300x200?text=No+Image"

    # External ability feed
    ABILITY_FEED_ENABLED: bool = True
    ABILITY_API_BASE_URL: str = "https://pokeapi.co/api/v2"
    ABILITY_PAGE_SIZE: int = Field(default=20, ge=1, le=100)
    ABILITY_NAME: str = "stench"
    HTTP_TIMEOUT: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
