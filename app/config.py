from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Inventory Management API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "local"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./inventory.db"
    SEED_SAMPLE_DATA: bool = True

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # HTTP
    # ==============================
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "*"

    # ==============================
    # Products
    # ==============================
    PLACEHOLDER_IMAGE_URL: str = "https://via.placeholder.com/50"
    ENFORCE_STATUS_FROM_STOCK: bool = False
    HISTORY_ACTOR: str = "admin"

    # ==============================
    # Import / Export
    # ==============================
    UPLOAD_DIR: Optional[str] = None
    EXPORT_FILENAME: str = "products.csv"

    def cors_origin_list(self) -> list[str]:
        origins = [part.strip() for part in self.CORS_ORIGINS.split(",")]
        return [origin for origin in origins if origin] or ["*"]


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
