# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./helpdesk.db")
    APP_NAME: str = "Helpdesk API"
    APP_DESC: str = "Support tickets, catalogs and user profiles for the school helpdesk"
    APP_VERSION: str = "1.0.0"
    AUTO_CREATE_TABLES: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "*"
    CORS_ALLOW_HEADERS: str = "authorization, x-client-info, apikey, content-type"

    # Bearer credentials issued by the identity provider
    AUTH_JWT_SECRET: str = "change-me"
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_AUDIENCE: str | None = None

    # Catalog ids with a fixed meaning for the ticket workflow
    OPEN_STATUS_ID: int = 1
    DEFAULT_PRIORITY_ID: int = 8
    FALLBACK_AREA_ID: int = 38

    CATALOG_WORKERS: int = 4

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip().rstrip("/") for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
