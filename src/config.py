from functools import lru_cache
from typing import Annotated, Any, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    # Application Configuration
    API_NAME: str = "spacetraveling"
    API_SUMMARY: str = "A small blog served from a headless content repository"
    APP_VERSION: str = "v0.1.x"

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    USER_AGENT: str = "spacetraveling"
    MAX_CONCURRENT_REQUESTS: int = 10

    CORS_ENABLED: bool = False
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]

    # Content Repository
    CONTENT_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    CONTENT_ACCESS_TOKEN: str | None = None
    CONTENT_DOCUMENT_TYPE: str = "posts"
    LISTING_PAGE_SIZE: int = 1
    PATHS_PAGE_SIZE: int = 100

    # Static Generation
    REVALIDATE_SECONDS: int = 60 * 30
    PRERENDER_ON_STARTUP: bool = True
    GENERATION_LOCK_TIMEOUT: int = 60
    DATE_LOCALE: str = "pt_BR"

    # Render Cache
    REDIS_URL: str = "redis://localhost:6379"
    RENDER_CACHE_NAMESPACE: str = "render_cache"

    # OpenTelemetry Settings
    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "spacetraveling"

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_from_string(cls, v: Any):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("CONTENT_API_ENDPOINT", mode="after")
    def strip_trailing_slash(cls, v: str):
        return v.rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
