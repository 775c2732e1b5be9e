import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    fetch_timeout_seconds: float = Field(30.0, alias="FETCH_TIMEOUT_SECONDS")
    fetch_max_redirects: int = Field(5, alias="FETCH_MAX_REDIRECTS")
    fetch_max_response_bytes: int = Field(10 * 1024 * 1024, alias="FETCH_MAX_RESPONSE_BYTES")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings


def configure_logging(level: str | None = None) -> None:
    """Apply the process-wide logging level (LOG_LEVEL unless overridden)."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
