"""Application configuration with environment variable validation."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Validation policy
    min_year: int = Field(default=1980, validation_alias="MIN_YEAR")
    brand_accept_threshold: float = Field(
        default=0.85, validation_alias="BRAND_ACCEPT_THRESHOLD"
    )
    model_accept_threshold: float = Field(
        default=0.8, validation_alias="MODEL_ACCEPT_THRESHOLD"
    )

    # Memoization / dataset
    evaluation_cache_size: int = Field(
        default=256, validation_alias="EVALUATION_CACHE_SIZE"
    )
    dataset_preview_rows: int = Field(default=10, validation_alias="DATASET_PREVIEW_ROWS")

    # CORS
    allowed_origins: list[str] = Field(
        default=["*"],
        validation_alias="ALLOWED_ORIGINS",
    )

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.allowed_origins, str):
            return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return self.allowed_origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
