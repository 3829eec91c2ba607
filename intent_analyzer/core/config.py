"""
Application settings.

All values come from the environment (or a local .env file). The circle
validation thresholds are validated at startup; an out-of-range value stops
the process before any request is served.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Intent Analyzer"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"
    TEST_MODE: bool = False

    # Similarity service
    CHROMA_DIR: Path = DATA_DIR / "chromadb"
    COLLECTION_NAME: str = "intent_analysis"
    EMBEDDING_MODEL: str = "all-MiniLM-L6-v2"
    SEARCH_LIMIT: int = Field(default=10, ge=1)
    SIMILARITY_MAX_ATTEMPTS: int = Field(default=2, ge=1)
    SIMILARITY_RETRY_DELAY_SECONDS: float = Field(default=0.5, ge=0.0)
    AUTO_INDEX_ON_STARTUP: bool = True

    # Circle validation thresholds
    SAFETY_FLOOR: float = Field(default=0.30, ge=0.0, le=1.0)
    MAX_DISTANCE_TO_GOLD: float = Field(default=0.30, ge=0.0, le=1.0)
    MAX_DISTANCE_TO_REF1: float = Field(default=0.15, ge=0.0, le=1.0)
    MAX_DISTANCE_TO_REF2: float = Field(default=0.15, ge=0.0, le=1.0)

    # Request handling
    MAX_SENTENCE_LENGTH: int = Field(default=500, ge=1)
    LOG_HISTORY_SIZE: int = Field(default=100, ge=1)

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
