"""Application configuration with comprehensive validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Faculty Appraisal Dashboard"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Snowflake (optional so the API and tests import without a warehouse)
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_CYCLES: int = Field(default=3600, ge=0)  # 1 hour

    # Evaluation window: "new" appraisals open this many months before cycle end
    EVALUATION_WINDOW_MONTHS: int = Field(default=1, ge=1, le=12)

    # Export filenames
    HOD_EXPORT_FILENAME: str = "Faculty_Appraisals_Detailed.csv"
    DEAN_EXPORT_FILENAME: str = "HoD_Appraisals_Detailed.csv"

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required safety settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if not self.SNOWFLAKE_ACCOUNT:
                raise ValueError("SNOWFLAKE_ACCOUNT is required in production")
        return self

    @property
    def snowflake_password(self) -> Optional[str]:
        if self.SNOWFLAKE_PASSWORD is None:
            return None
        return self.SNOWFLAKE_PASSWORD.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
