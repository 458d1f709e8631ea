"""Application configuration with comprehensive validation."""
from typing import Literal
from functools import lru_cache
from pydantic import Field, model_validator
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
    APP_NAME: str = "CRM Insight Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Sales Forecast Parameters
    FORECAST_AGED_DEAL_DAYS: int = Field(default=90, ge=1, le=730)
    FORECAST_AGED_CONFIDENCE_DISCOUNT: float = Field(default=0.2, ge=0.0, le=1.0)
    FORECAST_AGED_CLOSE_DISCOUNT: float = Field(default=0.3, ge=0.0, le=1.0)
    FORECAST_DEFAULT_MODEL: Literal["conservative", "aggressive", "ensemble"] = "ensemble"

    # Behavioral Analytics
    HEATMAP_GRID_SIZE: int = Field(default=50, ge=1, le=500)
    SESSION_FLOW_LIMIT: int = Field(default=100, ge=1, le=10000)
    TOP_PAGES_LIMIT: int = Field(default=10, ge=1, le=100)

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
