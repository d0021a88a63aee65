"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_tracker.services.calculators import CalculationMethod

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_calculation_method: CalculationMethod = CalculationMethod.HARRIS_BENEDICT
    seed_sample_foods: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
