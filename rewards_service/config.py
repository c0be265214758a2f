"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./rewards.db"

    # Service
    service_name: str = "rewards-service"
    log_level: str = "INFO"

    # Rewards cache
    cache_max_size: int = 50
    cache_initial_capacity: int = 10  # advisory sizing hint
    cache_ttl_seconds: float = 3600.0  # 1 hour
    cache_invalidation_enabled: bool = True
    cache_clear_interval_ms: int = 360_000  # full flush, independent of per-entry TTL

    # Seed data
    seed_on_startup: bool = False
    seed_customers_csv: Optional[str] = None
    seed_transactions_csv: Optional[str] = None

    # Query limits
    max_lookback_days: int = 1000
    max_lookback_months: int = 36


settings = Settings()
