"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - order_bump_price is configuration; core only supplies the fallback default

Design Decisions:
    - Defaults provided for all settings: works out-of-the-box with docker-compose
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from salesdesk.core.pricing import DEFAULT_ADD_ON_PRICE


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SALESDESK_", case_sensitive=False,
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://salesdesk:salesdesk@db:5432/salesdesk"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_all: bool = False

    # Checkout
    order_bump_price: Decimal = Field(DEFAULT_ADD_ON_PRICE, ge=0)
    order_bump_name: str = "1-on-1 Priority Support"
    payment_delay_seconds: float = Field(2.0, ge=0)
    payment_timeout_seconds: float = Field(10.0, gt=0)
    payment_approve: bool = True

    # Share links
    public_origin: str = "http://localhost:5173"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
