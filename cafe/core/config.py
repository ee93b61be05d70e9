"""Application configuration."""
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./cafe.db"

    # Cafe
    cafe_name: str = "Yoko Cafe"
    seed_menu_on_startup: bool = False

    # Pricing
    tax_rate: Decimal = Decimal("0.10")
    extra_shot_price: Decimal = Decimal("0.75")
    order_number_prefix: str = "YC"

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
