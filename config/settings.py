from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Shopify Admin API — no defaults, MUST be set in .env
    SHOPIFY_SHOP: str
    SHOPIFY_ACCESS_TOKEN: str
    SHOPIFY_API_VERSION: str = "2024-01"
    SHOPIFY_TIMEOUT_SECONDS: float = 30.0

    # Address overrides (default points at a local Redis)
    REDIS_URL: str = "redis://localhost:6379/0"
    OVERRIDE_BACKEND: Literal["redis", "memory"] = "redis"
    OVERRIDE_KEY_PREFIX: str = "order_address_"

    # Orders / labels
    ORDERS_FETCH_LIMIT: int = 250
    LABEL_GRID_COLUMNS: int = 2  # compact 12-up sheet: 2 x 6
    LABEL_GRID_ROWS: int = 6

    # App
    APP_NAME: str = "Order Prep"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"
    STORE_TIMEZONE: str = "America/Santiago"  # "today" on the dashboard


settings = Settings()
