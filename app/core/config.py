from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Service ---
    PROJECT_NAME: str = "Medicine_Orders"
    LOG_LEVEL: str = "INFO"

    # --- Storage ---
    # "memory" keeps orders in process; "sql" uses DATABASE_URL through SQLAlchemy
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"
    DATABASE_URL: str = "sqlite:///./orders.db"
    # None means the in-memory store grows without bound
    ORDER_STORE_CAPACITY: int | None = None

    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_WAIT_SECONDS: float = 3

    # --- Listing ---
    DEFAULT_PAGE_LIMIT: int = 10

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Unrelated variables in .env must not crash startup
    )

settings = Settings()
