from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Optional / Default Fields ---
    PROJECT_NAME: str = "Storefront Admin Dashboard"
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Calendar used for the today / month / year sales buckets
    TIMEZONE: str = "Asia/Jakarta"
    RECENT_ORDERS_LIMIT: int = 5
    LOG_LEVEL: str = "INFO"

    # --- Startup ---
    DB_CONNECT_RETRIES: int = 10
    DB_RETRY_WAIT_SECONDS: float = 3

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Ignore unrelated variables in .env instead of crashing
    )

settings = Settings()
