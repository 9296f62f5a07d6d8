from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.
    Loads from environment variables and optionally from a .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage Settings
    STORAGE_BACKEND: str = "sql"  # sql | json
    DATABASE_URL: str = "sqlite:///data/business.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    JSON_STORAGE_PATH: str = "data/storage.json"

    # Predictions output
    PREDICTIONS_DIR: str = "data/predictions"

    # AWS Settings (optional predictions mirror)
    AWS_S3_BUCKET: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    PREDICTIONS_S3_PREFIX: str = "predictions"

    # Forecast Settings
    TIMEZONE: str = "Africa/Lusaka"
    DEFAULT_HORIZON: int = 30
    DEFAULT_MIN_HISTORY: int = 90
    DEFAULT_LOOKBACK_DAYS: int = 365
    INCREASE_THRESHOLD: float = 0.20
    DECREASE_THRESHOLD: float = -0.15
    LEGACY_RESIDUALS: bool = False

    # Logging Settings
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "Sales Trends Server"

# Singleton instance
settings = Settings()
