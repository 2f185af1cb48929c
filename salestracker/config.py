"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Sales tracker settings.

    Each field can be set through an environment variable of the same name,
    e.g. DATABASE_URL. A .env file in the working directory is read too, with
    real environment variables winning.
    """
    
    APP_NAME: str = "Sales Tracker"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./salestracker.db"
    
    # Dashboard defaults
    LOW_STOCK_THRESHOLD: int = 10
    TOP_SELLING_LIMIT: int = 10
    MONTHLY_SALES_MONTHS: int = 12
    
    # Demo data
    DEMO_DATA_SEED: int = 42
    
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
