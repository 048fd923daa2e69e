from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "Link Tracker"
    app_version: str = "1.0.0"

    # Short links
    base_url: str = "http://localhost:3000"  # shortenedLink = base_url + "/" + shortcode
    short_code_length: int = 6
    max_retries: int = 10
    default_validity_minutes: int = 30
    max_batch_size: int = 5  # The shortening form has five candidate slots

    # Short code generation strategy
    short_code_strategy: str = "random"  # Options: "random", "base62"
    short_code_salt: int = 1256  # Salt for Base62 strategy

    # Persistence settings
    persistence_backend: str = "sql"  # Options: "sql", "json_file", "memory", "redis", "null"
    database_url: str = "sqlite:///./link_tracker.db"
    storage_dir: str = "./data"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "linktracker:"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
