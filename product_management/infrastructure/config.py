"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://products:products_dev_password@db:5432/products"
    create_tables_on_startup: bool = False

    # Authentication
    admin_api_key: str = "dev-admin-key-change-in-production"

    # Pagination
    default_per_page: int = 15
    max_per_page: int = 100

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
