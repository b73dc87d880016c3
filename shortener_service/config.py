from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    
    Settings are read once at startup and never changed afterwards.
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    
    # Application
    app_name: str = "URL Shortener"
    app_version: str = "1.0.0"
    
    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    
    # Public base URL used to compose short URLs.
    # When unset it is derived from host and port.
    base_url: Optional[str] = None
    
    # Mapping store
    store_backend: str = "sqlalchemy"  # Options: "sqlalchemy", "memory"
    database_url: str = "sqlite:///./url_shortener.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30  # Seconds to wait for a pooled connection
    
    # Number of codes tried per shorten request when the store reports a
    # conflict. 1 means a collision fails the request.
    shorten_max_attempts: int = 1
    
    # Logging
    log_level: str = "INFO"
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def public_base_url(self) -> str:
        """Base URL for composed short URLs, without a trailing slash"""
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"http://{self.host}:{self.port}"


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings instance (singleton).
    
    @lru_cache ensures the environment is read only once.
    """
    return Settings()
