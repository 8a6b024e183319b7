from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Keepsake"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3002

    # Timeline document
    data_path: str = "data/timeline.json"
    default_start_date: str = "2022-12-25"  # Used when the document is missing or unreadable

    # Static roots
    upload_dir: str = "data/uploads"
    public_dir: str = "public"
    admin_dir: str = "admin"

    # Limits
    max_upload_size: int = 10 * 1024 * 1024  # 10MB decoded image
    max_request_size: int = 16 * 1024 * 1024  # base64 inflates uploads by ~4/3

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:3002"

    @model_validator(mode="after")
    def validate_config(self) -> "Settings":
        """Validate server and storage configuration"""
        if not self.default_start_date:
            raise ValueError("DEFAULT_START_DATE must not be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Invalid port {self.port}. Must be between 1 and 65535")
        if self.max_upload_size <= 0 or self.max_request_size <= 0:
            raise ValueError("MAX_UPLOAD_SIZE and MAX_REQUEST_SIZE must be positive")
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
