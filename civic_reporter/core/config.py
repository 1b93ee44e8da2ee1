"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "Civic Issue Reporter"
    debug: bool = False
    database_url: str = "sqlite:///./civic_issues.db"
    api_prefix: str = "/api"

    # Listener
    host: str = "0.0.0.0"
    port: int = 3000

    # Photo uploads
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024  # 5 MB


settings = Settings()
