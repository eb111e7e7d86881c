"""
Configuration management for Service Desk.
Supports .env files and environment variables.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///service_desk.db"
    database_echo: bool = False

    # Message import
    default_phone_region: str = "PL"
    results_dir: Path = Path("./results")

    # Application settings
    app_name: str = "Service Desk"
    log_level: str = "INFO"

    def get_db_path(self) -> Path:
        """Extract the database file path from the URL."""
        if self.database_url.startswith("sqlite:///"):
            return Path(self.database_url.replace("sqlite:///", ""))
        return Path("service_desk.db")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
