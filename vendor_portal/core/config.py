from functools import lru_cache
from typing import List, Optional
import json
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    # API settings
    PROJECT_NAME: str = "Vendor Portal Adapter"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS settings, comma separated or a JSON list
    BACKEND_CORS_ORIGINS: str = "*"

    # Upstream SAP OData settings
    SAP_BASE_URL: str = ""
    SAP_USERNAME: str = ""
    SAP_PASSWORD: str = ""
    SAP_TIMEOUT: float = 30.0  # seconds
    SAP_VERIFY_SSL: bool = True
    SAP_CA_BUNDLE: Optional[str] = None

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from a comma separated string or a JSON list."""
        value = self.BACKEND_CORS_ORIGINS.strip()
        if value.startswith("["):
            return [str(origin) for origin in json.loads(value)]
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @field_validator("SAP_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings, built once per process.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
