"""Application configuration."""

import os

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    token_secret: SecretStr
    token_ttl_seconds: int = 3600
    bcrypt_rounds: int = 12
    images_bucket: str = "images"
    public_base_url: str = ""
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
