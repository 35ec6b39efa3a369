"""
Application configuration using environment variables.
"""
import logging
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "SocialHub API"
    debug: bool = False
    environment: str = "development"

    # Security
    jwt_secret: Optional[str] = None
    algorithm: str = "HS256"
    token_expire_days: int = 7
    bcrypt_rounds: int = 12

    # Database
    database_url: str = "sqlite:///./socialhub.db"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Content
    post_max_length: int = 500

    # Rate limiting
    register_rate_limit: str = "3/minute"
    login_rate_limit: str = "5/minute"
    ai_rate_limit: str = "10/minute"

    # AI content generation
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-3.5-turbo"
    ai_max_tokens: int = 200
    ai_temperature: float = 0.8

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance, resolving the token signing secret."""
    settings = Settings()
    if not settings.jwt_secret:
        if settings.environment == "production":
            raise ValueError(
                "JWT_SECRET must be set in production! "
                "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
            )
        # Tokens signed with this secret do not survive a restart.
        settings.jwt_secret = secrets.token_urlsafe(32)
        logging.getLogger("socialhub.config").warning(
            "JWT_SECRET is not set; using an ephemeral secret for this process"
        )
    return settings
