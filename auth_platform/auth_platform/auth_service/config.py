"""
Configuration management for the authentication service
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

from .utils.durations import parse_duration


class Settings(BaseSettings):
    """Authentication service configuration loaded from environment variables"""

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "authentication"
    MONGODB_COLLECTION: str = "users"
    MONGODB_TIMEOUT_MS: int = 5000

    # Credentials
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    EXPIRES_IN: str = "1h"
    BCRYPT_ROUNDS: int = 10

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("EXPIRES_IN")
    @classmethod
    def _check_expires_in(cls, value: str) -> str:
        parse_duration(value)
        return value

    @field_validator("JWT_SECRET")
    @classmethod
    def _check_jwt_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET must not be empty")
        return value

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def _check_bcrypt_rounds(cls, value: int) -> int:
        # bcrypt only accepts cost factors 4..31
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value

    @property
    def token_expire_seconds(self) -> int:
        return parse_duration(self.EXPIRES_IN)


# Global settings instance
settings = Settings()
