"""
TASKNEST API - Configuration Module

This module handles application configuration via environment variables.
Values are read once at import; nothing else in the package calls os.getenv.
"""

import os
from typing import Optional


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TASKNEST API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = _env_bool("DEBUG")

    # MongoDB
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://mongodb:27017")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "tasknest")

    # CORS - Allowed origins for client requests
    # Multiple origins can be comma-separated
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # JWT - no default secret; startup fails without one (tasknest.security)
    JWT_SECRET_KEY: Optional[str] = os.getenv("JWT_SECRET_KEY") or None
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "15"))

    # Password hashing cost
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # When true, a token is only accepted while its session row still exists
    REQUIRE_ACTIVE_SESSION: bool = _env_bool("REQUIRE_ACTIVE_SESSION")

    @property
    def is_production(self) -> bool:
        return not self.DEBUG


settings = Settings()
