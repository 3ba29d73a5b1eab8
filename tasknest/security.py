"""
TASKNEST API - Security Validation

Startup checks for the security-relevant configuration.
"""

import warnings
from typing import Optional

from tasknest.config import Settings, settings as default_settings


MIN_SECRET_LENGTH = 32


def validate_security_config(config: Optional[Settings] = None) -> None:
    """
    Validate security configuration on startup.

    A missing JWT secret is fatal. Weak but present settings only warn so
    development environments keep working.
    """
    config = config or default_settings

    if not config.JWT_SECRET_KEY or not config.JWT_SECRET_KEY.strip():
        raise RuntimeError(
            "JWT_SECRET_KEY is not set. Refusing to start without a signing secret."
        )

    if len(config.JWT_SECRET_KEY) < MIN_SECRET_LENGTH and config.is_production:
        warnings.warn(
            "SECURITY WARNING: JWT_SECRET_KEY is too short for production. "
            f"Use at least {MIN_SECRET_LENGTH} characters.",
            UserWarning,
        )

    if "*" in config.CORS_ORIGINS:
        warnings.warn(
            "SECURITY WARNING: CORS wildcard (*) detected. "
            "Set specific origins via CORS_ORIGINS.",
            UserWarning,
        )
