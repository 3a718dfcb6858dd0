"""Configuration module for the Presida backend.

Usage:
    from presida.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from presida.core.config.enums import Environment
from presida.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
