"""Configuration settings for the regimen OCR parser."""
import os
from typing import Literal


EnvironmentType = Literal["development", "staging", "production"]


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Request limits
    MAX_TEXT_LENGTH: int = 50000

    # Fallback output
    FALLBACK_MAX_EXERCISES: int = 2

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        self.MAX_TEXT_LENGTH = _int_env("MAX_TEXT_LENGTH", 50000)
        self.FALLBACK_MAX_EXERCISES = max(1, _int_env("FALLBACK_MAX_EXERCISES", 2))


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


settings = Settings()
