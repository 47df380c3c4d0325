"""
Application configuration.

League defaults and server settings. All settings can be overridden via
environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


@dataclass
class AppConfig:
    """Configuration for the capsheet API."""

    # League defaults for newly created leagues
    default_salary_cap: float = field(default_factory=lambda: _env_float("CAPSHEET_SALARY_CAP", 279.0))
    max_franchise_tags: int = field(default_factory=lambda: _env_int("CAPSHEET_MAX_FRANCHISE_TAGS", 1))

    # Salaries averaged for the positional franchise tag value
    franchise_tag_top_n: int = field(default_factory=lambda: _env_int("CAPSHEET_FRANCHISE_TAG_TOP_N", 10))

    # Server settings
    log_level: str = field(default_factory=lambda: os.getenv("CAPSHEET_LOG_LEVEL", "INFO").upper())
    cors_origins: list[str] = field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv(
                "CAPSHEET_CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if origin.strip()
        ]
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if self.default_salary_cap <= 0:
            errors.append("CAPSHEET_SALARY_CAP must be positive")
        if self.max_franchise_tags < 0:
            errors.append("CAPSHEET_MAX_FRANCHISE_TAGS cannot be negative")
        if self.franchise_tag_top_n < 1:
            errors.append("CAPSHEET_FRANCHISE_TAG_TOP_N must be at least 1")
        return errors


# Singleton config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global application configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() rereads the environment."""
    global _config
    _config = None
