"""
Etsmart Configuration Module
============================

Centralized configuration management using environment variables.
Supports both .env files and system environment variables.

Scoring tunables (matrix, vocabularies, thresholds) are NOT here:
they live in src/scoring/scoring_config.py.

Environment Variables:
    ETSY_SEARCH_URL: Etsy search page URL (default: https://www.etsy.com/search)
    ETSY_REQUEST_TIMEOUT: Request timeout in seconds (default: 10)
    ETSY_RATE_LIMIT_SECONDS: Minimum delay between requests (default: 0.5)
    ETSY_USER_AGENT: Browser User-Agent sent with each request
    ETSY_MAX_PLAUSIBLE_COUNT: Upper bound for a plausible result count (default: 10000000)
    ETSY_MANY_RESULTS_ESTIMATE: Count used when Etsy only says "many results" (default: 50000)

    CORS_ORIGINS: Extra allowed origins for the API (comma-separated)

    LOG_LEVEL: Root log level (default: INFO)
    LOG_JSON: JSON structured logs (default: false)
    LOG_FILE: Optional log file path (rotated)

    ENVIRONMENT: development / production (default: development)
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv


# Load environment variables from .env file if present
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable (None or default when unset)."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_float(key: str, default: float) -> float:
    """Get environment variable as float."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be a float, got: {value}")


def get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def get_env_list(key: str) -> List[str]:
    """Get a comma-separated environment variable as a list of non-empty strings."""
    value = os.getenv(key, "")
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class EtsySearchConfig:
    """Etsy search page scraping configuration (signal source)."""

    search_url: str = field(default_factory=lambda: get_env("ETSY_SEARCH_URL", "https://www.etsy.com/search"))
    request_timeout: float = field(default_factory=lambda: get_env_float("ETSY_REQUEST_TIMEOUT", 10.0))
    rate_limit_seconds: float = field(default_factory=lambda: get_env_float("ETSY_RATE_LIMIT_SECONDS", 0.5))
    user_agent: str = field(default_factory=lambda: get_env("ETSY_USER_AGENT", DEFAULT_USER_AGENT))

    # Plausibility bounds for parsed counts
    max_plausible_count: int = field(default_factory=lambda: get_env_int("ETSY_MAX_PLAUSIBLE_COUNT", 10_000_000))
    many_results_estimate: int = field(default_factory=lambda: get_env_int("ETSY_MANY_RESULTS_ESTIMATE", 50_000))

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.rate_limit_seconds < 0:
            raise ValueError("rate_limit_seconds cannot be negative")
        if self.max_plausible_count <= 0:
            raise ValueError("max_plausible_count must be positive")


@dataclass
class ApiConfig:
    """HTTP API configuration."""

    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ] + get_env_list("CORS_ORIGINS"))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE"))

    # Structured logging
    json_logs: bool = field(default_factory=lambda: get_env_bool("LOG_JSON", False))


@dataclass
class Settings:
    """Main application settings container."""

    etsy: EtsySearchConfig = field(default_factory=EtsySearchConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Application metadata
    app_name: str = "etsmart-scoring"
    app_version: str = "1.0.0"
    environment: str = field(default_factory=lambda: get_env("ENVIRONMENT", "development"))


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton pattern).

    Raises:
        ValueError: If an ETSY_* value is invalid
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
