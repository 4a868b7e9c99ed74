"""Checkout API configuration management.

Loads configuration from environment variables with sensible defaults.
A `.env` file in the working directory is honoured if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class PricingConfig:
    """Pricing file location and refresh behaviour."""

    file: Path = Path("configs/pricing.json")
    refresh_seconds: float = 5.0
    watch_enabled: bool = True

    def __post_init__(self):
        if self.refresh_seconds <= 0:
            raise ValueError("PRICING_REFRESH_SECONDS must be greater than zero")


@dataclass
class ServerConfig:
    """HTTP bind address."""

    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    json_logs: bool = False

    # Feature Flags
    enable_metrics: bool = False

    pricing: PricingConfig = field(default_factory=PricingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - PRICING_FILE: Pricing rules file, JSON or YAML (default: "configs/pricing.json")
        - PRICING_REFRESH_SECONDS: Seconds between change checks (default: 5)
        - PRICING_WATCH_ENABLED: Reload the pricing file when it changes (default: "true")
        - HOST / PORT: Bind address for `checkoutapi serve` (default: 0.0.0.0:8080)
        - LOG_LEVEL: Logging verbosity (default: "INFO")
        - JSON_LOGS: Render logs as JSON (default: "false")
        - ENABLE_METRICS: Expose Prometheus metrics on /metrics (default: "false")

        Raises:
            ValueError: If a numeric setting cannot be parsed or is out of range
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_logs=_env_bool("JSON_LOGS", "false"),
            enable_metrics=_env_bool("ENABLE_METRICS", "false"),
            pricing=PricingConfig(
                file=Path(os.getenv("PRICING_FILE", "configs/pricing.json")),
                refresh_seconds=_env_number("PRICING_REFRESH_SECONDS", "5", float),
                watch_enabled=_env_bool("PRICING_WATCH_ENABLED", "true"),
            ),
            server=ServerConfig(
                host=os.getenv("HOST", "0.0.0.0"),
                port=_env_number("PORT", "8080", int),
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
