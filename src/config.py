"""
Centralized configuration with environment variable overrides.

Provider details and scheduling thresholds are configurable here.
The fee table is deliberately not: prices live in ``src.tools.pricing``.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from src.logging_context import SessionIdFilter

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class ProviderConfig:
    """The single care provider whose calendar is being booked."""

    provider_id: str = os.getenv("PROVIDER_ID", "basma_adel_123")
    name: str = os.getenv("PROVIDER_NAME", "Dr. Bassma Adel")
    currency: str = os.getenv("CURRENCY", "EGP")


@dataclass(frozen=True)
class SchedulingConfig:
    """Lead time and booking window settings."""

    lead_time_minutes: int = _safe_int("LEAD_TIME_MINUTES", "15")
    booking_window_days: int = _safe_int("BOOKING_WINDOW_DAYS", "14")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "session-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.scheduling.lead_time_minutes < 0:
        raise ValueError(
            f"LEAD_TIME_MINUTES must be >= 0, got {config.scheduling.lead_time_minutes}"
        )
    if config.scheduling.booking_window_days < 1:
        raise ValueError(
            f"BOOKING_WINDOW_DAYS must be >= 1, got {config.scheduling.booking_window_days}"
        )
    if not config.provider.name.strip():
        raise ValueError("PROVIDER_NAME must not be empty")
    currency = config.provider.currency
    if len(currency) != 3 or not currency.isalpha():
        raise ValueError(f"CURRENCY must be a 3-letter code, got {currency!r}")


LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"


def build_log_handler() -> logging.Handler:
    """Console handler that stamps every record with the booking-session id."""
    handler = logging.StreamHandler()
    handler.addFilter(SessionIdFilter())
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[build_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.provider.name)
    return config


# Singleton instance
settings = load_config()
