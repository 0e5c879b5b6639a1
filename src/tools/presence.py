"""
Mock provider presence signal.

In production an external presence service keeps this current; the
booking core only ever reads it.
"""

import logging

from src.config import settings

logger = logging.getLogger(__name__)

_online: dict[str, bool] = {}


def is_provider_online(provider_id: str = settings.provider.provider_id) -> bool:
    """Whether the provider can take an immediate session right now."""
    return _online.get(provider_id, False)


def set_provider_online(online: bool, provider_id: str = settings.provider.provider_id) -> None:
    """Stand-in for the presence service pushing a status change."""
    _online[provider_id] = online
    logger.info("Provider %s is now %s", provider_id, "online" if online else "offline")


def reset() -> None:
    """Mark every provider offline. Used by test fixtures for isolation."""
    _online.clear()
