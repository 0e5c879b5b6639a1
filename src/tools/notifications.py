"""Mock notifier that stands in for the toast/notification UI."""

import logging
from datetime import datetime, timezone
from typing import Callable, TypedDict

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class Notification(TypedDict):
    message: str
    sent_at: str


_outbox: list[Notification] = []


def notify(message: str) -> None:
    """Deliver a user-facing acknowledgement."""
    _outbox.append({"message": message, "sent_at": datetime.now(timezone.utc).isoformat()})
    logger.debug("Notification sent: %s", message)


def get_sent() -> list[Notification]:
    return list(_outbox)


def reset() -> None:
    """Empty the outbox. Used by test fixtures for isolation."""
    _outbox.clear()
