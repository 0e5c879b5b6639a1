"""
Immediate-session path: book the provider starting right after the lead time.

There is no catalogue lookup and no patient choice, so this path skips the
selection state machine entirely.
"""

from datetime import datetime, timedelta
from typing import Optional

from src.booking.handoff import to_booking_descriptor
from src.booking.validation import BookingResult
from src.config import settings
from src.logging_context import get_session_logger
from src.schemas.booking_schema import (
    BookingError,
    DurationClass,
    ImmediateSessionRequest,
    RequestClass,
)
from src.tools.pricing import fee

logger = get_session_logger(__name__)

IMMEDIATE_DURATION = DurationClass.SHORT


def build_immediate_request(
    now: datetime, lead_minutes: Optional[int] = None
) -> ImmediateSessionRequest:
    """Synthesize the request: start after the lead time, fixed short length.

    The start is rounded up to the next whole minute so it never falls
    inside the lead time.
    """
    lead = settings.scheduling.lead_time_minutes if lead_minutes is None else lead_minutes
    start = now + timedelta(minutes=lead)
    if start.second or start.microsecond:
        start = start.replace(second=0, microsecond=0) + timedelta(minutes=1)
    return ImmediateSessionRequest(
        start=start,
        end=start + timedelta(minutes=IMMEDIATE_DURATION.minutes),
        duration_class=IMMEDIATE_DURATION,
        fee=fee(IMMEDIATE_DURATION, RequestClass.IMMEDIATE),
    )


def request_immediate(now: datetime, provider_online: bool) -> BookingResult:
    """Book an immediate session, or reject with NOT_ONLINE."""
    if not provider_online:
        logger.info("Immediate session refused: provider offline")
        return BookingResult.rejected(BookingError.NOT_ONLINE)

    request = build_immediate_request(now)
    return BookingResult(passed=True, descriptor=to_booking_descriptor(request))
