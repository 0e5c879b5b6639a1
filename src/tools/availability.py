"""
Availability filter over the slot template catalogue.

Pure function of its inputs: the caller supplies ``now`` so a single user
action sees one consistent instant and tests need no clock mocking.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from src.config import settings
from src.schemas.booking_schema import DurationClass, TimeSlotTemplate
from src.tools.bookings import BookedSlotLookup
from src.tools.templates import get_templates
from src.utils import is_beyond_lead_time, start_instant

logger = logging.getLogger(__name__)


def available_slots(
    day: date,
    duration_class: DurationClass,
    now: datetime,
    templates: Optional[Iterable[TimeSlotTemplate]] = None,
    booked: Optional[BookedSlotLookup] = None,
    lead_minutes: Optional[int] = None,
) -> list[TimeSlotTemplate]:
    """
    Return the templates that may be booked on ``day``, in catalogue order.

    Past dates yield nothing. Today keeps only windows starting strictly
    after ``now`` plus the lead time. Future dates keep every window of the
    requested duration. When ``booked`` is given, reserved windows are
    removed as well.
    """
    lead = settings.scheduling.lead_time_minutes if lead_minutes is None else lead_minutes
    source = get_templates() if templates is None else list(templates)
    candidates = [t for t in source if t.duration_class == duration_class]

    today = now.date()
    if day < today:
        return []
    if day == today:
        candidates = [
            t for t in candidates
            if is_beyond_lead_time(start_instant(day, t.start_time), now, lead)
        ]

    if booked is not None:
        candidates = [
            t for t in candidates
            if not booked.is_booked(day, t.start_time, t.end_time)
        ]

    logger.debug(
        "%d '%s' slots available on %s (now=%s)",
        len(candidates), duration_class.value, day.isoformat(), now.isoformat(timespec="minutes"),
    )
    return candidates


def bookable_dates(now: datetime, days: Optional[int] = None) -> list[date]:
    """Dates offered by the date picker, starting with today."""
    window = settings.scheduling.booking_window_days if days is None else days
    today = now.date()
    return [today + timedelta(days=offset) for offset in range(window)]
