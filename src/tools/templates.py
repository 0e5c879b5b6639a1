"""
Slot template catalogue for the provider's bookable day.

Working hours are data: edit ``_RAW_TEMPLATES`` to change them. The
catalogue is written on the 12-hour clock the clinic publishes and is
normalized to 24-hour ``datetime.time`` values once, at import time.
"""

import logging
from datetime import date, datetime
from typing import Optional

from src.schemas.booking_schema import DurationClass, TimeSlotTemplate
from src.utils import parse_clock

logger = logging.getLogger(__name__)

_RAW_TEMPLATES: list[tuple[str, str, DurationClass]] = [
    ("11:00 AM", "11:30 AM", DurationClass.SHORT),
    ("11:30 AM", "12:00 PM", DurationClass.SHORT),
    ("12:00 PM", "01:00 PM", DurationClass.LONG),
    ("05:59 PM", "06:29 PM", DurationClass.SHORT),
    ("06:29 PM", "06:59 PM", DurationClass.SHORT),
    ("06:59 PM", "07:29 PM", DurationClass.SHORT),
    ("07:29 PM", "07:59 PM", DurationClass.SHORT),
    ("07:59 PM", "08:59 PM", DurationClass.LONG),
    ("08:59 PM", "09:59 PM", DurationClass.LONG),
    ("09:59 PM", "10:59 PM", DurationClass.LONG),
]


def build_templates(
    raw: list[tuple[str, str, DurationClass]],
) -> tuple[TimeSlotTemplate, ...]:
    """Parse and validate a raw catalogue.

    Raises:
        ValueError: If a window is empty, its length does not match its
            duration class, or windows are out of order or overlap.
    """
    templates = tuple(
        TimeSlotTemplate(
            start_time=parse_clock(start),
            end_time=parse_clock(end),
            duration_class=duration,
        )
        for start, end, duration in raw
    )

    anchor = date.min
    previous: Optional[TimeSlotTemplate] = None
    for template in templates:
        length = (
            datetime.combine(anchor, template.end_time)
            - datetime.combine(anchor, template.start_time)
        ).total_seconds() / 60
        if length <= 0:
            raise ValueError(f"Template {template.label} ends before it starts")
        if length != template.duration_class.minutes:
            raise ValueError(
                f"Template {template.label} lasts {length:.0f} minutes, "
                f"expected {template.duration_class.minutes} for "
                f"'{template.duration_class.value}'"
            )
        if previous is not None and template.start_time < previous.end_time:
            raise ValueError(
                f"Template {template.label} overlaps or precedes {previous.label}"
            )
        previous = template

    return templates


SLOT_TEMPLATES: tuple[TimeSlotTemplate, ...] = build_templates(_RAW_TEMPLATES)


def get_templates(
    duration_class: Optional[DurationClass] = None,
) -> list[TimeSlotTemplate]:
    """Return the catalogue in chronological order, optionally by duration."""
    if duration_class is None:
        return list(SLOT_TEMPLATES)
    return [t for t in SLOT_TEMPLATES if t.duration_class == duration_class]
