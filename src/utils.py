"""Clock helpers shared by the template store, availability filter and validators."""

import re
from datetime import date, datetime, time, timedelta
from typing import Optional

_CLOCK_RE = re.compile(
    r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>[AaPp]\.?[Mm]\.?)?\s*$"
)


def to_24_hour(hour: int, meridiem: Optional[str]) -> int:
    """Normalize a 12-hour clock hour into a 24-hour hour-of-day.

    ``12 AM`` is midnight (0) and ``12 PM`` is noon (12); every other PM hour
    gains 12. Without a meridiem the hour is already on a 24-hour clock.

    Examples:
        >>> to_24_hour(12, "AM")
        0
        >>> to_24_hour(12, "PM")
        12
        >>> to_24_hour(5, "pm")
        17
    """
    if meridiem is None:
        if not 0 <= hour <= 23:
            raise ValueError(f"Hour out of range for a 24-hour clock: {hour}")
        return hour
    if not 1 <= hour <= 12:
        raise ValueError(f"Hour out of range for a 12-hour clock: {hour}")
    is_pm = meridiem.replace(".", "").upper() == "PM"
    if hour == 12:
        return 12 if is_pm else 0
    return hour + 12 if is_pm else hour


def parse_clock(value: str) -> time:
    """Parse ``"05:59 PM"``, ``"5:59pm"`` or ``"17:59"`` into a time.

    Raises:
        ValueError: If the value is not a recognizable clock reading.
    """
    match = _CLOCK_RE.match(value or "")
    if not match:
        raise ValueError(f"Unrecognized clock value: {value!r}")
    minute = int(match["minute"])
    if minute > 59:
        raise ValueError(f"Minute out of range: {value!r}")
    return time(to_24_hour(int(match["hour"]), match["meridiem"]), minute)


def format_clock(value: time) -> str:
    """Render a time on the 12-hour clock the patient UI uses."""
    return value.strftime("%I:%M %p")


def start_instant(day: date, start: time) -> datetime:
    """Project a wall-clock start time onto a calendar date."""
    return datetime.combine(day, start)


def is_beyond_lead_time(instant: datetime, now: datetime, lead_minutes: int) -> bool:
    """True if ``instant`` is strictly later than ``now`` plus the lead time."""
    return instant > now + timedelta(minutes=lead_minutes)
