"""
Lead-time rule and the result types that carry booking errors.

Every patient-facing failure is returned as a value, never raised: the
booking workflow has to stay usable after any of them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.booking.messages import build_error_message
from src.config import settings
from src.schemas.booking_schema import BookingDescriptor, BookingError
from src.utils import is_beyond_lead_time

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of a single validation check."""
    passed: bool
    error: Optional[BookingError] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(passed=True)

    @classmethod
    def fail(cls, error: BookingError) -> "ValidationResult":
        return cls(passed=False, error=error, message=build_error_message(error))


@dataclass
class BookingResult:
    """Outcome of a booking path: a descriptor or the reason there is none."""
    passed: bool
    descriptor: Optional[BookingDescriptor] = None
    error: Optional[BookingError] = None
    message: Optional[str] = None
    reference: Optional[str] = None

    @classmethod
    def rejected(cls, error: BookingError) -> "BookingResult":
        return cls(passed=False, error=error, message=build_error_message(error))

    @classmethod
    def from_validation(cls, result: ValidationResult) -> "BookingResult":
        return cls(passed=result.passed, error=result.error, message=result.message)


def check_lead_time(
    instant: datetime,
    now: datetime,
    error: BookingError,
    lead_minutes: Optional[int] = None,
) -> ValidationResult:
    """Pass only if ``instant`` starts strictly after ``now`` plus the lead time.

    ``error`` names the failure the caller reports: a template confirmation
    reports STALE_SLOT, a custom proposal LEAD_TIME_VIOLATION.
    """
    lead = settings.scheduling.lead_time_minutes if lead_minutes is None else lead_minutes
    if is_beyond_lead_time(instant, now, lead):
        return ValidationResult.ok()
    logger.info(
        "Lead time check failed: %s is within %d minutes of %s",
        instant.isoformat(timespec="minutes"), lead, now.isoformat(timespec="minutes"),
    )
    return ValidationResult.fail(error)
