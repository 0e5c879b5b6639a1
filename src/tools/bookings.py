"""
Committed-bookings lookup and a mock in-memory store.

The availability filter only needs the ``BookedSlotLookup`` query shape.
In production this would be backed by the sessions table the payment
step writes to; the mock here keeps tests and the console demo honest.
"""

import logging
import uuid
from datetime import date, datetime, time, timezone
from typing import Protocol, TypedDict

from src.schemas.booking_schema import BookingDescriptor

logger = logging.getLogger(__name__)


class BookedSlotLookup(Protocol):
    """Anything that can tell whether a window is already reserved."""

    def is_booked(self, day: date, start_time: time, end_time: time) -> bool:
        ...


class CommittedBooking(TypedDict):
    """Booking record kept by the mock store."""

    booking_ref: str
    date: str
    start_time: str
    end_time: str
    request_class: str
    fee: int
    status: str
    created_at: str


class InMemoryBookingStore:
    """Mock committed-bookings store keyed by ``(date, start, end)``."""

    def __init__(self) -> None:
        self._bookings: dict[tuple[date, time, time], CommittedBooking] = {}

    def is_booked(self, day: date, start_time: time, end_time: time) -> bool:
        booking = self._bookings.get((day, start_time, end_time))
        return booking is not None and booking["status"] == "confirmed"

    def commit(self, descriptor: BookingDescriptor) -> CommittedBooking:
        """Record a paid booking so its window stops being offered."""
        ref = f"SES-{uuid.uuid4().hex[:6].upper()}"
        record: CommittedBooking = {
            "booking_ref": ref,
            "date": descriptor.date.isoformat(),
            "start_time": descriptor.start_time.strftime("%H:%M"),
            "end_time": descriptor.end_time.strftime("%H:%M"),
            "request_class": descriptor.request_class.value,
            "fee": descriptor.fee,
            "status": "confirmed",
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        key = (descriptor.date, descriptor.start_time, descriptor.end_time)
        self._bookings[key] = record
        logger.info(
            "Booking committed: %s on %s at %s", ref, record["date"], record["start_time"]
        )
        return record

    def cancel(self, day: date, start_time: time, end_time: time) -> bool:
        """Release a window. Returns False if nothing was booked there."""
        booking = self._bookings.get((day, start_time, end_time))
        if booking is None:
            return False
        booking["status"] = "cancelled"
        logger.info("Booking cancelled: %s", booking["booking_ref"])
        return True

    def reset(self) -> None:
        """Clear all bookings. Used by test fixtures for isolation."""
        self._bookings.clear()
