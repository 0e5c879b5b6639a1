"""Per-session booking state shared between the flow and its collaborators."""

from dataclasses import dataclass, field
from typing import Optional

from src.schemas.booking_schema import BookingDescriptor, BookingError


@dataclass
class BookingSessionData:
    """
    Per-session structured data for one patient's booking attempt.

    Lives for the lifetime of a BookingFlow. The flow writes the current
    descriptor and collaborator references here instead of threading them
    through every call.
    """
    session_id: str
    descriptor: Optional[BookingDescriptor] = None
    payment_reference: Optional[str] = None
    approval_reference: Optional[str] = None
    last_error: Optional[BookingError] = None
    error_count: int = 0
    error_history: list[BookingError] = field(default_factory=list)

    def record_error(self, error: BookingError) -> None:
        self.last_error = error
        self.error_count += 1
        self.error_history.append(error)
