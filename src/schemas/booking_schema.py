"""Booking, slot and request data models."""

from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DurationClass(str, Enum):
    """Coarse session length used for slot filtering and pricing."""

    SHORT = "short"
    LONG = "long"

    @property
    def minutes(self) -> int:
        return _DURATION_MINUTES[self]


_DURATION_MINUTES: dict[DurationClass, int] = {
    DurationClass.SHORT: 30,
    DurationClass.LONG: 60,
}


class RequestClass(str, Enum):
    """Booking channel a descriptor came through."""

    STANDARD = "standard"
    CUSTOM = "custom"
    IMMEDIATE = "immediate"


class BookingError(str, Enum):
    """Local validation failures surfaced to the patient."""

    NO_SLOT_SELECTED = "no_slot_selected"
    STALE_SLOT = "stale_slot"
    LEAD_TIME_VIOLATION = "lead_time_violation"
    MISSING_DATE_OR_TIME = "missing_date_or_time"
    NOT_ONLINE = "not_online"


class TimeSlotTemplate(BaseModel):
    """A daily candidate window, independent of any calendar date."""

    model_config = ConfigDict(frozen=True)

    start_time: time
    end_time: time
    duration_class: DurationClass

    @property
    def label(self) -> str:
        return f"{self.start_time:%H:%M}-{self.end_time:%H:%M}"


class CustomRequest(BaseModel):
    """Patient-proposed appointment awaiting provider approval."""

    model_config = ConfigDict(frozen=True)

    date: date
    time: str
    duration_class: DurationClass
    notes: str = ""


class ImmediateSessionRequest(BaseModel):
    """Near-term session synthesized from the current instant."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    duration_class: DurationClass = DurationClass.SHORT
    fee: int


class BookingDescriptor(BaseModel):
    """Finalized, priced record handed to the payment collaborator."""

    model_config = ConfigDict(frozen=True)

    date: date
    start_time: time
    end_time: time
    duration_class: DurationClass
    request_class: RequestClass
    fee: int = Field(ge=0)
    currency: str
    provider_name: str
    duration_minutes: int
    notes: Optional[str] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def _check_window(self) -> "BookingDescriptor":
        if self.ends_at <= self.starts_at:
            raise ValueError(
                f"Booking ends at {self.ends_at.isoformat()}, "
                f"not after its start {self.starts_at.isoformat()}"
            )
        return self

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    @property
    def ends_at(self) -> datetime:
        """End instant; ``end_date`` is set only when the session crosses midnight."""
        return datetime.combine(self.end_date or self.date, self.end_time)
