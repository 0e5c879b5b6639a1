"""User-facing text built from booking records."""

from typing import Optional

from src.config import settings
from src.schemas.booking_schema import (
    BookingDescriptor,
    BookingError,
    CustomRequest,
    RequestClass,
)
from src.utils import format_clock

ERROR_MESSAGES: dict[BookingError, str] = {
    BookingError.NO_SLOT_SELECTED: "Please choose a time slot before booking.",
    BookingError.STALE_SLOT: (
        "That time is no longer available to book. Please pick another slot."
    ),
    BookingError.LEAD_TIME_VIOLATION: (
        "Requested times must be at least {lead} minutes from now. "
        "Please choose a later time."
    ),
    BookingError.MISSING_DATE_OR_TIME: "Please choose both a date and a time for your request.",
    BookingError.NOT_ONLINE: (
        "The doctor is offline right now. You can still book a scheduled appointment."
    ),
}

REQUEST_CLASS_LABELS: dict[RequestClass, str] = {
    RequestClass.STANDARD: "Standard Appointment",
    RequestClass.CUSTOM: "Custom Appointment",
    RequestClass.IMMEDIATE: "Immediate Session",
}


def build_error_message(error: BookingError, lead_minutes: Optional[int] = None) -> str:
    """Return the remedy shown to the patient for a validation failure."""
    lead = settings.scheduling.lead_time_minutes if lead_minutes is None else lead_minutes
    return ERROR_MESSAGES[error].format(lead=lead)


def build_booking_summary(descriptor: BookingDescriptor) -> str:
    """Build the read-back summary shown before payment."""
    ends = format_clock(descriptor.end_time)
    if descriptor.end_date is not None:
        ends += f" on {descriptor.end_date:%B} {descriptor.end_date.day}"
    lines = [
        "Booking Summary",
        f"  Doctor: {descriptor.provider_name}",
        f"  Appointment Type: {REQUEST_CLASS_LABELS[descriptor.request_class]}",
        f"  Date & Time: {descriptor.date:%B} {descriptor.date.day}, {descriptor.date:%Y} - "
        f"{format_clock(descriptor.start_time)} to {ends}",
        f"  Duration: {descriptor.duration_minutes} Minutes",
    ]
    if descriptor.notes:
        lines.append(f"  Notes: {descriptor.notes}")
    lines.append(f"  Fee: {descriptor.fee} {descriptor.currency}")
    return "\n".join(lines)


def build_custom_request_ack(request: CustomRequest) -> str:
    """Acknowledgement sent once a custom request is queued for approval."""
    return (
        f"Your request for {request.date:%B} {request.date.day} at {request.time} "
        f"has been sent. The doctor will confirm it shortly."
    )


def build_payment_error(message: str) -> str:
    return f"Booking Failed: {message or 'There was an error processing your booking'}"
