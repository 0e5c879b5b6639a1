"""Tests for user-facing message builders."""

from datetime import date, time

from src.booking.messages import (
    ERROR_MESSAGES,
    build_booking_summary,
    build_custom_request_ack,
    build_error_message,
    build_payment_error,
)
from src.schemas.booking_schema import (
    BookingDescriptor,
    BookingError,
    CustomRequest,
    DurationClass,
    RequestClass,
)
from tests.conftest import TODAY


def _descriptor(notes=None) -> BookingDescriptor:
    return BookingDescriptor(
        date=TODAY,
        start_time=time(18, 29),
        end_time=time(18, 59),
        duration_class=DurationClass.SHORT,
        request_class=RequestClass.STANDARD,
        fee=120,
        currency="EGP",
        provider_name="Dr. Test",
        duration_minutes=30,
        notes=notes,
    )


class TestErrorMessages:
    def test_every_error_has_a_message(self):
        assert set(ERROR_MESSAGES) == set(BookingError)

    def test_lead_time_is_filled_in(self):
        assert "20 minutes" in build_error_message(BookingError.LEAD_TIME_VIOLATION, lead_minutes=20)

    def test_plain_messages_pass_through(self):
        assert build_error_message(BookingError.NO_SLOT_SELECTED) == (
            ERROR_MESSAGES[BookingError.NO_SLOT_SELECTED]
        )


class TestSummary:
    def test_summary_lines(self):
        summary = build_booking_summary(_descriptor())
        assert summary.splitlines() == [
            "Booking Summary",
            "  Doctor: Dr. Test",
            "  Appointment Type: Standard Appointment",
            "  Date & Time: March 10, 2026 - 06:29 PM to 06:59 PM",
            "  Duration: 30 Minutes",
            "  Fee: 120 EGP",
        ]

    def test_end_on_next_day(self):
        descriptor = _descriptor().model_copy(
            update={"start_time": time(23, 56), "end_time": time(0, 26), "end_date": date(2026, 3, 11)}
        )
        assert "11:56 PM to 12:26 AM on March 11" in build_booking_summary(descriptor)

    def test_notes_line(self):
        assert "  Notes: Prefer video" in build_booking_summary(_descriptor("Prefer video"))


class TestAcknowledgements:
    def test_custom_request_ack(self):
        request = CustomRequest(date=TODAY, time="07:15 PM", duration_class=DurationClass.SHORT)
        assert build_custom_request_ack(request).startswith("Your request for March 10 at 07:15 PM")

    def test_payment_error(self):
        assert build_payment_error("The card was declined.") == (
            "Booking Failed: The card was declined."
        )

    def test_payment_error_fallback(self):
        assert "error processing" in build_payment_error("")
