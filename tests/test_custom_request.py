"""Tests for the custom request path."""

from datetime import time, timedelta

from src.booking.custom_request import CustomRequestForm
from src.schemas.booking_schema import BookingError, DurationClass, RequestClass
from src.tools import approvals, notifications
from tests.conftest import NOW, TODAY


def _form(day=TODAY, value="", duration=DurationClass.SHORT, notes="") -> CustomRequestForm:
    form = CustomRequestForm()
    form.set_date(day)
    form.set_time(value)
    form.set_duration(duration)
    form.set_notes(notes)
    return form


class TestValidation:
    def test_missing_time(self):
        result = _form(value="").validate(NOW)
        assert result.error == BookingError.MISSING_DATE_OR_TIME

    def test_missing_date(self):
        result = _form(day=None, value="09:00").validate(NOW)
        assert result.error == BookingError.MISSING_DATE_OR_TIME

    def test_whitespace_time_counts_as_missing(self):
        assert _form(value="   ").validate(NOW).error == BookingError.MISSING_DATE_OR_TIME

    def test_unparseable_time(self):
        assert _form(value="soon").validate(NOW).error == BookingError.MISSING_DATE_OR_TIME

    def test_inside_lead_time(self):
        result = _form(value="06:20 PM").validate(NOW)
        assert result.error == BookingError.LEAD_TIME_VIOLATION
        assert "15 minutes" in result.message

    def test_exact_lead_boundary(self):
        assert _form(value="18:25").validate(NOW).error == BookingError.LEAD_TIME_VIOLATION

    def test_just_after_lead_time(self):
        assert _form(value="06:26 PM").validate(NOW).passed

    def test_past_time_today(self):
        assert _form(value="09:00 AM").validate(NOW).error == BookingError.LEAD_TIME_VIOLATION

    def test_later_date_any_time(self):
        assert _form(day=TODAY + timedelta(days=1), value="09:00").validate(NOW).passed


class TestSubmit:
    def test_submit_queues_and_acknowledges(self):
        form = _form(day=TODAY + timedelta(days=1), value="09:00", notes="Prefer video")
        result = form.submit(NOW)

        assert result.passed
        assert result.reference.startswith("REQ-")
        assert approvals.get_approval(result.reference)["status"] == "pending"
        assert result.message == (
            "Your request for March 11 at 09:00 has been sent. The doctor will confirm it shortly."
        )
        assert notifications.get_sent()[-1]["message"] == result.message

    def test_submit_builds_priced_descriptor(self):
        form = _form(day=TODAY + timedelta(days=1), value="09:00", duration=DurationClass.LONG)
        descriptor = form.submit(NOW).descriptor

        assert descriptor.request_class == RequestClass.CUSTOM
        assert descriptor.start_time == time(9, 0)
        assert descriptor.end_time == time(10, 0)
        assert descriptor.fee == 260
        assert descriptor.duration_minutes == 60

    def test_invalid_submit_sends_nothing(self):
        result = _form(value="").submit(NOW)
        assert not result.passed
        assert result.descriptor is None
        assert approvals.list_pending() == []
        assert notifications.get_sent() == []

    def test_custom_sink_and_notifier(self):
        received = []
        sent = []

        def sink(request):
            received.append(request)
            return {"approval_ref": "REQ-LOCAL", "date": "", "time": "", "duration_class": "",
                    "notes": "", "status": "pending", "submitted_at": ""}

        result = _form(day=TODAY + timedelta(days=2), value="10:30").submit(
            NOW, sink=sink, notifier=sent.append,
        )
        assert result.reference == "REQ-LOCAL"
        assert received[0].time == "10:30"
        assert len(sent) == 1

    def test_empty_notes_become_none(self):
        descriptor = _form(day=TODAY + timedelta(days=1), value="09:00").submit(NOW).descriptor
        assert descriptor.notes is None


class TestClear:
    def test_clear_resets_fields(self):
        form = _form(value="09:00", duration=DurationClass.LONG, notes="x")
        form.clear()
        assert form.date is None
        assert form.time == ""
        assert form.duration_class == DurationClass.SHORT
        assert form.notes == ""
