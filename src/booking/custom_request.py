"""
Custom request path: the patient proposes a date and time.

Nothing is booked here. A valid request goes to the provider's
pending-approval queue and the patient gets an acknowledgement.
"""

from datetime import date, datetime
from typing import Callable, Optional

from src.booking.handoff import to_booking_descriptor
from src.booking.messages import build_custom_request_ack
from src.booking.validation import BookingResult, ValidationResult, check_lead_time
from src.logging_context import get_session_logger
from src.schemas.booking_schema import BookingError, CustomRequest, DurationClass
from src.tools.approvals import ApprovalRecord, submit_for_approval
from src.tools.notifications import Notifier, notify
from src.utils import parse_clock

logger = get_session_logger(__name__)

ApprovalSink = Callable[[CustomRequest], ApprovalRecord]


class CustomRequestForm:
    """Editable fields of a custom request, validated on submit."""

    def __init__(self) -> None:
        self.date: Optional[date] = None
        self.time: str = ""
        self.duration_class: DurationClass = DurationClass.SHORT
        self.notes: str = ""

    def set_date(self, day: Optional[date]) -> None:
        self.date = day

    def set_time(self, value: str) -> None:
        self.time = (value or "").strip()

    def set_duration(self, duration_class: DurationClass) -> None:
        self.duration_class = duration_class

    def set_notes(self, notes: str) -> None:
        self.notes = (notes or "").strip()

    def validate(self, now: datetime) -> ValidationResult:
        """Apply the completeness check, then the lead-time rule."""
        if self.date is None or not self.time:
            return ValidationResult.fail(BookingError.MISSING_DATE_OR_TIME)
        try:
            proposed = parse_clock(self.time)
        except ValueError:
            logger.info("Unparseable custom time: %r", self.time)
            return ValidationResult.fail(BookingError.MISSING_DATE_OR_TIME)
        return check_lead_time(
            datetime.combine(self.date, proposed), now, BookingError.LEAD_TIME_VIOLATION
        )

    def to_request(self) -> CustomRequest:
        """Freeze the current fields. Call only after validate() passed."""
        if self.date is None:
            raise ValueError("Custom request has no date")
        return CustomRequest(
            date=self.date,
            time=self.time,
            duration_class=self.duration_class,
            notes=self.notes,
        )

    def submit(
        self,
        now: datetime,
        sink: ApprovalSink = submit_for_approval,
        notifier: Notifier = notify,
    ) -> BookingResult:
        """Validate, queue for approval and acknowledge.

        The returned descriptor prices the request for the payment step;
        the provider still has to accept the time out of band.
        """
        result = self.validate(now)
        if not result.passed:
            return BookingResult.from_validation(result)

        request = self.to_request()
        record = sink(request)
        ack = build_custom_request_ack(request)
        notifier(ack)
        logger.info("Custom request submitted: %s", record["approval_ref"])

        return BookingResult(
            passed=True,
            descriptor=to_booking_descriptor(request),
            message=ack,
            reference=record["approval_ref"],
        )

    def clear(self) -> None:
        self.date = None
        self.time = ""
        self.duration_class = DurationClass.SHORT
        self.notes = ""
