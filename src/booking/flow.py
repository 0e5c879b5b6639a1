"""
Booking flow: one patient's booking session driven by UI events.

Owns the standard selection, the custom request form and the session data,
and wires them to the external collaborators. ``now`` is read from the
injected clock exactly once per operation and threaded through, so one
click sees one instant.
"""

from datetime import date, datetime
from typing import Callable, Optional

from src.booking.custom_request import ApprovalSink, CustomRequestForm
from src.booking.handoff import hand_off, to_booking_descriptor
from src.booking.immediate import request_immediate
from src.booking.selection import SlotSelection
from src.booking.state_machine import SelectionState
from src.booking.validation import BookingResult, ValidationResult
from src.logging_context import get_session_logger, new_session_id, set_session_id
from src.schemas.booking_schema import (
    BookingDescriptor,
    DurationClass,
    RequestClass,
    TimeSlotTemplate,
)
from src.schemas.session_schema import BookingSessionData
from src.tools.approvals import submit_for_approval
from src.tools.availability import bookable_dates
from src.tools.bookings import InMemoryBookingStore
from src.tools.notifications import Notifier, notify
from src.tools.payment import MockPaymentGateway, PaymentGateway, PaymentResult
from src.tools.presence import is_provider_online

logger = get_session_logger(__name__)

Clock = Callable[[], datetime]


class BookingFlow:
    """Event handlers for the booking screen."""

    def __init__(
        self,
        clock: Clock = datetime.now,
        gateway: Optional[PaymentGateway] = None,
        store: Optional[InMemoryBookingStore] = None,
        presence: Callable[[], bool] = is_provider_online,
        approval_sink: ApprovalSink = submit_for_approval,
        notifier: Notifier = notify,
    ) -> None:
        self._clock = clock
        self._gateway = gateway if gateway is not None else MockPaymentGateway()
        self._store = store
        self._presence = presence
        self._approval_sink = approval_sink
        self._notifier = notifier

        self.session = BookingSessionData(session_id=new_session_id())
        set_session_id(self.session.session_id)
        self.selection = SlotSelection(booked=store)
        self.custom = CustomRequestForm()

    # ------------------------------------------------------------------ #
    # Standard booking
    # ------------------------------------------------------------------ #

    def open(self) -> list[date]:
        """Show the booking screen: today preselected, dates to pick from."""
        now = self._clock()
        was_confirmed = self.selection.is_confirmed
        self.selection.set_date(now.date(), now)
        self._drop_reopened_descriptor(was_confirmed)
        return bookable_dates(now)

    def choose_date(self, day: date) -> list[TimeSlotTemplate]:
        now = self._clock()
        was_confirmed = self.selection.is_confirmed
        slots = self.selection.set_date(day, now)
        self._drop_reopened_descriptor(was_confirmed)
        return slots

    def choose_duration(self, duration_class: DurationClass) -> list[TimeSlotTemplate]:
        now = self._clock()
        was_confirmed = self.selection.is_confirmed
        if self.selection.state == SelectionState.IDLE:
            self.selection.set_date(now.date(), now)
        slots = self.selection.set_duration(duration_class, now)
        self._drop_reopened_descriptor(was_confirmed)
        return slots

    def choose_slot(self, slot: TimeSlotTemplate) -> ValidationResult:
        was_confirmed = self.selection.is_confirmed
        result = self.selection.select_slot(slot)
        if not result.passed and result.error is not None:
            self.session.record_error(result.error)
        self._drop_reopened_descriptor(was_confirmed)
        return result

    def confirm(self) -> BookingResult:
        """Re-validate the chosen slot and assemble its descriptor.

        Repeating a confirm re-checks the same slot against a fresh ``now``.
        """
        now = self._clock()
        was_confirmed = self.selection.is_confirmed
        result = self.selection.confirm(now)
        if not result.passed:
            if result.error is not None:
                self.session.record_error(result.error)
            self._drop_reopened_descriptor(was_confirmed)
            return BookingResult.from_validation(result)

        descriptor = to_booking_descriptor(self.selection)
        self.session.descriptor = descriptor
        return BookingResult(passed=True, descriptor=descriptor)

    def _drop_reopened_descriptor(self, was_confirmed: bool) -> None:
        # A standard descriptor is only valid while its selection stays confirmed.
        if was_confirmed and not self.selection.is_confirmed:
            self.session.descriptor = None

    # ------------------------------------------------------------------ #
    # Custom request
    # ------------------------------------------------------------------ #

    def update_custom_request(
        self,
        day: Optional[date] = None,
        time: Optional[str] = None,
        duration_class: Optional[DurationClass] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Apply field edits; arguments left as None are unchanged."""
        if day is not None:
            self.custom.set_date(day)
        if time is not None:
            self.custom.set_time(time)
        if duration_class is not None:
            self.custom.set_duration(duration_class)
        if notes is not None:
            self.custom.set_notes(notes)

    def submit_custom_request(self) -> BookingResult:
        now = self._clock()
        result = self.custom.submit(now, sink=self._approval_sink, notifier=self._notifier)
        if not result.passed:
            if result.error is not None:
                self.session.record_error(result.error)
            return result

        self.session.descriptor = result.descriptor
        self.session.approval_reference = result.reference
        return result

    # ------------------------------------------------------------------ #
    # Immediate session
    # ------------------------------------------------------------------ #

    def book_immediate(self) -> BookingResult:
        now = self._clock()
        result = request_immediate(now, self._presence())
        if not result.passed:
            if result.error is not None:
                self.session.record_error(result.error)
            return result

        self.session.descriptor = result.descriptor
        return result

    # ------------------------------------------------------------------ #
    # Payment handoff
    # ------------------------------------------------------------------ #

    async def checkout(self, descriptor: Optional[BookingDescriptor] = None) -> PaymentResult:
        """Hand the descriptor to payment and wait for the success signal.

        Raises:
            ValueError: If there is nothing to pay for yet.
        """
        descriptor = descriptor or self.session.descriptor
        if descriptor is None:
            raise ValueError("No booking descriptor to check out")

        result = await hand_off(descriptor, self._gateway)
        if not result.get("success"):
            logger.warning("Payment failed: %s", result.get("message"))
            return result

        self.session.payment_reference = result.get("payment_ref")
        # Custom requests hold no slot until the provider accepts them.
        if self._store is not None and descriptor.request_class != RequestClass.CUSTOM:
            self._store.commit(descriptor)
        logger.info("Payment complete: %s", self.session.payment_reference)
        return result

    def start_over(self) -> None:
        self.selection.reset()
        self.custom.clear()
        self.session.descriptor = None
