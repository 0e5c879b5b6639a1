"""
In-progress standard booking: date, duration and chosen slot.

Availability is recomputed whenever the date or duration changes, and the
chosen slot is dropped at the same time so no choice survives into a
different day or duration. Confirmation re-checks the lead time against a
fresh ``now`` because the cached list was computed earlier.

Usage:
    selection = SlotSelection()
    selection.set_date(day, now)
    slots = selection.set_duration(DurationClass.SHORT, now)
    selection.select_slot(slots[0])
    result = selection.confirm(datetime.now())
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional

from src.booking.state_machine import (
    SelectionState,
    SelectionStateMachine,
    SelectionTrigger,
)
from src.booking.validation import ValidationResult, check_lead_time
from src.logging_context import get_session_logger
from src.schemas.booking_schema import BookingError, DurationClass, TimeSlotTemplate
from src.tools.availability import available_slots
from src.tools.bookings import BookedSlotLookup
from src.utils import start_instant

logger = get_session_logger(__name__)


class SlotSelection:
    """
    Tracks the patient's choice and enforces the selection invariants.

    A slot can only be chosen from the current availability list, and
    confirm() refuses a slot whose start has drifted inside the lead time.
    """

    def __init__(
        self,
        templates: Optional[Iterable[TimeSlotTemplate]] = None,
        booked: Optional[BookedSlotLookup] = None,
    ) -> None:
        self._sm = SelectionStateMachine()
        self._templates = list(templates) if templates is not None else None
        self._booked = booked
        self.date: Optional[date] = None
        self.duration_class: Optional[DurationClass] = None
        self.chosen_slot: Optional[TimeSlotTemplate] = None
        self.available: list[TimeSlotTemplate] = []

    @property
    def state(self) -> SelectionState:
        return self._sm.current_state

    @property
    def is_confirmed(self) -> bool:
        return self._sm.is_terminal()

    def _recompute(self, now: datetime) -> None:
        if self.date is None or self.duration_class is None:
            self.available = []
            return
        self.available = available_slots(
            self.date,
            self.duration_class,
            now,
            templates=self._templates,
            booked=self._booked,
        )

    def set_date(self, day: date, now: datetime) -> list[TimeSlotTemplate]:
        """Change the date, clearing the chosen slot. Returns the new list."""
        self._sm.transition(SelectionTrigger.DATE_SELECTED)
        self.date = day
        self.chosen_slot = None
        self._recompute(now)
        logger.debug("Date set to %s (%d slots)", day.isoformat(), len(self.available))
        return list(self.available)

    def set_duration(self, duration_class: DurationClass, now: datetime) -> list[TimeSlotTemplate]:
        """Change the duration, clearing the chosen slot. Returns the new list."""
        self._sm.transition(SelectionTrigger.DURATION_SELECTED)
        self.duration_class = duration_class
        self.chosen_slot = None
        self._recompute(now)
        logger.debug(
            "Duration set to %s (%d slots)", duration_class.value, len(self.available)
        )
        return list(self.available)

    def select_slot(self, slot: TimeSlotTemplate) -> ValidationResult:
        """Choose a slot from the current availability list."""
        if slot not in self.available:
            logger.info("Rejected slot %s: not in current availability", slot.label)
            return ValidationResult.fail(BookingError.STALE_SLOT)
        if self.is_confirmed and slot == self.chosen_slot:
            return ValidationResult.ok()
        self._sm.transition(SelectionTrigger.SLOT_SELECTED)
        self.chosen_slot = slot
        logger.debug("Slot chosen: %s", slot.label)
        return ValidationResult.ok()

    def confirm(self, now: datetime) -> ValidationResult:
        """
        Confirm the chosen slot against a freshly read ``now``.

        On STALE_SLOT the stale choice is cleared and the list recomputed
        with ``now``, and the selection returns to DURATION_CHOSEN, not
        SLOT_CHOSEN: the patient picks again from the fresh list.

        Confirming an already confirmed selection re-checks the slot: it
        stays CONFIRMED if still valid and expires like any other stale
        slot if not.
        """
        if self.chosen_slot is None or self.date is None:
            logger.info("Confirm attempted with no slot selected")
            return ValidationResult.fail(BookingError.NO_SLOT_SELECTED)

        instant = start_instant(self.date, self.chosen_slot.start_time)
        result = check_lead_time(instant, now, BookingError.STALE_SLOT)
        if not result.passed:
            logger.warning("Slot %s went stale before confirmation", self.chosen_slot.label)
            self._sm.transition(SelectionTrigger.SLOT_EXPIRED)
            self.chosen_slot = None
            self._recompute(now)
            return result

        if self.is_confirmed:
            return result
        self._sm.transition(SelectionTrigger.CONFIRM_SUCCEEDED)
        logger.info("Selection confirmed: %s %s", self.date.isoformat(), self.chosen_slot.label)
        return result

    def reset(self) -> None:
        """Discard the whole selection and return to IDLE."""
        if self._sm.current_state != SelectionState.IDLE:
            self._sm.transition(SelectionTrigger.RESET)
        self.date = None
        self.duration_class = None
        self.chosen_slot = None
        self.available = []

    def get_state_trace(self) -> list[str]:
        return self._sm.get_state_trace()

    def to_dict(self) -> dict[str, Any]:
        """Export the selection as a flat dict for logging and display."""
        return {
            "state": self.state.value,
            "date": self.date.isoformat() if self.date else None,
            "duration_class": self.duration_class.value if self.duration_class else None,
            "chosen_slot": self.chosen_slot.label if self.chosen_slot else None,
            "available": [s.label for s in self.available],
        }
