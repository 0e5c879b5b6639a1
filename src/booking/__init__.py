from src.booking.flow import BookingFlow
from src.booking.selection import SlotSelection
from src.booking.state_machine import (
    InvalidTransitionError,
    SelectionState,
    SelectionStateMachine,
    SelectionTrigger,
)
from src.booking.validation import BookingResult, ValidationResult

__all__ = [
    "BookingFlow",
    "SlotSelection",
    "SelectionStateMachine",
    "SelectionState",
    "SelectionTrigger",
    "InvalidTransitionError",
    "BookingResult",
    "ValidationResult",
]
