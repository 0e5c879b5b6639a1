"""
Finite state machine for the standard booking selection.

Five states, each reachable only through an explicit trigger. The
selection layer drives it; an undefined transition is a programming error
and raises rather than being reported to the patient.

Usage:
    sm = SelectionStateMachine()
    sm.transition(SelectionTrigger.DATE_SELECTED)
    assert sm.current_state == SelectionState.DATE_CHOSEN
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    """All states of an in-progress standard booking."""
    IDLE = "idle"
    DATE_CHOSEN = "date_chosen"
    DURATION_CHOSEN = "duration_chosen"
    SLOT_CHOSEN = "slot_chosen"
    CONFIRMED = "confirmed"


class SelectionTrigger(str, Enum):
    """Patient events that cause state transitions."""
    DATE_SELECTED = "date_selected"
    DURATION_SELECTED = "duration_selected"
    SLOT_SELECTED = "slot_selected"
    CONFIRM_SUCCEEDED = "confirm_succeeded"
    SLOT_EXPIRED = "slot_expired"
    RESET = "reset"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: SelectionState
    to_state: SelectionState
    trigger: SelectionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: SelectionState
    entered_at: datetime
    trigger: Optional[SelectionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


_S = SelectionState
_T = SelectionTrigger


class SelectionStateMachine:
    """
    Deterministic state machine for date, duration and slot selection.

    Changing the date or duration from any selecting state lands in
    DURATION_CHOSEN at best, because the chosen slot is always dropped.
    CONFIRMED reopens the same way until the booking is paid for.
    """

    TRANSITIONS: list[Transition] = [
        # --- Date ---
        Transition(_S.IDLE, _S.DATE_CHOSEN, _T.DATE_SELECTED),
        Transition(_S.DATE_CHOSEN, _S.DATE_CHOSEN, _T.DATE_SELECTED),
        Transition(_S.DURATION_CHOSEN, _S.DURATION_CHOSEN, _T.DATE_SELECTED),
        Transition(_S.SLOT_CHOSEN, _S.DURATION_CHOSEN, _T.DATE_SELECTED),
        Transition(_S.CONFIRMED, _S.DURATION_CHOSEN, _T.DATE_SELECTED),

        # --- Duration ---
        Transition(_S.DATE_CHOSEN, _S.DURATION_CHOSEN, _T.DURATION_SELECTED),
        Transition(_S.DURATION_CHOSEN, _S.DURATION_CHOSEN, _T.DURATION_SELECTED),
        Transition(_S.SLOT_CHOSEN, _S.DURATION_CHOSEN, _T.DURATION_SELECTED),
        Transition(_S.CONFIRMED, _S.DURATION_CHOSEN, _T.DURATION_SELECTED),

        # --- Slot ---
        Transition(_S.DURATION_CHOSEN, _S.SLOT_CHOSEN, _T.SLOT_SELECTED),
        Transition(_S.SLOT_CHOSEN, _S.SLOT_CHOSEN, _T.SLOT_SELECTED),
        Transition(_S.CONFIRMED, _S.SLOT_CHOSEN, _T.SLOT_SELECTED),

        # --- Confirmation gate ---
        Transition(_S.SLOT_CHOSEN, _S.CONFIRMED, _T.CONFIRM_SUCCEEDED),
        Transition(_S.SLOT_CHOSEN, _S.DURATION_CHOSEN, _T.SLOT_EXPIRED),
        Transition(_S.CONFIRMED, _S.DURATION_CHOSEN, _T.SLOT_EXPIRED),

        # --- Start over ---
        Transition(_S.DATE_CHOSEN, _S.IDLE, _T.RESET),
        Transition(_S.DURATION_CHOSEN, _S.IDLE, _T.RESET),
        Transition(_S.SLOT_CHOSEN, _S.IDLE, _T.RESET),
        Transition(_S.CONFIRMED, _S.IDLE, _T.RESET),
    ]

    def __init__(self) -> None:
        self._current_state = SelectionState.IDLE
        self._history: list[StateEntry] = [
            StateEntry(state=SelectionState.IDLE, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> SelectionState:
        return self._current_state

    def transition(self, trigger: SelectionTrigger) -> SelectionState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new selection state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state

                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                logger.debug(
                    "Selection transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def can_transition(self, trigger: SelectionTrigger) -> bool:
        return trigger in self.get_valid_triggers()

    def get_valid_triggers(self) -> list[SelectionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_terminal(self) -> bool:
        """Check if the selection has been confirmed."""
        return self._current_state == SelectionState.CONFIRMED
