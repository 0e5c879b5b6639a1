"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional

import pytest

from src.booking.flow import BookingFlow
from src.booking.selection import SlotSelection
from src.booking.state_machine import SelectionStateMachine
from src.schemas.booking_schema import DurationClass, TimeSlotTemplate
from src.tools import approvals, notifications, presence
from src.tools.bookings import InMemoryBookingStore
from src.tools.payment import MockPaymentGateway

TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 18, 10)


def make_template(
    start: str, end: str, duration: DurationClass = DurationClass.SHORT
) -> TimeSlotTemplate:
    """Helper to create a template from ``"HH:MM"`` strings."""
    sh, sm = (int(p) for p in start.split(":"))
    eh, em = (int(p) for p in end.split(":"))
    return TimeSlotTemplate(start_time=time(sh, sm), end_time=time(eh, em), duration_class=duration)


SCENARIO_TEMPLATES = [
    make_template("17:59", "18:29"),
    make_template("18:29", "18:59"),
    make_template("19:59", "20:59", DurationClass.LONG),
]


class FakeClock:
    """Clock a test can move forward between UI events."""

    def __init__(self, start: datetime = NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def set(self, value: datetime) -> None:
        self.current = value


@pytest.fixture(autouse=True)
def reset_mock_collaborators():
    yield
    approvals.reset()
    notifications.reset()
    presence.reset()


@pytest.fixture
def state_machine():
    return SelectionStateMachine()


@pytest.fixture
def selection():
    return SlotSelection(templates=SCENARIO_TEMPLATES)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gateway():
    return MockPaymentGateway()


@pytest.fixture
def store():
    return InMemoryBookingStore()


def make_flow(
    clock: FakeClock,
    gateway: Optional[MockPaymentGateway] = None,
    store: Optional[InMemoryBookingStore] = None,
    online: bool = True,
) -> BookingFlow:
    """Create a BookingFlow over the real catalogue with fake collaborators."""
    return BookingFlow(
        clock=clock,
        gateway=gateway or MockPaymentGateway(),
        store=store,
        presence=lambda: online,
    )


@pytest.fixture
def flow(clock, gateway, store):
    return make_flow(clock, gateway, store)
