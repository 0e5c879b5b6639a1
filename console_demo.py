"""
Offline console demo: walks the booking workflow without any services.

Uses the real selection state machine, availability filter, pricing and
handoff with the mock payment, approval and presence collaborators. The
clock starts at 18:10 today and only moves when a scenario advances it,
so every run shows the same slots.

Usage:
    python console_demo.py
    python console_demo.py --scenario custom
    python console_demo.py --scenario stale
"""

import argparse
import asyncio
from datetime import datetime, timedelta
from typing import Callable, Optional

from src.booking.flow import BookingFlow
from src.booking.messages import build_booking_summary, build_payment_error
from src.booking.validation import BookingResult
from src.config import settings
from src.schemas.booking_schema import DurationClass, TimeSlotTemplate
from src.tools.bookings import InMemoryBookingStore
from src.tools.payment import MockPaymentGateway
from src.tools.presence import set_provider_online
from src.tools.pricing import get_fee_table

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class DemoClock:
    """Deterministic clock the scenarios can move forward."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, minutes: int) -> None:
        self.current += timedelta(minutes=minutes)


class ConsoleSession:
    """Drives a BookingFlow from typed or scripted commands."""

    HELP = (
        "Commands: date YYYY-MM-DD | duration short|long | slot N | confirm | pay |\n"
        "          custom YYYY-MM-DD HH:MM [notes] | immediate | online on|off |\n"
        "          wait MINUTES | fees | status | quit"
    )

    SCENARIOS: dict[str, list[str]] = {
        "standard": ["duration short", "slot 1", "confirm", "pay"],
        "tomorrow": ["date +1", "duration long", "slot 2", "confirm", "pay"],
        "custom": ["custom +2 16:45 First session, prefer video", "pay"],
        "immediate": ["online on", "immediate", "pay"],
        "offline": ["online off", "immediate"],
        "stale": ["duration short", "slot 1", "wait 10", "confirm", "slot 1", "confirm", "pay"],
        "empty": ["confirm"],
    }

    def __init__(self, clock: Optional[DemoClock] = None) -> None:
        start = datetime.now().replace(hour=18, minute=10, second=0, microsecond=0)
        self.clock = clock or DemoClock(start)
        self.gateway = MockPaymentGateway()
        self.store = InMemoryBookingStore()
        self.flow = BookingFlow(clock=self.clock, gateway=self.gateway, store=self.store)
        self.slots: list[TimeSlotTemplate] = []
        self.commands: dict[str, Callable[[list[str]], None]] = {
            "date": self._cmd_date,
            "duration": self._cmd_duration,
            "slot": self._cmd_slot,
            "confirm": self._cmd_confirm,
            "pay": self._cmd_pay,
            "custom": self._cmd_custom,
            "immediate": self._cmd_immediate,
            "online": self._cmd_online,
            "wait": self._cmd_wait,
            "fees": self._cmd_fees,
            "status": self._cmd_status,
        }

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def warn(self, text: str) -> None:
        print(f"{YELLOW}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SESSION BOOKING - {title}{RESET}")
        print(f"{BOLD}  Provider: {settings.provider.name}{RESET}")
        print(f"{BOLD}  Now: {self.clock().strftime('%Y-%m-%d %H:%M')}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def start(self) -> None:
        dates = self.flow.open()
        self.system_log(
            f"Bookable dates: {dates[0].isoformat()} .. {dates[-1].isoformat()}"
        )
        self.system_log(f"State: {self.flow.selection.state.value}")

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self.banner(f"Scenario: {scenario}")
        self.start()
        for step in steps:
            print(f"\n{BLUE}[Patient] {RESET}{step}")
            self.process(step)

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(self.flow.selection.get_state_trace())}{RESET}")
        print(f"{DIM}  Errors: {[e.value for e in self.flow.session.error_history]}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        self.banner("Console Demo")
        print(self.HELP)
        self.start()
        while True:
            line = input(f"\n{BLUE}[Patient] {RESET}").strip()
            if not line:
                continue
            if line.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self.process(line)

    def process(self, line: str) -> None:
        name, *args = line.split()
        handler = self.commands.get(name.lower())
        if handler is None:
            self.warn(f"Unknown command '{name}'.")
            print(self.HELP)
            return
        try:
            handler(args)
        except (ValueError, IndexError) as exc:
            self.warn(f"Could not read that: {exc}")

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def _parse_day(self, token: str):
        if token.startswith("+"):
            return self.clock().date() + timedelta(days=int(token[1:]))
        return datetime.strptime(token, "%Y-%m-%d").date()

    def _show_slots(self, slots: list[TimeSlotTemplate]) -> None:
        self.slots = slots
        if not slots:
            self.say("No available time slots for that day.")
            return
        for i, slot in enumerate(slots, start=1):
            self.say(f"  {i}. {slot.label} ({slot.duration_class.value})")

    def _cmd_date(self, args: list[str]) -> None:
        self._show_slots(self.flow.choose_date(self._parse_day(args[0])))

    def _cmd_duration(self, args: list[str]) -> None:
        self._show_slots(self.flow.choose_duration(DurationClass(args[0].lower())))

    def _cmd_slot(self, args: list[str]) -> None:
        index = int(args[0]) - 1
        if not 0 <= index < len(self.slots):
            self.warn("There is no slot with that number.")
            return
        result = self.flow.choose_slot(self.slots[index])
        if result.passed:
            self.say(f"Selected {self.slots[index].label}.")
        else:
            self.warn(result.message or "")
        self.system_log(f"State: {self.flow.selection.state.value}")

    def _cmd_confirm(self, args: list[str]) -> None:
        result = self.flow.confirm()
        self._show_result(result)
        if not result.passed:
            self._show_slots(list(self.flow.selection.available))
        self.system_log(f"State: {self.flow.selection.state.value}")

    def _cmd_custom(self, args: list[str]) -> None:
        self.flow.update_custom_request(
            day=self._parse_day(args[0]),
            time=args[1],
            notes=" ".join(args[2:]),
        )
        self._show_result(self.flow.submit_custom_request())

    def _cmd_immediate(self, args: list[str]) -> None:
        self._show_result(self.flow.book_immediate())

    def _cmd_online(self, args: list[str]) -> None:
        set_provider_online(args[0].lower() == "on")
        self.system_log(f"Provider online: {args[0].lower() == 'on'}")

    def _cmd_wait(self, args: list[str]) -> None:
        self.clock.advance(int(args[0]))
        self.system_log(f"Clock advanced to {self.clock().strftime('%H:%M')}")

    def _cmd_fees(self, args: list[str]) -> None:
        for key, amount in get_fee_table().items():
            self.say(f"  {key}: {amount} {settings.provider.currency}")

    def _cmd_status(self, args: list[str]) -> None:
        self.system_log(f"Selection: {self.flow.selection.to_dict()}")
        self.system_log(f"Session: {self.flow.session}")

    def _cmd_pay(self, args: list[str]) -> None:
        if self.flow.session.descriptor is None:
            self.warn("Nothing to pay for yet.")
            return
        result = asyncio.run(self.flow.checkout())
        if result.get("success"):
            self.say(f"Booking Successful. Payment reference {result.get('payment_ref')}.")
        else:
            self.warn(build_payment_error(result.get("message", "")))

    def _show_result(self, result: BookingResult) -> None:
        if not result.passed:
            self.warn(result.message or "")
            return
        if result.message:
            self.say(result.message)
        if result.descriptor is not None:
            self.say(build_booking_summary(result.descriptor))


def main() -> None:
    parser = argparse.ArgumentParser(description="Session booking console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        help="Auto-play a scripted scenario instead of reading commands",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
