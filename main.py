"""
Session booking entry point.

Runs the offline console demo. The booking core itself is a library;
the patient web app calls ``src.booking.BookingFlow`` directly.

Usage:
    Interactive:  python main.py
    Scripted:     python main.py --scenario standard
"""

import logging

from src.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode() -> None:
    """Start the offline console demo (no external services required)."""
    from console_demo import main as console_main

    logger.info("Starting %s console demo", settings.app_name)
    console_main()


if __name__ == "__main__":
    _run_console_mode()
