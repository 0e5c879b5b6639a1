"""
Booking handoff: assemble the priced descriptor and pass it to payment.

Assembly is pure. Once the descriptor is handed to the payment
collaborator the core is done with it: no retries, no polling.
"""

import asyncio
from datetime import date, datetime, timedelta
from typing import Optional, Union

from src.booking.selection import SlotSelection
from src.config import settings
from src.logging_context import get_session_logger
from src.schemas.booking_schema import (
    BookingDescriptor,
    CustomRequest,
    ImmediateSessionRequest,
    RequestClass,
)
from src.tools.payment import PaymentGateway, PaymentResult
from src.tools.pricing import fee
from src.utils import parse_clock

logger = get_session_logger(__name__)

BookingSource = Union[SlotSelection, CustomRequest, ImmediateSessionRequest]


def _from_selection(selection: SlotSelection) -> BookingDescriptor:
    if not selection.is_confirmed or selection.chosen_slot is None or selection.date is None:
        raise ValueError(
            f"Selection must be confirmed before handoff (state: {selection.state.value})"
        )
    slot = selection.chosen_slot
    return BookingDescriptor(
        date=selection.date,
        start_time=slot.start_time,
        end_time=slot.end_time,
        duration_class=slot.duration_class,
        request_class=RequestClass.STANDARD,
        fee=fee(slot.duration_class, RequestClass.STANDARD),
        currency=settings.provider.currency,
        provider_name=settings.provider.name,
        duration_minutes=slot.duration_class.minutes,
    )


def _end_date(start: datetime, end: datetime) -> Optional[date]:
    return end.date() if end.date() != start.date() else None


def _from_custom(request: CustomRequest) -> BookingDescriptor:
    start = datetime.combine(request.date, parse_clock(request.time))
    end = start + timedelta(minutes=request.duration_class.minutes)
    return BookingDescriptor(
        date=request.date,
        start_time=start.time(),
        end_time=end.time(),
        end_date=_end_date(start, end),
        duration_class=request.duration_class,
        request_class=RequestClass.CUSTOM,
        fee=fee(request.duration_class, RequestClass.CUSTOM),
        currency=settings.provider.currency,
        provider_name=settings.provider.name,
        duration_minutes=request.duration_class.minutes,
        notes=request.notes or None,
    )


def _from_immediate(request: ImmediateSessionRequest) -> BookingDescriptor:
    return BookingDescriptor(
        date=request.start.date(),
        start_time=request.start.time(),
        end_time=request.end.time(),
        end_date=_end_date(request.start, request.end),
        duration_class=request.duration_class,
        request_class=RequestClass.IMMEDIATE,
        fee=fee(request.duration_class, RequestClass.IMMEDIATE),
        currency=settings.provider.currency,
        provider_name=settings.provider.name,
        duration_minutes=request.duration_class.minutes,
    )


def to_booking_descriptor(source: BookingSource) -> BookingDescriptor:
    """Build the descriptor for any of the three booking paths.

    Raises:
        ValueError: If a standard selection has not been confirmed.
        TypeError: If the source is not a recognized booking path.
    """
    if isinstance(source, SlotSelection):
        descriptor = _from_selection(source)
    elif isinstance(source, CustomRequest):
        descriptor = _from_custom(source)
    elif isinstance(source, ImmediateSessionRequest):
        descriptor = _from_immediate(source)
    else:
        raise TypeError(f"Cannot build a booking descriptor from {type(source).__name__}")

    logger.info(
        "Descriptor assembled: %s %s %s-%s fee=%d %s",
        descriptor.request_class.value,
        descriptor.date.isoformat(),
        descriptor.start_time.strftime("%H:%M"),
        descriptor.end_time.strftime("%H:%M"),
        descriptor.fee,
        descriptor.currency,
    )
    return descriptor


def hand_off(
    descriptor: BookingDescriptor, gateway: PaymentGateway
) -> "asyncio.Task[PaymentResult]":
    """Schedule the payment collaborator and return without waiting.

    Must be called from a running event loop. The caller may await the
    returned task to learn whether to show a confirmation or a payment error.
    """
    logger.info("Handing off %s booking to payment", descriptor.request_class.value)
    return asyncio.create_task(gateway.charge(descriptor))
