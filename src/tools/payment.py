"""
Payment collaborator interface and a mock gateway.

In production this would create a Stripe payment intent for the
descriptor's fee and resolve once the card is captured. The core only
cares whether the charge succeeded.
"""

import asyncio
import logging
import uuid
from typing import Optional, Protocol, TypedDict

from src.schemas.booking_schema import BookingDescriptor

logger = logging.getLogger(__name__)


class PaymentResult(TypedDict, total=False):
    """Outcome reported by the payment collaborator."""

    success: bool
    payment_ref: str
    message: str


class PaymentGateway(Protocol):
    async def charge(self, descriptor: BookingDescriptor) -> PaymentResult:
        ...


class MockPaymentGateway:
    """Succeeds after a short simulated delay unless told to decline."""

    def __init__(self, decline: bool = False, delay_seconds: float = 0.0) -> None:
        self.decline = decline
        self.delay_seconds = delay_seconds
        self.charged: list[BookingDescriptor] = []

    async def charge(self, descriptor: BookingDescriptor) -> PaymentResult:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        self.charged.append(descriptor)

        if self.decline:
            logger.warning(
                "Payment declined for %s %s %s",
                descriptor.fee, descriptor.currency, descriptor.request_class.value,
            )
            return {"success": False, "message": "The card was declined."}

        ref = f"PAY-{uuid.uuid4().hex[:8].upper()}"
        logger.info("Payment captured: %s for %s %s", ref, descriptor.fee, descriptor.currency)
        return {
            "success": True,
            "payment_ref": ref,
            "message": f"Charged {descriptor.fee} {descriptor.currency}.",
        }

    def last_charge(self) -> Optional[BookingDescriptor]:
        return self.charged[-1] if self.charged else None
