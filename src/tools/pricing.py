"""Static fee table keyed by duration class and request class."""

from src.schemas.booking_schema import DurationClass, RequestClass

FEE_TABLE: dict[tuple[DurationClass, RequestClass], int] = {
    (DurationClass.SHORT, RequestClass.STANDARD): 120,
    (DurationClass.LONG, RequestClass.STANDARD): 220,
    (DurationClass.SHORT, RequestClass.CUSTOM): 150,
    (DurationClass.LONG, RequestClass.CUSTOM): 260,
}

# Immediate sessions are always short, so their price ignores duration.
IMMEDIATE_FEE = 180


def fee(duration_class: DurationClass, request_class: RequestClass) -> int:
    """Look up the fee for a booking.

    Raises:
        KeyError: If the combination has no price.
    """
    if request_class == RequestClass.IMMEDIATE:
        return IMMEDIATE_FEE
    key = (duration_class, request_class)
    if key not in FEE_TABLE:
        raise KeyError(
            f"No fee for duration '{duration_class}' and request class '{request_class}'"
        )
    return FEE_TABLE[key]


def get_fee_table() -> dict[str, int]:
    """Return a display copy of every price, keyed ``"<duration>/<request>"``."""
    table = {
        f"{duration.value}/{request.value}": amount
        for (duration, request), amount in FEE_TABLE.items()
    }
    table[RequestClass.IMMEDIATE.value] = IMMEDIATE_FEE
    return table
