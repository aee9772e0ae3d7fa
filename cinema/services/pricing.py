"""Seat pricing.

The only place a seat price is computed. Booking confirmation and the seat
map preview both go through `seat_price`, so they always agree.
"""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from cinema.domain import Money, Seat, Show
from cinema.domain.errors import InvalidPremiumError, InvalidPriceError

HUNDRED = Decimal(100)


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert through str so floats keep their printed value (0.1, not 0.1000000000000000055...)."""
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidPriceError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise InvalidPriceError(f"Not a finite number: {value!r}")
    return result


def to_currency(amount: Decimal, places: int = 2) -> Decimal:
    """Round an amount half-even to the currency's smallest unit."""
    return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)


def final_price(
    base_price: Decimal | int | float | str,
    premium_percent: Decimal | int | float | str,
    places: int = 2,
) -> Decimal:
    """Return base_price * (1 + premium_percent / 100), rounded half-even to `places`.

    Raises:
        InvalidPriceError: If base_price is negative.
        InvalidPremiumError: If premium_percent is below -100.
    """
    base = to_decimal(base_price)
    premium = to_decimal(premium_percent)
    if base < 0:
        raise InvalidPriceError("Base price cannot be negative")
    if premium < -HUNDRED:
        raise InvalidPremiumError("Premium cannot be below -100 percent")
    return to_currency(base * (HUNDRED + premium) / HUNDRED, places)


def seat_price(show: Show, seat: Seat, places: int = 2) -> Money:
    return Money(final_price(show.base_price.amount, seat.seat_type.premium_percent, places))
