"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class _Identifier:
    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MovieId(_Identifier):
    """Unique identifier for a Movie."""


@dataclass(frozen=True)
class ShowroomId(_Identifier):
    """Unique identifier for a Showroom."""


@dataclass(frozen=True)
class ShowId(_Identifier):
    """Unique identifier for a Show."""


@dataclass(frozen=True)
class BookingId(_Identifier):
    """Unique identifier for a Booking."""


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class SeatType:
    """Seat category carrying a percentage premium over a show's base price.

    A premium of -100 makes the seat free; anything lower would produce a
    negative price and is rejected.
    """

    name: str
    premium_percent: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Seat type name cannot be blank")
        if self.premium_percent < -100:
            raise ValueError("Seat type premium cannot be below -100 percent")
