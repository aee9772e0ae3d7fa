"""Domain models representing persisted state.

These are pure domain objects with no storage concerns.
Django ORM models are in cinema/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from cinema.domain.value_objects import (
    BookingId,
    Capacity,
    Money,
    MovieId,
    SeatType,
    ShowId,
    ShowroomId,
)


@dataclass(frozen=True)
class Movie:
    """Catalog entry. The core only holds a reference to it."""

    id: MovieId
    title: str
    description: str


@dataclass(frozen=True)
class Showroom:
    """Domain representation of a Showroom."""

    id: ShowroomId
    name: str
    total_seats: Capacity


@dataclass(frozen=True)
class Seat:
    """A seat label within a showroom and its type."""

    label: str
    seat_type: SeatType


@dataclass(frozen=True)
class SeatLayout:
    """The fixed, ordered seat inventory of a showroom.

    Defined once per showroom and shared by every show scheduled there.
    """

    showroom_id: ShowroomId
    seats: tuple[Seat, ...]

    @property
    def capacity(self) -> int:
        return len(self.seats)

    def labels(self) -> list[str]:
        return [seat.label for seat in self.seats]

    def find(self, label: str) -> Seat | None:
        for seat in self.seats:
            if seat.label == label:
                return seat
        return None


@dataclass(frozen=True)
class Show:
    """A screening of a movie in a showroom over [starts_at, ends_at)."""

    id: ShowId
    movie_id: MovieId
    showroom_id: ShowroomId
    starts_at: datetime
    ends_at: datetime
    base_price: Money
    created_at: datetime

    def overlaps(self, starts_at: datetime, ends_at: datetime) -> bool:
        """Half-open interval intersection; touching intervals do not overlap."""
        return self.starts_at < ends_at and starts_at < self.ends_at


@dataclass(frozen=True)
class Booking:
    """A confirmed reservation of one seat for one show.

    Seat type, premium and base price are captured when the booking is made,
    so later catalog changes never alter an issued ticket.
    """

    id: BookingId
    show_id: ShowId
    seat_label: str
    seat_type: str
    premium_percent: Decimal
    base_price: Money
    total_price: Money
    created_at: datetime


@dataclass(frozen=True)
class SeatAvailability:
    """One row of a show's seat map."""

    label: str
    seat_type: SeatType
    price: Money
    booked: bool


@dataclass(frozen=True)
class DeletionReport:
    """What a cascading delete removed."""

    shows: int = 0
    bookings: int = 0
