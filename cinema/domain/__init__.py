from cinema.domain.models import (
    Booking,
    DeletionReport,
    Movie,
    Seat,
    SeatAvailability,
    SeatLayout,
    Show,
    Showroom,
)
from cinema.domain.value_objects import (
    BookingId,
    Capacity,
    Money,
    MovieId,
    SeatType,
    ShowId,
    ShowroomId,
)

__all__ = [
    "Movie",
    "Showroom",
    "Seat",
    "SeatLayout",
    "Show",
    "Booking",
    "SeatAvailability",
    "DeletionReport",
    "MovieId",
    "ShowroomId",
    "ShowId",
    "BookingId",
    "Money",
    "Capacity",
    "SeatType",
]
