"""Booking ledger service.

A (show, seat) pair is either available or booked. Booking is a single
conditional write at the store: it is accepted only if nobody booked the
seat first, so concurrent attempts for one seat end with exactly one
success. There are no temporary holds.
"""

from uuid import uuid4

from loguru import logger

from cinema.domain import Booking, BookingId, Show, ShowId
from cinema.domain.errors import (
    BookingNotFoundError,
    LayoutNotFoundError,
    SeatAlreadyBookedError,
    SeatNotFoundError,
    ShowNotFoundError,
)
from cinema.services.ids import Clock, IdGenerator, parse_id, utc_now
from cinema.services.pricing import seat_price
from cinema.stores.interfaces import CinemaStore


class BookingLedgerService:
    """Service for reserving and releasing seats."""

    def __init__(
        self,
        store: CinemaStore,
        id_generator: IdGenerator = uuid4,
        clock: Clock = utc_now,
        currency_places: int = 2,
    ) -> None:
        self._store = store
        self._new_id = id_generator
        self._now = clock
        self._places = currency_places

    def book_seat(self, show_id: ShowId | str, seat_label: str) -> Booking:
        """Reserve one seat for one show.

        Raises:
            InvalidIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
            SeatNotFoundError: If the label is not in the show's layout.
            SeatAlreadyBookedError: If the seat is already booked for the show.
        """
        show = self._get_show(show_id)
        layout = self._store.get_layout(show.showroom_id)
        if layout is None:
            raise LayoutNotFoundError(str(show.showroom_id))
        seat = layout.find(seat_label)
        if seat is None:
            raise SeatNotFoundError(seat_label)

        booking = Booking(
            id=BookingId(self._new_id()),
            show_id=show.id,
            seat_label=seat.label,
            seat_type=seat.seat_type.name,
            premium_percent=seat.seat_type.premium_percent,
            base_price=show.base_price,
            total_price=seat_price(show, seat, self._places),
            created_at=self._now(),
        )
        if not self._store.add_booking_if_absent(booking):
            if self._store.get_show(show.id) is None:
                raise ShowNotFoundError(str(show.id))
            logger.bind(show_id=str(show.id), seat_label=seat.label).warning(
                "Booking rejected: seat already booked"
            )
            raise SeatAlreadyBookedError(str(show.id), seat.label)

        logger.bind(
            booking_id=str(booking.id),
            show_id=str(show.id),
            seat_label=seat.label,
            total_price=str(booking.total_price),
        ).info("Seat booked")
        return booking

    def cancel_booking(self, booking_id: BookingId | str) -> None:
        """Remove a booking so the seat becomes available again.

        Raises:
            InvalidIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        bid = parse_id(BookingId, booking_id, "booking")
        if not self._store.remove_booking(bid):
            raise BookingNotFoundError(str(bid))
        logger.bind(booking_id=str(bid)).info("Booking cancelled")

    def get_booking(self, booking_id: BookingId | str) -> Booking:
        bid = parse_id(BookingId, booking_id, "booking")
        booking = self._store.get_booking(bid)
        if booking is None:
            raise BookingNotFoundError(str(bid))
        return booking

    def bookings_for_show(self, show_id: ShowId | str) -> list[Booking]:
        show = self._get_show(show_id)
        return self._store.list_bookings(show.id)

    def _get_show(self, show_id: ShowId | str) -> Show:
        sid = parse_id(ShowId, show_id, "show")
        show = self._store.get_show(sid)
        if show is None:
            raise ShowNotFoundError(str(sid))
        return show
