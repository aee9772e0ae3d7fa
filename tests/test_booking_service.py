"""Unit tests for BookingLedgerService."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from cinema.domain import Money
from cinema.domain.errors import (
    BookingNotFoundError,
    ConflictError,
    InvalidIdError,
    SeatAlreadyBookedError,
    SeatNotFoundError,
    ShowNotFoundError,
)
from cinema.services.booking_service import BookingLedgerService


class TestBookSeat:
    """Tests for book_seat."""

    def test_standard_seat_costs_base_price(self, core, show):
        """Given a standard seat, charges the base price."""
        booking = core.ledger.book_seat(str(show.id), "A1")
        assert booking.show_id == show.id
        assert booking.seat_label == "A1"
        assert booking.seat_type == "standard"
        assert booking.total_price == Money(Decimal("100.00"))

    def test_vip_seat_carries_premium(self, core, show):
        """Given a vip seat, charges base price plus 50 percent."""
        booking = core.ledger.book_seat(show.id, "A2")
        assert booking.premium_percent == Decimal("50")
        assert booking.base_price == Money(Decimal("100"))
        assert booking.total_price == Money(Decimal("150.00"))

    def test_second_booking_of_same_seat_conflicts(self, core, show):
        """Given the seat is taken, raises SeatAlreadyBookedError."""
        core.ledger.book_seat(show.id, "A1")
        with pytest.raises(SeatAlreadyBookedError) as exc_info:
            core.ledger.book_seat(show.id, "A1")
        assert isinstance(exc_info.value, ConflictError)
        assert len(core.ledger.bookings_for_show(show.id)) == 1

    def test_same_seat_in_another_show_is_independent(self, core, room, movie, show, at):
        """The same label can be booked once per show."""
        later = core.scheduler.schedule_show(movie.id, room.id, at(16), at(18), 120)
        core.ledger.book_seat(show.id, "A1")
        booking = core.ledger.book_seat(later.id, "A1")
        assert booking.total_price == Money(Decimal("120.00"))

    def test_unknown_seat(self, core, show):
        """Given a label outside the layout, raises SeatNotFoundError."""
        with pytest.raises(SeatNotFoundError):
            core.ledger.book_seat(show.id, "Z9")

    def test_unknown_show(self, core):
        """Given show does not exist, raises ShowNotFoundError."""
        with pytest.raises(ShowNotFoundError):
            core.ledger.book_seat(uuid4().hex, "A1")

    def test_malformed_show_id(self, core):
        """Given invalid UUID, raises InvalidIdError."""
        with pytest.raises(InvalidIdError):
            core.ledger.book_seat("show-1", "A1")

    def test_failed_attempt_leaves_ledger_intact(self, core, show):
        """A rejected booking adds nothing."""
        first = core.ledger.book_seat(show.id, "A1")
        with pytest.raises(SeatNotFoundError):
            core.ledger.book_seat(show.id, "nope")
        assert core.ledger.bookings_for_show(show.id) == [first]

    def test_uses_injected_id_and_clock(self, store, show):
        """Booking id and timestamp come from the injected generator and clock."""
        booking_id = uuid4()
        moment = datetime(2026, 11, 1, 9, tzinfo=timezone.utc)
        ledger = BookingLedgerService(store, id_generator=lambda: booking_id, clock=lambda: moment)

        booking = ledger.book_seat(show.id, "A1")

        assert booking.id.value == booking_id
        assert booking.created_at == moment


class TestCancelBooking:
    """Tests for cancel_booking."""

    def test_book_cancel_rebook(self, core, show):
        """Given a cancelled booking, the seat can be booked again."""
        booking = core.ledger.book_seat(show.id, "A1")
        core.ledger.cancel_booking(str(booking.id))
        again = core.ledger.book_seat(show.id, "A1")
        assert again.id != booking.id

    def test_cancelled_booking_is_gone(self, core, show):
        """Given a cancelled booking, get_booking raises BookingNotFoundError."""
        booking = core.ledger.book_seat(show.id, "A1")
        core.ledger.cancel_booking(booking.id)
        with pytest.raises(BookingNotFoundError):
            core.ledger.get_booking(booking.id)

    def test_cancel_twice(self, core, show):
        """Given an already cancelled booking, raises BookingNotFoundError."""
        booking = core.ledger.book_seat(show.id, "A1")
        core.ledger.cancel_booking(booking.id)
        with pytest.raises(BookingNotFoundError):
            core.ledger.cancel_booking(booking.id)

    def test_cancel_unknown(self, core):
        """Given booking does not exist, raises BookingNotFoundError."""
        with pytest.raises(BookingNotFoundError):
            core.ledger.cancel_booking(uuid4().hex)


class TestBookingQueries:
    def test_get_booking_shows_seat(self, core, show):
        """Given booking exists, returns it by string id."""
        booking = core.ledger.book_seat(show.id, "A2")
        assert core.ledger.get_booking(str(booking.id)).seat_label == "A2"

    def test_bookings_for_show_in_creation_order(self, core, show):
        """Bookings come back in the order they were made."""
        first = core.ledger.book_seat(show.id, "A2")
        second = core.ledger.book_seat(show.id, "A1")
        assert [b.id for b in core.ledger.bookings_for_show(show.id)] == [first.id, second.id]

    def test_bookings_for_unknown_show(self, core):
        """Given show does not exist, raises ShowNotFoundError."""
        with pytest.raises(ShowNotFoundError):
            core.ledger.bookings_for_show(uuid4().hex)
