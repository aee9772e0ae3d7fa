"""Integration tests for the Django ORM store.

Run with: pytest tests/test_django_store.py -v
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.db import OperationalError

from cinema import models as orm
from cinema.core import build_core, default_core
from cinema.domain import Booking, BookingId, Money, MovieId, SeatLayout, ShowId, ShowroomId
from cinema.domain.errors import (
    InvalidPriceError,
    SeatAlreadyBookedError,
    ShowOverlapError,
    StoreUnavailableError,
)
from cinema.stores.django_store import (
    DjangoCinemaStore,
    DjangoMovieCatalog,
    translate_db_errors,
)


@pytest.fixture
def django_store() -> DjangoCinemaStore:
    return DjangoCinemaStore()


@pytest.fixture
def django_core(db, django_store):
    return build_core(django_store, DjangoMovieCatalog())


@pytest.fixture
def movie_row(db) -> orm.Movie:
    return orm.Movie.objects.create(title="Arrival", description="First contact")


@pytest.fixture
def db_room(django_core, standard, vip):
    showroom = django_core.layouts.create_showroom("Room A", 2)
    django_core.layouts.define_layout(showroom.id, [("A1", standard), ("A2", vip)])
    return showroom


@pytest.fixture
def db_show(django_core, db_room, movie_row, at):
    return django_core.scheduler.schedule_show(
        str(movie_row.id), db_room.id, at(14), at(16), Decimal("100")
    )


@pytest.mark.django_db
class TestDjangoMovieCatalog:
    """Tests for DjangoMovieCatalog."""

    def test_movie_lookup(self, movie_row):
        """Given movie row exists, it is found by id."""
        catalog = DjangoMovieCatalog()
        movie_id = MovieId(movie_row.id)
        assert catalog.movie_exists(movie_id)
        assert catalog.get_movie(movie_id).title == "Arrival"

    def test_unknown_movie(self):
        """Given no movie row, returns False and None."""
        catalog = DjangoMovieCatalog()
        assert not catalog.movie_exists(MovieId(uuid4()))
        assert catalog.get_movie(MovieId(uuid4())) is None


@pytest.mark.django_db
class TestDjangoLayouts:
    """Tests for layout persistence."""

    def test_layout_round_trips_in_order(self, django_core, django_store, db_room, vip):
        """Seats come back in definition order with their types."""
        layout = django_store.get_layout(db_room.id)
        assert layout.labels() == ["A1", "A2"]
        assert layout.find("A2").seat_type == vip

    def test_second_layout_rejected(self, django_store, db_room):
        """Given a layout exists, a second write returns False."""
        layout = django_store.get_layout(db_room.id)
        assert django_store.add_layout_if_absent(layout) is False

    def test_layout_for_missing_room_rejected(self, django_store, db_room):
        """Given the showroom does not exist, the write returns False."""
        layout = django_store.get_layout(db_room.id)
        orphan = SeatLayout(showroom_id=ShowroomId(uuid4()), seats=layout.seats)
        assert django_store.add_layout_if_absent(orphan) is False


@pytest.mark.django_db
class TestDjangoShows:
    """Tests for show persistence."""

    def test_show_persisted(self, django_core, django_store, db_show):
        """A scheduled show reads back unchanged."""
        stored = django_store.get_show(db_show.id)
        assert stored.base_price == Money(Decimal("100"))
        assert stored.starts_at == db_show.starts_at
        assert orm.Show.objects.count() == 1

    def test_overlap_rejected_by_store(self, django_core, db_room, movie_row, db_show, at):
        """Given an overlapping show, raises ShowOverlapError and stores nothing."""
        with pytest.raises(ShowOverlapError):
            django_core.scheduler.schedule_show(
                str(movie_row.id), db_room.id, at(15), at(17), 100
            )
        assert orm.Show.objects.count() == 1

    def test_back_to_back_allowed(self, django_core, db_room, movie_row, db_show, at):
        """A show may start when the previous one ends."""
        django_core.scheduler.schedule_show(str(movie_row.id), db_room.id, at(16), at(18), 100)
        assert [s.starts_at for s in django_core.scheduler.list_shows(db_room.id)] == [
            at(14),
            at(16),
        ]

    def test_stored_price_matches_returned_show(
        self, django_core, django_store, db_room, movie_row, at
    ):
        """Given a price finer than a cent, the rounded price is returned and stored."""
        show = django_core.scheduler.schedule_show(
            str(movie_row.id), db_room.id, at(18), at(20), "12.345"
        )

        stored = django_store.get_show(show.id)
        assert show.base_price.amount == Decimal("12.34")
        assert stored.base_price == show.base_price

        preview = {s.label: s.price for s in django_core.availability.seat_map(show.id)}
        booking = django_core.ledger.book_seat(show.id, "A2")
        assert booking.total_price == preview["A2"] == Money(Decimal("18.51"))

    def test_price_rounding_to_zero_rejected(self, django_core, db_room, movie_row, at):
        """Given a price below half a cent, raises InvalidPriceError and stores nothing."""
        with pytest.raises(InvalidPriceError):
            django_core.scheduler.schedule_show(
                str(movie_row.id), db_room.id, at(18), at(20), "0.001"
            )
        assert not orm.Show.objects.exists()


@pytest.mark.django_db
class TestDjangoBookings:
    """Tests for booking persistence."""

    def test_booking_persisted_with_captured_prices(self, django_core, django_store, db_show):
        """The row keeps the premium and total charged at booking."""
        booking = django_core.ledger.book_seat(db_show.id, "A2")

        row = orm.Booking.objects.get(pk=booking.id.value)
        assert row.total_price == Decimal("150.00")
        assert row.premium_percent == Decimal("50")
        assert django_store.get_booking(booking.id) == booking

    def test_unique_constraint_rejects_duplicate(self, django_core, django_store, db_show):
        """Given the seat is taken, a direct insert returns False."""
        django_core.ledger.book_seat(db_show.id, "A1")
        duplicate = Booking(
            id=BookingId(uuid4()),
            show_id=db_show.id,
            seat_label="A1",
            seat_type="standard",
            premium_percent=Decimal("0"),
            base_price=Money(Decimal("100")),
            total_price=Money(Decimal("100")),
            created_at=datetime.now(timezone.utc),
        )
        assert django_store.add_booking_if_absent(duplicate) is False
        assert orm.Booking.objects.filter(show_id=db_show.id.value).count() == 1

    def test_duplicate_surfaces_as_conflict(self, django_core, db_show):
        """Given the seat is taken, book_seat raises SeatAlreadyBookedError."""
        django_core.ledger.book_seat(db_show.id, "A1")
        with pytest.raises(SeatAlreadyBookedError):
            django_core.ledger.book_seat(db_show.id, "A1")

    def test_cancel_and_rebook(self, django_core, django_store, db_show):
        """Given a cancelled booking, the seat can be booked again."""
        booking = django_core.ledger.book_seat(db_show.id, "A1")
        django_core.ledger.cancel_booking(booking.id)
        assert django_store.booked_labels(db_show.id) == set()
        django_core.ledger.book_seat(db_show.id, "A1")
        assert django_store.count_bookings(db_show.id) == 1

    def test_availability_reads_committed_state(self, django_core, db_show, at):
        """Availability reflects bookings as soon as they are written."""
        django_core.ledger.book_seat(db_show.id, "A1")
        assert django_core.availability.remaining_seats(db_show.id) == ["A2"]
        django_core.ledger.book_seat(db_show.id, "A2")
        assert list(django_core.availability.list_open_shows(at(9))) == []


@pytest.mark.django_db
class TestDjangoCascades:
    """Tests for cascading deletes."""

    def test_delete_showroom(self, django_core, db_room, db_show):
        """Removing a showroom removes its layout, shows and bookings."""
        django_core.ledger.book_seat(db_show.id, "A1")

        report = django_core.layouts.remove_showroom(db_room.id)

        assert (report.shows, report.bookings) == (1, 1)
        assert not orm.LayoutSeat.objects.exists()
        assert not orm.Showroom.objects.exists()

    def test_withdraw_movie_deletes_movie_row(self, django_core, movie_row, db_show):
        """Withdrawing a movie removes its shows, bookings and row."""
        django_core.ledger.book_seat(db_show.id, "A2")

        report = django_core.scheduler.withdraw_movie(str(movie_row.id))

        assert (report.shows, report.bookings) == (1, 1)
        assert not orm.Movie.objects.exists()
        assert not orm.Booking.objects.exists()

    def test_delete_unknown_show(self, django_store):
        """Given show does not exist, reports nothing deleted."""
        report = django_store.delete_show(ShowId(uuid4()))
        assert (report.shows, report.bookings) == (0, 0)


class TestStorageFailures:
    """Tests for database error translation."""

    def test_operational_error_becomes_unavailable(self):
        """OperationalError is raised as StoreUnavailableError naming the operation."""

        @translate_db_errors
        def broken():
            raise OperationalError("connection refused")

        with pytest.raises(StoreUnavailableError) as exc_info:
            broken()
        assert exc_info.value.operation == "broken"

    @pytest.mark.django_db
    def test_store_read_failure(self, django_store, monkeypatch):
        """Given the database drops, a store read raises StoreUnavailableError."""

        def refuse(*args, **kwargs):
            raise OperationalError("server closed the connection")

        monkeypatch.setattr(orm.Show.objects, "filter", refuse)
        with pytest.raises(StoreUnavailableError):
            django_store.get_show(ShowId(uuid4()))


class TestDefaultCore:
    """Tests for default_core."""

    @pytest.mark.django_db
    def test_default_core_uses_django_store(self, settings):
        """Services read from the configured database."""
        settings.CINEMA_CURRENCY_PLACES = 2
        core = default_core()
        assert core.layouts.list_showrooms() == []

    def test_currency_finer_than_price_columns_rejected(self, settings):
        """Given more currency places than the columns hold, raises ImproperlyConfigured."""
        settings.CINEMA_CURRENCY_PLACES = orm.PRICE_PLACES + 1
        with pytest.raises(ImproperlyConfigured):
            default_core()
