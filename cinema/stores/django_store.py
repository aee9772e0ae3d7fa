"""Django ORM implementation of the CinemaStore and MovieCatalog.

Conditional writes lean on the database:

- bookings: the (show, seat_label) unique constraint; the insert runs in its
  own savepoint so a rejected insert leaves the caller's transaction usable.
- shows and layouts: the showroom row is locked with SELECT ... FOR UPDATE
  before the check, so concurrent writers for one room are serialized.
"""

import functools
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from loguru import logger

from cinema import models as orm
from cinema.domain import (
    Booking,
    BookingId,
    Capacity,
    DeletionReport,
    Money,
    Movie,
    MovieId,
    Seat,
    SeatLayout,
    SeatType,
    Show,
    ShowId,
    Showroom,
    ShowroomId,
)
from cinema.domain.errors import StoreUnavailableError
from cinema.stores.interfaces import CinemaStore, MovieCatalog

P = ParamSpec("P")
R = TypeVar("R")


def translate_db_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Surface connectivity and I/O failures as StoreUnavailableError."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.bind(operation=func.__name__).error("Database error: {}", exc)
            raise StoreUnavailableError(func.__name__) from exc

    return wrapper


def _to_movie(row: orm.Movie) -> Movie:
    return Movie(id=MovieId(row.id), title=row.title, description=row.description)


def _to_showroom(row: orm.Showroom) -> Showroom:
    return Showroom(
        id=ShowroomId(row.id),
        name=row.name,
        total_seats=Capacity(row.total_seats),
    )


def _to_show(row: orm.Show) -> Show:
    return Show(
        id=ShowId(row.id),
        movie_id=MovieId(row.movie_id),
        showroom_id=ShowroomId(row.showroom_id),
        starts_at=row.starts_at,
        ends_at=row.ends_at,
        base_price=Money(row.base_price),
        created_at=row.created_at,
    )


def _to_booking(row: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        show_id=ShowId(row.show_id),
        seat_label=row.seat_label,
        seat_type=row.seat_type,
        premium_percent=row.premium_percent,
        base_price=Money(row.base_price),
        total_price=Money(row.total_price),
        created_at=row.created_at,
    )


class DjangoMovieCatalog(MovieCatalog):
    """Catalog backed by the Movie table."""

    @translate_db_errors
    def movie_exists(self, movie_id: MovieId) -> bool:
        return orm.Movie.objects.filter(pk=movie_id.value).exists()

    @translate_db_errors
    def get_movie(self, movie_id: MovieId) -> Movie | None:
        row = orm.Movie.objects.filter(pk=movie_id.value).first()
        return _to_movie(row) if row else None


class DjangoCinemaStore(CinemaStore):
    """Relational store using Django ORM."""

    @translate_db_errors
    def add_showroom(self, showroom: Showroom) -> None:
        orm.Showroom.objects.create(
            id=showroom.id.value,
            name=showroom.name,
            total_seats=showroom.total_seats.value,
        )

    @translate_db_errors
    def get_showroom(self, showroom_id: ShowroomId) -> Showroom | None:
        row = orm.Showroom.objects.filter(pk=showroom_id.value).first()
        return _to_showroom(row) if row else None

    @translate_db_errors
    def list_showrooms(self) -> list[Showroom]:
        return [_to_showroom(row) for row in orm.Showroom.objects.order_by("name")]

    @translate_db_errors
    def add_layout_if_absent(self, layout: SeatLayout) -> bool:
        with transaction.atomic():
            room = (
                orm.Showroom.objects.select_for_update()
                .filter(pk=layout.showroom_id.value)
                .first()
            )
            if room is None or room.layout_seats.exists():
                return False
            orm.LayoutSeat.objects.bulk_create(
                orm.LayoutSeat(
                    showroom=room,
                    position=position,
                    label=seat.label,
                    seat_type=seat.seat_type.name,
                    premium_percent=seat.seat_type.premium_percent,
                )
                for position, seat in enumerate(layout.seats)
            )
        return True

    @translate_db_errors
    def get_layout(self, showroom_id: ShowroomId) -> SeatLayout | None:
        rows = orm.LayoutSeat.objects.filter(showroom_id=showroom_id.value).order_by(
            "position"
        )
        seats = tuple(
            Seat(
                label=row.label,
                seat_type=SeatType(name=row.seat_type, premium_percent=row.premium_percent),
            )
            for row in rows
        )
        if not seats:
            return None
        return SeatLayout(showroom_id=showroom_id, seats=seats)

    @translate_db_errors
    def add_show_if_free(self, show: Show) -> bool:
        with transaction.atomic():
            room = (
                orm.Showroom.objects.select_for_update()
                .filter(pk=show.showroom_id.value)
                .first()
            )
            if room is None:
                return False
            overlapping = orm.Show.objects.filter(
                showroom=room,
                starts_at__lt=show.ends_at,
                ends_at__gt=show.starts_at,
            ).exists()
            if overlapping:
                return False
            orm.Show.objects.create(
                id=show.id.value,
                movie_id=show.movie_id.value,
                showroom=room,
                starts_at=show.starts_at,
                ends_at=show.ends_at,
                base_price=show.base_price.amount,
                created_at=show.created_at,
            )
        return True

    @translate_db_errors
    def get_show(self, show_id: ShowId) -> Show | None:
        row = orm.Show.objects.filter(pk=show_id.value).first()
        return _to_show(row) if row else None

    @translate_db_errors
    def list_shows(self, showroom_id: ShowroomId | None = None) -> list[Show]:
        queryset = orm.Show.objects.order_by("starts_at")
        if showroom_id is not None:
            queryset = queryset.filter(showroom_id=showroom_id.value)
        return [_to_show(row) for row in queryset]

    @translate_db_errors
    def add_booking_if_absent(self, booking: Booking) -> bool:
        try:
            with transaction.atomic():
                orm.Booking.objects.create(
                    id=booking.id.value,
                    show_id=booking.show_id.value,
                    seat_label=booking.seat_label,
                    seat_type=booking.seat_type,
                    premium_percent=booking.premium_percent,
                    base_price=booking.base_price.amount,
                    total_price=booking.total_price.amount,
                    created_at=booking.created_at,
                )
        except IntegrityError:
            logger.bind(
                show_id=str(booking.show_id), seat_label=booking.seat_label
            ).debug("Booking insert rejected by constraint")
            return False
        return True

    @translate_db_errors
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = orm.Booking.objects.filter(pk=booking_id.value).first()
        return _to_booking(row) if row else None

    @translate_db_errors
    def remove_booking(self, booking_id: BookingId) -> bool:
        deleted, _ = orm.Booking.objects.filter(pk=booking_id.value).delete()
        return deleted > 0

    @translate_db_errors
    def list_bookings(self, show_id: ShowId) -> list[Booking]:
        rows = orm.Booking.objects.filter(show_id=show_id.value).order_by("created_at")
        return [_to_booking(row) for row in rows]

    @translate_db_errors
    def booked_labels(self, show_id: ShowId) -> set[str]:
        return set(
            orm.Booking.objects.filter(show_id=show_id.value).values_list(
                "seat_label", flat=True
            )
        )

    @translate_db_errors
    def count_bookings(self, show_id: ShowId) -> int:
        return orm.Booking.objects.filter(show_id=show_id.value).count()

    @translate_db_errors
    def delete_show(self, show_id: ShowId) -> DeletionReport:
        with transaction.atomic():
            bookings, _ = orm.Booking.objects.filter(show_id=show_id.value).delete()
            shows, _ = orm.Show.objects.filter(pk=show_id.value).delete()
        return DeletionReport(shows=shows, bookings=bookings)

    @translate_db_errors
    def delete_showroom(self, showroom_id: ShowroomId) -> DeletionReport:
        with transaction.atomic():
            room = (
                orm.Showroom.objects.select_for_update()
                .filter(pk=showroom_id.value)
                .first()
            )
            if room is None:
                return DeletionReport()
            bookings, _ = orm.Booking.objects.filter(show__showroom=room).delete()
            shows, _ = orm.Show.objects.filter(showroom=room).delete()
            orm.LayoutSeat.objects.filter(showroom=room).delete()
            room.delete()
        return DeletionReport(shows=shows, bookings=bookings)

    @translate_db_errors
    def delete_movie(self, movie_id: MovieId) -> DeletionReport:
        with transaction.atomic():
            bookings, _ = orm.Booking.objects.filter(
                show__movie_id=movie_id.value
            ).delete()
            shows, _ = orm.Show.objects.filter(movie_id=movie_id.value).delete()
            orm.Movie.objects.filter(pk=movie_id.value).delete()
        return DeletionReport(shows=shows, bookings=bookings)
