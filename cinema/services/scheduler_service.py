"""Show scheduling service.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from datetime import datetime
from decimal import Decimal
from typing import NoReturn
from uuid import uuid4

from loguru import logger

from cinema.domain import DeletionReport, Money, MovieId, Show, ShowId, ShowroomId
from cinema.domain.errors import (
    InvalidIntervalError,
    InvalidPriceError,
    LayoutNotFoundError,
    MovieNotFoundError,
    ShowNotFoundError,
    ShowOverlapError,
    ShowroomNotFoundError,
)
from cinema.services.ids import Clock, IdGenerator, parse_id, require_aware, utc_now
from cinema.services.pricing import to_currency, to_decimal
from cinema.stores.interfaces import CinemaStore, MovieCatalog


class ShowSchedulerService:
    """Service for placing shows on a showroom's timeline."""

    def __init__(
        self,
        store: CinemaStore,
        catalog: MovieCatalog,
        id_generator: IdGenerator = uuid4,
        clock: Clock = utc_now,
        currency_places: int = 2,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._new_id = id_generator
        self._now = clock
        self._places = currency_places

    def schedule_show(
        self,
        movie_id: MovieId | str,
        showroom_id: ShowroomId | str,
        starts_at: datetime,
        ends_at: datetime,
        base_price: Decimal | int | str,
    ) -> Show:
        """Schedule a movie in a showroom over [starts_at, ends_at).

        A show may start exactly when the previous one in the room ends. The base
        price is rounded half-even to the currency unit before it is checked.

        Raises:
            InvalidIntervalError: If ends_at <= starts_at or a timestamp is naive.
            InvalidPriceError: If base_price is not positive once rounded to the
                currency unit.
            InvalidIdError: If an ID is not a valid UUID.
            MovieNotFoundError: If the catalog does not know the movie.
            ShowroomNotFoundError: If the showroom does not exist.
            LayoutNotFoundError: If the showroom has no seat layout yet.
            ShowOverlapError: If another show occupies the room in that interval.
        """
        _validate_interval(starts_at, ends_at)
        price = to_currency(to_decimal(base_price), self._places)
        if price <= 0:
            raise InvalidPriceError("Base price must be positive")

        movie = parse_id(MovieId, movie_id, "movie")
        room = parse_id(ShowroomId, showroom_id, "showroom")
        if not self._catalog.movie_exists(movie):
            raise MovieNotFoundError(str(movie))
        if self._store.get_showroom(room) is None:
            raise ShowroomNotFoundError(str(room))
        if self._store.get_layout(room) is None:
            raise LayoutNotFoundError(str(room))

        show = Show(
            id=ShowId(self._new_id()),
            movie_id=movie,
            showroom_id=room,
            starts_at=starts_at,
            ends_at=ends_at,
            base_price=Money(price),
            created_at=self._now(),
        )
        if not self._store.add_show_if_free(show):
            self._raise_rejection(show)

        logger.bind(
            show_id=str(show.id),
            showroom_id=str(room),
            starts_at=starts_at.isoformat(),
            ends_at=ends_at.isoformat(),
        ).info("Show scheduled")
        return show

    def _raise_rejection(self, show: Show) -> NoReturn:
        if self._store.get_showroom(show.showroom_id) is None:
            raise ShowroomNotFoundError(str(show.showroom_id))
        conflict = next(
            (
                existing
                for existing in self._store.list_shows(show.showroom_id)
                if existing.overlaps(show.starts_at, show.ends_at)
            ),
            None,
        )
        conflict_id = str(conflict.id) if conflict else None
        logger.bind(
            showroom_id=str(show.showroom_id), conflicting_show_id=conflict_id
        ).warning("Show rejected: showroom occupied")
        raise ShowOverlapError(conflict_id)

    def get_show(self, show_id: ShowId | str) -> Show:
        """Return a show by ID.

        Raises:
            InvalidIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
        """
        sid = parse_id(ShowId, show_id, "show")
        show = self._store.get_show(sid)
        if show is None:
            raise ShowNotFoundError(str(sid))
        return show

    def list_shows(self, showroom_id: ShowroomId | str | None = None) -> list[Show]:
        """Return shows ordered by start time, optionally for one showroom."""
        if showroom_id is None:
            return self._store.list_shows()
        return self._store.list_shows(parse_id(ShowroomId, showroom_id, "showroom"))

    def cancel_show(self, show_id: ShowId | str) -> DeletionReport:
        """Remove a show and free all of its bookings."""
        show = self.get_show(show_id)
        report = self._store.delete_show(show.id)
        logger.bind(show_id=str(show.id), bookings=report.bookings).info("Show cancelled")
        return report

    def withdraw_movie(self, movie_id: MovieId | str) -> DeletionReport:
        """Remove every show of a movie together with their bookings.

        Raises:
            MovieNotFoundError: If the catalog does not know the movie.
        """
        movie = parse_id(MovieId, movie_id, "movie")
        if not self._catalog.movie_exists(movie):
            raise MovieNotFoundError(str(movie))
        report = self._store.delete_movie(movie)
        logger.bind(
            movie_id=str(movie), shows=report.shows, bookings=report.bookings
        ).info("Movie withdrawn")
        return report


def _validate_interval(starts_at: datetime, ends_at: datetime) -> None:
    require_aware(starts_at, "starts_at")
    require_aware(ends_at, "ends_at")
    if ends_at <= starts_at:
        raise InvalidIntervalError("Show must end after it starts")
