"""Read-side queries over shows and bookings.

Nothing here writes or locks. Every call recomputes from the store's current
state, so results reflect the latest committed bookings.
"""

from collections.abc import Iterator
from datetime import datetime

from cinema.domain import SeatAvailability, SeatLayout, Show, ShowId, ShowroomId
from cinema.domain.errors import LayoutNotFoundError, ShowNotFoundError
from cinema.services.ids import parse_id, require_aware
from cinema.services.pricing import seat_price
from cinema.stores.interfaces import CinemaStore


class AvailabilityService:
    """Service answering which shows and seats are still open."""

    def __init__(self, store: CinemaStore, currency_places: int = 2) -> None:
        self._store = store
        self._places = currency_places

    def list_open_shows(self, as_of: datetime) -> Iterator[Show]:
        """Return a generator of shows that have not ended by `as_of` and are not sold out.

        Shows come in start order. Each call starts over from current state.

        Raises:
            InvalidIntervalError: If as_of is not a timezone-aware datetime.
        """
        return self._open_shows(require_aware(as_of, "as_of"))

    def _open_shows(self, as_of: datetime) -> Iterator[Show]:
        layouts: dict[ShowroomId, SeatLayout | None] = {}
        for show in self._store.list_shows():
            if show.ends_at <= as_of:
                continue
            if show.showroom_id not in layouts:
                layouts[show.showroom_id] = self._store.get_layout(show.showroom_id)
            layout = layouts[show.showroom_id]
            if layout is None:
                continue
            if self._store.count_bookings(show.id) < layout.capacity:
                yield show

    def remaining_seats(self, show_id: ShowId | str) -> list[str]:
        """Return unbooked seat labels in layout order.

        Raises:
            InvalidIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
        """
        show, layout = self._show_and_layout(show_id)
        booked = self._store.booked_labels(show.id)
        return [label for label in layout.labels() if label not in booked]

    def is_sold_out(self, show_id: ShowId | str) -> bool:
        show, layout = self._show_and_layout(show_id)
        return self._store.count_bookings(show.id) >= layout.capacity

    def seat_map(self, show_id: ShowId | str) -> list[SeatAvailability]:
        """Return every seat of the show with its price and booked flag."""
        show, layout = self._show_and_layout(show_id)
        booked = self._store.booked_labels(show.id)
        return [
            SeatAvailability(
                label=seat.label,
                seat_type=seat.seat_type,
                price=seat_price(show, seat, self._places),
                booked=seat.label in booked,
            )
            for seat in layout.seats
        ]

    def _show_and_layout(self, show_id: ShowId | str) -> tuple[Show, SeatLayout]:
        sid = parse_id(ShowId, show_id, "show")
        show = self._store.get_show(sid)
        if show is None:
            raise ShowNotFoundError(str(sid))
        layout = self._store.get_layout(show.showroom_id)
        if layout is None:
            raise LayoutNotFoundError(str(show.showroom_id))
        return show, layout
