"""Showroom and seat layout service.

A showroom's layout is defined exactly once and then shared by every show
scheduled in that room; there is no per-show seat configuration.
"""

from collections.abc import Iterable
from decimal import Decimal
from uuid import uuid4

from loguru import logger

from cinema.domain import (
    Capacity,
    DeletionReport,
    Seat,
    SeatLayout,
    SeatType,
    Showroom,
    ShowroomId,
)
from cinema.domain.errors import (
    InvalidLayoutError,
    InvalidShowroomError,
    LayoutAlreadyDefinedError,
    LayoutNotFoundError,
    SeatNotFoundError,
    ShowroomNotFoundError,
)
from cinema.services.ids import IdGenerator, parse_id
from cinema.stores.interfaces import CinemaStore


class SeatLayoutService:
    """Service for showroom setup and seat layout lookups."""

    def __init__(self, store: CinemaStore, id_generator: IdGenerator = uuid4) -> None:
        self._store = store
        self._new_id = id_generator

    def create_showroom(self, name: str, total_seats: int) -> Showroom:
        """Register a new showroom.

        Raises:
            InvalidShowroomError: If the name is blank or total_seats is not positive.
        """
        if not name or not name.strip():
            raise InvalidShowroomError("Showroom name cannot be blank")
        if isinstance(total_seats, bool) or not isinstance(total_seats, int):
            raise InvalidShowroomError("Total seats must be an integer")
        if total_seats <= 0:
            raise InvalidShowroomError("Showroom must have at least one seat")
        showroom = Showroom(
            id=ShowroomId(self._new_id()),
            name=name.strip(),
            total_seats=Capacity(total_seats),
        )
        self._store.add_showroom(showroom)
        logger.bind(showroom_id=str(showroom.id)).info("Showroom created")
        return showroom

    def get_showroom(self, showroom_id: ShowroomId | str) -> Showroom:
        """Return a showroom by ID.

        Raises:
            InvalidIdError: If the showroom_id is not a valid UUID.
            ShowroomNotFoundError: If the showroom does not exist.
        """
        room_id = parse_id(ShowroomId, showroom_id, "showroom")
        showroom = self._store.get_showroom(room_id)
        if showroom is None:
            raise ShowroomNotFoundError(str(room_id))
        return showroom

    def list_showrooms(self) -> list[Showroom]:
        return self._store.list_showrooms()

    def define_layout(
        self,
        showroom_id: ShowroomId | str,
        seats: Iterable[tuple[str, SeatType] | Seat],
    ) -> SeatLayout:
        """Define the showroom's seat layout, once.

        Seats keep the order they are given in.

        Raises:
            InvalidIdError: If the showroom_id is not a valid UUID.
            ShowroomNotFoundError: If the showroom does not exist.
            InvalidLayoutError: If the seat list is empty, has blank or
                duplicate labels, does not match the showroom's seat count,
                or gives one seat type two different premiums.
            LayoutAlreadyDefinedError: If the showroom already has a layout.
        """
        showroom = self.get_showroom(showroom_id)
        layout = SeatLayout(
            showroom_id=showroom.id,
            seats=tuple(_to_seat(entry) for entry in seats),
        )
        _validate_layout(layout, showroom)

        if not self._store.add_layout_if_absent(layout):
            if self._store.get_showroom(showroom.id) is None:
                raise ShowroomNotFoundError(str(showroom.id))
            raise LayoutAlreadyDefinedError(str(showroom.id))
        logger.bind(showroom_id=str(showroom.id), seats=layout.capacity).info(
            "Seat layout defined"
        )
        return layout

    def get_layout(self, showroom_id: ShowroomId | str) -> SeatLayout:
        """Return the showroom's layout.

        Raises:
            ShowroomNotFoundError: If the showroom does not exist.
            LayoutNotFoundError: If no layout was defined yet.
        """
        showroom = self.get_showroom(showroom_id)
        layout = self._store.get_layout(showroom.id)
        if layout is None:
            raise LayoutNotFoundError(str(showroom.id))
        return layout

    def seats_of(self, showroom_id: ShowroomId | str) -> list[Seat]:
        return list(self.get_layout(showroom_id).seats)

    def seat_type(self, showroom_id: ShowroomId | str, label: str) -> SeatType:
        """Return the type of one seat.

        Raises:
            SeatNotFoundError: If the label is not in the layout.
        """
        seat = self.get_layout(showroom_id).find(label)
        if seat is None:
            raise SeatNotFoundError(label)
        return seat.seat_type

    def remove_showroom(self, showroom_id: ShowroomId | str) -> DeletionReport:
        """Delete a showroom with its layout, shows and their bookings.

        Raises:
            ShowroomNotFoundError: If the showroom does not exist.
        """
        showroom = self.get_showroom(showroom_id)
        report = self._store.delete_showroom(showroom.id)
        logger.bind(
            showroom_id=str(showroom.id), shows=report.shows, bookings=report.bookings
        ).info("Showroom removed")
        return report


def _to_seat(entry: tuple[str, SeatType] | Seat) -> Seat:
    if isinstance(entry, Seat):
        return entry
    try:
        label, seat_type = entry
    except (TypeError, ValueError) as exc:
        raise InvalidLayoutError("Each seat must be a (label, seat type) pair") from exc
    if not isinstance(seat_type, SeatType):
        raise InvalidLayoutError(f"Seat {label} has no seat type")
    if not isinstance(label, str):
        raise InvalidLayoutError("Seat labels must be strings")
    return Seat(label=label.strip(), seat_type=seat_type)


def _validate_layout(layout: SeatLayout, showroom: Showroom) -> None:
    if not layout.seats:
        raise InvalidLayoutError("Seat layout cannot be empty")

    labels: set[str] = set()
    premiums: dict[str, Decimal] = {}
    for seat in layout.seats:
        if not seat.label:
            raise InvalidLayoutError("Seat labels cannot be blank")
        if seat.label in labels:
            raise InvalidLayoutError(f"Duplicate seat label {seat.label}")
        labels.add(seat.label)

        known = premiums.setdefault(seat.seat_type.name, seat.seat_type.premium_percent)
        if known != seat.seat_type.premium_percent:
            raise InvalidLayoutError(
                f"Seat type {seat.seat_type.name} has conflicting premiums"
            )

    if layout.capacity != showroom.total_seats.value:
        raise InvalidLayoutError(
            f"Layout has {layout.capacity} seats but showroom has "
            f"{showroom.total_seats.value}"
        )
