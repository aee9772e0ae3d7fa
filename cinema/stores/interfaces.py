"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.

Writes that guard an invariant are conditional: the store accepts the write
only if its precondition still holds at commit time and reports a rejection
otherwise. Services turn rejections into domain errors; stores never raise
domain conflict errors themselves.
"""

from abc import ABC, abstractmethod

from cinema.domain import (
    Booking,
    BookingId,
    DeletionReport,
    Movie,
    MovieId,
    SeatLayout,
    Show,
    ShowId,
    Showroom,
    ShowroomId,
)


class MovieCatalog(ABC):
    """Read-only view of the movie catalog."""

    @abstractmethod
    def movie_exists(self, movie_id: MovieId) -> bool:
        """Check if a movie exists."""
        ...

    @abstractmethod
    def get_movie(self, movie_id: MovieId) -> Movie | None:
        """Return a movie by ID, or None if not found."""
        ...


class CinemaStore(ABC):
    """Interface for showroom, layout, show and booking persistence."""

    @abstractmethod
    def add_showroom(self, showroom: Showroom) -> None:
        """Persist a new showroom."""
        ...

    @abstractmethod
    def get_showroom(self, showroom_id: ShowroomId) -> Showroom | None:
        """Return a showroom by ID, or None if not found."""
        ...

    @abstractmethod
    def list_showrooms(self) -> list[Showroom]:
        """Return all showrooms ordered by name."""
        ...

    @abstractmethod
    def add_layout_if_absent(self, layout: SeatLayout) -> bool:
        """Persist a layout unless the showroom already has one.

        Returns False when a layout already exists or the showroom no longer
        exists.
        """
        ...

    @abstractmethod
    def get_layout(self, showroom_id: ShowroomId) -> SeatLayout | None:
        """Return the showroom's layout with seats in definition order."""
        ...

    @abstractmethod
    def add_show_if_free(self, show: Show) -> bool:
        """Persist a show unless it overlaps another show in its showroom.

        The overlap check and the insert are one atomic unit per showroom.
        Returns False when the interval is taken or the showroom no longer
        exists.
        """
        ...

    @abstractmethod
    def get_show(self, show_id: ShowId) -> Show | None:
        """Return a show by ID, or None if not found."""
        ...

    @abstractmethod
    def list_shows(self, showroom_id: ShowroomId | None = None) -> list[Show]:
        """Return shows ordered by starts_at ascending, optionally for one room."""
        ...

    @abstractmethod
    def add_booking_if_absent(self, booking: Booking) -> bool:
        """Persist a booking unless its (show, seat label) is already taken.

        Returns False when the seat is already booked for the show, or the
        show no longer exists.
        """
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def remove_booking(self, booking_id: BookingId) -> bool:
        """Delete a booking. Returns False if it did not exist."""
        ...

    @abstractmethod
    def list_bookings(self, show_id: ShowId) -> list[Booking]:
        """Return a show's bookings ordered by created_at ascending."""
        ...

    @abstractmethod
    def booked_labels(self, show_id: ShowId) -> set[str]:
        """Return the seat labels already booked for a show."""
        ...

    @abstractmethod
    def count_bookings(self, show_id: ShowId) -> int:
        """Return how many seats are booked for a show."""
        ...

    @abstractmethod
    def delete_show(self, show_id: ShowId) -> DeletionReport:
        """Delete a show's bookings, then the show."""
        ...

    @abstractmethod
    def delete_showroom(self, showroom_id: ShowroomId) -> DeletionReport:
        """Delete bookings, shows, layout and finally the showroom."""
        ...

    @abstractmethod
    def delete_movie(self, movie_id: MovieId) -> DeletionReport:
        """Delete bookings and shows for a movie.

        Stores that also hold the movie reference record delete it last.
        """
        ...
