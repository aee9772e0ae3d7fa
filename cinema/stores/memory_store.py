"""In-process implementation of the CinemaStore and MovieCatalog.

Writers serialize on a lock per showroom (layouts, shows) and a lock per show
(bookings). Cascading deletes always take a room lock before a show lock.
Readers take no locks and work on snapshots of the dictionaries.
Locks of deleted showrooms and shows are dropped; ids are never reused.
"""

import threading
from collections.abc import Hashable, Iterable

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
from cinema.stores.interfaces import CinemaStore, MovieCatalog


class InMemoryMovieCatalog(MovieCatalog):
    """Catalog holding movies in a dictionary."""

    def __init__(self, movies: Iterable[Movie] = ()) -> None:
        self._movies: dict[MovieId, Movie] = {movie.id: movie for movie in movies}

    def add(self, movie: Movie) -> None:
        self._movies[movie.id] = movie

    def movie_exists(self, movie_id: MovieId) -> bool:
        return movie_id in self._movies

    def get_movie(self, movie_id: MovieId) -> Movie | None:
        return self._movies.get(movie_id)


class _KeyedLocks:
    """Lazily created lock per key."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def __call__(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def discard(self, key: Hashable) -> None:
        """Forget the lock for a key whose record is gone."""
        with self._guard:
            self._locks.pop(key, None)

    def __len__(self) -> int:
        return len(self._locks)


class InMemoryCinemaStore(CinemaStore):
    """Thread-safe dictionary-backed store."""

    def __init__(self) -> None:
        self._showrooms: dict[ShowroomId, Showroom] = {}
        self._layouts: dict[ShowroomId, SeatLayout] = {}
        self._shows: dict[ShowId, Show] = {}
        self._bookings: dict[BookingId, Booking] = {}
        # show -> seat label -> booking
        self._seat_index: dict[ShowId, dict[str, BookingId]] = {}
        self._room_lock = _KeyedLocks()
        self._show_lock = _KeyedLocks()

    def add_showroom(self, showroom: Showroom) -> None:
        with self._room_lock(showroom.id):
            self._showrooms[showroom.id] = showroom

    def get_showroom(self, showroom_id: ShowroomId) -> Showroom | None:
        return self._showrooms.get(showroom_id)

    def list_showrooms(self) -> list[Showroom]:
        return sorted(self._showrooms.values(), key=lambda room: room.name)

    def add_layout_if_absent(self, layout: SeatLayout) -> bool:
        with self._room_lock(layout.showroom_id):
            if layout.showroom_id not in self._showrooms:
                self._room_lock.discard(layout.showroom_id)
                return False
            if layout.showroom_id in self._layouts:
                return False
            self._layouts[layout.showroom_id] = layout
        return True

    def get_layout(self, showroom_id: ShowroomId) -> SeatLayout | None:
        return self._layouts.get(showroom_id)

    def add_show_if_free(self, show: Show) -> bool:
        with self._room_lock(show.showroom_id):
            if show.showroom_id not in self._showrooms:
                self._room_lock.discard(show.showroom_id)
                return False
            for existing in self.list_shows(show.showroom_id):
                if existing.overlaps(show.starts_at, show.ends_at):
                    return False
            self._shows[show.id] = show
        return True

    def get_show(self, show_id: ShowId) -> Show | None:
        return self._shows.get(show_id)

    def list_shows(self, showroom_id: ShowroomId | None = None) -> list[Show]:
        shows = list(self._shows.values())
        if showroom_id is not None:
            shows = [show for show in shows if show.showroom_id == showroom_id]
        return sorted(shows, key=lambda show: show.starts_at)

    def add_booking_if_absent(self, booking: Booking) -> bool:
        with self._show_lock(booking.show_id):
            if booking.show_id not in self._shows:
                self._show_lock.discard(booking.show_id)
                return False
            seats = self._seat_index.setdefault(booking.show_id, {})
            if booking.seat_label in seats:
                return False
            self._bookings[booking.id] = booking
            seats[booking.seat_label] = booking.id
        return True

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        return self._bookings.get(booking_id)

    def remove_booking(self, booking_id: BookingId) -> bool:
        booking = self._bookings.get(booking_id)
        if booking is None:
            return False
        with self._show_lock(booking.show_id):
            if self._bookings.pop(booking_id, None) is None:
                if booking.show_id not in self._shows:
                    self._show_lock.discard(booking.show_id)
                return False
            self._seat_index.get(booking.show_id, {}).pop(booking.seat_label, None)
        return True

    def list_bookings(self, show_id: ShowId) -> list[Booking]:
        booking_ids = list(self._seat_index.get(show_id, {}).values())
        bookings = [self._bookings.get(booking_id) for booking_id in booking_ids]
        return sorted(
            (booking for booking in bookings if booking is not None),
            key=lambda booking: booking.created_at,
        )

    def booked_labels(self, show_id: ShowId) -> set[str]:
        return set(self._seat_index.get(show_id, {}))

    def count_bookings(self, show_id: ShowId) -> int:
        return len(self._seat_index.get(show_id, {}))

    def delete_show(self, show_id: ShowId) -> DeletionReport:
        show = self._shows.get(show_id)
        if show is None:
            return DeletionReport()
        with self._room_lock(show.showroom_id):
            return self._purge_shows([show])

    def delete_showroom(self, showroom_id: ShowroomId) -> DeletionReport:
        with self._room_lock(showroom_id):
            if showroom_id not in self._showrooms:
                return DeletionReport()
            report = self._purge_shows(self.list_shows(showroom_id))
            self._layouts.pop(showroom_id, None)
            del self._showrooms[showroom_id]
            self._room_lock.discard(showroom_id)
        return report

    def delete_movie(self, movie_id: MovieId) -> DeletionReport:
        shows = 0
        bookings = 0
        by_room: dict[ShowroomId, list[Show]] = {}
        for show in self.list_shows():
            if show.movie_id == movie_id:
                by_room.setdefault(show.showroom_id, []).append(show)
        for showroom_id, room_shows in by_room.items():
            with self._room_lock(showroom_id):
                report = self._purge_shows(room_shows)
            shows += report.shows
            bookings += report.bookings
        return DeletionReport(shows=shows, bookings=bookings)

    def _purge_shows(self, shows: list[Show]) -> DeletionReport:
        # caller holds the showroom lock
        removed_shows = 0
        removed_bookings = 0
        for show in shows:
            with self._show_lock(show.id):
                for booking_id in self._seat_index.pop(show.id, {}).values():
                    del self._bookings[booking_id]
                    removed_bookings += 1
                if self._shows.pop(show.id, None) is not None:
                    removed_shows += 1
                self._show_lock.discard(show.id)
        return DeletionReport(shows=removed_shows, bookings=removed_bookings)
