"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from cinema.core import CinemaCore, build_core
from cinema.domain import Movie, MovieId, SeatType, Show, Showroom
from cinema.stores.memory_store import InMemoryCinemaStore, InMemoryMovieCatalog


@pytest.fixture
def at():
    """Build an aware UTC timestamp on a fixed day."""

    def _at(hour: int, minute: int = 0, day: int = 2) -> datetime:
        return datetime(2026, 11, day, hour, minute, tzinfo=timezone.utc)

    return _at


@pytest.fixture
def standard() -> SeatType:
    return SeatType("standard", Decimal("0"))


@pytest.fixture
def vip() -> SeatType:
    return SeatType("vip", Decimal("50"))


@pytest.fixture
def movie() -> Movie:
    return Movie(id=MovieId(uuid4()), title="Arrival", description="First contact")


@pytest.fixture
def store() -> InMemoryCinemaStore:
    return InMemoryCinemaStore()


@pytest.fixture
def catalog(movie: Movie) -> InMemoryMovieCatalog:
    return InMemoryMovieCatalog([movie])


@pytest.fixture
def core(store, catalog) -> CinemaCore:
    return build_core(store, catalog)


@pytest.fixture
def room(core: CinemaCore, standard, vip) -> Showroom:
    """Room A: A1 standard, A2 vip."""
    showroom = core.layouts.create_showroom("Room A", 2)
    core.layouts.define_layout(showroom.id, [("A1", standard), ("A2", vip)])
    return showroom


@pytest.fixture
def show(core: CinemaCore, room: Showroom, movie: Movie, at) -> Show:
    """Base price 100, 14:00-16:00 in Room A."""
    return core.scheduler.schedule_show(movie.id, room.id, at(14), at(16), Decimal("100"))
