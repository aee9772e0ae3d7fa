"""Assembles the cinema services around one store and catalog."""

from dataclasses import dataclass
from uuid import uuid4

from cinema.services.availability_service import AvailabilityService
from cinema.services.booking_service import BookingLedgerService
from cinema.services.ids import Clock, IdGenerator, utc_now
from cinema.services.layout_service import SeatLayoutService
from cinema.services.scheduler_service import ShowSchedulerService
from cinema.stores.interfaces import CinemaStore, MovieCatalog


@dataclass(frozen=True)
class CinemaCore:
    layouts: SeatLayoutService
    scheduler: ShowSchedulerService
    ledger: BookingLedgerService
    availability: AvailabilityService


def build_core(
    store: CinemaStore,
    catalog: MovieCatalog,
    id_generator: IdGenerator = uuid4,
    clock: Clock = utc_now,
    currency_places: int = 2,
) -> CinemaCore:
    return CinemaCore(
        layouts=SeatLayoutService(store, id_generator),
        scheduler=ShowSchedulerService(store, catalog, id_generator, clock, currency_places),
        ledger=BookingLedgerService(store, id_generator, clock, currency_places),
        availability=AvailabilityService(store, currency_places),
    )


def default_core() -> CinemaCore:
    """Services backed by the Django database configured in settings."""
    from django.conf import settings
    from django.core.exceptions import ImproperlyConfigured

    from cinema.models import PRICE_PLACES
    from cinema.stores.django_store import DjangoCinemaStore, DjangoMovieCatalog

    if settings.CINEMA_CURRENCY_PLACES > PRICE_PLACES:
        raise ImproperlyConfigured(
            f"CINEMA_CURRENCY_PLACES cannot exceed {PRICE_PLACES}, the scale of the price columns"
        )
    return build_core(
        DjangoCinemaStore(),
        DjangoMovieCatalog(),
        currency_places=settings.CINEMA_CURRENCY_PLACES,
    )
