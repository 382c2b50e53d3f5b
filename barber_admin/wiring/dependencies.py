from functools import lru_cache
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from barber_admin.core.config import settings
from barber_admin.application.ports.agenda_store import AgendaStorePort
from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.application.use_cases.absences import AbsencesUseCase
from barber_admin.application.use_cases.agenda import AgendaUseCase
from barber_admin.application.use_cases.customers import CustomersUseCase
from barber_admin.application.use_cases.dashboard import DashboardUseCase
from barber_admin.application.use_cases.inventory import InventoryUseCase
from barber_admin.infrastructure.backend.http_backend import HttpBarbershopBackend
from barber_admin.infrastructure.backend.mock_backend import MockBarbershopBackend
from barber_admin.infrastructure.store.memory_store import MemoryAgendaStore


@lru_cache
def get_backend() -> BarbershopBackendPort:
    logger = logging.getLogger(__name__)
    if settings.BACKEND_PROVIDER.lower() == "mock":
        logger.info("Using MockBarbershopBackend (BACKEND_PROVIDER=mock)")
        return MockBarbershopBackend()

    if not settings.BACKEND_BASE_URL:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockBarbershopBackend (BACKEND_BASE_URL missing, ENV=dev/local)")
            return MockBarbershopBackend()
        raise ValueError("BACKEND_BASE_URL is required outside dev/local.")

    logger.info("Using HttpBarbershopBackend base_url=%s", settings.BACKEND_BASE_URL)
    return HttpBarbershopBackend()


@lru_cache
def get_agenda_store() -> AgendaStorePort:
    return MemoryAgendaStore()


def _day_of_week_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.DAY_OF_WEEK_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        logging.getLogger(__name__).warning(
            "Unknown DAY_OF_WEEK_TIMEZONE, using UTC", extra={"reason": settings.DAY_OF_WEEK_TIMEZONE}
        )
        return ZoneInfo("UTC")


@lru_cache
def get_agenda_use_case() -> AgendaUseCase:
    # Cached so the in-flight command registry is shared between requests.
    return AgendaUseCase(
        backend=get_backend(),
        store=get_agenda_store(),
        day_of_week_timezone=_day_of_week_timezone(),
        default_duration_minutes=settings.DEFAULT_SERVICE_DURATION_MINUTES,
        fallback_color=settings.FALLBACK_STAFF_COLOR,
    )


def get_dashboard_use_case() -> DashboardUseCase:
    return DashboardUseCase(backend=get_backend())


def get_customers_use_case() -> CustomersUseCase:
    return CustomersUseCase(backend=get_backend())


def get_inventory_use_case() -> InventoryUseCase:
    return InventoryUseCase(backend=get_backend())


def get_absences_use_case() -> AbsencesUseCase:
    return AbsencesUseCase(backend=get_backend())
