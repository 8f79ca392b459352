from functools import lru_cache
import logging

from app.core.config import settings
from app.application.client_session import ClientSession
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.scheduler import SchedulerPort
from app.application.ports.session_store import SessionStorePort
from app.application.ports.station_directory import StationDirectoryPort
from app.application.use_cases.booking import BookingWorkflow
from app.application.use_cases.filter_stations import FilterStationsUseCase
from app.application.use_cases.selection import SelectionUseCase
from app.infrastructure.directory.http_directory import HttpStationDirectory
from app.infrastructure.directory.static_directory import StaticStationDirectory
from app.infrastructure.payments.http_gateway import HttpPaymentGateway
from app.infrastructure.payments.mock_gateway import MockPaymentGateway
from app.infrastructure.scheduling.threading_scheduler import ThreadingScheduler
from app.infrastructure.store.memory_store import MemorySessionStore


_session_store: MemorySessionStore | None = None


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_station_directory() -> StationDirectoryPort:
    if not settings.STATION_DIRECTORY_URL or _is_local():
        logging.getLogger(__name__).info("Using StaticStationDirectory")
        return StaticStationDirectory()
    return HttpStationDirectory()


@lru_cache
def get_payment_gateway() -> PaymentGatewayPort:
    if not settings.PAYMENT_GATEWAY_API_KEY or _is_local():
        logging.getLogger(__name__).info("Using MockPaymentGateway")
        return MockPaymentGateway()
    return HttpPaymentGateway()


@lru_cache
def get_scheduler() -> SchedulerPort:
    return ThreadingScheduler()


def build_booking_workflow() -> BookingWorkflow:
    return BookingWorkflow(
        payment_gateway=get_payment_gateway(),
        scheduler=get_scheduler(),
        directory=get_station_directory(),
        units_per_hour=settings.ENERGY_UNITS_PER_HOUR,
        auto_close_seconds=settings.BOOKING_AUTO_CLOSE_SECONDS,
    )


def build_client_session(session_id: str) -> ClientSession:
    return ClientSession(
        session_id=session_id,
        selection=SelectionUseCase(clear_on_filter_miss=settings.SELECTION_CLEAR_ON_FILTER_MISS),
        booking=build_booking_workflow(),
    )


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore(
            session_factory=build_client_session,
            ttl_seconds=settings.SESSION_TTL_SECONDS,
        )
    return _session_store


def get_filter_use_case() -> FilterStationsUseCase:
    return FilterStationsUseCase(directory=get_station_directory())
