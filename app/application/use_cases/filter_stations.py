from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from app.application.exceptions import StationNotFound
from app.application.ports.station_directory import StationDirectoryPort
from app.core.config import settings
from app.domain.entities.filter_criteria import ANY, FilterCriteria
from app.domain.entities.station import AvailabilityStatus, Station

CHARGER_TYPES: tuple[str, ...] = ("CCS2", "CHAdeMO", "Type 2 AC", "Bharat AC001", "Bharat DC001", "15A Socket")

AVAILABILITY_OPTIONS: tuple[tuple[str, str], ...] = (
    (ANY, "All Stations"),
    (AvailabilityStatus.available.value, "Available Now"),
    (AvailabilityStatus.busy.value, "Limited Spots"),
)

AMENITY_OPTIONS: tuple[str, ...] = ("Restaurant", "WiFi", "Shopping", "Parking", "Coffee", "ATM")


def default_criteria() -> FilterCriteria:
    return FilterCriteria(max_distance_km=settings.DEFAULT_MAX_DISTANCE_KM)


def active_filter_count(criteria: FilterCriteria) -> int:
    """Number of criteria that differ from the defaults (drives the filter badge)."""
    defaults = default_criteria()
    return sum(
        (
            criteria.charger_type != ANY,
            criteria.availability != ANY,
            bool(criteria.amenities),
            criteria.max_distance_km != defaults.max_distance_km,
        )
    )


def matches(station: Station, query: str, criteria: FilterCriteria) -> bool:
    needle = query.lower()
    if needle and needle not in station.name.lower() and needle not in station.address.lower():
        return False

    if criteria.charger_type != ANY and criteria.charger_type not in station.charger_types:
        return False

    if criteria.availability != ANY and station.status.value != criteria.availability:
        return False

    if station.distance_km > criteria.max_distance_km:
        return False

    return criteria.amenities <= station.amenities


def filter_stations(catalog: Sequence[Station], query: str, criteria: FilterCriteria) -> list[Station]:
    """Stations satisfying every criterion, in catalog order. Neither input is mutated."""
    return [station for station in catalog if matches(station, query, criteria)]


@dataclass(frozen=True)
class FilterResult:
    stations: list[Station]
    total: int
    active_filters: int

    @property
    def empty(self) -> bool:
        return not self.stations


class FilterStationsUseCase:
    def __init__(self, directory: StationDirectoryPort) -> None:
        self._directory = directory
        self._logger = logging.getLogger(__name__)

    def execute(self, query: str, criteria: FilterCriteria) -> FilterResult:
        catalog = self._directory.list_stations()
        stations = filter_stations(catalog, query, criteria)
        self._logger.debug(
            "Stations filtered",
            extra={"reason": f"{len(stations)}/{len(catalog)} matched"},
        )
        return FilterResult(
            stations=stations,
            total=len(catalog),
            active_filters=active_filter_count(criteria),
        )

    def get_station(self, station_id: str) -> Station:
        station = self._directory.get_station(station_id)
        if station is None:
            raise StationNotFound(f"Station {station_id} not found")
        return station
