from __future__ import annotations

from typing import Iterable

from app.application.dto.station_record import parse_station_records
from app.application.ports.station_directory import StationDirectoryPort
from app.domain.entities.station import Station
from app.infrastructure.directory.station_catalog_data import STATION_RECORDS


class StaticStationDirectory(StationDirectoryPort):
    def __init__(self, stations: Iterable[Station] | None = None) -> None:
        self._stations = list(stations) if stations is not None else parse_station_records(STATION_RECORDS)

    def list_stations(self) -> list[Station]:
        return list(self._stations)

    def get_station(self, station_id: str) -> Station | None:
        return next((s for s in self._stations if s.id == station_id), None)

    def replace_catalog(self, stations: Iterable[Station]) -> None:
        """Swap the whole catalog; records themselves are never edited in place."""
        self._stations = list(stations)
