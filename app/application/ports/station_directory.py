from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.station import Station


class StationDirectoryPort(ABC):
    @abstractmethod
    def list_stations(self) -> list[Station]:
        """Return the full catalog in directory order."""
        raise NotImplementedError

    @abstractmethod
    def get_station(self, station_id: str) -> Station | None:
        """Return the current record for a station, or None if unknown."""
        raise NotImplementedError
