from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from app.application.dto.station_record import parse_station_records
from app.application.exceptions import StationDirectoryError
from app.application.ports.station_directory import StationDirectoryPort
from app.core.config import settings
from app.domain.entities.station import Station


class HttpStationDirectory(StationDirectoryPort):
    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None) -> None:
        self._base_url = (base_url or settings.STATION_DIRECTORY_URL or "").rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("STATION_DIRECTORY_URL is required for the HTTP station directory")

    def list_stations(self) -> list[Station]:
        try:
            response = self._client.get(f"{self._base_url}/stations")
            response.raise_for_status()
            data = response.json()
            records = data.get("stations", []) if isinstance(data, dict) else data
            return parse_station_records(records)
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            self._logger.error("Error fetching station catalog", extra={"error": str(e)})
            raise StationDirectoryError(f"Station directory unavailable: {e}") from e

    def get_station(self, station_id: str) -> Station | None:
        try:
            response = self._client.get(f"{self._base_url}/stations/{station_id}")
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return parse_station_records([response.json()])[0]
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            self._logger.error("Error fetching station", extra={"station_id": station_id, "error": str(e)})
            raise StationDirectoryError(f"Station directory unavailable: {e}") from e
