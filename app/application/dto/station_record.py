from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.station import AvailabilityStatus, Coordinates, Station


class CoordinatesDTO(BaseModel):
    lat: float
    lng: float


class StationRecordDTO(BaseModel):
    """Station record as published by the directory service (camelCase keys accepted)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    address: str
    distance: float = Field(ge=0)
    status: AvailabilityStatus
    charger_types: list[str] = Field(alias="chargerTypes", min_length=1)
    amenities: list[str] = Field(default_factory=list)
    available_chargers: int = Field(alias="availableChargers", ge=0)
    total_chargers: int = Field(alias="totalChargers", ge=0)
    price_per_unit: float = Field(alias="pricePerKwh", gt=0)
    coordinates: CoordinatesDTO

    def to_entity(self) -> Station:
        return Station(
            id=str(self.id),
            name=self.name,
            address=self.address,
            distance_km=self.distance,
            status=self.status,
            charger_types=frozenset(self.charger_types),
            amenities=frozenset(self.amenities),
            available_chargers=self.available_chargers,
            total_chargers=self.total_chargers,
            price_per_unit=self.price_per_unit,
            coordinates=Coordinates(lat=self.coordinates.lat, lng=self.coordinates.lng),
        )


def parse_station_records(payload: list[dict]) -> list[Station]:
    return [StationRecordDTO.model_validate(item).to_entity() for item in payload]
