from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AvailabilityStatus(str, Enum):
    available = "available"
    busy = "busy"
    offline = "offline"


STATUS_LABELS = {
    AvailabilityStatus.available: "Available Now",
    AvailabilityStatus.busy: "Limited Spots",
    AvailabilityStatus.offline: "Offline",
}


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class Station:
    id: str
    name: str
    address: str
    distance_km: float  # precomputed upstream, never recalculated here
    status: AvailabilityStatus
    charger_types: frozenset[str]
    amenities: frozenset[str]
    available_chargers: int
    total_chargers: int
    price_per_unit: float
    coordinates: Coordinates

    def __post_init__(self) -> None:
        if not self.charger_types:
            raise ValueError(f"Station {self.id} must support at least one charger type")
        if self.distance_km < 0:
            raise ValueError(f"Station {self.id} has negative distance")
        if not 0 <= self.available_chargers <= self.total_chargers:
            raise ValueError(
                f"Station {self.id} has {self.available_chargers} available of {self.total_chargers} chargers"
            )
        if self.price_per_unit <= 0:
            raise ValueError(f"Station {self.id} must have a positive price")

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, "Unknown")

    @property
    def is_bookable(self) -> bool:
        return self.status != AvailabilityStatus.offline and self.available_chargers > 0
