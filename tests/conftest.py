from __future__ import annotations

import pytest

from app.domain.entities.station import AvailabilityStatus, Coordinates, Station


@pytest.fixture
def make_station():
    def _make(
        id: str = "A",
        name: str | None = None,
        address: str = "1 Ring Road, New Delhi",
        distance_km: float = 1.0,
        status: AvailabilityStatus = AvailabilityStatus.available,
        charger_types: tuple[str, ...] = ("CCS2",),
        amenities: tuple[str, ...] = (),
        available_chargers: int = 2,
        total_chargers: int = 4,
        price_per_unit: float = 10.8,
    ) -> Station:
        return Station(
            id=id,
            name=name or f"Station {id}",
            address=address,
            distance_km=distance_km,
            status=status,
            charger_types=frozenset(charger_types),
            amenities=frozenset(amenities),
            available_chargers=available_chargers,
            total_chargers=total_chargers,
            price_per_unit=price_per_unit,
            coordinates=Coordinates(lat=28.6, lng=77.2),
        )

    return _make
