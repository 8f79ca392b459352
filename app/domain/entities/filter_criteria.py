from __future__ import annotations

from dataclasses import dataclass

ANY = "all"


@dataclass(frozen=True)
class FilterCriteria:
    charger_type: str = ANY  # ANY or one exact charger label
    availability: str = ANY  # ANY or one AvailabilityStatus value
    amenities: frozenset[str] = frozenset()  # station must offer all of them
    max_distance_km: float = 10.0  # inclusive

    def __post_init__(self) -> None:
        if self.max_distance_km <= 0:
            raise ValueError("max_distance_km must be positive")
