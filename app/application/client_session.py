from __future__ import annotations

from dataclasses import dataclass, field

from app.application.use_cases.booking import BookingWorkflow
from app.application.use_cases.filter_stations import default_criteria
from app.application.use_cases.selection import SelectionUseCase
from app.domain.entities.filter_criteria import FilterCriteria


@dataclass
class ClientSession:
    """Everything one user is doing: search text, filters, selection and an optional booking."""

    session_id: str
    selection: SelectionUseCase
    booking: BookingWorkflow
    query: str = ""
    criteria: FilterCriteria = field(default_factory=default_criteria)
    last_seen_at: float | None = None

    def reset_criteria(self) -> None:
        self.query = ""
        self.criteria = default_criteria()

    def close(self) -> None:
        self.booking.close()
