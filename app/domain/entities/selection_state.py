from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.station import Station


@dataclass(frozen=True)
class SelectionState:
    selected: Station | None = None
    updated_at: float | None = None

    @property
    def selected_id(self) -> str | None:
        return self.selected.id if self.selected else None
