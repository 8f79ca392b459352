from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from app.domain.entities.selection_state import SelectionState
from app.domain.entities.station import Station

SelectionObserver = Callable[[Station | None], None]


def select(current: Station | None, candidate: Station) -> Station | None:
    """Toggle selection: re-selecting the current station clears it."""
    if current is not None and current.id == candidate.id:
        return None
    return candidate


class SelectionUseCase:
    """Holds the currently selected station and notifies observers on change."""

    def __init__(self, clear_on_filter_miss: bool = False) -> None:
        self._state = SelectionState()
        self._observers: list[SelectionObserver] = []
        self._clear_on_filter_miss = clear_on_filter_miss
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected(self) -> Station | None:
        return self._state.selected

    def subscribe(self, observer: SelectionObserver) -> Callable[[], None]:
        """Register an observer. Returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def toggle(self, candidate: Station) -> Station | None:
        self._set(select(self._state.selected, candidate))
        return self._state.selected

    def clear(self) -> None:
        self._set(None)

    def reconcile(self, results: Sequence[Station]) -> Station | None:
        """
        Apply the dangling-selection policy after the filtered results change.
        By default the selection is left as is, even when it is no longer listed.
        """
        current = self._state.selected
        if current is None or not self._clear_on_filter_miss:
            return current
        if any(station.id == current.id for station in results):
            return current
        self._logger.info("Selection cleared by filter", extra={"station_id": current.id})
        self._set(None)
        return None

    def _set(self, station: Station | None) -> None:
        previous_id = self._state.selected_id
        self._state = SelectionState(selected=station, updated_at=time.time())
        new_id = self._state.selected_id
        if previous_id == new_id:
            return
        self._logger.info(
            "Selection changed",
            extra={"station_id": new_id, "reason": f"previous={previous_id}"},
        )
        for observer in list(self._observers):
            observer(station)
