from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from app.domain.entities.payment import PaymentMethod
from app.domain.entities.station import Station

TIME_SLOTS: tuple[str, ...] = (
    "09:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "01:00 PM",
    "02:00 PM",
    "03:00 PM",
    "04:00 PM",
    "05:00 PM",
    "06:00 PM",
    "07:00 PM",
    "08:00 PM",
)


@dataclass(frozen=True)
class BookingSession:
    session_token: str  # distinguishes this booking attempt from later ones on the same workflow
    station: Station  # captured at open time, not a live pointer to the selection
    slot: str | None = None
    duration_hours: int = 2
    payment_method: PaymentMethod = PaymentMethod.card

    def with_changes(self, **changes) -> BookingSession:
        return replace(self, **changes)


@dataclass(frozen=True)
class Idle:
    name: str = "idle"


@dataclass(frozen=True)
class SlotSelection:
    session: BookingSession
    name: str = "slot_selection"


@dataclass(frozen=True)
class Payment:
    session: BookingSession
    error: str | None = None
    name: str = "payment"


@dataclass(frozen=True)
class Confirming:
    session: BookingSession
    booking_id: str
    amount: float
    transaction_id: str | None = None
    name: str = "confirming"


BookingState = Union[Idle, SlotSelection, Payment, Confirming]
