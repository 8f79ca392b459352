from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PaymentMethod(str, Enum):
    card = "card"
    upi = "upi"
    wallet = "wallet"


@dataclass(frozen=True)
class PaymentDetails:
    card_number: str | None = None
    expiry: str | None = None  # MM/YY
    cvv: str | None = None
    cardholder_name: str | None = None
    upi_id: str | None = None  # handle@provider
    wallet_id: str | None = None

    def __repr__(self) -> str:
        # Keeps card data out of logs and tracebacks.
        last4 = (self.card_number or "")[-4:]
        return f"PaymentDetails(card=****{last4}, upi_id={self.upi_id!r}, wallet_id={self.wallet_id!r})"


@dataclass(frozen=True)
class ChargeResult:
    success: bool
    transaction_id: str | None = None
    booking_reference: str | None = None
    error: str | None = None
    meta: dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, transaction_id: str, booking_reference: str | None = None) -> ChargeResult:
        return cls(success=True, transaction_id=transaction_id, booking_reference=booking_reference)

    @classmethod
    def failed(cls, error: str) -> ChargeResult:
        return cls(success=False, error=error)
