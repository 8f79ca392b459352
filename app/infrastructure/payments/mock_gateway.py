from __future__ import annotations

import logging
import uuid

from app.application.ports.payment_gateway import PaymentGatewayPort
from app.domain.entities.payment import ChargeResult, PaymentDetails, PaymentMethod


class MockPaymentGateway(PaymentGatewayPort):
    """Accepts every charge unless its method or card number is on the decline lists."""

    def __init__(
        self,
        declined_methods: set[PaymentMethod] | None = None,
        declined_cards: set[str] | None = None,
    ) -> None:
        self._declined_methods = set(declined_methods or ())
        self._declined_cards = set(declined_cards or ())
        self.charges: list[tuple[float, PaymentMethod, str]] = []
        self._logger = logging.getLogger(__name__)

    def submit_charge(
        self,
        amount: float,
        method: PaymentMethod,
        details: PaymentDetails,
        description: str | None = None,
    ) -> ChargeResult:
        card = (details.card_number or "").replace(" ", "")
        if method in self._declined_methods or (card and card in self._declined_cards):
            self._logger.info("Mock charge declined", extra={"amount": amount, "method": method.value})
            return ChargeResult.failed("Payment declined by issuer")

        transaction_id = f"mock_txn_{len(self.charges) + 1}_{uuid.uuid4().hex[:6]}"
        self.charges.append((amount, method, transaction_id))
        self._logger.info(
            "Mock charge captured",
            extra={"amount": amount, "method": method.value, "reason": description},
        )
        return ChargeResult.ok(transaction_id=transaction_id)
