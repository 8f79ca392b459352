from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.payment import ChargeResult, PaymentDetails, PaymentMethod


class PaymentGatewayPort(ABC):
    @abstractmethod
    def submit_charge(
        self,
        amount: float,
        method: PaymentMethod,
        details: PaymentDetails,
        description: str | None = None,
    ) -> ChargeResult:
        """
        Submit a charge to the payment processor.

        Declines are reported as ChargeResult(success=False, error=...).
        Transport failures raise PaymentGatewayError.
        """
        raise NotImplementedError
