from __future__ import annotations

import logging

import httpx

from app.application.exceptions import PaymentGatewayError
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.core.config import settings
from app.domain.entities.payment import ChargeResult, PaymentDetails, PaymentMethod


class HttpPaymentGateway(PaymentGatewayPort):
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key or settings.PAYMENT_GATEWAY_API_KEY
        self._base_url = (base_url or settings.PAYMENT_GATEWAY_URL or "").rstrip("/")
        self._client = client or httpx.Client(timeout=15.0)
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("PAYMENT_GATEWAY_API_KEY is required for the HTTP payment gateway")
        if not self._base_url:
            raise ValueError("PAYMENT_GATEWAY_URL is required for the HTTP payment gateway")

    def submit_charge(
        self,
        amount: float,
        method: PaymentMethod,
        details: PaymentDetails,
        description: str | None = None,
    ) -> ChargeResult:
        url = f"{self._base_url}/charges"
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        payload = {
            # Minor units avoid float drift on the processor side.
            "amount": int(round(amount * 100)),
            "currency": "INR",
            "method": method.value,
            "description": description or "",
            "source": self._source(method, details),
        }

        try:
            response = self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Error reaching payment gateway", extra={"error": str(e)})
            raise PaymentGatewayError(f"Payment gateway unreachable: {e}") from e

        if response.status_code in (402, 422):
            data = _json_or_empty(response)
            reason = data.get("error") or data.get("message") or "Payment declined"
            self._logger.info("Charge declined", extra={"amount": amount, "method": method.value, "reason": reason})
            return ChargeResult.failed(str(reason))

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error("Payment gateway error", extra={"error": str(e)})
            raise PaymentGatewayError(f"Payment gateway returned {response.status_code}") from e

        data = _json_or_empty(response)
        transaction_id = data.get("id") or data.get("transactionId")
        if not transaction_id:
            raise PaymentGatewayError("No transaction ID returned from payment gateway")

        self._logger.info("Charge captured", extra={"amount": amount, "method": method.value})
        return ChargeResult.ok(
            transaction_id=str(transaction_id),
            booking_reference=data.get("bookingReference"),
        )

    def _source(self, method: PaymentMethod, details: PaymentDetails) -> dict[str, str | None]:
        if method == PaymentMethod.card:
            return {
                "number": (details.card_number or "").replace(" ", ""),
                "expiry": details.expiry,
                "cvv": details.cvv,
                "name": details.cardholder_name,
            }
        if method == PaymentMethod.upi:
            return {"vpa": details.upi_id}
        return {"wallet": details.wallet_id}


def _json_or_empty(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
