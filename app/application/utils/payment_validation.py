from __future__ import annotations

import re

from app.domain.entities.payment import PaymentDetails, PaymentMethod

_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/(\d{2})$")
_CVV_RE = re.compile(r"^\d{3,4}$")
_UPI_RE = re.compile(r"^[A-Za-z0-9._-]{2,256}@[A-Za-z][A-Za-z0-9.-]{1,63}$")


def _digits(value: str | None) -> str:
    return re.sub(r"[\s-]", "", value or "")


def luhn_valid(number: str) -> bool:
    total = 0
    for index, char in enumerate(reversed(number)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def validate_payment_details(method: PaymentMethod, details: PaymentDetails) -> str | None:
    """Return a user-facing error message, or None if details are usable for method."""
    if method == PaymentMethod.card:
        number = _digits(details.card_number)
        if not number.isdigit() or not 12 <= len(number) <= 19 or not luhn_valid(number):
            return "Enter a valid card number"
        if not _EXPIRY_RE.match((details.expiry or "").strip()):
            return "Enter the card expiry as MM/YY"
        if not _CVV_RE.match((details.cvv or "").strip()):
            return "Enter the 3 or 4 digit CVV"
        if not (details.cardholder_name or "").strip():
            return "Enter the cardholder name"
        return None

    if method == PaymentMethod.upi:
        if not _UPI_RE.match((details.upi_id or "").strip()):
            return "Enter a valid UPI ID (name@bank)"
        return None

    if method == PaymentMethod.wallet:
        if not (details.wallet_id or "").strip():
            return "Choose a wallet to pay with"
        return None

    return f"Unsupported payment method: {method}"
