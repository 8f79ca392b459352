from __future__ import annotations

import re
import secrets
import string

BOOKING_PREFIX = "CE"
_ALPHABET = string.digits + string.ascii_uppercase
_REFERENCE_RE = re.compile(r"^CE[0-9A-Z]{8}$")


def generate_booking_reference() -> str:
    """CE + 8 characters from [0-9A-Z]. Uniqueness is only as good as the randomness."""
    return BOOKING_PREFIX + "".join(secrets.choice(_ALPHABET) for _ in range(8))


def is_booking_reference(value: str | None) -> bool:
    return bool(value) and bool(_REFERENCE_RE.match(value))
