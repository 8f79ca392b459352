from __future__ import annotations

from app.application.exceptions import InvalidArgument
from app.core.config import settings


def charging_cost(
    duration_hours: int,
    price_per_unit: float,
    units_per_hour: float | None = None,
) -> float:
    """
    Cost of a charging slot: duration * unit price * units consumed per hour.

    No rounding happens here; see format_amount for the presentation policy.
    """
    if units_per_hour is None:
        units_per_hour = settings.ENERGY_UNITS_PER_HOUR
    if isinstance(duration_hours, bool) or not isinstance(duration_hours, int) or duration_hours < 1:
        raise InvalidArgument(f"duration_hours must be an integer >= 1, got {duration_hours!r}")
    if not price_per_unit > 0:
        raise InvalidArgument(f"price_per_unit must be positive, got {price_per_unit!r}")
    if not units_per_hour > 0:
        raise InvalidArgument(f"units_per_hour must be positive, got {units_per_hour!r}")
    return duration_hours * price_per_unit * units_per_hour


def estimated_energy(duration_hours: int, units_per_hour: float | None = None) -> float:
    if units_per_hour is None:
        units_per_hour = settings.ENERGY_UNITS_PER_HOUR
    return duration_hours * units_per_hour


def round_amount(amount: float) -> float:
    return round(amount, settings.CURRENCY_DECIMALS)


def format_amount(amount: float) -> str:
    return f"{settings.CURRENCY_SYMBOL}{amount:,.{settings.CURRENCY_DECIMALS}f}"
