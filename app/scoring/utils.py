"""
Numeric Utilities
app/scoring/utils.py

Precision-safe rounding, clamping and zero-guarded division shared by the
scoring, A/B and forecast calculators.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Union

Number = Union[int, float, Decimal]

_MS_PER_DAY = 1000 * 60 * 60 * 24


def to_decimal(value: Number, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # quantize needs every integer digit plus the requested places
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return exact.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)


def round_half_up(value: Number, places: int = 2) -> float:
    """
    Round half away from zero at the given decimal place.

    Goes through the shortest repr of the float, so 1.005 rounds to 1.01.
    """
    return float(to_decimal(value, places))


def round_int(value: Number) -> int:
    """Round half away from zero to an integer."""
    return int(to_decimal(value, 0))


def clamp(value: Number, min_val: Number = 0, max_val: Number = 100):
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def safe_ratio(numerator: Number, denominator: Number) -> float:
    """
    Divide with zero-division protection.

    Returns 0.0 when the denominator is zero.
    """
    if not denominator:
        return 0.0
    return numerator / denominator


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now(now: Optional[datetime] = None) -> datetime:
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def whole_days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, floored (negative when end < start)."""
    delta_ms = (as_utc(end) - as_utc(start)).total_seconds() * 1000
    return int(delta_ms // _MS_PER_DAY)


def fractional_days_between(start: datetime, end: datetime) -> float:
    return (as_utc(end) - as_utc(start)).total_seconds() / 86400
