"""Shared numeric helpers — month arithmetic, rounding, domain guards."""

from __future__ import annotations

import calendar
import math
from datetime import date

# Absolute tolerance under which two money/rate values are considered equal.
EQUALITY_TOLERANCE = 1e-9


def add_months(start: date, months: int) -> date:
    """Return ``start`` advanced by ``months`` calendar months.

    The day is clamped to the last day of the target month
    (Jan 31 + 1 month → Feb 28/29).
    """
    year = start.year + (start.month - 1 + months) // 12
    month = (start.month - 1 + months) % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def within_calendar(start: date, months: int) -> bool:
    """True when ``add_months(start, months)`` stays within ``date.min .. date.max``."""
    year = start.year + (start.month - 1 + months) // 12
    return date.min.year <= year <= date.max.year


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def non_negative(value: float) -> float:
    """Clamp to ≥ 0; NaN becomes 0."""
    if not math.isfinite(value) and not value > 0:
        return 0.0
    return max(0.0, value)


def round_money(value: float, places: int = 2) -> float:
    """Round half away from zero, as the pages display amounts.

    Python's ``round`` uses banker's rounding on the binary value; pages
    show 2.675 as 2.68, so scale with a small epsilon first.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** places
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5 + 1e-9) / factor
    return math.copysign(rounded, value) if rounded else 0.0


def nearly_equal(a: float, b: float, tolerance: float = EQUALITY_TOLERANCE) -> bool:
    return abs(a - b) <= tolerance
