"""
Date utilities for maturity and cash-flow bucketing.

Key concepts:
  - Calendar-month arithmetic: ``add_months`` clamps the day to the target
    month's length (Jan 31 + 1 month -> Feb 28/29).
  - Month index: ``month_index(start, d)`` is the number of calendar months
    between the month containing ``start`` and the month containing ``d``.
    Bucket ``0`` is the current month.
  - Year fractions use a flat 365-day year, matching the yield approximation.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timezone

DAYS_PER_YEAR = 365.0


def add_months(d: date, months: int) -> date:
    """Return ``d`` shifted by ``months`` calendar months (may be negative).

    The day of month is clamped to the last valid day of the target month.
    """
    total = d.year * 12 + (d.month - 1) + months
    year, month_zero = divmod(total, 12)
    month = month_zero + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def month_start(d: date) -> date:
    """Return the first day of the month containing ``d``."""
    return d.replace(day=1)


def month_index(start: date, d: date) -> int:
    """Return the signed number of calendar months from ``start``'s month to ``d``'s."""
    return (d.year - start.year) * 12 + (d.month - start.month)


def days_between(start: date, end: date) -> int:
    """Return ``(end - start).days``; positive when ``end`` is in the future."""
    return (end - start).days


def year_fraction(start: date, end: date) -> float:
    """Return the number of 365-day years from ``start`` to ``end`` (signed)."""
    return days_between(start, end) / DAYS_PER_YEAR


def month_label(d: date) -> str:
    """Return a short month label such as ``"Nov 2026"``."""
    return f"{calendar.month_abbr[d.month]} {d.year}"


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def today_utc() -> date:
    """Return today's date in UTC."""
    return utcnow().date()
