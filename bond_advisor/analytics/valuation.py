"""
Valuation helpers shared by every analysis.

market_value(asset)
    ``current_price`` when it is known and positive, otherwise
    ``purchase_price``. Aggregates therefore reflect price moves when a live
    price exists and degrade to cost basis when it does not.

approximate_ytm(asset, as_of)
    Quick yield-to-maturity estimate in percent::

        perpetual / undated       -> nominal interest_rate
        zero-coupon               -> ((F / P) ** (1 / n) - 1) * 100
        coupon-bearing            -> (C + (F - P) / n) / ((F + P) / 2) * 100

    where ``n`` is years to maturity floored at 0.01 so a same-day maturity
    does not divide by zero. This is the textbook approximation, not an IRR
    solve. Results that are not finite degrade to 0.0.

All functions are pure: no I/O, no clock reads unless ``as_of`` is omitted.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from datetime import date
from typing import Optional

from bond_advisor.models.portfolio import FixedIncomeAsset
from bond_advisor.utils.time_utils import today_utc, year_fraction

logger = logging.getLogger(__name__)

MIN_YEARS_TO_MATURITY = 0.01


def market_value(asset: FixedIncomeAsset) -> float:
    """Return the asset's current price if positive, else its purchase price."""
    price = asset.current_price
    if price is not None and math.isfinite(price) and price > 0:
        return price
    return asset.purchase_price


def total_market_value(assets: Iterable[FixedIncomeAsset]) -> float:
    """Sum of ``market_value`` over ``assets``; 0.0 for an empty collection."""
    return float(sum(market_value(a) for a in assets))


def weighted_average(
    assets: Iterable[FixedIncomeAsset],
    selector: Callable[[FixedIncomeAsset], float],
) -> float:
    """Market-value-weighted mean of ``selector(asset)``.

    Returns 0.0 when the collection is empty or its total value is zero.
    """
    assets = list(assets)
    total = total_market_value(assets)
    if total <= 0:
        return 0.0
    return sum(selector(a) * market_value(a) for a in assets) / total


def years_to_maturity(asset: FixedIncomeAsset, as_of: Optional[date] = None) -> Optional[float]:
    """Signed years from ``as_of`` to maturity, or ``None`` for undated assets."""
    if asset.maturity_date is None:
        return None
    return year_fraction(as_of or today_utc(), asset.maturity_date)


def approximate_ytm(asset: FixedIncomeAsset, as_of: Optional[date] = None) -> float:
    """Approximate yield to maturity in percent.

    Args:
        asset: The holding to evaluate.
        as_of: Valuation date; defaults to today (UTC).

    Returns:
        Yield in percent, e.g. ``4.25``. Perpetual and undated assets return
        their nominal ``interest_rate`` unchanged.
    """
    if asset.is_perpetual or asset.maturity_date is None:
        return asset.interest_rate

    years = max(MIN_YEARS_TO_MATURITY, year_fraction(as_of or today_utc(), asset.maturity_date))
    face = asset.face_value
    price = asset.purchase_price

    try:
        if asset.interest_rate == 0:
            ytm = ((face / price) ** (1.0 / years) - 1.0) * 100.0
        else:
            annual_coupon = face * (asset.interest_rate / 100.0)
            price_gain = (face - price) / years
            average_investment = (face + price) / 2.0
            ytm = (annual_coupon + price_gain) / average_investment * 100.0
    except (OverflowError, ZeroDivisionError):
        logger.debug("YTM overflow for asset %s; using 0.0", asset.id)
        return 0.0

    if not math.isfinite(ytm):
        return 0.0
    return ytm
