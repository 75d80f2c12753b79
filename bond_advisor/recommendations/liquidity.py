"""
Liquidity gap projection: will maturing assets cover planned outflows?

Projection (24 months, user's currency only)
--------------------------------------------
Each month holds ``needs`` (planned outflows) and ``maturities`` (face value
redeemed). Walking the months in order, the running position accumulates
``maturities - needs``. For every month with a need:

  shortfall  maturities < needs; amount = needs - maturities.
             Critical when amount > 20% of that month's need AND the
             running position is negative at that month.
  surplus    maturities > 1.5 x needs; amount = maturities - needs.

Sale candidates (only when a critical shortfall exists)
-------------------------------------------------------
All perpetual bonds (sellable any time at market value) plus dated assets
in the user's currency maturing after the earliest critical month. They
are ranked by premium-to-face ratio ascending (deepest discount first) and
the first one is suggested for early sale. The sellable total is reported
per currency (perpetuals may be foreign), e.g. "9.500 € + £5,000".

Output
------
  shortfalls present           -> "Liquidity Gap Planning"
  no shortfalls, surpluses     -> "Surplus Reinvestment Planning"
  neither                      -> nothing
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from bond_advisor.analytics.cashflow import MonthlyCashFlow, build_monthly_cash_flows
from bond_advisor.analytics.valuation import market_value
from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory
from bond_advisor.utils.money import format_currency
from bond_advisor.utils.time_utils import add_months

PROJECTION_MONTHS = 24
CRITICAL_SHORTFALL_RATIO = 0.20
SURPLUS_RATIO = 1.5
SAMPLE_SIZE = 3


@dataclass(frozen=True)
class LiquidityGap:
    """A shortfall or surplus in one month.

    Attributes:
        month:     First day of the month.
        label:     Display label, e.g. ``"Nov 2026"``.
        amount:    Absolute size of the gap (always >= 0).
        critical:  Shortfalls only: large relative gap with a negative
                   running position.
    """

    month:    date
    label:    str
    amount:   float
    critical: bool = False


@dataclass(frozen=True)
class LiquidityProjection:
    """Result of walking the monthly buckets."""

    flows:      list[MonthlyCashFlow]
    shortfalls: list[LiquidityGap]
    surpluses:  list[LiquidityGap]

    @property
    def critical(self) -> list[LiquidityGap]:
        return [g for g in self.shortfalls if g.critical]


def project_liquidity(
    today: date,
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
    currency: str,
    months: int = PROJECTION_MONTHS,
) -> LiquidityProjection:
    """Classify each month with a planned outflow as shortfall, surplus or neither."""
    flows = build_monthly_cash_flows(today, assets, events, months, currency=currency)
    shortfalls: list[LiquidityGap] = []
    surpluses: list[LiquidityGap] = []

    for flow in flows:
        if flow.needs <= 0:
            continue
        if flow.maturities < flow.needs:
            amount = flow.needs - flow.maturities
            critical = amount > CRITICAL_SHORTFALL_RATIO * flow.needs and flow.cumulative < 0
            shortfalls.append(LiquidityGap(flow.month, flow.label, amount, critical))
        elif flow.maturities > SURPLUS_RATIO * flow.needs:
            surpluses.append(LiquidityGap(flow.month, flow.label, flow.maturities - flow.needs))

    return LiquidityProjection(flows, shortfalls, surpluses)


def premium_ratio(asset: FixedIncomeAsset) -> float:
    """``(market value - face value) / face value``; negative means discount."""
    if asset.face_value <= 0:
        return 0.0
    return (market_value(asset) - asset.face_value) / asset.face_value


def sale_candidates(
    assets: Sequence[FixedIncomeAsset],
    currency: str,
    after_month: date,
) -> list[FixedIncomeAsset]:
    """Assets that could be sold early to cover a shortfall in ``after_month``.

    Perpetuals of any currency qualify; dated assets must be in ``currency``
    and mature in a later month. Sorted deepest discount first.
    """
    next_month = add_months(after_month, 1)
    candidates = [
        a for a in assets
        if a.is_perpetual
        or (
            a.maturity_date is not None
            and a.currency == currency
            and a.maturity_date >= next_month
        )
    ]
    return sorted(candidates, key=premium_ratio)


def _premium_phrase(ratio: float) -> str:
    if ratio < 0:
        return f"a {abs(ratio) * 100:.1f}% discount to face value"
    if ratio > 0:
        return f"a {ratio * 100:.1f}% premium to face value"
    return "par value"


def _sample(labels: list[str]) -> str:
    shown = ", ".join(labels[:SAMPLE_SIZE])
    rest = len(labels) - SAMPLE_SIZE
    if rest > 0:
        return f"{shown} and {rest} more"
    return shown


def sellable_value_by_currency(
    candidates: Sequence[FixedIncomeAsset],
    currency: str,
) -> dict[str, float]:
    """Market value of ``candidates`` per currency, ``currency`` first.

    Amounts are never converted between currencies.
    """
    totals: dict[str, float] = {currency: 0.0}
    for asset in candidates:
        totals[asset.currency] = totals.get(asset.currency, 0.0) + market_value(asset)
    return {code: value for code, value in totals.items() if value > 0}


def _sellable_total_text(candidates: Sequence[FixedIncomeAsset], currency: str) -> str:
    totals = sellable_value_by_currency(candidates, currency)
    return " + ".join(format_currency(value, code) for code, value in totals.items())


def _gap_text(gap: LiquidityGap, kind: str, currency: str) -> str:
    return f"{gap.label}: {format_currency(gap.amount, currency)} {kind}"


def shortfall_actions(
    projection: LiquidityProjection,
    assets: Sequence[FixedIncomeAsset],
    currency: str,
) -> list[str]:
    """Action items for a projection that contains at least one shortfall."""
    items: list[str] = []
    critical = projection.critical

    if critical:
        items.append(
            "Critical shortfalls in "
            + ", ".join(g.label for g in critical)
            + ": planned expenses exceed both maturities and your running cash position"
        )

    items.append(
        "Upcoming shortfalls: "
        + _sample([_gap_text(g, "shortfall", currency) for g in projection.shortfalls])
    )

    if critical:
        first = critical[0]
        candidates = sale_candidates(assets, currency, first.month)
        if candidates:
            top = candidates[0]
            items.append(
                "Assets available for early sale total "
                + _sellable_total_text(candidates, currency)
            )
            items.append(
                f"Consider selling {top.name} "
                f"({format_currency(market_value(top), top.currency)}, "
                f"{_premium_phrase(premium_ratio(top))}) to cover the {first.label} shortfall"
            )
        else:
            items.append(
                "No holdings can be sold to close the gap: consider arranging a credit line "
                "or holding cash-equivalents such as money market funds"
            )
    else:
        items.append(
            "Consider allocating funds to money market accounts for immediate liquidity needs"
        )

    if projection.surpluses:
        items.append(
            "Rebalance your ladder: shift maturities from surplus months ("
            + _sample([g.label for g in projection.surpluses])
            + ") toward shortfall months"
        )

    return items


def analyze_liquidity(
    today: date,
    user: User,
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
) -> list[Recommendation]:
    """Shortfall planning or surplus reinvestment advice for the next 24 months."""
    if not events:
        return []

    currency = user.currency
    projection = project_liquidity(today, assets, events, currency)

    if projection.shortfalls:
        return [
            Recommendation(
                category=RecommendationCategory.LIQUIDITY,
                title="Liquidity Gap Planning",
                description="Your upcoming expenses may exceed your maturing investments in some periods:",
                action_items=shortfall_actions(projection, assets, currency),
            )
        ]

    if projection.surpluses:
        items = [
            f"{_gap_text(g, 'surplus', currency)}; plan the reinvestment before the maturity date"
            for g in projection.surpluses[:SAMPLE_SIZE]
        ]
        rest = len(projection.surpluses) - SAMPLE_SIZE
        if rest > 0:
            items.append(f"{rest} more surplus month(s) in the next {PROJECTION_MONTHS} months")
        return [
            Recommendation(
                category=RecommendationCategory.LIQUIDITY,
                title="Surplus Reinvestment Planning",
                description="Maturities comfortably exceed your planned expenses in some months:",
                action_items=items,
            )
        ]

    return []
