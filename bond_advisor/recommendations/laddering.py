"""
Bond-ladder analysis: are maturities spread across the coming years?

Runs only with at least three dated (non-perpetual) assets. Maturities are
bucketed by calendar year.

  clustered      some year holds 3+ maturities -> suggest spreading the
                 busiest year (earliest year wins a tie)
  missing years  years from the current year through +5 with no maturity
                 -> suggest filling the first three
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory

MIN_DATED_ASSETS = 3
CLUSTER_SIZE = 3
LADDER_SPAN_YEARS = 5
MAX_GAP_SUGGESTIONS = 3


def maturities_by_year(assets: Sequence[FixedIncomeAsset]) -> dict[int, int]:
    """Count of dated assets per maturity year, ascending by year."""
    counts: dict[int, int] = {}
    for asset in assets:
        if asset.is_perpetual or asset.maturity_date is None:
            continue
        year = asset.maturity_date.year
        counts[year] = counts.get(year, 0) + 1
    return dict(sorted(counts.items()))


def missing_years(counts: dict[int, int], current_year: int) -> list[int]:
    """Years in [current_year, current_year + 5] with no maturity."""
    return [
        year
        for year in range(current_year, current_year + LADDER_SPAN_YEARS + 1)
        if counts.get(year, 0) == 0
    ]


def busiest_year(counts: dict[int, int]) -> int | None:
    """Year with the most maturities; earliest year on a tie."""
    if not counts:
        return None
    return max(counts, key=lambda y: (counts[y], -y))


def analyze_laddering(
    today: date,
    user: User,
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
) -> list[Recommendation]:
    """One ``laddering`` recommendation when maturities cluster or leave gaps."""
    dated = [a for a in assets if not a.is_perpetual and a.maturity_date is not None]
    if len(dated) < MIN_DATED_ASSETS:
        return []

    counts = maturities_by_year(dated)
    clustered = any(n >= CLUSTER_SIZE for n in counts.values())
    gaps = missing_years(counts, today.year)

    strategy: list[str] = []
    if clustered:
        year = busiest_year(counts)
        strategy.append(
            f"Diversify your {year} maturities into other years to smooth your cash flow"
        )
    for year in gaps[:MAX_GAP_SUGGESTIONS]:
        strategy.append(
            f"Consider adding securities maturing in {year} to complete your ladder"
        )

    if not strategy:
        return []

    return [
        Recommendation(
            category=RecommendationCategory.LADDERING,
            title="Bond Ladder Optimization",
            description="A well-structured bond ladder can help balance liquidity needs with yield:",
            action_items=strategy,
        )
    ]
