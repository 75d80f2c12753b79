"""
Regional yield commentary.

With at least three holdings, the market-value-weighted approximate YTM is
compared against a per-region threshold for the user's home region. Below
the threshold, region-specific higher-yielding alternatives are suggested.
Regions without a threshold never trigger.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from bond_advisor.analytics.valuation import approximate_ytm, total_market_value, weighted_average
from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory

MIN_ASSETS = 3


@dataclass(frozen=True)
class YieldRule:
    threshold_pct: float
    suggestions: tuple[str, ...]


YIELD_RULES: dict[str, YieldRule] = {
    "eurozone": YieldRule(
        3.0,
        (
            "Consider peripheral Eurozone government bonds (Italy, Spain) for higher yields",
            "Investment grade corporate bonds can offer yield premiums over government debt",
        ),
    ),
    "uk": YieldRule(
        4.0,
        (
            "Consider longer-dated gilts for better yield",
            "UK corporate bonds offer a yield premium over government securities",
        ),
    ),
}


def analyze_yield(
    today: date,
    user: User,
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
) -> list[Recommendation]:
    """A ``yield`` recommendation when the weighted YTM is below the home-region threshold."""
    if len(assets) < MIN_ASSETS:
        return []

    rule = YIELD_RULES.get(user.region)
    if rule is None or total_market_value(assets) <= 0:
        return []

    weighted_ytm = weighted_average(assets, lambda a: approximate_ytm(a, today))
    if weighted_ytm >= rule.threshold_pct:
        return []

    return [
        Recommendation(
            category=RecommendationCategory.YIELD,
            title="Yield Enhancement Strategies",
            description=(
                f"Your current portfolio yield is {weighted_ytm:.2f}%. "
                "Consider these options:"
            ),
            action_items=list(rule.suggestions),
            region=user.region,
        )
    ]
