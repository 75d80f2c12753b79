"""
Diversification and concentration analysis.

Runs only when the portfolio holds at least two assets. Market value is
accumulated per asset group, per currency and per region and converted to
a percentage of the total.

  diversification  one recommendation listing every group whose share lies
                   outside the risk profile's ideal [min, max] range
  regional         the largest region holds more than 70% of value
  currency         the largest currency holds more than 80% of value

A zero total short-circuits to no recommendations.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from bond_advisor.analytics.valuation import market_value
from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.recommendations.market_tables import ideal_range
from bond_advisor.taxonomy.asset_taxonomy import (
    AssetGroup,
    RecommendationCategory,
    RiskTolerance,
    asset_group,
)

MIN_ASSETS = 2
REGION_CONCENTRATION_PCT = 70.0
CURRENCY_CONCENTRATION_PCT = 80.0

REGION_ALTERNATIVES: dict[str, str] = {
    "eurozone": "Consider adding UK or US fixed income assets to diversify from Eurozone exposure",
    "uk":       "Consider adding Eurozone fixed income assets to diversify from UK exposure",
    "us":       "Consider adding European fixed income assets to diversify from US exposure",
}

CURRENCY_ALTERNATIVES: dict[str, str] = {
    "EUR": "Consider adding GBP or USD denominated assets to reduce Euro exposure",
    "GBP": "Consider adding EUR or USD denominated assets to reduce Pound exposure",
    "USD": "Consider adding EUR or GBP denominated assets to reduce Dollar exposure",
}


@dataclass(frozen=True)
class Distribution:
    """Percentage of total market value per group, currency and region."""

    by_group:    dict[AssetGroup, float]
    by_currency: dict[str, float]
    by_region:   dict[str, float]


def compute_distribution(assets: Sequence[FixedIncomeAsset]) -> Distribution | None:
    """Percent shares of market value; ``None`` when the total is zero."""
    groups: dict[AssetGroup, float] = {g: 0.0 for g in AssetGroup}
    currencies: dict[str, float] = {}
    regions: dict[str, float] = {}
    total = 0.0

    for asset in assets:
        value = market_value(asset)
        groups[asset_group(asset.asset_type)] += value
        currencies[asset.currency] = currencies.get(asset.currency, 0.0) + value
        regions[asset.region] = regions.get(asset.region, 0.0) + value
        total += value

    if total <= 0:
        return None

    def pct(bucket: dict) -> dict:
        return {k: v / total * 100.0 for k, v in bucket.items()}

    return Distribution(pct(groups), pct(currencies), pct(regions))


def allocation_imbalances(
    by_group: dict[AssetGroup, float],
    risk: RiskTolerance,
) -> list[str]:
    """One "increase"/"reduce" suggestion per group outside its ideal range."""
    imbalances: list[str] = []
    for group in AssetGroup:
        low, high = ideal_range(risk, group)
        actual = by_group.get(group, 0.0)
        if actual < low:
            imbalances.append(
                f"Consider increasing {group} allocation "
                f"(currently {actual:.1f}%, target {low}-{high}%)"
            )
        elif actual > high:
            imbalances.append(
                f"Consider reducing {group} allocation "
                f"(currently {actual:.1f}%, target {low}-{high}%)"
            )
    return imbalances


def dominant(shares: dict[str, float]) -> tuple[str, float] | None:
    """Largest bucket; the first inserted wins a tie."""
    if not shares:
        return None
    key = max(shares, key=lambda k: shares[k])
    return key, shares[key]


def analyze_diversification(
    today: date,
    user: User,
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
) -> list[Recommendation]:
    """Allocation imbalance, regional and currency concentration checks."""
    if len(assets) < MIN_ASSETS:
        return []

    dist = compute_distribution(assets)
    if dist is None:
        return []

    recommendations: list[Recommendation] = []

    imbalances = allocation_imbalances(dist.by_group, user.risk_tolerance)
    if imbalances:
        recommendations.append(
            Recommendation(
                category=RecommendationCategory.DIVERSIFICATION,
                title="Portfolio Balance Optimization",
                description=(
                    f"Based on your {user.risk_tolerance} risk profile, "
                    "we recommend adjusting your asset allocation:"
                ),
                action_items=imbalances,
            )
        )

    top_region = dominant(dist.by_region)
    if top_region is not None and top_region[1] > REGION_CONCENTRATION_PCT:
        region, share = top_region
        items = [
            REGION_ALTERNATIVES.get(
                region,
                f"Consider adding fixed income assets from outside {region} to spread regional risk",
            ),
            f"{region} represents {share:.1f}% of your portfolio",
        ]
        recommendations.append(
            Recommendation(
                category=RecommendationCategory.REGIONAL,
                title="Geographical Diversification",
                description="Your portfolio is highly concentrated in one region:",
                action_items=items,
                region=region,
            )
        )

    top_currency = dominant(dist.by_currency)
    if top_currency is not None and top_currency[1] > CURRENCY_CONCENTRATION_PCT:
        currency, share = top_currency
        items = [
            CURRENCY_ALTERNATIVES.get(
                currency,
                f"Consider adding assets denominated in other currencies to reduce {currency} exposure",
            ),
            f"{currency} represents {share:.1f}% of your portfolio value",
        ]
        recommendations.append(
            Recommendation(
                category=RecommendationCategory.CURRENCY,
                title="Currency Diversification",
                description="Your portfolio is concentrated in one currency:",
                action_items=items,
            )
        )

    return recommendations
