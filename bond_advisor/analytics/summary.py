"""
Portfolio summary statistics for the report header.

All aggregates are market-value based (see ``valuation.market_value``):

  total_value          sum of market values
  weighted_yield       market-value-weighted approximate YTM (%)
  weighted_maturity    market-value-weighted years to maturity over dated
                       assets; matured positions count as 0 years
  by_group / by_currency / by_region
                       market value per bucket, insertion ordered
  taxable_value / tax_exempt_value
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from bond_advisor.analytics.valuation import (
    approximate_ytm,
    market_value,
    total_market_value,
    weighted_average,
    years_to_maturity,
)
from bond_advisor.models.portfolio import FixedIncomeAsset
from bond_advisor.taxonomy.asset_taxonomy import AssetGroup, asset_group


@dataclass(frozen=True)
class PortfolioSummary:
    """Headline statistics for a set of holdings."""

    asset_count:       int
    total_value:       float
    weighted_yield:    float
    weighted_maturity: float
    by_group:          dict[str, float] = field(default_factory=dict)
    by_currency:       dict[str, float] = field(default_factory=dict)
    by_region:         dict[str, float] = field(default_factory=dict)
    taxable_value:     float = 0.0
    tax_exempt_value:  float = 0.0

    def share(self, bucket: dict[str, float], key: str) -> float:
        """Percentage of ``total_value`` held in ``bucket[key]`` (0 if empty)."""
        if self.total_value <= 0:
            return 0.0
        return bucket.get(key, 0.0) / self.total_value * 100.0


def empty_group_totals() -> dict[str, float]:
    """One zeroed entry per ``AssetGroup`` in declaration order."""
    return {group.value: 0.0 for group in AssetGroup}


def summarize_portfolio(assets: Sequence[FixedIncomeAsset], today: date) -> PortfolioSummary:
    """Compute a ``PortfolioSummary``; an empty portfolio yields all zeros."""
    by_group = empty_group_totals()
    if not assets:
        return PortfolioSummary(0, 0.0, 0.0, 0.0, by_group=by_group)

    by_currency: dict[str, float] = {}
    by_region: dict[str, float] = {}
    taxable = 0.0

    for asset in assets:
        value = market_value(asset)
        by_group[asset_group(asset.asset_type).value] += value
        by_currency[asset.currency] = by_currency.get(asset.currency, 0.0) + value
        by_region[asset.region] = by_region.get(asset.region, 0.0) + value
        if asset.taxable:
            taxable += value

    total = total_market_value(assets)
    dated = [a for a in assets if a.maturity_date is not None]

    return PortfolioSummary(
        asset_count=len(assets),
        total_value=total,
        weighted_yield=weighted_average(assets, lambda a: approximate_ytm(a, today)),
        weighted_maturity=weighted_average(
            dated, lambda a: max(0.0, years_to_maturity(a, today) or 0.0)
        ),
        by_group=by_group,
        by_currency=by_currency,
        by_region=by_region,
        taxable_value=taxable,
        tax_exempt_value=total - taxable,
    )
