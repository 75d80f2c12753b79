"""
Tests for bond_advisor/recommendations/diversification.py.

What we test
------------
- Fewer than two assets, or a zero total, yields nothing.
- A portfolio 100% in one group shows at least one imbalance for every
  risk profile.
- A balanced portfolio shows no allocation imbalance.
- Regional (> 70%) and currency (> 80%) concentration checks, including
  the generic text for untabulated regions and currencies.
"""

from __future__ import annotations

import pytest

from bond_advisor.recommendations.diversification import (
    allocation_imbalances,
    analyze_diversification,
    compute_distribution,
    dominant,
)
from bond_advisor.taxonomy.asset_taxonomy import (
    AssetGroup,
    AssetType,
    RecommendationCategory,
    RiskTolerance,
)
from conftest import TODAY, build_asset, build_user


def _by_category(recs):
    return {r.category: r for r in recs}


class TestGuards:
    def test_single_asset(self, moderate_user):
        assert analyze_diversification(TODAY, moderate_user, [build_asset()], []) == []

    def test_empty(self, moderate_user):
        assert analyze_diversification(TODAY, moderate_user, [], []) == []


class TestAllocation:
    @pytest.mark.parametrize("risk", list(RiskTolerance))
    def test_single_group_always_imbalanced(self, risk):
        user = build_user(risk_tolerance=risk)
        assets = [build_asset(id="a"), build_asset(id="b")]
        recs = _by_category(analyze_diversification(TODAY, user, assets, []))

        rec = recs[RecommendationCategory.DIVERSIFICATION]
        assert rec.title == "Portfolio Balance Optimization"
        assert f"{risk.value} risk profile" in rec.description
        assert rec.action_items

    def test_imbalance_text(self):
        by_group = {g: 0.0 for g in AssetGroup}
        by_group[AssetGroup.GOVERNMENT] = 100.0
        items = allocation_imbalances(by_group, RiskTolerance.MODERATE)
        assert items == [
            "Consider reducing government allocation (currently 100.0%, target 30-50%)",
            "Consider increasing corporate allocation (currently 0.0%, target 20-40%)",
            "Consider increasing savings allocation (currently 0.0%, target 5-20%)",
        ]

    def test_ranges_come_from_ideal_range(self, monkeypatch):
        monkeypatch.setattr(
            "bond_advisor.recommendations.diversification.ideal_range",
            lambda risk, group: (0, 100),
        )
        by_group = {g: 0.0 for g in AssetGroup}
        by_group[AssetGroup.GOVERNMENT] = 100.0
        assert allocation_imbalances(by_group, RiskTolerance.MODERATE) == []

    def test_balanced_portfolio(self, moderate_user, mixed_portfolio):
        recs = _by_category(analyze_diversification(TODAY, moderate_user, mixed_portfolio, []))
        assert RecommendationCategory.DIVERSIFICATION not in recs

    def test_distribution_uses_market_value(self):
        assets = [
            build_asset(purchase_price=1_000, current_price=3_000),
            build_asset(asset_type=AssetType.CD, purchase_price=1_000),
        ]
        dist = compute_distribution(assets)
        assert dist.by_group[AssetGroup.GOVERNMENT] == pytest.approx(75.0)
        assert dist.by_group[AssetGroup.SAVINGS] == pytest.approx(25.0)


class TestConcentration:
    def test_region_and_currency(self, moderate_user, mixed_portfolio):
        recs = _by_category(analyze_diversification(TODAY, moderate_user, mixed_portfolio, []))

        regional = recs[RecommendationCategory.REGIONAL]
        assert regional.title == "Geographical Diversification"
        assert regional.region == "eurozone"
        assert regional.action_items == [
            "Consider adding UK or US fixed income assets to diversify from Eurozone exposure",
            "eurozone represents 100.0% of your portfolio",
        ]

        currency = recs[RecommendationCategory.CURRENCY]
        assert currency.title == "Currency Diversification"
        assert currency.action_items[1] == "EUR represents 100.0% of your portfolio value"

    def test_below_thresholds(self, moderate_user):
        assets = [
            build_asset(id="eu", purchase_price=5_000),
            build_asset(id="uk", asset_type=AssetType.GILTS, currency="GBP", region="uk",
                        purchase_price=5_000),
        ]
        recs = _by_category(analyze_diversification(TODAY, moderate_user, assets, []))
        assert RecommendationCategory.REGIONAL not in recs
        assert RecommendationCategory.CURRENCY not in recs

    def test_seventy_percent_is_not_concentrated(self, moderate_user):
        assets = [
            build_asset(id="eu", purchase_price=7_000),
            build_asset(id="us", region="us", currency="USD", purchase_price=3_000),
        ]
        recs = _by_category(analyze_diversification(TODAY, moderate_user, assets, []))
        assert RecommendationCategory.REGIONAL not in recs

    def test_untabulated_region_and_currency(self, moderate_user):
        assets = [
            build_asset(id="a", region="asia", currency="SGD"),
            build_asset(id="b", region="asia", currency="SGD"),
        ]
        recs = _by_category(analyze_diversification(TODAY, moderate_user, assets, []))
        assert recs[RecommendationCategory.REGIONAL].action_items[0] == (
            "Consider adding fixed income assets from outside asia to spread regional risk"
        )
        assert recs[RecommendationCategory.CURRENCY].action_items[0] == (
            "Consider adding assets denominated in other currencies to reduce SGD exposure"
        )


def test_dominant_first_wins_tie():
    assert dominant({"eurozone": 50.0, "uk": 50.0}) == ("eurozone", 50.0)
    assert dominant({}) is None
