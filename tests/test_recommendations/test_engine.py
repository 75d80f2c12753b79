"""
Tests for generate_recommendations().

What we test
------------
- No user or no assets returns [].
- Output is the concatenation rollover -> diversification/regional/currency
  -> laddering -> liquidity -> yield.
- Identical inputs give deep-equal output.
- End-to-end: a conservative eurozone user with a 9800 EUR bond maturing in
  45 days and a 5000 EUR need in 60 days gets keep-liquid / reinvest advice.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from bond_advisor.recommendations.engine import ANALYSES, generate_recommendations
from bond_advisor.taxonomy.asset_taxonomy import AssetType, RecommendationCategory, RiskTolerance
from bond_advisor.utils.money import format_currency
from conftest import TODAY, build_asset, build_event, build_user

_ORDER = [
    RecommendationCategory.ROLLOVER,
    RecommendationCategory.DIVERSIFICATION,
    RecommendationCategory.REGIONAL,
    RecommendationCategory.CURRENCY,
    RecommendationCategory.LADDERING,
    RecommendationCategory.LIQUIDITY,
    RecommendationCategory.YIELD,
]


def _busy_portfolio():
    """Triggers every analysis for a moderate eurozone user."""
    assets = [
        build_asset(id="soon", name="Bund Dec 2026", interest_rate=1.0,
                    maturity_date=TODAY + timedelta(days=40)),
        build_asset(id="b", interest_rate=1.0, maturity_date=date(2028, 6, 1)),
        build_asset(id="c", interest_rate=1.0, maturity_date=date(2028, 7, 1)),
        build_asset(id="d", interest_rate=1.0, maturity_date=date(2028, 8, 1)),
    ]
    events = [build_event(amount=50_000, event_date=date(2027, 2, 1))]
    return assets, events


class TestGuards:
    def test_no_assets(self, moderate_user):
        assert generate_recommendations(moderate_user, [], [build_event()], TODAY) == []

    def test_no_user(self, mixed_portfolio):
        assert generate_recommendations(None, mixed_portfolio, [], TODAY) == []


class TestComposition:
    def test_analysis_order(self):
        assert [name for name, _ in ANALYSES] == [
            "rollover", "diversification", "laddering", "liquidity", "yield",
        ]

    def test_every_category_in_order(self, moderate_user):
        assets, events = _busy_portfolio()
        recs = generate_recommendations(moderate_user, assets, events, TODAY)
        categories = [r.category for r in recs]
        assert categories == _ORDER

    def test_idempotent(self, moderate_user):
        assets, events = _busy_portfolio()
        first = generate_recommendations(moderate_user, assets, events, TODAY)
        second = generate_recommendations(moderate_user, assets, events, TODAY)
        assert first == second

    def test_inputs_not_mutated(self, moderate_user):
        assets, events = _busy_portfolio()
        before = [a.model_dump() for a in assets]
        generate_recommendations(moderate_user, assets, events, TODAY)
        assert [a.model_dump() for a in assets] == before

    def test_logs_total(self, moderate_user, mixed_portfolio, caplog):
        with caplog.at_level(logging.INFO, logger="bond_advisor.recommendations.engine"):
            recs = generate_recommendations(moderate_user, mixed_portfolio, [], TODAY)
        assert f"Generated {len(recs)} recommendation(s)" in caplog.text


class TestEndToEnd:
    def test_keep_liquid_and_reinvest(self):
        user = build_user(risk_tolerance=RiskTolerance.CONSERVATIVE, currency="EUR", region="eurozone")
        bond = build_asset(
            asset_type=AssetType.GOVERNMENT_BOND,
            name="Eurozone Govt 2026",
            face_value=10_000,
            purchase_price=9_800,
            interest_rate=2.0,
            maturity_date=TODAY + timedelta(days=45),
            currency="EUR",
            region="eurozone",
        )
        need = build_event(amount=5_000, currency="EUR", event_date=TODAY + timedelta(days=60))

        recs = generate_recommendations(user, [bond], [need], TODAY)

        rollovers = [r for r in recs if r.category is RecommendationCategory.ROLLOVER]
        assert len(rollovers) == 1
        rec = rollovers[0]
        assert rec.title == "Eurozone Govt 2026 matures in 45 days"
        assert any(
            "Keep" in item and format_currency(5_000, "EUR") in item for item in rec.action_items
        )
        assert any(
            "Reinvest" in item and format_currency(4_800, "EUR") in item for item in rec.action_items
        )
        assert format_currency(4_800, "EUR") == "4.800 €"
