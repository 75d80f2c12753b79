"""
Tests for bond_advisor/recommendations/rollover.py.

What we test
------------
- Only assets maturing in (0, 90] days produce a recommendation.
- Title and description name the asset, value and day count.
- A same-currency need within 6 months that the asset covers yields
  keep-liquid / reinvest items.
- Otherwise a replacement is suggested at the risk-implied term.
- Moderate / aggressive users holding a foreign asset get one
  cross-region alternative; conservative users never do.
"""

from __future__ import annotations

from datetime import date, timedelta

from bond_advisor.recommendations.rollover import (
    analyze_rollovers,
    cross_region_alternative,
    soon_maturing,
    upcoming_needs,
)
from bond_advisor.taxonomy.asset_taxonomy import AssetType, RecommendationCategory, RiskTolerance
from bond_advisor.utils.money import format_currency
from conftest import TODAY, build_asset, build_event, build_user


def _gilt(**overrides):
    fields = dict(
        asset_type=AssetType.GILTS, name="UKT 2026", currency="GBP", region="uk",
        maturity_date=TODAY + timedelta(days=45),
    )
    fields.update(overrides)
    return build_asset(**fields)


class TestSoonMaturing:
    def test_window_bounds(self):
        assets = [
            build_asset(id="today", maturity_date=TODAY),
            build_asset(id="d1", maturity_date=TODAY + timedelta(days=1)),
            build_asset(id="d90", maturity_date=TODAY + timedelta(days=90)),
            build_asset(id="d91", maturity_date=TODAY + timedelta(days=91)),
            build_asset(id="past", maturity_date=TODAY - timedelta(days=5)),
            build_asset(id="perp", asset_type=AssetType.PERPETUAL_BOND, maturity_date=None),
        ]
        assert [(a.id, d) for a, d in soon_maturing(assets, TODAY)] == [("d1", 1), ("d90", 90)]


class TestUpcomingNeeds:
    def test_same_currency_within_six_months(self):
        events = [
            build_event(amount=1_000, event_date=TODAY + timedelta(days=10)),
            build_event(amount=2_000, event_date=date(2027, 4, 17)),
            build_event(amount=4_000, event_date=date(2027, 4, 18)),
            build_event(amount=8_000, event_date=TODAY),
            build_event(amount=16_000, currency="GBP", event_date=TODAY + timedelta(days=10)),
        ]
        assert upcoming_needs(events, "EUR", TODAY) == 3_000


class TestCrossRegionAlternative:
    def test_skips_user_and_asset_regions(self):
        assert cross_region_alternative("eurozone", "uk") == "us"
        assert cross_region_alternative("us", "eurozone") == "uk"
        assert cross_region_alternative("uk", "asia") == "eurozone"


class TestAnalyzeRollovers:
    def test_thirty_days_no_need(self, moderate_user):
        asset = build_asset(maturity_date=TODAY + timedelta(days=30))
        recs = analyze_rollovers(TODAY, moderate_user, [asset], [])

        assert len(recs) == 1
        rec = recs[0]
        assert rec.category is RecommendationCategory.ROLLOVER
        assert rec.title == "Bund 2.5% 2029 matures in 30 days"
        assert "30 days" in rec.description
        assert "10.000 €" in rec.description
        assert rec.region == "eurozone"
        assert rec.action_items == ["Consider a 1-year government bond at approximately 3.1%"]

    def test_singular_day(self, moderate_user):
        asset = build_asset(maturity_date=TODAY + timedelta(days=1))
        assert analyze_rollovers(TODAY, moderate_user, [asset], [])[0].title.endswith("matures in 1 day")

    def test_nothing_maturing(self, moderate_user, mixed_portfolio):
        assert analyze_rollovers(TODAY, moderate_user, mixed_portfolio, []) == []

    def test_keep_liquid_and_reinvest(self, conservative_user):
        asset = build_asset(
            face_value=10_000, purchase_price=9_800, interest_rate=2.0,
            maturity_date=TODAY + timedelta(days=45),
        )
        event = build_event(amount=5_000, event_date=TODAY + timedelta(days=60))
        items = analyze_rollovers(TODAY, conservative_user, [asset], [event])[0].action_items
        assert items == [
            f"Keep {format_currency(5_000, 'EUR')} liquid for upcoming expenses",
            f"Reinvest {format_currency(4_800, 'EUR')} in a new fixed income asset",
        ]

    def test_exact_cover_has_no_reinvest_item(self, moderate_user):
        asset = build_asset(purchase_price=5_000, maturity_date=TODAY + timedelta(days=20))
        event = build_event(amount=5_000, event_date=TODAY + timedelta(days=30))
        items = analyze_rollovers(TODAY, moderate_user, [asset], [event])[0].action_items
        assert items == ["Keep 5.000 € liquid for upcoming expenses"]

    def test_need_larger_than_value_suggests_replacement(self, conservative_user):
        asset = build_asset(purchase_price=1_000, maturity_date=TODAY + timedelta(days=20))
        event = build_event(amount=5_000, event_date=TODAY + timedelta(days=30))
        items = analyze_rollovers(TODAY, conservative_user, [asset], [event])[0].action_items
        assert items == ["Consider a 3-6 month government bond at approximately 2.8%"]

    def test_other_currency_need_ignored(self, moderate_user):
        asset = build_asset(maturity_date=TODAY + timedelta(days=20))
        event = build_event(currency="GBP", event_date=TODAY + timedelta(days=30))
        items = analyze_rollovers(TODAY, moderate_user, [asset], [event])[0].action_items
        assert items[0].startswith("Consider a 1-year")

    def test_cross_region_for_moderate(self, moderate_user):
        rec = analyze_rollovers(TODAY, moderate_user, [_gilt()], [])[0]
        assert rec.region == "uk"
        assert "£10,000" in rec.description
        assert rec.action_items == [
            "Consider a 1-year government bond at approximately 4.2%",
            "For diversification, consider a US government bond at approximately 4.5%",
        ]

    def test_cross_region_for_aggressive_uses_long_term(self, aggressive_user):
        items = analyze_rollovers(TODAY, aggressive_user, [_gilt()], [])[0].action_items
        assert items == [
            "Consider a 2+ year government bond at approximately 4.5%",
            "For diversification, consider a US government bond at approximately 4.8%",
        ]

    def test_no_cross_region_for_conservative(self, conservative_user):
        items = analyze_rollovers(TODAY, conservative_user, [_gilt()], [])[0].action_items
        assert items == ["Consider a 3-6 month government bond at approximately 3.9%"]

    def test_untabulated_region_uses_global_rates(self):
        user = build_user(risk_tolerance=RiskTolerance.MODERATE, region="asia")
        asset = build_asset(
            asset_type=AssetType.CD, region="asia", name="HK CD",
            maturity_date=TODAY + timedelta(days=10),
        )
        items = analyze_rollovers(TODAY, user, [asset], [])[0].action_items
        assert items == ["Consider a 1-year certificate of deposit at approximately 3.7%"]

    def test_one_recommendation_per_asset(self, moderate_user):
        assets = [
            build_asset(id="a", name="A", maturity_date=TODAY + timedelta(days=10)),
            build_asset(id="b", name="B", maturity_date=TODAY + timedelta(days=80)),
        ]
        recs = analyze_rollovers(TODAY, moderate_user, assets, [])
        assert [r.title for r in recs] == ["A matures in 10 days", "B matures in 80 days"]
