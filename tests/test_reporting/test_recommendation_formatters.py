"""Tests for the ASCII CLI formatters."""

from __future__ import annotations

from datetime import date

from bond_advisor.analytics.cashflow import build_monthly_cash_flows
from bond_advisor.analytics.summary import summarize_portfolio
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.reporting.formatters import (
    format_recommendations,
    format_summary,
    format_timeline,
    group_by_category,
)
from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory
from conftest import TODAY, build_asset, build_event


def _rec(category, title, items=()):
    return Recommendation(category=category, title=title, description="desc", action_items=list(items))


class TestGroupByCategory:
    def test_declaration_order_and_stable_within(self):
        recs = [
            _rec("yield", "Y"),
            _rec("rollover", "R1"),
            _rec("currency", "C"),
            _rec("rollover", "R2"),
        ]
        grouped = group_by_category(recs)
        assert list(grouped) == [
            RecommendationCategory.ROLLOVER,
            RecommendationCategory.CURRENCY,
            RecommendationCategory.YIELD,
        ]
        assert [r.title for r in grouped[RecommendationCategory.ROLLOVER]] == ["R1", "R2"]


class TestFormatRecommendations:
    def test_renders_blocks(self, moderate_user):
        out = format_recommendations(
            [_rec("rollover", "Bund matures in 30 days", ["Do a thing"])],
            moderate_user,
            as_of="2026-10-17",
        )
        assert "=== Recommendations for Ana ===" in out
        assert "As of: 2026-10-17" in out
        assert "[ROLLOVER]" in out
        assert "* Bund matures in 30 days" in out
        assert "- Do a thing" in out
        assert "1 recommendation(s)" in out

    def test_empty(self, moderate_user):
        assert "no recommendations" in format_recommendations([], moderate_user)


class TestFormatSummary:
    def test_headline_values(self, moderate_user, mixed_portfolio):
        out = format_summary(summarize_portfolio(mixed_portfolio, TODAY), moderate_user)
        assert "Assets:             3" in out
        assert "20.000 €" in out
        assert "By asset group:" in out
        assert "50.0%" in out

    def test_empty_portfolio(self, moderate_user):
        out = format_summary(summarize_portfolio([], TODAY), moderate_user)
        assert "(no assets in portfolio)" in out


class TestFormatTimeline:
    def test_rows_and_negative_flag(self, moderate_user):
        flows = build_monthly_cash_flows(
            TODAY,
            [build_asset(maturity_date=date(2026, 12, 5), face_value=5_000)],
            [build_event(amount=1_000, event_date=date(2026, 11, 20))],
            3,
        )
        out = format_timeline(flows, moderate_user)
        lines = out.splitlines()
        assert "=== Liquidity Timeline (3 months) ===" in out
        nov = next(line for line in lines if line.strip().startswith("Nov 2026"))
        dec = next(line for line in lines if line.strip().startswith("Dec 2026"))
        assert nov.endswith("!")
        assert "-1.000 €" in nov
        assert not dec.endswith("!")
        assert "4.000 €" in dec
