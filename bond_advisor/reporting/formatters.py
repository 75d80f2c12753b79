"""
ASCII terminal formatters for CLI reporting commands.

All formatters take model objects or analytics results and return plain
multi-line strings suitable for ``typer.echo()``. Money is rendered with
``utils.money.format_currency`` in the user's currency.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from collections.abc import Sequence

from bond_advisor.analytics.cashflow import MonthlyCashFlow
from bond_advisor.analytics.summary import PortfolioSummary
from bond_advisor.models.portfolio import User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory
from bond_advisor.utils.money import format_currency


# ── Recommendations ───────────────────────────────────────────────────────────


def group_by_category(
    recommendations: Sequence[Recommendation],
) -> dict[RecommendationCategory, list[Recommendation]]:
    """Bucket recommendations by category, preserving engine order in each bucket.

    Buckets appear in ``RecommendationCategory`` declaration order; empty
    categories are omitted.
    """
    buckets: dict[RecommendationCategory, list[Recommendation]] = {
        cat: [] for cat in RecommendationCategory
    }
    for rec in recommendations:
        buckets[rec.category].append(rec)
    return {cat: recs for cat, recs in buckets.items() if recs}


def format_recommendations(
    recommendations: Sequence[Recommendation],
    user: User,
    as_of: str = "",
) -> str:
    """Format recommendations grouped by category.

    Example::

        === Recommendations for Ana ===
          As of: 2026-10-17

          [ROLLOVER]
            * Bund 2026 matures in 45 days
              Your 5.000 € government bond matures in 45 days. ...
                - Consider a 1-year government bond at approximately 3.2%
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Recommendations for {user.display_name} ===")
    if as_of:
        lines.append(f"  As of: {as_of}")

    if not recommendations:
        lines.append("")
        lines.append("  (no recommendations: your portfolio looks balanced)")
        return "\n".join(lines)

    for cat, recs in group_by_category(recommendations).items():
        lines.append("")
        lines.append(f"  [{cat.value.upper()}]")
        for rec in recs:
            lines.append(f"    * {rec.title}")
            if rec.description:
                lines.append(f"      {rec.description}")
            for item in rec.action_items:
                lines.append(f"        - {item}")
            if rec.link:
                lines.append(f"      More: {rec.link}")

    lines.append("")
    lines.append(f"  {len(recommendations)} recommendation(s)")
    return "\n".join(lines)


# ── Portfolio summary ─────────────────────────────────────────────────────────


def _bucket_rows(summary: PortfolioSummary, bucket: dict[str, float], currency: str) -> list[str]:
    rows = []
    for key, value in bucket.items():
        if value <= 0:
            continue
        rows.append(
            f"    {key:<14}  {format_currency(value, currency):>16}  "
            f"{summary.share(bucket, key):>6.1f}%"
        )
    return rows


def format_summary(summary: PortfolioSummary, user: User) -> str:
    """Format headline portfolio statistics and value breakdowns."""
    cur = user.currency
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Portfolio Summary: {user.display_name} ===")
    lines.append(f"  Assets:             {summary.asset_count}")
    lines.append(f"  Total value:        {format_currency(summary.total_value, cur)}")
    lines.append(f"  Average yield:      {summary.weighted_yield:.2f}%")
    lines.append(f"  Average maturity:   {summary.weighted_maturity:.1f} years")

    if summary.asset_count == 0:
        lines.append("")
        lines.append("  (no assets in portfolio)")
        return "\n".join(lines)

    lines.append(f"  Taxable:            {format_currency(summary.taxable_value, cur)}")
    lines.append(f"  Tax-exempt:         {format_currency(summary.tax_exempt_value, cur)}")

    for heading, bucket in (
        ("By asset group", summary.by_group),
        ("By currency", summary.by_currency),
        ("By region", summary.by_region),
    ):
        lines.append("")
        lines.append(f"  {heading}:")
        lines.extend(_bucket_rows(summary, bucket, cur))

    return "\n".join(lines)


# ── Liquidity timeline ────────────────────────────────────────────────────────


def format_timeline(flows: Sequence[MonthlyCashFlow], user: User) -> str:
    """Format the month-by-month maturities / needs / cumulative table.

    Months with a negative cumulative balance are flagged with ``!``.
    """
    cur = user.currency
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Liquidity Timeline ({len(flows)} months) ===")

    header = f"    {'Month':<9}  {'Maturing':>14}  {'Needs':>14}  {'Cumulative':>14}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))

    for flow in flows:
        flag = " !" if flow.cumulative < 0 else ""
        lines.append(
            f"    {flow.label:<9}  "
            f"{format_currency(flow.maturities, cur):>14}  "
            f"{format_currency(flow.needs, cur):>14}  "
            f"{format_currency(flow.cumulative, cur):>14}{flag}"
        )

    return "\n".join(lines)
