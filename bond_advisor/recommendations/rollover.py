"""
Rollover analysis: what to do with holdings that mature in the next 90 days.

For each dated asset maturing in (0, 90] days:

  1. Sum liquidity events in the same currency dated in (today, today + 6 months].
  2. If there is such a need and the asset's market value covers it:
       - keep the needed amount liquid,
       - reinvest any remainder.
  3. Otherwise suggest a replacement instrument from the rate table at the
     tenor implied by the user's risk tolerance and, for moderate or
     aggressive users holding an asset outside their home region, one
     cross-region alternative. The alternative is the first of eurozone,
     uk, us that is neither the user's region nor the asset's, so it never
     points back at either market (a eurozone user is not always sent to uk).

One ``rollover`` recommendation is emitted per soon-maturing asset, tagged
with that asset's region.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from bond_advisor.analytics.valuation import market_value
from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.recommendations.market_tables import (
    TERM_DESCRIPTIONS,
    Term,
    issuer_rate_bucket,
    lookup_rate,
    region_label,
    resolve_rate,
    term_for_risk,
)
from bond_advisor.taxonomy.asset_taxonomy import (
    RecommendationCategory,
    RiskTolerance,
    asset_type_label,
)
from bond_advisor.utils.money import format_currency
from bond_advisor.utils.time_utils import add_months, days_between

ROLLOVER_WINDOW_DAYS = 90
LIQUIDITY_LOOKAHEAD_MONTHS = 6

# Candidate regions for a cross-region suggestion, in order of preference.
CROSS_REGION_CANDIDATES: tuple[str, ...] = ("eurozone", "uk", "us")


def soon_maturing(assets: Sequence[FixedIncomeAsset], today: date) -> list[tuple[FixedIncomeAsset, int]]:
    """Return ``(asset, days_to_maturity)`` for assets maturing in (0, 90] days."""
    result: list[tuple[FixedIncomeAsset, int]] = []
    for asset in assets:
        if asset.maturity_date is None:
            continue
        days = days_between(today, asset.maturity_date)
        if 0 < days <= ROLLOVER_WINDOW_DAYS:
            result.append((asset, days))
    return result


def upcoming_needs(events: Sequence[LiquidityEvent], currency: str, today: date) -> float:
    """Sum of same-currency outflows in (today, today + 6 months]."""
    horizon = add_months(today, LIQUIDITY_LOOKAHEAD_MONTHS)
    return sum(
        e.amount
        for e in events
        if e.currency == currency and today < e.event_date <= horizon
    )


def cross_region_alternative(user_region: str, asset_region: str) -> str | None:
    """First candidate region that is neither the user's nor the asset's."""
    for region in CROSS_REGION_CANDIDATES:
        if region not in (user_region, asset_region):
            return region
    return None


def rollover_options(
    asset: FixedIncomeAsset,
    user: User,
    needs: float,
) -> list[str]:
    """Build the ordered action items for one maturing asset."""
    value = market_value(asset)
    options: list[str] = []

    if needs > 0 and value >= needs:
        options.append(
            f"Keep {format_currency(needs, asset.currency)} liquid for upcoming expenses"
        )
        remainder = value - needs
        if remainder > 0:
            options.append(
                f"Reinvest {format_currency(remainder, asset.currency)} in a new fixed income asset"
            )
        return options

    term = term_for_risk(user.risk_tolerance)
    _, bucket, rate = resolve_rate(asset.region, asset.asset_type, asset.issuer_type, term)
    options.append(
        f"Consider a {TERM_DESCRIPTIONS[term]} {asset_type_label(bucket)} "
        f"at approximately {rate:.1f}%"
    )

    if user.region != asset.region and user.risk_tolerance != RiskTolerance.CONSERVATIVE:
        alternate = cross_region_alternative(user.region, asset.region)
        if alternate is not None:
            alt_bucket = issuer_rate_bucket(asset.issuer_type)
            alt_term = Term.MEDIUM if user.risk_tolerance == RiskTolerance.MODERATE else Term.LONG
            alt_rate = lookup_rate(alternate, alt_bucket, alt_term)
            options.append(
                f"For diversification, consider a {region_label(alternate)} "
                f"{asset_type_label(alt_bucket)} at approximately {alt_rate:.1f}%"
            )

    return options


def analyze_rollovers(
    today: date,
    user: User,
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
) -> list[Recommendation]:
    """One ``rollover`` recommendation per asset maturing within 90 days."""
    recommendations: list[Recommendation] = []

    for asset, days in soon_maturing(assets, today):
        needs = upcoming_needs(events, asset.currency, today)
        day_word = "day" if days == 1 else "days"
        value_str = format_currency(market_value(asset), asset.currency)
        recommendations.append(
            Recommendation(
                category=RecommendationCategory.ROLLOVER,
                title=f"{asset.name} matures in {days} {day_word}",
                description=(
                    f"Your {value_str} {asset_type_label(asset.asset_type)} matures in "
                    f"{days} {day_word}. Consider these reinvestment options:"
                ),
                action_items=rollover_options(asset, user, needs),
                region=asset.region,
            )
        )

    return recommendations
