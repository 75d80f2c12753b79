"""
Recommendation engine entry point.

``generate_recommendations(user, assets, events, today=None)`` runs every
analysis against one immutable snapshot and concatenates their outputs in
a fixed order:

    rollover -> diversification (+ regional, currency) -> laddering
             -> liquidity -> yield

Each analysis is a pure function ``(today, user, assets, events) ->
list[Recommendation]`` listed in ``ANALYSES``; none depends on another's
output, so adding one means appending to the tuple.

The engine never raises for data it can degrade on: an empty asset list or
a missing user returns ``[]``, and each analysis short-circuits on its own
degenerate inputs (zero totals, too few assets).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date
from typing import Optional

from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.models.recommendation import Recommendation
from bond_advisor.recommendations.diversification import analyze_diversification
from bond_advisor.recommendations.laddering import analyze_laddering
from bond_advisor.recommendations.liquidity import analyze_liquidity
from bond_advisor.recommendations.rollover import analyze_rollovers
from bond_advisor.recommendations.yield_commentary import analyze_yield
from bond_advisor.utils.time_utils import today_utc

logger = logging.getLogger(__name__)

Analysis = Callable[
    [date, User, Sequence[FixedIncomeAsset], Sequence[LiquidityEvent]],
    list[Recommendation],
]

ANALYSES: tuple[tuple[str, Analysis], ...] = (
    ("rollover",        analyze_rollovers),
    ("diversification", analyze_diversification),
    ("laddering",       analyze_laddering),
    ("liquidity",       analyze_liquidity),
    ("yield",           analyze_yield),
)


def generate_recommendations(
    user: Optional[User],
    assets: Sequence[FixedIncomeAsset],
    events: Sequence[LiquidityEvent],
    today: Optional[date] = None,
) -> list[Recommendation]:
    """Produce all recommendations for one user's portfolio snapshot.

    Args:
        user:   Portfolio owner; ``None`` yields no recommendations.
        assets: Holdings already filtered to ``user``.
        events: Planned outflows already filtered to ``user``.
        today:  Reference date; defaults to today (UTC). Pass it explicitly
                for reproducible output.

    Returns:
        Recommendations in analysis order; ``[]`` when there is no user or
        no assets.
    """
    if user is None or not assets:
        return []

    as_of = today or today_utc()
    assets = list(assets)
    events = list(events)

    recommendations: list[Recommendation] = []
    for name, analysis in ANALYSES:
        produced = analysis(as_of, user, assets, events)
        logger.debug("Analysis %s produced %d recommendation(s)", name, len(produced))
        recommendations.extend(produced)

    logger.info(
        "Generated %d recommendation(s) for user %s (%d assets, %d events, as of %s)",
        len(recommendations), user.id, len(assets), len(events), as_of,
    )
    return recommendations
