"""
Monthly cash-flow buckets: what matures and what is needed, month by month.

``build_monthly_cash_flows(today, assets, events, months, currency)``
returns one ``MonthlyCashFlow`` per calendar month starting with the month
that contains ``today``:

  maturities  face value of dated assets maturing in that month
  needs       sum of liquidity-event amounts dated in that month
  net         maturities - needs
  cumulative  running sum of ``net`` up to and including that month

Only records dated on or after ``today`` count; perpetual bonds never
mature. When ``currency`` is given, assets and events in other currencies
are ignored (no FX conversion is attempted).

The liquidity analysis uses a 24-month horizon in the user's currency; the
liquidity timeline report uses the configured horizon across all
currencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional

from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent
from bond_advisor.utils.time_utils import add_months, month_index, month_label, month_start


@dataclass(frozen=True)
class MonthlyCashFlow:
    """Aggregated inflows and outflows for one calendar month.

    Attributes:
        month:       First day of the month.
        maturities:  Face value redeemed in the month.
        needs:       Planned outflows in the month.
        cumulative:  Running net position through this month.
    """

    month: date
    maturities: float
    needs: float
    cumulative: float

    @property
    def net(self) -> float:
        return self.maturities - self.needs

    @property
    def label(self) -> str:
        return month_label(self.month)


def build_monthly_cash_flows(
    today: date,
    assets: Iterable[FixedIncomeAsset],
    events: Iterable[LiquidityEvent],
    months: int,
    currency: Optional[str] = None,
) -> list[MonthlyCashFlow]:
    """Bucket maturities and needs into ``months`` consecutive calendar months.

    Args:
        today:    Reference date; bucket 0 is the month containing it.
        assets:   Holdings to scan for maturities.
        events:   Planned outflows.
        months:   Number of buckets (must be >= 1).
        currency: Optional ISO code filter.

    Returns:
        ``months`` MonthlyCashFlow entries in chronological order.

    Raises:
        ValueError: If ``months < 1``.
    """
    if months < 1:
        raise ValueError(f"months must be >= 1, got {months}.")

    maturities = [0.0] * months
    needs = [0.0] * months

    for asset in assets:
        if asset.is_perpetual or asset.maturity_date is None:
            continue
        if currency is not None and asset.currency != currency:
            continue
        if asset.maturity_date < today:
            continue
        idx = month_index(today, asset.maturity_date)
        if idx < months:
            maturities[idx] += asset.face_value

    for event in events:
        if currency is not None and event.currency != currency:
            continue
        if event.event_date < today:
            continue
        idx = month_index(today, event.event_date)
        if idx < months:
            needs[idx] += event.amount

    first = month_start(today)
    flows: list[MonthlyCashFlow] = []
    running = 0.0
    for i in range(months):
        running += maturities[i] - needs[i]
        flows.append(
            MonthlyCashFlow(
                month=add_months(first, i),
                maturities=maturities[i],
                needs=needs[i],
                cumulative=running,
            )
        )
    return flows
