"""
Static market tables and the ordered fallback lookups over them.

APPROXIMATE_RATES
    region -> rate bucket -> term -> approximate yield (%). Illustrative
    snapshot values; a live feed would replace this table, not the lookups.
    Terms map from risk tolerance: conservative -> short (3-6 months),
    moderate -> medium (1 year), aggressive -> long (2+ years). Money
    market quotes only exist for the short term.

IDEAL_ALLOCATION
    risk tolerance -> asset group -> (min %, max %). No single range spans
    0-100, so a portfolio concentrated in one group always shows at least
    one imbalance.

Rate lookup fallback chain (``resolve_rate``)
----------------------------------------------
    1. region        : asset region if tabulated, else ``global``
    2. rate bucket   : the asset type itself, then its alias bucket
                       (treasury notes/bonds -> treasuryBill, national
                       sovereign lines -> governmentBond), then the issuer
                       bucket (corporate -> corporateBond, else
                       governmentBond)
    3. table miss    : ``global`` / ``governmentBond`` for the term
    4. last resort   : DEFAULT_TERM_RATES (3.0 / 3.5 / 4.0)
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from bond_advisor.taxonomy.asset_taxonomy import (
    AssetGroup,
    AssetType,
    IssuerType,
    RiskTolerance,
)


class Term(StrEnum):
    """Replacement-instrument tenor bucket."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


GLOBAL_REGION = "global"

TERM_BY_RISK: Mapping[RiskTolerance, Term] = MappingProxyType({
    RiskTolerance.CONSERVATIVE: Term.SHORT,
    RiskTolerance.MODERATE:     Term.MEDIUM,
    RiskTolerance.AGGRESSIVE:   Term.LONG,
})

TERM_DESCRIPTIONS: Mapping[Term, str] = MappingProxyType({
    Term.SHORT:  "3-6 month",
    Term.MEDIUM: "1-year",
    Term.LONG:   "2+ year",
})

DEFAULT_TERM_RATES: Mapping[Term, float] = MappingProxyType({
    Term.SHORT:  3.0,
    Term.MEDIUM: 3.5,
    Term.LONG:   4.0,
})

REGION_LABELS: Mapping[str, str] = MappingProxyType({
    "eurozone": "Eurozone",
    "uk":       "UK",
    "us":       "US",
    "global":   "Global",
})


def _rates(short: float, medium: float | None = None, long: float | None = None) -> Mapping[Term, float]:
    table = {Term.SHORT: short}
    if medium is not None:
        table[Term.MEDIUM] = medium
    if long is not None:
        table[Term.LONG] = long
    return MappingProxyType(table)


APPROXIMATE_RATES: Mapping[str, Mapping[AssetType, Mapping[Term, float]]] = MappingProxyType({
    "eurozone": MappingProxyType({
        AssetType.GOVERNMENT_BOND: _rates(2.8, 3.1, 3.5),
        AssetType.CORPORATE_BOND:  _rates(3.2, 3.7, 4.1),
        AssetType.CD:              _rates(2.5, 2.9, 3.3),
        AssetType.TREASURY_BILL:   _rates(2.7, 3.0, 3.4),
        AssetType.MONEY_MARKET:    _rates(2.4),
    }),
    "uk": MappingProxyType({
        AssetType.GOVERNMENT_BOND: _rates(3.9, 4.2, 4.5),
        AssetType.CORPORATE_BOND:  _rates(4.3, 4.7, 5.1),
        AssetType.CD:              _rates(3.7, 4.0, 4.3),
        AssetType.TREASURY_BILL:   _rates(3.8, 4.1, 4.4),
        AssetType.MONEY_MARKET:    _rates(3.6),
    }),
    "us": MappingProxyType({
        AssetType.GOVERNMENT_BOND: _rates(4.1, 4.5, 4.8),
        AssetType.CORPORATE_BOND:  _rates(4.5, 5.0, 5.4),
        AssetType.CD:              _rates(4.0, 4.3, 4.6),
        AssetType.TREASURY_BILL:   _rates(3.9, 4.2, 4.4),
        AssetType.MONEY_MARKET:    _rates(3.8),
    }),
    GLOBAL_REGION: MappingProxyType({
        AssetType.GOVERNMENT_BOND: _rates(3.5, 3.9, 4.2),
        AssetType.CORPORATE_BOND:  _rates(4.0, 4.5, 4.8),
        AssetType.CD:              _rates(3.4, 3.7, 4.0),
        AssetType.TREASURY_BILL:   _rates(3.5, 3.8, 4.1),
        AssetType.MONEY_MARKET:    _rates(3.3),
    }),
})

# Asset types quoted under another row of the rate table.
RATE_BUCKET_ALIASES: Mapping[AssetType, AssetType] = MappingProxyType({
    AssetType.TREASURY_NOTE: AssetType.TREASURY_BILL,
    AssetType.TREASURY_BOND: AssetType.TREASURY_BILL,
    AssetType.GILTS:         AssetType.GOVERNMENT_BOND,
    AssetType.BUNDS:         AssetType.GOVERNMENT_BOND,
    AssetType.OATS:          AssetType.GOVERNMENT_BOND,
    AssetType.BTPS:          AssetType.GOVERNMENT_BOND,
})

Range = tuple[float, float]

IDEAL_ALLOCATION: Mapping[RiskTolerance, Mapping[AssetGroup, Range]] = MappingProxyType({
    RiskTolerance.CONSERVATIVE: MappingProxyType({
        AssetGroup.GOVERNMENT: (40, 70),
        AssetGroup.CORPORATE:  (10, 30),
        AssetGroup.MUNICIPAL:  (0, 20),
        AssetGroup.SAVINGS:    (10, 30),
        AssetGroup.OTHER:      (0, 10),
    }),
    RiskTolerance.MODERATE: MappingProxyType({
        AssetGroup.GOVERNMENT: (30, 50),
        AssetGroup.CORPORATE:  (20, 40),
        AssetGroup.MUNICIPAL:  (0, 30),
        AssetGroup.SAVINGS:    (5, 20),
        AssetGroup.OTHER:      (0, 15),
    }),
    RiskTolerance.AGGRESSIVE: MappingProxyType({
        AssetGroup.GOVERNMENT: (15, 40),
        AssetGroup.CORPORATE:  (30, 60),
        AssetGroup.MUNICIPAL:  (0, 40),
        AssetGroup.SAVINGS:    (0, 15),
        AssetGroup.OTHER:      (0, 20),
    }),
})


# ── Fallback lookups ──────────────────────────────────────────────────────────

def term_for_risk(risk: RiskTolerance) -> Term:
    """Replacement tenor for a risk profile."""
    return TERM_BY_RISK[risk]


def region_label(region: str) -> str:
    """Display label for a region code (``"uk"`` -> ``"UK"``)."""
    return REGION_LABELS.get(region, region.title())


def issuer_rate_bucket(issuer_type: IssuerType) -> AssetType:
    """Rate bucket used when the asset type itself is not tabulated."""
    if issuer_type == IssuerType.CORPORATE:
        return AssetType.CORPORATE_BOND
    return AssetType.GOVERNMENT_BOND


def resolve_rate_region(region: str) -> str:
    """Step 1: the asset's region if tabulated, else ``global``."""
    return region if region in APPROXIMATE_RATES else GLOBAL_REGION


def resolve_rate_bucket(
    region: str,
    asset_type: AssetType,
    issuer_type: IssuerType,
    term: Term,
) -> AssetType:
    """Step 2: first of (type, alias, issuer bucket) quoted for ``term`` in ``region``."""
    quotes = APPROXIMATE_RATES.get(region, {})
    candidates = [asset_type]
    if asset_type in RATE_BUCKET_ALIASES:
        candidates.append(RATE_BUCKET_ALIASES[asset_type])
    for candidate in candidates:
        if term in quotes.get(candidate, {}):
            return candidate
    return issuer_rate_bucket(issuer_type)


def lookup_rate(region: str, bucket: AssetType, term: Term) -> float:
    """Steps 3 and 4: exact quote, else global government, else the default."""
    quote = APPROXIMATE_RATES.get(region, {}).get(bucket, {}).get(term)
    if quote is not None:
        return quote
    fallback = APPROXIMATE_RATES.get(GLOBAL_REGION, {}).get(AssetType.GOVERNMENT_BOND, {}).get(term)
    if fallback is not None:
        return fallback
    return DEFAULT_TERM_RATES[term]


def resolve_rate(
    region: str,
    asset_type: AssetType,
    issuer_type: IssuerType,
    term: Term,
) -> tuple[str, AssetType, float]:
    """Run the full fallback chain.

    Returns:
        ``(region_used, rate_bucket, approximate_rate_pct)``.
    """
    rate_region = resolve_rate_region(region)
    bucket = resolve_rate_bucket(rate_region, asset_type, issuer_type, term)
    return rate_region, bucket, lookup_rate(rate_region, bucket, term)


def ideal_range(risk: RiskTolerance, group: AssetGroup) -> Range:
    """Target (min %, max %) for ``group`` under ``risk``."""
    return IDEAL_ALLOCATION[risk][group]
