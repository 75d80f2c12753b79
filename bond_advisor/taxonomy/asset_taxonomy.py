"""
Asset taxonomy for fixed-income holdings.

Hierarchy: ``AssetGroup`` (top-level) → ``AssetType`` (instrument kind).

The diversification analysis reasons about five broad groups rather than
the eighteen instrument kinds a user can record. ``ASSET_GROUP_MAP`` is the
canonical integrity contract:
  - Every ``AssetGroup`` must have an entry.
  - Every ``AssetType`` must appear in exactly one group's list.

Run ``tests/test_taxonomy/test_asset_taxonomy.py`` to verify this contract.

The remaining enums (``IssuerType``, ``PaymentFrequency``, ``RatingAgency``,
``RiskTolerance``, ``RecommendationCategory``) are closed vocabularies used
by the models and the recommendation engine.

This module has NO imports from any other ``bond_advisor`` package.
"""

from enum import StrEnum


class AssetGroup(StrEnum):
    """Top-level allocation bucket used for diversification targets."""

    GOVERNMENT = "government"
    """Sovereign debt of any tenor, including inflation-linked issues."""

    CORPORATE = "corporate"
    """Corporate and financial issuer debt, including hybrids and perpetuals."""

    MUNICIPAL = "municipal"
    """Sub-sovereign / local authority debt."""

    SAVINGS = "savings"
    """Deposit-like instruments: CDs, savings bonds, money market."""

    OTHER = "other"
    """Anything not otherwise classified."""


class AssetType(StrEnum):
    """Kind of fixed-income instrument recorded by the user."""

    GOVERNMENT_BOND = "governmentBond"
    CORPORATE_BOND = "corporateBond"
    MUNICIPAL_BOND = "municipalBond"
    CD = "CD"
    TREASURY_BILL = "treasuryBill"
    TREASURY_NOTE = "treasuryNote"
    TREASURY_BOND = "treasuryBond"
    MONEY_MARKET = "moneyMarket"
    GILTS = "gilts"
    BUNDS = "bunds"
    OATS = "OATs"
    BTPS = "BTPs"
    STRUCTURED_NOTE = "structuredNote"
    INFLATION_LINKED_BOND = "inflationLinkedBond"
    SUBORDINATED_BOND = "subordinatedBond"
    PERPETUAL_BOND = "perpetualBond"
    """No maturity date; the only type allowed to omit one."""
    SAVINGS_BOND = "savingsBond"
    OTHER = "other"


class IssuerType(StrEnum):
    """Who issued the instrument."""

    GOVERNMENT = "government"
    CORPORATE = "corporate"
    MUNICIPAL = "municipal"
    FINANCIAL = "financial"
    OTHER = "other"


class PaymentFrequency(StrEnum):
    """Coupon payment schedule."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"
    AT_MATURITY = "atMaturity"
    IRREGULAR = "irregular"


class RatingAgency(StrEnum):
    """Agency that assigned the credit rating."""

    SP = "S&P"
    MOODYS = "Moodys"
    FITCH = "Fitch"
    DBRS = "DBRS"
    OTHER = "other"
    NONE = "none"


class RiskTolerance(StrEnum):
    """User risk profile; drives rollover tenor and allocation targets."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class RecommendationCategory(StrEnum):
    """Category tag attached to every engine output."""

    ROLLOVER = "rollover"
    DIVERSIFICATION = "diversification"
    LADDERING = "laddering"
    LIQUIDITY = "liquidity"
    CURRENCY = "currency"
    REGIONAL = "regional"
    YIELD = "yield"


# ── Integrity contract ────────────────────────────────────────────────────────

ASSET_GROUP_MAP: dict[AssetGroup, list[AssetType]] = {
    AssetGroup.GOVERNMENT: [
        AssetType.GOVERNMENT_BOND,
        AssetType.TREASURY_BILL,
        AssetType.TREASURY_NOTE,
        AssetType.TREASURY_BOND,
        AssetType.GILTS,
        AssetType.BUNDS,
        AssetType.OATS,
        AssetType.BTPS,
        AssetType.INFLATION_LINKED_BOND,
    ],
    AssetGroup.CORPORATE: [
        AssetType.CORPORATE_BOND,
        AssetType.STRUCTURED_NOTE,
        AssetType.SUBORDINATED_BOND,
        AssetType.PERPETUAL_BOND,
    ],
    AssetGroup.MUNICIPAL: [
        AssetType.MUNICIPAL_BOND,
    ],
    AssetGroup.SAVINGS: [
        AssetType.CD,
        AssetType.SAVINGS_BOND,
        AssetType.MONEY_MARKET,
    ],
    AssetGroup.OTHER: [
        AssetType.OTHER,
    ],
}

_TYPE_TO_GROUP: dict[AssetType, AssetGroup] = {
    asset_type: group
    for group, types in ASSET_GROUP_MAP.items()
    for asset_type in types
}

ASSET_TYPE_LABELS: dict[AssetType, str] = {
    AssetType.GOVERNMENT_BOND:       "government bond",
    AssetType.CORPORATE_BOND:        "corporate bond",
    AssetType.MUNICIPAL_BOND:        "municipal bond",
    AssetType.CD:                    "certificate of deposit",
    AssetType.TREASURY_BILL:         "treasury bill",
    AssetType.TREASURY_NOTE:         "treasury note",
    AssetType.TREASURY_BOND:         "treasury bond",
    AssetType.MONEY_MARKET:          "money market fund",
    AssetType.GILTS:                 "gilt",
    AssetType.BUNDS:                 "Bund",
    AssetType.OATS:                  "OAT",
    AssetType.BTPS:                  "BTP",
    AssetType.STRUCTURED_NOTE:       "structured note",
    AssetType.INFLATION_LINKED_BOND: "inflation-linked bond",
    AssetType.SUBORDINATED_BOND:     "subordinated bond",
    AssetType.PERPETUAL_BOND:        "perpetual bond",
    AssetType.SAVINGS_BOND:          "savings bond",
    AssetType.OTHER:                 "fixed income asset",
}


def asset_group(asset_type: AssetType) -> AssetGroup:
    """Return the allocation group for ``asset_type`` (``OTHER`` if unmapped)."""
    return _TYPE_TO_GROUP.get(asset_type, AssetGroup.OTHER)


def asset_type_label(asset_type: AssetType) -> str:
    """Return a human-readable label such as ``"government bond"``."""
    return ASSET_TYPE_LABELS.get(asset_type, str(asset_type))
