"""
Portfolio input models: the user profile, the assets they hold, and the
cash outflows they have planned.

All three are frozen: the recommendation engine treats them as an
immutable snapshot and never mutates a record. Record invariants are
enforced here at construction time so nothing downstream re-checks them:

  - ``face_value`` and ``purchase_price`` are strictly positive.
  - ``interest_rate`` is a percentage in [0, 100].
  - ``maturity_date`` is required unless the asset is a ``perpetualBond``.
  - ``call_date`` is required when ``callable`` is set.
  - ``LiquidityEvent.amount`` is strictly positive.

Field names follow Python conventions; the stored record keys
(``type``, ``country``, ``date``) are accepted as aliases so exported
records load without renaming.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from bond_advisor.taxonomy.asset_taxonomy import (
    AssetType,
    IssuerType,
    PaymentFrequency,
    RatingAgency,
    RiskTolerance,
)


def _normalize_currency(v: str) -> str:
    code = v.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"currency must be a 3-letter ISO code, got '{v}'.")
    return code


def _id_to_str(v: Any) -> Any:
    # Data stores may hand out integer keys.
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


def _normalize_region(v: str) -> str:
    region = v.strip().lower()
    if not region:
        raise ValueError("region must not be empty.")
    return region


class User(BaseModel):
    """Owner of a portfolio.

    Attributes:
        id: Opaque user identifier from the data store.
        name: Display name.
        email: Contact / login address.
        risk_tolerance: ``conservative``, ``moderate`` or ``aggressive``.
        currency: Preferred (home) currency, e.g. ``"EUR"``.
        region: Home region code, e.g. ``"eurozone"``, ``"uk"``, ``"us"``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = ""
    email: str = ""
    risk_tolerance: RiskTolerance
    currency: str
    region: str = Field(validation_alias=AliasChoices("region", "country"))

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return _id_to_str(v)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return _normalize_currency(v)

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        return _normalize_region(v)

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.id


class FixedIncomeAsset(BaseModel):
    """A single bond-like holding.

    Attributes:
        id: Opaque asset identifier.
        user_id: Owning user.
        asset_type: Instrument kind from ``AssetType``.
        issuer_type: Issuer category from ``IssuerType``.
        name: Human-readable name, e.g. ``"Bund 2.3% 2033"``.
        purchase_date: Date the position was bought.
        maturity_date: Redemption date; ``None`` only for perpetual bonds.
        face_value: Amount repaid at maturity (> 0).
        purchase_price: Amount paid (> 0).
        current_price: Latest known market price, if any.
        interest_rate: Nominal coupon in percent (0 for zero-coupon).
        payment_frequency: Coupon schedule.
        currency: ISO currency code.
        region: Market region code.
        rating / rating_agency / esg_rating: Optional credit metadata.
        taxable: Whether income is taxable.
        callable: Whether the issuer may redeem early.
        call_date: First call date; required when ``callable`` is set.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    user_id: str
    asset_type: AssetType = Field(validation_alias=AliasChoices("asset_type", "type"))
    issuer_type: IssuerType = IssuerType.OTHER
    name: str
    purchase_date: Optional[dt.date] = None
    maturity_date: Optional[dt.date] = None
    face_value: float = Field(gt=0)
    purchase_price: float = Field(gt=0)
    current_price: Optional[float] = None
    interest_rate: float = Field(ge=0, le=100)
    payment_frequency: PaymentFrequency = Field(
        default=PaymentFrequency.ANNUAL,
        validation_alias=AliasChoices("payment_frequency", "interest_payment_frequency"),
    )
    currency: str
    region: str
    rating: Optional[str] = None
    rating_agency: Optional[RatingAgency] = None
    esg_rating: Optional[str] = None
    taxable: bool = True
    callable: bool = False
    call_date: Optional[dt.date] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _id_to_str(v)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return _normalize_currency(v)

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        return _normalize_region(v)

    @model_validator(mode="after")
    def validate_maturity(self) -> "FixedIncomeAsset":
        """Dated instruments need a maturity date; callables need a call date."""
        if self.maturity_date is None and self.asset_type != AssetType.PERPETUAL_BOND:
            raise ValueError(
                f"maturity_date is required for asset type '{self.asset_type}'."
            )
        if self.callable and self.call_date is None:
            raise ValueError("call_date is required when callable is true.")
        return self

    @property
    def is_perpetual(self) -> bool:
        return self.asset_type == AssetType.PERPETUAL_BOND


class LiquidityEvent(BaseModel):
    """A planned cash outflow (tuition, house deposit, tax bill, ...).

    Attributes:
        id: Opaque event identifier.
        user_id: Owning user.
        amount: Outflow amount (> 0).
        currency: ISO currency code of the outflow.
        event_date: Date the cash is needed.
        description: Free-text note.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    user_id: str
    amount: float = Field(gt=0)
    currency: str
    event_date: dt.date = Field(validation_alias=AliasChoices("event_date", "date"))
    description: str = ""

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _id_to_str(v)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return _normalize_currency(v)


class PortfolioSnapshot(BaseModel):
    """A consistent, already-fetched view of one user's data."""

    model_config = ConfigDict(frozen=True)

    user: User
    assets: list[FixedIncomeAsset] = []
    events: list[LiquidityEvent] = []
