"""
Shared pytest fixtures for the bond advisor test suite.

Provides:
  - ``TODAY``: the fixed reference date every engine test runs against.
  - ``make_user`` / ``make_asset`` / ``make_event``: factories returning
    valid model instances with overridable fields.
  - Sample users and a small mixed portfolio.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

import pytest

from bond_advisor.models.portfolio import FixedIncomeAsset, LiquidityEvent, User
from bond_advisor.taxonomy.asset_taxonomy import AssetType, IssuerType, RiskTolerance

TODAY = date(2026, 10, 17)


def build_user(**overrides: Any) -> User:
    fields: dict[str, Any] = {
        "id": "user-1",
        "name": "Ana",
        "email": "ana@example.com",
        "risk_tolerance": RiskTolerance.MODERATE,
        "currency": "EUR",
        "region": "eurozone",
    }
    fields.update(overrides)
    return User(**fields)


def build_asset(**overrides: Any) -> FixedIncomeAsset:
    fields: dict[str, Any] = {
        "id": "asset-1",
        "user_id": "user-1",
        "asset_type": AssetType.GOVERNMENT_BOND,
        "issuer_type": IssuerType.GOVERNMENT,
        "name": "Bund 2.5% 2029",
        "purchase_date": date(2024, 1, 10),
        "maturity_date": date(2029, 1, 10),
        "face_value": 10_000.0,
        "purchase_price": 10_000.0,
        "interest_rate": 2.5,
        "currency": "EUR",
        "region": "eurozone",
    }
    fields.update(overrides)
    return FixedIncomeAsset(**fields)


def build_event(**overrides: Any) -> LiquidityEvent:
    fields: dict[str, Any] = {
        "id": "event-1",
        "user_id": "user-1",
        "amount": 1_000.0,
        "currency": "EUR",
        "event_date": date(2026, 11, 20),
        "description": "Car repair",
    }
    fields.update(overrides)
    return LiquidityEvent(**fields)


# ── Factory fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def make_user() -> Callable[..., User]:
    return build_user


@pytest.fixture
def make_asset() -> Callable[..., FixedIncomeAsset]:
    return build_asset


@pytest.fixture
def make_event() -> Callable[..., LiquidityEvent]:
    return build_event


# ── Sample domain objects ─────────────────────────────────────────────────────

@pytest.fixture
def moderate_user() -> User:
    """Eurozone, EUR, moderate risk."""
    return build_user()


@pytest.fixture
def conservative_user() -> User:
    return build_user(risk_tolerance=RiskTolerance.CONSERVATIVE)


@pytest.fixture
def aggressive_user() -> User:
    return build_user(risk_tolerance=RiskTolerance.AGGRESSIVE)


@pytest.fixture
def mixed_portfolio() -> list[FixedIncomeAsset]:
    """Government, corporate and savings holdings spread over several years."""
    return [
        build_asset(id="gov", maturity_date=date(2028, 5, 1)),
        build_asset(
            id="corp",
            asset_type=AssetType.CORPORATE_BOND,
            issuer_type=IssuerType.CORPORATE,
            name="Siemens 3% 2030",
            maturity_date=date(2030, 3, 1),
            face_value=8_000.0,
            purchase_price=8_000.0,
            interest_rate=3.0,
        ),
        build_asset(
            id="cd",
            asset_type=AssetType.CD,
            issuer_type=IssuerType.FINANCIAL,
            name="Bank CD 2027",
            maturity_date=date(2027, 9, 1),
            face_value=2_000.0,
            purchase_price=2_000.0,
            interest_rate=2.8,
        ),
    ]
