"""
Portfolio file loaders: the data-store side of the recommendation engine.

JSON snapshot
-------------
One file per user::

    {
      "user":   {"id": "u1", "risk_tolerance": "moderate", "currency": "EUR", "country": "eurozone"},
      "assets": [{"id": "a1", "type": "bunds", "name": "...", "maturity_date": "2027-01-15", ...}],
      "liquidity_events": [{"id": "e1", "amount": 5000, "date": "2026-12-01", ...}]
    }

``events`` is accepted in place of ``liquidity_events``. Keys follow the
stored record layout (``type``, ``country``, ``date``) or the model field
names; unknown keys such as ``created_at`` are ignored. Empty strings in
optional fields are treated as absent.

Defaults applied before validation:
  - user without ``currency`` / ``region``  → ``[defaults]`` from config
  - asset/event without ``currency``        → the user's currency
  - asset without ``region``                → the user's region
  - asset/event without ``user_id``         → the user's id

Records whose ``user_id`` names another user are dropped with a warning,
so the engine only ever sees one user's data.

Asset CSV
---------
Header row required. Required columns:
  id, type, name, face_value, purchase_price, interest_rate

Every other ``FixedIncomeAsset`` field may appear as an optional column.
Money and rate cells may carry symbols and thousands separators as typed
in a spreadsheet ("€ 10,000", "2.5%"); they are cleaned with
``utils.money.parse_input_value``.

Errors
------
Missing files raise ``FileNotFoundError``. All records are validated
before anything is returned; if any fail, one ``ValueError`` lists the
first 10 failures.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from bond_advisor.config import DefaultsConfig
from bond_advisor.models.portfolio import (
    FixedIncomeAsset,
    LiquidityEvent,
    PortfolioSnapshot,
    User,
)
from bond_advisor.utils.money import parse_input_value

logger = logging.getLogger(__name__)

MAX_ERRORS_SHOWN = 10

REQUIRED_CSV_COLUMNS = frozenset({
    "id", "type", "name", "face_value", "purchase_price", "interest_rate",
})

NUMERIC_CSV_COLUMNS = frozenset({
    "face_value", "purchase_price", "current_price", "interest_rate",
})


class PortfolioLoadError(ValueError):
    """Raised when one or more records in a portfolio file fail validation."""

    def __init__(self, source: str, errors: list[tuple[str, str]]) -> None:
        self.source = source
        self.errors = errors
        detail = "\n".join(f"  {where}: {msg}" for where, msg in errors[:MAX_ERRORS_SHOWN])
        hidden = len(errors) - MAX_ERRORS_SHOWN
        suffix = f"\n  … and {hidden} more" if hidden > 0 else ""
        super().__init__(
            f"{len(errors)} record(s) failed validation in {source}:\n{detail}{suffix}"
        )


def load_portfolio(
    path: Path,
    defaults: Optional[DefaultsConfig] = None,
) -> PortfolioSnapshot:
    """Load one user's portfolio snapshot from a JSON file.

    Args:
        path:     JSON file (must exist).
        defaults: Fallback currency/region for the user record.

    Returns:
        Validated snapshot with assets and events filtered to the user.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON, has no user, or any
            record fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Portfolio file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Portfolio file is not valid JSON: {path}: {exc}") from exc

    if not isinstance(raw, dict) or not isinstance(raw.get("user"), dict):
        raise ValueError(f"Portfolio file must be an object with a 'user' record: {path}")

    return snapshot_from_dict(raw, defaults or DefaultsConfig(), source=path.name)


def snapshot_from_dict(
    raw: dict[str, Any],
    defaults: DefaultsConfig,
    source: str = "<dict>",
) -> PortfolioSnapshot:
    """Validate an already-parsed snapshot mapping. See module docstring."""
    try:
        user = User.model_validate(_with_user_defaults(raw["user"], defaults))
    except ValidationError as exc:
        raise PortfolioLoadError(source, [("user", _first_line(exc))]) from exc

    asset_rows = raw.get("assets") or []
    event_rows = raw.get("liquidity_events", raw.get("events")) or []

    errors: list[tuple[str, str]] = []
    assets = _validate_records(
        FixedIncomeAsset, asset_rows, user, "asset", errors, with_region=True,
    )
    events = _validate_records(
        LiquidityEvent, event_rows, user, "event", errors, with_region=False,
    )

    if errors:
        raise PortfolioLoadError(source, errors)

    logger.info(
        "Loaded portfolio for user %s from %s: %d assets, %d events",
        user.id, source, len(assets), len(events),
    )
    return PortfolioSnapshot(user=user, assets=assets, events=events)


def parse_asset_csv(path: Path, user: User) -> list[FixedIncomeAsset]:
    """Parse a CSV of holdings for ``user`` into validated assets.

    Missing ``currency`` / ``region`` / ``user_id`` cells inherit from
    ``user``; rows belonging to another user are dropped with a warning.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If required columns are missing or any row fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Asset CSV file not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = REQUIRED_CSV_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        rows = [_clean_csv_row(row) for row in reader]

    if not rows:
        logger.warning("Asset CSV is empty (header only): %s", path)
        return []

    errors: list[tuple[str, str]] = []
    assets = _validate_records(
        FixedIncomeAsset, rows, user, "row", errors, with_region=True, first_index=2,
    )
    if errors:
        raise PortfolioLoadError(path.name, errors)

    logger.info("Parsed %d assets from %s", len(assets), path.name)
    return assets


# ── Private helpers ────────────────────────────────────────────────────────────

def _with_user_defaults(record: dict[str, Any], defaults: DefaultsConfig) -> dict[str, Any]:
    out = _clean(record)
    out.setdefault("currency", defaults.currency)
    if "region" not in out and "country" not in out:
        out["region"] = defaults.region
    return out


def _with_owner_defaults(
    record: dict[str, Any],
    user: User,
    with_region: bool,
) -> dict[str, Any]:
    out = _clean(record)
    out.setdefault("user_id", user.id)
    out.setdefault("currency", user.currency)
    if with_region:
        out.setdefault("region", user.region)
    return out


def _clean_csv_row(row: dict[str | None, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in row.items():
        if not key:
            continue
        key = key.strip()
        text = (value or "").strip()
        out[key] = _csv_number(text) if key in NUMERIC_CSV_COLUMNS else text
    return out


def _csv_number(text: str) -> Any:
    """Plain numbers pass through; "€ 10,000"-style cells are cleaned.

    Cells without digits, or with a minus sign, are returned unchanged so
    validation reports them.
    """
    if text.startswith("-") or not any(c.isdigit() for c in text):
        return text
    try:
        return float(text)
    except ValueError:
        return parse_input_value(text)


def _clean(record: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is ``None`` or a blank string."""
    return {
        k: v for k, v in record.items()
        if v is not None and not (isinstance(v, str) and not v.strip())
    }


def _validate_records(
    model: type[BaseModel],
    rows: list[Any],
    user: User,
    label: str,
    errors: list[tuple[str, str]],
    with_region: bool,
    first_index: int = 0,
) -> list[Any]:
    """Validate ``rows`` into ``model`` instances owned by ``user``.

    Failures are appended to ``errors``; rows for other users are skipped.
    """
    valid: list[Any] = []
    dropped = 0

    for i, row in enumerate(rows, start=first_index):
        where = f"{label} {i}"
        if not isinstance(row, dict):
            errors.append((where, f"expected an object, got {type(row).__name__}"))
            continue
        record = _with_owner_defaults(row, user, with_region)
        if str(record["user_id"]) != user.id:
            dropped += 1
            continue
        try:
            valid.append(model.model_validate(record))
        except ValidationError as exc:
            errors.append((where, _first_line(exc)))

    if dropped:
        logger.warning(
            "Dropped %d %s record(s) that belong to a user other than %s",
            dropped, label, user.id,
        )
    return valid


def _first_line(exc: ValidationError) -> str:
    """Compact one-line summary of a pydantic validation error."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
