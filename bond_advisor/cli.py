"""
Bond advisor CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the portfolio snapshot (``--portfolio`` or ``data.portfolio_file``).
  4. Run the analysis.
  5. Report the result to stdout (errors to stderr, exit code 1).

Install and run::

    pip install -e .
    bond-advisor --help
    bond-advisor validate-config
    bond-advisor validate-portfolio --portfolio config/examples/portfolio.json
    bond-advisor summary
    bond-advisor timeline --months 24
    bond-advisor recommend --as-of 2026-10-17 --export-dir data/outputs
    bond-advisor recommend --assets-csv holdings.csv
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="bond-advisor",
    help="Fixed-income portfolio advisor: rollover, diversification, ladder and liquidity advice.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _fail(message: str) -> typer.Exit:
    typer.echo(f"[ERROR] {message}", err=True)
    return typer.Exit(code=1)


def _load_config_or_exit(config_path: Optional[str] = None):
    """Return the merged AppConfig; config errors end the command with exit code 1."""
    from pydantic import ValidationError

    from bond_advisor.config import load_config

    try:
        return load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        raise _fail(str(exc))
    except (ValidationError, ValueError) as exc:
        raise _fail(f"Invalid configuration: {exc}")


def _configure_logging(config):
    from bond_advisor.utils.logging import configure_logging

    configure_logging(config.logging)


def _load_portfolio_or_exit(config, portfolio_path: Optional[str]):
    """Load the portfolio snapshot, printing a friendly error and exiting on failure."""
    from bond_advisor.ingestion.portfolio_loader import load_portfolio

    path = Path(portfolio_path or config.data.portfolio_file)
    try:
        return load_portfolio(path, config.defaults)
    except FileNotFoundError as exc:
        raise _fail(str(exc))
    except ValueError as exc:
        raise _fail(f"Portfolio load failed:\n{exc}")


def _with_csv_assets_or_exit(snapshot, assets_csv: Optional[str]):
    """Append holdings from an asset CSV to ``snapshot`` (unchanged when no CSV is given)."""
    from bond_advisor.ingestion.portfolio_loader import parse_asset_csv

    if not assets_csv:
        return snapshot
    try:
        extra = parse_asset_csv(Path(assets_csv), snapshot.user)
    except FileNotFoundError as exc:
        raise _fail(str(exc))
    except ValueError as exc:
        raise _fail(f"Asset CSV load failed:\n{exc}")
    return snapshot.model_copy(update={"assets": [*snapshot.assets, *extra]})


def _parse_as_of_or_exit(as_of: Optional[str]) -> date:
    from bond_advisor.utils.time_utils import today_utc

    if not as_of:
        return today_utc()
    try:
        return date.fromisoformat(as_of)
    except ValueError as exc:
        raise _fail(f"Invalid --as-of date: {exc}")


_PORTFOLIO_HELP = "Path to a portfolio JSON file. Uses data.portfolio_file if omitted."
_CONFIG_HELP = "Path to TOML config file."
_AS_OF_HELP = "Reference date (YYYY-MM-DD). Defaults to today (UTC)."
_ASSETS_CSV_HELP = "CSV of additional holdings for the portfolio user (header row required)."


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print the full merged config as JSON.",
    ),
) -> None:
    """Merge every config layer, validate it and print the effective settings."""
    config = _load_config_or_exit(config_path)

    settings = [
        ("Default currency", config.defaults.currency),
        ("Default region", config.defaults.region),
        ("Portfolio file", config.data.portfolio_file),
        ("Output dir", config.data.output_dir),
        ("Timeline months", config.reporting.timeline_months),
        ("Log level", config.logging.level),
        ("Log file", config.logging.log_file or "(stderr only)"),
        ("Debug", config.debug),
    ]
    for label, value in settings:
        typer.echo(f"  {label + ':':<18}{value}")

    if show_full:
        typer.echo("")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-portfolio")
def validate_portfolio(
    portfolio_path: Optional[str] = typer.Option(None, "--portfolio", help=_PORTFOLIO_HELP),
    assets_csv: Optional[str] = typer.Option(None, "--assets-csv", help=_ASSETS_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Load a portfolio file and report what it contains."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _load_portfolio_or_exit(config, portfolio_path)
    snapshot = _with_csv_assets_or_exit(snapshot, assets_csv)
    user = snapshot.user

    typer.echo(f"  User:     {user.display_name} ({user.id})")
    typer.echo(f"  Risk:     {user.risk_tolerance.value}")
    typer.echo(f"  Currency: {user.currency}")
    typer.echo(f"  Region:   {user.region}")
    typer.echo(f"  Assets:   {len(snapshot.assets)}")
    typer.echo(f"  Events:   {len(snapshot.events)}")
    typer.echo("")
    typer.echo("[OK] Portfolio valid.")


@app.command("summary")
def summary(
    portfolio_path: Optional[str] = typer.Option(None, "--portfolio", help=_PORTFOLIO_HELP),
    as_of: Optional[str] = typer.Option(None, "--as-of", help=_AS_OF_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Print total value, average yield and maturity, and value breakdowns."""
    from bond_advisor.analytics.summary import summarize_portfolio
    from bond_advisor.reporting.formatters import format_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    today = _parse_as_of_or_exit(as_of)

    snapshot = _load_portfolio_or_exit(config, portfolio_path)
    result = summarize_portfolio(snapshot.assets, today)
    typer.echo(format_summary(result, snapshot.user))


@app.command("timeline")
def timeline(
    portfolio_path: Optional[str] = typer.Option(None, "--portfolio", help=_PORTFOLIO_HELP),
    months: Optional[int] = typer.Option(
        None,
        "--months",
        min=1,
        help="Number of months to show. Uses reporting.timeline_months if omitted.",
    ),
    as_of: Optional[str] = typer.Option(None, "--as-of", help=_AS_OF_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Print month-by-month maturities, planned needs and cumulative balance."""
    from bond_advisor.analytics.cashflow import build_monthly_cash_flows
    from bond_advisor.reporting.formatters import format_timeline

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    today = _parse_as_of_or_exit(as_of)

    snapshot = _load_portfolio_or_exit(config, portfolio_path)
    flows = build_monthly_cash_flows(
        today,
        snapshot.assets,
        snapshot.events,
        months or config.reporting.timeline_months,
    )
    typer.echo(format_timeline(flows, snapshot.user))


@app.command("recommend")
def recommend(
    portfolio_path: Optional[str] = typer.Option(None, "--portfolio", help=_PORTFOLIO_HELP),
    assets_csv: Optional[str] = typer.Option(None, "--assets-csv", help=_ASSETS_CSV_HELP),
    category: Optional[str] = typer.Option(
        None,
        "--category",
        help="Only show one category (rollover, diversification, laddering, "
             "liquidity, currency, regional, yield).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the recommendations as JSON."),
    export_dir: Optional[str] = typer.Option(
        None,
        "--export-dir",
        help="Also write recommendations_<user>_<date>.json/.csv into this directory.",
    ),
    as_of: Optional[str] = typer.Option(None, "--as-of", help=_AS_OF_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Generate recommendations for the portfolio."""
    from bond_advisor.recommendations.engine import generate_recommendations
    from bond_advisor.reporting.export import (
        EXPORT_COLUMNS,
        export_to_csv,
        export_to_json,
        flatten_recommendations_for_export,
        recommendations_to_json,
    )
    from bond_advisor.reporting.formatters import format_recommendations
    from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    today = _parse_as_of_or_exit(as_of)

    selected: Optional[RecommendationCategory] = None
    if category:
        try:
            selected = RecommendationCategory(category.strip().lower())
        except ValueError:
            valid = ", ".join(c.value for c in RecommendationCategory)
            raise _fail(f"Unknown category '{category}'. Valid: {valid}")

    snapshot = _load_portfolio_or_exit(config, portfolio_path)
    snapshot = _with_csv_assets_or_exit(snapshot, assets_csv)
    recs = generate_recommendations(snapshot.user, snapshot.assets, snapshot.events, today)
    if selected is not None:
        recs = [r for r in recs if r.category == selected]

    user_id = snapshot.user.id
    payload = recommendations_to_json(recs, user_id, today.isoformat())

    if as_json:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        typer.echo(format_recommendations(recs, snapshot.user, as_of=today.isoformat()))

    if export_dir:
        out = Path(export_dir)
        stem = f"recommendations_{user_id}_{today.isoformat()}"
        json_path = export_to_json(payload, out / f"{stem}.json")
        csv_path = export_to_csv(
            flatten_recommendations_for_export(recs, user_id, today.isoformat()),
            out / f"{stem}.csv",
            fieldnames=EXPORT_COLUMNS,
        )
        typer.echo(f"  Exported: {json_path}", err=as_json)
        typer.echo(f"  Exported: {csv_path}", err=as_json)


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
