"""
bond_advisor.reporting: Formatting and export of engine output.

Modules:
  formatters: ASCII terminal formatters for Typer CLI commands.
  export    : JSON payload and flat CSV export helpers.
"""
