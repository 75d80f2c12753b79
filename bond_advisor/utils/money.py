"""
Currency formatting and numeric input parsing.

Each supported currency is rendered with the separators and symbol
placement of the locale conventionally associated with it::

    EUR (de-DE)  1.234 €        GBP (en-GB)  £1,234
    USD (en-US)  $1,234         CHF (de-CH)  CHF 1'234
    JPY (ja-JP)  ¥1,234         SEK (sv-SE)  1 234 kr
    NOK (nb-NO)  1 234 kr       DKK (da-DK)  1.234 kr.
    PLN (pl-PL)  1 234 zł       CZK (cs-CZ)  1 234 Kč

Unknown codes fall back to EUR-style separators with the ISO code as the
symbol. Amounts are rounded half away from zero.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class CurrencyStyle:
    """Rendering rules for one currency.

    Attributes:
        symbol:        Symbol or code printed next to the number.
        group_sep:     Thousands separator.
        decimal_sep:   Decimal separator.
        symbol_first:  True when the symbol precedes the number.
        spaced:        True when a space separates symbol and number.
    """

    symbol: str
    group_sep: str
    decimal_sep: str
    symbol_first: bool
    spaced: bool


CURRENCY_STYLES: dict[str, CurrencyStyle] = {
    "EUR": CurrencyStyle("€",   ".", ",", symbol_first=False, spaced=True),
    "GBP": CurrencyStyle("£",   ",", ".", symbol_first=True,  spaced=False),
    "USD": CurrencyStyle("$",   ",", ".", symbol_first=True,  spaced=False),
    "CHF": CurrencyStyle("CHF", "'", ".", symbol_first=True,  spaced=True),
    "JPY": CurrencyStyle("¥",   ",", ".", symbol_first=True,  spaced=False),
    "SEK": CurrencyStyle("kr",  " ", ",", symbol_first=False, spaced=True),
    "NOK": CurrencyStyle("kr",  " ", ",", symbol_first=False, spaced=True),
    "DKK": CurrencyStyle("kr.", ".", ",", symbol_first=False, spaced=True),
    "PLN": CurrencyStyle("zł",  " ", ",", symbol_first=False, spaced=True),
    "CZK": CurrencyStyle("Kč",  " ", ",", symbol_first=False, spaced=True),
}

_FALLBACK = CURRENCY_STYLES["EUR"]

_NON_NUMERIC = re.compile(r"[^0-9.]")


def format_currency(
    amount: float,
    currency: str = "EUR",
    decimals: int = 0,
    exclude_symbol: bool = False,
) -> str:
    """Format ``amount`` in ``currency`` using that currency's conventions.

    Args:
        amount:         Value to format (may be negative).
        currency:       ISO code, e.g. ``"EUR"``. Case-insensitive.
        decimals:       Number of fraction digits (default 0).
        exclude_symbol: Return only the grouped number.

    Returns:
        Formatted string, e.g. ``format_currency(5000, "EUR") == "5.000 €"``.
    """
    if amount is None or not math.isfinite(amount):
        return ""

    code = (currency or "EUR").upper()
    style = CURRENCY_STYLES.get(code)
    if style is None:
        style = CurrencyStyle(code, _FALLBACK.group_sep, _FALLBACK.decimal_sep,
                              symbol_first=False, spaced=True)

    number = _group_number(abs(amount), decimals, style.group_sep, style.decimal_sep)
    sign = "-" if amount < 0 and number.strip("0.,' ") else ""

    if exclude_symbol:
        return f"{sign}{number}"

    gap = " " if style.spaced else ""
    if style.symbol_first:
        return f"{sign}{style.symbol}{gap}{number}"
    return f"{sign}{number}{gap}{style.symbol}"


def parse_input_value(value: str | None) -> float:
    """Parse a number typed into a form field.

    Everything except digits and ``.`` is discarded, so ``"€ 12,500.50"``
    parses as ``12500.5``. Empty or unparseable input returns ``0.0``.
    """
    if not value:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", value)
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


# ── Helpers ───────────────────────────────────────────────────────────────────

def _group_number(value: float, decimals: int, group_sep: str, decimal_sep: str) -> str:
    quantum = Decimal(1).scaleb(-decimals) if decimals > 0 else Decimal(1)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    integer_part, _, fraction_part = f"{rounded:f}".partition(".")

    groups: list[str] = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)

    grouped = group_sep.join(groups)
    if decimals > 0:
        return f"{grouped}{decimal_sep}{fraction_part}"
    return grouped
