"""Revenue entry helpers for the foundation step."""

import re

from risk_audit.core.errors import RevenueParseError

REVENUE_PRESETS: tuple[tuple[str, int], ...] = (
    ("$1M", 1_000_000),
    ("$5M", 5_000_000),
    ("$10M", 10_000_000),
    ("$25M", 25_000_000),
    ("$50M+", 50_000_000),
)

_SHORTHAND_RE = re.compile(r"^\$?\s*(\d+(?:\.\d+)?)\s*([kmb])$", re.IGNORECASE)
_MULTIPLIERS = {"k": 1_000, "m": 1_000_000, "b": 1_000_000_000}


def parse_revenue(text: str) -> int:
    """
    Parse a revenue entry such as "10m", "2.5b", "$5,000,000" or "750000".

    Args:
        text: Raw user entry

    Returns:
        Revenue in whole currency units

    Raises:
        RevenueParseError: If no positive amount can be read from the text
    """
    value = (text or "").strip()

    match = _SHORTHAND_RE.match(value)
    if match:
        amount = round(float(match.group(1)) * _MULTIPLIERS[match.group(2).lower()])
    else:
        digits = re.sub(r"[^0-9]", "", value)
        if not digits:
            raise RevenueParseError(f"Could not read a revenue amount from {text!r}")
        amount = int(digits)

    if amount <= 0:
        raise RevenueParseError("Annual revenue must be greater than zero")
    return amount


def format_currency(amount: float) -> str:
    """Format as whole US dollars, e.g. 5000000 -> "$5,000,000"."""
    return f"${amount:,.0f}"
