"""Display formatting for Zacks quote fields.

The quote feed returns every value as a string, with ``"NA"`` or ``"-"``
standing in for a missing number. These helpers turn those strings into
display text and never raise.
"""

import re

from config.settings_pydantic import settings

NOT_AVAILABLE = "N/A"
MISSING_VALUES = frozenset({"", "NA", "-"})

RANK_COLORS: dict[str, str] = {
    "1": "#00C805",  # Strong Buy
    "2": "#7CB342",  # Buy
    "3": "#FFC107",  # Hold
    "4": "#FF9800",  # Sell
    "5": "#F44336",  # Strong Sell
}
DEFAULT_RANK_COLOR = "#9E9E9E"

RANK_EMOJIS: dict[str, str] = {
    "1": "🟢",
    "2": "🟢",
    "3": "🟡",
    "4": "🟠",
    "5": "🔴",
}
DEFAULT_RANK_EMOJI = "⚪"

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def is_missing(value: str | None) -> bool:
    """Check whether a vendor value means "no data"."""
    return value is None or value in MISSING_VALUES


def parse_float(value: str | None) -> float | None:
    """Parse the leading number of a string, ignoring trailing text.

    Args:
        value: Raw vendor string, e.g. ``"12.5"`` or ``"1.2%"``.

    Returns:
        Parsed float, or None when the string does not start with a number.
    """
    if value is None:
        return None
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    # Adding 0.0 folds -0.0 into 0.0
    return float(match.group(1)) + 0.0


def format_number(value: str | None) -> str:
    """Pass through an already formatted vendor number."""
    if is_missing(value):
        return NOT_AVAILABLE
    return value


def format_currency(value: str | None) -> str:
    """Format a price as ``$x.xx``.

    Examples:
        >>> format_currency("3.5")
        '$3.50'
        >>> format_currency("NA")
        'N/A'
    """
    if is_missing(value):
        return NOT_AVAILABLE
    num = parse_float(value)
    if num is None:
        return value
    return f"${num:.2f}"


def format_percent(value: str | None) -> str:
    """Format a percentage with an explicit sign for non-negative values.

    Examples:
        >>> format_percent("-1.2")
        '-1.20%'
        >>> format_percent("0")
        '+0.00%'
    """
    if is_missing(value):
        return NOT_AVAILABLE
    num = parse_float(value)
    if num is None:
        return value
    sign = "+" if num >= 0 else ""
    return f"{sign}{num:.2f}%"


def format_dividend_yield(value: str | None) -> str:
    if not value:
        return NOT_AVAILABLE
    return f"{value}%"


def rank_color(rank: str | None) -> str:
    """Map a Zacks rank ("1".."5") to its hex color, gray otherwise."""
    return RANK_COLORS.get(rank or "", DEFAULT_RANK_COLOR)


def rank_emoji(rank: str | None) -> str:
    return RANK_EMOJIS.get(rank or "", DEFAULT_RANK_EMOJI)


def is_positive_change(net_change: str | None) -> bool | None:
    """Direction of a change value: True for >= 0, False for < 0, None if unknown."""
    change = parse_float(net_change)
    if change is None:
        return None
    return change >= 0


def change_indicator(net_change: str | None) -> str:
    positive = is_positive_change(net_change)
    if positive is None:
        return ""
    return "📈" if positive else "📉"


def zacks_quote_url(ticker: str) -> str:
    """Public Zacks quote page for a ticker."""
    return settings.zacks_web_url_template.format(ticker=ticker)


def ticker_icon_url(ticker: str) -> str:
    """Logo image URL for a ticker."""
    return settings.icon_url_template.format(ticker=ticker)
