"""Text and markdown rendering of quotes, search hits and recents."""

from zacksrank.data.models.lookup_results import RecentWithQuote
from zacksrank.data.models.quote_data import ZacksQuoteData
from zacksrank.data.models.ticker_search_result import TickerSearchResult
from zacksrank.utils.date_utils import format_time_ago
from zacksrank.utils.formatters import (
    NOT_AVAILABLE,
    change_indicator,
    format_currency,
    format_dividend_yield,
    format_number,
    format_percent,
    rank_color,
    rank_emoji,
    zacks_quote_url,
)


def generate_quote_markdown(quote: ZacksQuoteData) -> str:
    """Render the detail page for one quote.

    Args:
        quote: Quote snapshot.

    Returns:
        Markdown document with price, change, rank and key metrics.
    """
    return f"""# {quote.name} ({quote.ticker})

## {format_currency(quote.last)} {change_indicator(quote.net_change)}
**Change:** {format_currency(quote.net_change)} ({format_percent(quote.percent_net_change)})

---

## Zacks Rank: {quote.zacks_rank} - {quote.zacks_rank_text} {rank_emoji(quote.zacks_rank)}

| Metric | Value |
|--------|-------|
| **P/E Ratio** | {format_number(quote.pe_ratio)} |
| **EPS** | {format_currency(quote.eps)} |
| **Market Cap** | {format_number(quote.market_cap)} |
| **Previous Close** | {format_currency(quote.previous_close)} |
| **Open** | {format_currency(quote.open)} |
| **Bid / Ask** | {format_currency(quote.bid)} / {format_currency(quote.ask)} |
| **52 Week Range** | {format_currency(quote.year_low)} - {format_currency(quote.year_high)} |
"""


def generate_metadata_lines(quote: ZacksQuoteData) -> list[str]:
    """Sidebar facts shown under the detail page."""
    return [
        f"Zacks Rank: {quote.zacks_rank} - {quote.zacks_rank_text} [{rank_color(quote.zacks_rank)}]",
        f"Dividend: {format_currency(quote.dividend)}",
        f"Yield: {format_dividend_yield(quote.dividend_yield)}",
        f"Last Updated: {quote.updated or NOT_AVAILABLE}",
        f"View on Zacks: {zacks_quote_url(quote.ticker)}",
    ]


def generate_not_found_markdown(ticker: str) -> str:
    return (
        f"# Not Found\n\nNo data found for ticker **{ticker}**.\n\n"
        "Make sure you entered a valid stock symbol.\n"
    )


def generate_error_markdown(ticker: str, message: str) -> str:
    return f"# Error\n\nFailed to fetch data for **{ticker}**:\n\n{message}\n"


def format_search_results(query: str, results: list[TickerSearchResult]) -> str:
    """One line per hit, or an empty-state message."""
    if not results:
        return f'No tickers found for "{query}"'
    lines = [f"Search Results ({len(results)} results)"]
    width = max(len(r.symbol) for r in results)
    for result in results:
        lines.append(f"  {result.symbol:<{width}}  {result.name}")
    return "\n".join(lines)


def _recent_accessories(item: RecentWithQuote, now: int | None) -> list[str]:
    accessories: list[str] = []
    quote = item.quote
    if quote is not None:
        accessories.append(format_currency(quote.last))
        accessories.append(format_percent(quote.percent_net_change))
        # Rank tag only when Zacks actually ranks the ticker
        if quote.zacks_rank and quote.zacks_rank != "NA" and quote.zacks_rank_text:
            accessories.append(f"Rank {quote.zacks_rank} - {quote.zacks_rank_text}")
    accessories.append(format_time_ago(item.recent.timestamp, now))
    return accessories


def format_recents_table(items: list[RecentWithQuote], now: int | None = None) -> str:
    """Render the recents view.

    Args:
        items: Recents entries with their fresh quotes, most recent first.
        now: Reference time in milliseconds for the "time ago" column.

    Returns:
        Table text, or an empty-state message.
    """
    if not items:
        return "No Recent Stocks\nSearch for stocks to add them to your recents"

    lines = [f"Recent Stocks ({len(items)} stocks)"]
    width = max(len(item.recent.symbol) for item in items)
    for item in items:
        accessories = " | ".join(_recent_accessories(item, now))
        lines.append(f"  {item.recent.symbol:<{width}}  {item.display_name}  {accessories}")
    return "\n".join(lines)
