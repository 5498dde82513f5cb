#!/usr/bin/env python3
"""Main CLI entry point for ticker search, Zacks quotes and recents."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import aiohttp

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings_pydantic import settings
from zacksrank.data.exceptions import StorageError
from zacksrank.data.fetchers.fetcher_utils import default_timeout
from zacksrank.data.models.lookup_status import LookupStatus
from zacksrank.data.recents import RecentsStore
from zacksrank.data.storage import LocalStorage
from zacksrank.output.json_writer import JSONWriter
from zacksrank.output.markdown_writer import (
    format_recents_table,
    format_search_results,
    generate_error_markdown,
    generate_metadata_lines,
    generate_not_found_markdown,
    generate_quote_markdown,
)
from zacksrank.services.lookup_service import LookupService
from zacksrank.utils.logging_config import set_verbose, setup_logging

logger = setup_logging(settings.log_level, settings.log_file)


async def run_search(service: LookupService, args: argparse.Namespace) -> int:
    outcome = await service.search(args.query)
    if outcome is None:
        return 0
    if args.json:
        JSONWriter().write(outcome.results)
    else:
        print(format_search_results(args.query, outcome.results))
    if not outcome.ok:
        logger.info(f"Search failed ({outcome.status.value}), showing no results")
    return 0


async def run_quote(service: LookupService, args: argparse.Namespace) -> int:
    lookup = await service.quick_lookup(args.ticker, args.name)
    if args.json:
        JSONWriter().write(lookup)
        return 0 if lookup.ok else 1

    if lookup.ok and lookup.quote is not None:
        print(generate_quote_markdown(lookup.quote))
        print("\n".join(generate_metadata_lines(lookup.quote)))
        return 0
    if lookup.status in (LookupStatus.NOT_FOUND, LookupStatus.EMPTY_QUERY):
        print(generate_not_found_markdown(lookup.ticker))
    else:
        print(generate_error_markdown(lookup.ticker, lookup.error or lookup.status.value))
    return 1


async def run_recents(service: LookupService, args: argparse.Namespace) -> int:
    items = await service.load_recents_with_quotes()
    if args.json:
        JSONWriter().write(items)
    else:
        print(format_recents_table(items))
    return 0


async def run_remove(service: LookupService, args: argparse.Namespace) -> int:
    symbol = args.ticker.strip().upper()
    await service.recents.remove(symbol)
    print(f"Removed {symbol}")
    return 0


async def run_clear(service: LookupService, args: argparse.Namespace) -> int:
    await service.recents.clear()
    print("Cleared recent stocks")
    return 0


COMMANDS = {
    "search": run_search,
    "quote": run_quote,
    "recents": run_recents,
    "remove": run_remove,
    "clear": run_clear,
}


async def run(args: argparse.Namespace) -> int:
    """Open one HTTP session and dispatch the sub-command."""
    recents = RecentsStore(LocalStorage(args.storage_path or settings.storage_path))
    async with aiohttp.ClientSession(timeout=default_timeout()) as session:
        service = LookupService(recents, session=session)
        return await COMMANDS[args.command](service, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Zacks Rank lookup tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Find a ticker by company name
  zacksrank search "apple"

  # Show the Zacks quote and rank (adds the ticker to recents)
  zacksrank quote aapl

  # Show recent tickers with fresh quotes
  zacksrank recents

  # Forget one ticker, or all of them
  zacksrank remove AAPL
  zacksrank clear
        """,
    )
    parser.add_argument(
        "--storage-path",
        type=Path,
        default=None,
        help=f"Path to local storage database (default: {settings.storage_path})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search tickers by name or symbol")
    search_parser.add_argument("query", help="Company name or ticker fragment")

    quote_parser = subparsers.add_parser("quote", help="Show the Zacks quote for a ticker")
    quote_parser.add_argument("ticker", help="Ticker symbol")
    quote_parser.add_argument(
        "--name",
        default=None,
        help="Name to store in recents (default: company name from Zacks)",
    )

    subparsers.add_parser("recents", help="List recent tickers with fresh quotes")

    remove_parser = subparsers.add_parser("remove", help="Remove a ticker from recents")
    remove_parser.add_argument("ticker", help="Ticker symbol")

    subparsers.add_parser("clear", help="Clear all recent tickers")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_verbose(logger)

    try:
        return asyncio.run(run(args))
    except StorageError as e:
        logger.error(f"Local storage error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
