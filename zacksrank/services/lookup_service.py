"""Lookup flows tying the clients to the recents list.

- quick lookup: fetch a quote and, on success, write the ticker through
  to the recents list;
- search and quote sessions: the latest request wins, so a slow answer
  to an older query never replaces the answer to a newer one;
- recents view: read the list and enrich every entry with a fresh quote.
"""

import logging
from collections.abc import Awaitable
from typing import Generic, TypeVar

import aiohttp

from zacksrank.data.exceptions import StorageError
from zacksrank.data.fetchers.yahoo_search import YahooSearchFetcher
from zacksrank.data.fetchers.zacks_quote import ZacksQuoteFetcher
from zacksrank.data.models.lookup_results import QuoteLookup, RecentWithQuote, SearchOutcome
from zacksrank.data.recents import RecentsStore

logger = logging.getLogger("zacksrank")

T = TypeVar("T")


class LatestRequestGuard(Generic[T]):
    """Drops results of requests that were superseded by a newer one.

    Each ``run`` call is tagged with the input it was issued for and a
    sequence number. When it resolves, the result is handed back only if
    no newer request was started in the meantime.
    """

    def __init__(self) -> None:
        self._sequence = 0
        self.current_key: str | None = None

    def is_current(self, key: str, sequence: int) -> bool:
        return sequence == self._sequence and key == self.current_key

    async def run(self, key: str, request: Awaitable[T]) -> T | None:
        """Await a request and return its result unless it went stale.

        Args:
            key: Input the request was issued for (query or ticker).
            request: Awaitable performing the request.

        Returns:
            The result, or None if a newer request was started meanwhile.
        """
        self._sequence += 1
        sequence = self._sequence
        self.current_key = key

        result = await request
        if not self.is_current(key, sequence):
            logger.debug(f"Discarding stale result for {key!r}")
            return None
        return result


class LookupService:
    """Search, quote and recents operations behind one object."""

    def __init__(
        self,
        recents: RecentsStore,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize service.

        Args:
            recents: Store receiving successful lookups.
            session: Optional aiohttp session shared by both clients.
        """
        self.recents = recents
        self.search_fetcher = YahooSearchFetcher(session)
        self.quote_fetcher = ZacksQuoteFetcher(session)
        self._search_guard: LatestRequestGuard[SearchOutcome] = LatestRequestGuard()
        self._quote_guard: LatestRequestGuard[QuoteLookup] = LatestRequestGuard()

    async def search(self, query: str) -> SearchOutcome | None:
        """Search tickers; returns None if a newer search superseded this one."""
        return await self._search_guard.run(query, self.search_fetcher.search(query))

    async def quick_lookup(self, ticker: str, name: str | None = None) -> QuoteLookup:
        """Fetch a quote and record the ticker in recents on success.

        Args:
            ticker: Ticker symbol, any case.
            name: Display name to store, e.g. from a search hit. Defaults to
                the quote's company name, then the ticker.

        Returns:
            QuoteLookup for the ticker.
        """
        lookup = await self.quote_fetcher.lookup(ticker)
        if lookup.ok and lookup.quote is not None:
            try:
                await self.recents.upsert(lookup.ticker, name or lookup.quote.name or lookup.ticker)
            except StorageError as e:
                logger.error(f"Could not record {lookup.ticker} in recents: {e}")
        return lookup

    async def lookup(self, ticker: str, name: str | None = None) -> QuoteLookup | None:
        """Quick lookup guarded so only the latest ticker's result is returned."""
        key = (ticker or "").strip().upper()
        return await self._quote_guard.run(key, self.quick_lookup(ticker, name))

    async def load_recents_with_quotes(self) -> list[RecentWithQuote]:
        """Read the recents list and attach a fresh quote to each entry.

        Quotes are fetched concurrently; entries whose quote cannot be
        fetched keep ``quote=None``.
        """
        recents = await self.recents.list()
        if not recents:
            return []

        quotes = await self.quote_fetcher.fetch_multiple([r.symbol for r in recents])
        return [RecentWithQuote(recent=r, quote=quotes.get(r.symbol)) for r in recents]
