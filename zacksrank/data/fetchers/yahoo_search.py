"""Ticker search against the Yahoo Finance search endpoint."""

import logging

import aiohttp

from config.settings_pydantic import settings
from zacksrank.data.exceptions import InvalidResponseError, LookupFailure, TransportError
from zacksrank.data.fetchers.base_fetcher import BaseFetcher
from zacksrank.data.models.lookup_results import SearchOutcome
from zacksrank.data.models.lookup_status import LookupStatus
from zacksrank.data.models.ticker_search_result import TickerSearchResult
from zacksrank.data.types import JSONValue

logger = logging.getLogger("zacksrank")


def parse_search_response(data: JSONValue) -> list[TickerSearchResult]:
    """Map a raw search body to equity and ETF hits.

    Args:
        data: Decoded JSON body, expected as ``{"quotes": [...]}``.

    Returns:
        Search results in response order.

    Raises:
        InvalidResponseError: If the body has no ``quotes`` list.
    """
    if not isinstance(data, dict):
        raise InvalidResponseError(f"Expected an object, got {type(data).__name__}")
    quotes = data.get("quotes")
    if not isinstance(quotes, list):
        raise InvalidResponseError("Search response has no 'quotes' list")

    results: list[TickerSearchResult] = []
    for quote in quotes:
        if not isinstance(quote, dict):
            continue
        if quote.get("quoteType") not in settings.search_quote_types:
            continue
        symbol = quote.get("symbol")
        if not symbol or not isinstance(symbol, str):
            continue
        name = quote.get("longname") or quote.get("shortname") or symbol
        results.append(TickerSearchResult(symbol=symbol, name=str(name)))
    return results


class YahooSearchFetcher(BaseFetcher[list[TickerSearchResult]]):
    """Searches tickers by free text."""

    async def fetch(self, key: str) -> list[TickerSearchResult]:
        """Run one search request.

        Args:
            key: Free-text query, sent URL-encoded.

        Returns:
            Equity and ETF hits.

        Raises:
            TransportError: On network failure or non-2xx status.
            InvalidResponseError: On an undecodable or ill-shaped body.
        """
        params = {
            "q": key,
            "quotesCount": settings.search_results_limit,
            "newsCount": 0,
            "listsCount": 0,
        }
        headers = {"User-Agent": settings.user_agent}
        data = await self._get_json(settings.yahoo_search_url, params=params, headers=headers)
        return parse_search_response(data)

    async def search(self, query: str) -> SearchOutcome:
        """Search without raising; failures are reported in the outcome.

        Args:
            query: Free-text query. Empty queries return without a request.

        Returns:
            SearchOutcome tagged with the lookup status.
        """
        if not query or not query.strip():
            return SearchOutcome(query=query, status=LookupStatus.EMPTY_QUERY)

        try:
            results = await self.fetch(query)
        except TransportError as e:
            logger.warning(f"Ticker search error for {query!r}: {e}")
            return SearchOutcome(query=query, status=LookupStatus.TRANSPORT_ERROR, error=str(e))
        except InvalidResponseError as e:
            logger.warning(f"Ticker search parsing error for {query!r}: {e}")
            return SearchOutcome(query=query, status=LookupStatus.INVALID_RESPONSE, error=str(e))
        except LookupFailure as e:
            logger.warning(f"Ticker search failed for {query!r}: {e}")
            return SearchOutcome(query=query, status=LookupStatus.TRANSPORT_ERROR, error=str(e))

        logger.debug(f"Search {query!r} returned {len(results)} results")
        return SearchOutcome(query=query, results=results)


async def search_tickers_outcome(
    query: str,
    session: aiohttp.ClientSession | None = None,
) -> SearchOutcome:
    """Search tickers and report why the result may be empty."""
    return await YahooSearchFetcher(session).search(query)


async def search_tickers(
    query: str,
    session: aiohttp.ClientSession | None = None,
) -> list[TickerSearchResult]:
    """Search tickers by name or symbol.

    A failed search looks like a search with no hits; use
    ``search_tickers_outcome`` to tell them apart.

    Args:
        query: Free-text query.
        session: Optional aiohttp session for connection pooling.

    Returns:
        Equity and ETF hits, empty on failure.
    """
    outcome = await search_tickers_outcome(query, session)
    return outcome.results
