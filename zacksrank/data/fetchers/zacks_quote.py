"""Quote and rank lookup against the Zacks quote feed."""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from config.settings_pydantic import settings
from zacksrank.data.exceptions import (
    InvalidResponseError,
    LookupFailure,
    TickerNotFoundError,
    TransportError,
)
from zacksrank.data.fetchers.base_fetcher import BaseFetcher
from zacksrank.data.fetchers.fetcher_utils import _validate_symbol
from zacksrank.data.models.lookup_results import QuoteLookup
from zacksrank.data.models.lookup_status import LookupStatus
from zacksrank.data.models.quote_data import ZacksQuoteData
from zacksrank.data.types import JSONValue

logger = logging.getLogger("zacksrank")


def parse_quote_response(data: JSONValue, symbol: str) -> ZacksQuoteData:
    """Pick the record for ``symbol`` out of a quote feed body.

    Args:
        data: Decoded JSON body, a mapping of ticker to quote record.
        symbol: Uppercased ticker that was requested.

    Returns:
        Parsed quote record.

    Raises:
        InvalidResponseError: If the body or the record has the wrong shape.
        TickerNotFoundError: If the body does not contain the ticker.
    """
    if not isinstance(data, dict):
        raise InvalidResponseError(f"Expected an object, got {type(data).__name__}")

    record = data.get(symbol)
    if not record:
        raise TickerNotFoundError(f"No quote data for {symbol}")
    if not isinstance(record, dict):
        raise InvalidResponseError(f"Quote record for {symbol} is not an object")

    try:
        return ZacksQuoteData.model_validate(record)
    except ValidationError as e:
        raise InvalidResponseError(f"Invalid quote record for {symbol}: {e}") from e


class ZacksQuoteFetcher(BaseFetcher[ZacksQuoteData]):
    """Fetches Zacks quote snapshots."""

    async def fetch(self, key: str) -> ZacksQuoteData:
        """Fetch the quote for one ticker.

        Args:
            key: Ticker symbol, any case.

        Returns:
            ZacksQuoteData for the ticker.

        Raises:
            ValueError: If the ticker is empty.
            TransportError: On network failure or non-2xx status.
            InvalidResponseError: On an undecodable or ill-shaped body.
            TickerNotFoundError: If the feed has no record for the ticker.
        """
        symbol = _validate_symbol(key)
        data = await self._get_json(settings.zacks_quote_url, params={"t": symbol})
        return parse_quote_response(data, symbol)

    async def lookup(self, ticker: str) -> QuoteLookup:
        """Fetch a quote without raising; failures are reported in the result.

        Args:
            ticker: Ticker symbol, any case.

        Returns:
            QuoteLookup tagged with the lookup status.
        """
        symbol = (ticker or "").strip().upper()
        try:
            symbol = _validate_symbol(symbol)
        except ValueError as e:
            return QuoteLookup(ticker=symbol, status=LookupStatus.EMPTY_QUERY, error=str(e))

        try:
            quote = await self.fetch(symbol)
        except TickerNotFoundError as e:
            logger.info(f"Zacks has no data for {symbol}")
            return QuoteLookup(ticker=symbol, status=LookupStatus.NOT_FOUND, error=str(e))
        except InvalidResponseError as e:
            logger.warning(f"Zacks parsing error for {symbol}: {e}")
            return QuoteLookup(ticker=symbol, status=LookupStatus.INVALID_RESPONSE, error=str(e))
        except TransportError as e:
            logger.warning(f"Zacks request error for {symbol}: {e}")
            return QuoteLookup(ticker=symbol, status=LookupStatus.TRANSPORT_ERROR, error=str(e))
        except LookupFailure as e:
            logger.warning(f"Zacks lookup failed for {symbol}: {e}")
            return QuoteLookup(ticker=symbol, status=LookupStatus.TRANSPORT_ERROR, error=str(e))

        logger.debug(f"Fetched {symbol} last={quote.last} rank={quote.zacks_rank}")
        return QuoteLookup(ticker=symbol, quote=quote)

    async def fetch_multiple(self, symbols: list[str]) -> dict[str, ZacksQuoteData | None]:
        """Fetch quotes for several tickers concurrently.

        Each ticker fails on its own; a failing ticker maps to None and
        never fails the batch.

        Args:
            symbols: Ticker symbols.

        Returns:
            Mapping of each given symbol to its quote or None, in input order.
        """
        tasks = [self.lookup(symbol) for symbol in symbols]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        quotes: dict[str, ZacksQuoteData | None] = {}
        for symbol, result in zip(symbols, results):
            if isinstance(result, QuoteLookup):
                quotes[symbol] = result.quote
            else:
                logger.error(f"Error in async quote fetch for {symbol}: {result}")
                quotes[symbol] = None
        return quotes


async def get_quote_lookup(
    ticker: str,
    session: aiohttp.ClientSession | None = None,
) -> QuoteLookup:
    """Fetch a quote and report why it may be missing."""
    return await ZacksQuoteFetcher(session).lookup(ticker)


async def get_quote(
    ticker: str,
    session: aiohttp.ClientSession | None = None,
) -> ZacksQuoteData | None:
    """Fetch the Zacks quote for a ticker.

    Args:
        ticker: Ticker symbol, uppercased before sending.
        session: Optional aiohttp session for connection pooling.

    Returns:
        The quote record, or None if the ticker is unknown or the request failed.
    """
    lookup = await get_quote_lookup(ticker, session)
    return lookup.quote


async def get_quotes(
    symbols: list[str],
    session: aiohttp.ClientSession | None = None,
) -> dict[str, ZacksQuoteData | None]:
    """Fetch quotes for several tickers concurrently, None for failures."""
    return await ZacksQuoteFetcher(session).fetch_multiple(symbols)
