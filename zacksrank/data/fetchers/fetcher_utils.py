"""Shared HTTP helpers for the search and quote fetchers.

Both upstream endpoints are plain JSON-over-GET. ``fetch_json`` performs one
request and maps every way it can go wrong onto the ``LookupFailure``
hierarchy so the fetchers only have to handle three exception types.
"""

import asyncio
import json
import logging
from collections.abc import Mapping

import aiohttp

from config.settings_pydantic import settings
from zacksrank.data.exceptions import InvalidResponseError, TransportError
from zacksrank.data.types import JSONValue

logger = logging.getLogger("zacksrank")


def _validate_symbol(symbol: str) -> str:
    """Validate and normalize ticker symbol.

    Args:
        symbol: Ticker symbol to validate.

    Returns:
        Normalized uppercase symbol.

    Raises:
        ValueError: If symbol is empty.
    """
    if not symbol or not isinstance(symbol, str):
        raise ValueError(f"Invalid symbol: {symbol!r}")
    symbol_upper = symbol.strip().upper()
    if not symbol_upper:
        raise ValueError(f"Invalid symbol format: {symbol!r}")
    return symbol_upper


def default_timeout() -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=settings.http_timeout_seconds)


async def _read_json(response: aiohttp.ClientResponse) -> JSONValue:
    if response.status < 200 or response.status >= 300:
        raise TransportError(
            f"{response.method} {response.url} returned HTTP {response.status}",
            status=response.status,
        )
    # The quote feed does not always label its body as application/json,
    # so the raw bytes are decoded here rather than by the declared charset
    body = await response.read()
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise InvalidResponseError(f"Undecodable JSON from {response.url}: {e}") from e


async def fetch_json(
    url: str,
    params: Mapping[str, str | int] | None = None,
    headers: Mapping[str, str] | None = None,
    session: aiohttp.ClientSession | None = None,
) -> JSONValue:
    """Issue one GET request and decode the JSON body.

    Args:
        url: Endpoint URL.
        params: Query parameters, URL-encoded by aiohttp.
        headers: Extra request headers.
        session: Optional aiohttp session for connection pooling.

    Returns:
        Decoded JSON body.

    Raises:
        TransportError: On network failure, timeout or non-2xx status.
        InvalidResponseError: If the body is not valid JSON.
    """
    try:
        if session:
            async with session.get(url, params=params, headers=headers) as response:
                return await _read_json(response)
        async with (
            aiohttp.ClientSession(timeout=default_timeout()) as temp_session,
            temp_session.get(url, params=params, headers=headers) as response,
        ):
            return await _read_json(response)
    except aiohttp.ClientError as e:
        raise TransportError(f"Request to {url} failed: {e}") from e
    except asyncio.TimeoutError as e:
        raise TransportError(f"Request to {url} timed out") from e
