"""Abstract base class for the HTTP fetchers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Generic, TypeVar

import aiohttp

from zacksrank.data.fetchers.fetcher_utils import fetch_json
from zacksrank.data.types import JSONValue

T = TypeVar("T")


class BaseFetcher(ABC, Generic[T]):
    """Abstract base class for fetching data from one JSON endpoint."""

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        """Initialize fetcher.

        Args:
            session: Optional aiohttp session reused for every request.
                If None, each request opens its own short-lived session.
        """
        self.session = session

    async def _get_json(
        self,
        url: str,
        params: Mapping[str, str | int] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> JSONValue:
        return await fetch_json(url, params=params, headers=headers, session=self.session)

    @abstractmethod
    async def fetch(self, key: str) -> T:
        """Fetch and parse data for one query or ticker.

        Args:
            key: Search query or ticker symbol.

        Returns:
            Parsed result.

        Raises:
            LookupFailure: If data cannot be fetched or parsed.
        """
        pass
