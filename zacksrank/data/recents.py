"""Most-recently-used list of looked up tickers.

The list lives as one JSON array under a single storage key. It is kept
most-recent-first, unique by symbol and capped at ``max_recents`` entries.
Only ``RecentsStore`` knows the key; every mutation is a read-modify-write
run under one lock so concurrent upserts and removals cannot drop each
other's changes.
"""

import asyncio
import json
import logging
from collections.abc import Callable

from pydantic import ValidationError

from config.settings_pydantic import settings
from zacksrank.data.exceptions import StorageError
from zacksrank.data.models.recent_ticker import RecentTicker
from zacksrank.data.storage import LocalStorage
from zacksrank.utils.date_utils import now_ms

logger = logging.getLogger("zacksrank")

RECENTS_KEY = settings.recents_key
MAX_RECENTS = settings.max_recents


def parse_recents(raw: str | None) -> list[RecentTicker]:
    """Decode the stored JSON list, treating anything unreadable as empty.

    Args:
        raw: Stored JSON string, or None if nothing is stored.

    Returns:
        Parsed entries; malformed entries are skipped.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Ignoring unparseable recents list: {e}")
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring recents value that is not a JSON list")
        return []

    recents: list[RecentTicker] = []
    for item in data:
        try:
            recents.append(RecentTicker.model_validate(item))
        except ValidationError as e:
            logger.debug(f"Skipping malformed recents entry {item!r}: {e}")
    return recents


def serialize_recents(recents: list[RecentTicker]) -> str:
    return json.dumps([recent.model_dump() for recent in recents])


class RecentsStore:
    """Persisted, capped, most-recent-first list of tickers."""

    def __init__(
        self,
        storage: LocalStorage,
        key: str = RECENTS_KEY,
        max_recents: int = MAX_RECENTS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Key-value storage holding the list.
            key: Storage key of the list.
            max_recents: Maximum number of entries kept.
            clock: Millisecond clock used for entry timestamps.
        """
        self._storage = storage
        self._key = key
        self.max_recents = max_recents
        self._clock = clock
        self._lock = asyncio.Lock()

    async def _read(self) -> list[RecentTicker]:
        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(None, self._storage.get_item, self._key)
        except StorageError as e:
            logger.warning(f"Could not read recents, treating as empty: {e}")
            return []
        return parse_recents(raw)

    async def _write(self, recents: list[RecentTicker]) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            self._storage.set_item,
            self._key,
            serialize_recents(recents),
        )

    async def upsert(self, symbol: str, name: str) -> list[RecentTicker]:
        """Move a ticker to the front of the list with a fresh timestamp.

        Args:
            symbol: Ticker symbol.
            name: Display name.

        Returns:
            The list as written.

        Raises:
            StorageError: If the list cannot be written.
        """
        async with self._lock:
            recents = await self._read()
            filtered = [r for r in recents if r.symbol != symbol]
            filtered.insert(0, RecentTicker(symbol=symbol, name=name, timestamp=self._clock()))
            trimmed = filtered[: self.max_recents]
            await self._write(trimmed)

        logger.debug(f"Added {symbol} to recents ({len(trimmed)} entries)")
        return trimmed

    async def remove(self, symbol: str) -> list[RecentTicker]:
        """Drop a ticker from the list. The list is rewritten even if nothing matched.

        Raises:
            StorageError: If the list cannot be written.
        """
        async with self._lock:
            recents = await self._read()
            filtered = [r for r in recents if r.symbol != symbol]
            await self._write(filtered)

        if len(filtered) == len(recents):
            logger.debug(f"{symbol} was not in recents")
        return filtered

    async def clear(self) -> None:
        """Delete the stored list entirely.

        Raises:
            StorageError: If the list cannot be removed.
        """
        async with self._lock:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._storage.remove_item, self._key)
        logger.info("Cleared recent tickers")

    async def list(self) -> list[RecentTicker]:
        """Read the list, most recent first; empty if absent or unreadable."""
        return await self._read()
