"""Pytest configuration and fixtures."""

import asyncio
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from zacksrank.data.recents import RecentsStore
from zacksrank.data.storage import LocalStorage


class FakeResponse:
    """Stand-in for aiohttp.ClientResponse used inside ``async with``."""

    def __init__(self, url: str, status: int = 200, body: str | bytes = "{}") -> None:
        self.url = url
        self.method = "GET"
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    async def read(self) -> bytes:
        return self._body

    async def text(self) -> str:
        return self._body.decode("utf-8")

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None


class FakeSession:
    """Stand-in for aiohttp.ClientSession that records every GET.

    ``handler`` receives the request params and returns either a JSON-able
    object, a ``(status, body)`` tuple with a str or bytes body, or raises
    an exception.
    Optional ``gates`` map a param value to an event the request waits on.
    """

    def __init__(self, handler: Callable[[dict[str, Any]], Any]) -> None:
        self.handler = handler
        self.calls: list[dict[str, Any]] = []
        self.gates: dict[str, asyncio.Event] = {}

    def get(self, url: str, params: Any = None, headers: Any = None) -> "_FakeRequest":
        call = {"url": url, "params": dict(params or {}), "headers": dict(headers or {})}
        self.calls.append(call)
        return _FakeRequest(self, call)


class _FakeRequest:
    def __init__(self, session: FakeSession, call: dict[str, Any]) -> None:
        self.session = session
        self.call = call

    async def __aenter__(self) -> FakeResponse:
        params = self.call["params"]
        for value in params.values():
            gate = self.session.gates.get(str(value))
            if gate is not None:
                await gate.wait()
        result = self.session.handler(params)
        if isinstance(result, tuple):
            status, body = result
            return FakeResponse(self.call["url"], status=status, body=body)
        return FakeResponse(self.call["url"], body=json.dumps(result))

    async def __aexit__(self, *exc_info: object) -> None:
        return None


@pytest.fixture
def sample_quote_record() -> dict[str, Any]:
    """Raw Zacks quote record for AAPL."""
    return {
        "ticker": "AAPL",
        "name": "Apple Inc.",
        "last": "227.5",
        "net_change": "-1.25",
        "percent_net_change": "-0.55",
        "previous_close": "228.75",
        "zacks_rank": "3",
        "zacks_rank_text": "Hold",
        "dividend_yield": "0.44",
        "updated": "10/17/2025 16:00",
        "SUNGARD_PE_RATIO": "34.6",
        "SUNGARD_EPS": "6.58",
        "SUNGARD_MARKET_CAP": "3.38T",
        "SUNGARD_OPEN": "229.1",
        "SUNGARD_BID": "227.4",
        "SUNGARD_ASK": "227.6",
        "SUNGARD_YRLOW": "164.08",
        "SUNGARD_YRHIGH": "260.1",
        "source": {"sungard": {"dividend": "1.00"}},
        "market_status": "closed",
    }


@pytest.fixture
def sample_search_body() -> dict[str, Any]:
    """Raw Yahoo search body mixing equities, ETFs and other quote types."""
    return {
        "quotes": [
            {"symbol": "AAPL", "shortname": "Apple Inc.", "longname": "Apple Inc.", "quoteType": "EQUITY", "exchange": "NMS"},
            {"symbol": "APLE", "shortname": "Apple Hospitality", "quoteType": "EQUITY", "exchange": "NYQ"},
            {"symbol": "AAPL250117C00150000", "shortname": "AAPL Jan 2025 150 Call", "quoteType": "OPTION", "exchange": "OPR"},
            {"symbol": "APPL.X", "quoteType": "ETF", "exchange": "PCX"},
            {"symbol": "^AAPL", "shortname": "Apple Index", "quoteType": "INDEX", "exchange": "SNP"},
        ],
    }


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    """Local storage in a temporary SQLite file."""
    return LocalStorage(tmp_path / "local_storage.db")


class FakeClock:
    """Millisecond clock advancing by one second per reading."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1000
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recents_store(storage: LocalStorage, clock: FakeClock) -> RecentsStore:
    """Recents store over temporary storage with a deterministic clock."""
    return RecentsStore(storage, clock=clock)


@pytest.fixture
def make_session() -> Callable[[Callable[[dict[str, Any]], Any]], FakeSession]:
    """Factory for fake HTTP sessions driven by a request handler."""
    return FakeSession


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "integration: tests that call the live endpoints")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip live-endpoint tests unless ZACKSRANK_RUN_INTEGRATION is set."""
    if os.getenv("ZACKSRANK_RUN_INTEGRATION"):
        return
    skip_integration = pytest.mark.skip(reason="set ZACKSRANK_RUN_INTEGRATION=1 to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
