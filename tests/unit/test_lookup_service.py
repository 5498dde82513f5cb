"""Unit tests for the lookup service."""

import asyncio

import pytest

from zacksrank.data.exceptions import StorageError
from zacksrank.data.models.lookup_status import LookupStatus
from zacksrank.data.recents import RecentsStore
from zacksrank.services.lookup_service import LatestRequestGuard, LookupService


class TestLatestRequestGuard:
    """Tests for latest-request-wins ordering."""

    @pytest.mark.asyncio
    async def test_single_request(self) -> None:
        """Test a lone request returns its result."""
        guard: LatestRequestGuard[str] = LatestRequestGuard()

        async def request() -> str:
            return "result"

        assert await guard.run("a", request()) == "result"

    @pytest.mark.asyncio
    async def test_slow_older_request_discarded(self) -> None:
        """Test an older request resolving after a newer one is dropped."""
        guard: LatestRequestGuard[str] = LatestRequestGuard()
        release_old = asyncio.Event()

        async def slow() -> str:
            await release_old.wait()
            return "old"

        async def fast() -> str:
            return "new"

        old_task = asyncio.create_task(guard.run("ap", slow()))
        await asyncio.sleep(0)
        new_result = await guard.run("apple", fast())
        release_old.set()

        assert new_result == "new"
        assert await old_task is None
        assert guard.current_key == "apple"


class TestLookupService:
    """Tests for LookupService flows."""

    @pytest.mark.asyncio
    async def test_quick_lookup_writes_through(
        self, make_session, recents_store: RecentsStore, sample_quote_record
    ) -> None:
        """Test a successful lookup adds the ticker with the quote's name."""
        session = make_session(lambda params: {params["t"]: sample_quote_record})
        service = LookupService(recents_store, session=session)

        lookup = await service.quick_lookup("aapl")

        assert lookup.ok
        recents = await recents_store.list()
        assert [(r.symbol, r.name) for r in recents] == [("AAPL", "Apple Inc.")]

    @pytest.mark.asyncio
    async def test_quick_lookup_uses_given_name(
        self, make_session, recents_store: RecentsStore, sample_quote_record
    ) -> None:
        """Test the name from a search hit is stored when given."""
        session = make_session(lambda params: {params["t"]: sample_quote_record})
        service = LookupService(recents_store, session=session)

        await service.quick_lookup("AAPL", name="Apple (search)")

        assert (await recents_store.list())[0].name == "Apple (search)"

    @pytest.mark.asyncio
    async def test_failed_lookup_not_recorded(self, make_session, recents_store: RecentsStore) -> None:
        """Test not-found and failed lookups leave recents untouched."""
        service = LookupService(recents_store, session=make_session(lambda params: {}))
        lookup = await service.quick_lookup("ZZZZ")
        assert lookup.status == LookupStatus.NOT_FOUND

        service = LookupService(recents_store, session=make_session(lambda params: (500, "")))
        lookup = await service.quick_lookup("AAPL")
        assert lookup.status == LookupStatus.TRANSPORT_ERROR

        assert await recents_store.list() == []

    @pytest.mark.asyncio
    async def test_storage_write_failure_keeps_quote(
        self, make_session, recents_store: RecentsStore, sample_quote_record, monkeypatch
    ) -> None:
        """Test a recents write failure does not fail the lookup."""

        async def broken_upsert(symbol: str, name: str):
            raise StorageError("disk full")

        monkeypatch.setattr(recents_store, "upsert", broken_upsert)
        session = make_session(lambda params: {params["t"]: sample_quote_record})
        service = LookupService(recents_store, session=session)

        lookup = await service.quick_lookup("AAPL")
        assert lookup.ok

    @pytest.mark.asyncio
    async def test_search_latest_wins(self, make_session, recents_store: RecentsStore) -> None:
        """Test a slow earlier search cannot overwrite a newer one."""

        def handler(params):
            return {"quotes": [{"symbol": params["q"].upper(), "quoteType": "EQUITY"}]}

        session = make_session(handler)
        session.gates["ap"] = asyncio.Event()
        service = LookupService(recents_store, session=session)

        old = asyncio.create_task(service.search("ap"))
        await asyncio.sleep(0)
        newest = await service.search("apple")
        session.gates["ap"].set()

        assert [r.symbol for r in newest.results] == ["APPLE"]
        assert await old is None

    @pytest.mark.asyncio
    async def test_lookup_latest_wins(
        self, make_session, recents_store: RecentsStore, sample_quote_record
    ) -> None:
        """Test a superseded quote lookup resolves to None."""
        session = make_session(lambda params: {params["t"]: {**sample_quote_record, "ticker": params["t"]}})
        session.gates["MSFT"] = asyncio.Event()
        service = LookupService(recents_store, session=session)

        old = asyncio.create_task(service.lookup("msft"))
        await asyncio.sleep(0)
        newest = await service.lookup("aapl")
        session.gates["MSFT"].set()

        assert newest.quote.ticker == "AAPL"
        assert await old is None

    @pytest.mark.asyncio
    async def test_load_recents_with_quotes(
        self, make_session, recents_store: RecentsStore, sample_quote_record
    ) -> None:
        """Test every recent is enriched, failures keep the stored name."""
        await recents_store.upsert("GONE", "Delisted Corp")
        await recents_store.upsert("AAPL", "Apple")

        def handler(params):
            if params["t"] == "AAPL":
                return {"AAPL": sample_quote_record}
            return {}

        service = LookupService(recents_store, session=make_session(handler))
        items = await service.load_recents_with_quotes()

        assert [item.recent.symbol for item in items] == ["AAPL", "GONE"]
        assert items[0].display_name == "Apple Inc."
        assert items[1].quote is None
        assert items[1].display_name == "Delisted Corp"

    @pytest.mark.asyncio
    async def test_load_recents_empty_no_requests(self, make_session, recents_store: RecentsStore) -> None:
        """Test an empty recents list issues no quote requests."""
        session = make_session(lambda params: {})
        service = LookupService(recents_store, session=session)

        assert await service.load_recents_with_quotes() == []
        assert session.calls == []
