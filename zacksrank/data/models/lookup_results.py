"""Tagged results returned by the search and quote clients."""

from pydantic import BaseModel, Field

from zacksrank.data.models.lookup_status import LookupStatus
from zacksrank.data.models.quote_data import ZacksQuoteData
from zacksrank.data.models.recent_ticker import RecentTicker
from zacksrank.data.models.ticker_search_result import TickerSearchResult


class SearchOutcome(BaseModel):
    """Search results together with the reason they may be empty."""

    query: str = Field(..., description="Query the search was issued for")
    status: LookupStatus = Field(default=LookupStatus.OK)
    results: list[TickerSearchResult] = Field(default_factory=list)
    error: str | None = Field(None, description="Failure message, if any")

    @property
    def ok(self) -> bool:
        return self.status in (LookupStatus.OK, LookupStatus.EMPTY_QUERY)


class QuoteLookup(BaseModel):
    """Quote for a ticker, or the reason it is missing."""

    ticker: str = Field(..., description="Uppercased ticker the lookup was issued for")
    status: LookupStatus = Field(default=LookupStatus.OK)
    quote: ZacksQuoteData | None = Field(None)
    error: str | None = Field(None, description="Failure message, if any")

    @property
    def ok(self) -> bool:
        return self.status == LookupStatus.OK and self.quote is not None


class RecentWithQuote(BaseModel):
    """A recents entry enriched with a freshly fetched quote."""

    recent: RecentTicker
    quote: ZacksQuoteData | None = None

    @property
    def display_name(self) -> str:
        """Name from the fresh quote, falling back to the stored name."""
        if self.quote is not None and self.quote.name:
            return self.quote.name
        return self.recent.name
