"""Pydantic model for a Zacks quote record."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ZacksQuoteData(BaseModel):
    """Quote snapshot for one ticker as returned by the Zacks quote feed.

    Every value is kept as a string because the feed mixes numbers with
    ``"NA"`` and ``"-"`` placeholders. Vendor fields the model does not
    name are kept as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ticker: str = Field("", description="Stock ticker symbol")
    name: str = Field("", description="Company name")
    last: str = Field("", description="Last traded price")
    net_change: str = Field("", description="Change since previous close")
    percent_net_change: str = Field("", description="Percent change since previous close")
    previous_close: str = Field("", description="Previous close")
    zacks_rank: str = Field("NA", description='Zacks rank, "1".."5" or "NA"')
    zacks_rank_text: str = Field("", description="Rank label, e.g. Strong Buy")
    dividend_yield: str = Field("", description="Dividend yield in percent")
    updated: str = Field("", description="Vendor timestamp of the snapshot")

    pe_ratio: str = Field("", alias="SUNGARD_PE_RATIO", description="P/E ratio")
    eps: str = Field("", alias="SUNGARD_EPS", description="Earnings per share")
    market_cap: str = Field("", alias="SUNGARD_MARKET_CAP", description="Market capitalization")
    open: str = Field("", alias="SUNGARD_OPEN", description="Opening price")
    bid: str = Field("", alias="SUNGARD_BID", description="Bid price")
    ask: str = Field("", alias="SUNGARD_ASK", description="Ask price")
    year_low: str = Field("", alias="SUNGARD_YRLOW", description="52 week low")
    year_high: str = Field("", alias="SUNGARD_YRHIGH", description="52 week high")

    source: dict[str, Any] = Field(default_factory=dict, description="Raw per-vendor blocks")

    @field_validator(
        "ticker",
        "name",
        "last",
        "net_change",
        "percent_net_change",
        "previous_close",
        "zacks_rank",
        "zacks_rank_text",
        "dividend_yield",
        "updated",
        "pe_ratio",
        "eps",
        "market_cap",
        "open",
        "bid",
        "ask",
        "year_low",
        "year_high",
        mode="before",
    )
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        """Coerce JSON numbers and nulls to the feed's string form."""
        if v is None:
            return ""
        if isinstance(v, bool):
            return str(v).lower()
        return str(v)

    @field_validator("source", mode="before")
    @classmethod
    def coerce_source(cls, v: Any) -> dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @property
    def dividend(self) -> str:
        """Annual dividend per share from the ``source.sungard`` block."""
        sungard = self.source.get("sungard")
        if not isinstance(sungard, dict):
            return ""
        value = sungard.get("dividend")
        return "" if value is None else str(value)
