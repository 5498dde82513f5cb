"""Pydantic model for entries of the recents list."""

from pydantic import BaseModel, Field


class RecentTicker(BaseModel):
    """A recently looked up ticker as persisted in local storage."""

    symbol: str = Field(..., description="Stock ticker symbol")
    name: str = Field(..., description="Display name at lookup time")
    timestamp: int = Field(..., description="Lookup time in epoch milliseconds")
