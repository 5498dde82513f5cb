"""Pydantic model for ticker search hits."""

from pydantic import BaseModel, Field, field_validator


class TickerSearchResult(BaseModel):
    """A single equity or ETF returned by the ticker search."""

    symbol: str = Field(..., description="Stock ticker symbol")
    name: str = Field(..., description="Long name, short name or the symbol itself")

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        """Strip surrounding whitespace."""
        return v.strip()
