"""Ticker search, Zacks Rank quotes and a recents list for the command line."""

__version__ = "1.0.0"
