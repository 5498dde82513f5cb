"""Lookup status enumeration."""

from enum import Enum


class LookupStatus(str, Enum):
    """Outcome of a search or quote lookup."""

    OK = "OK"
    EMPTY_QUERY = "EMPTY_QUERY"
    NOT_FOUND = "NOT_FOUND"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
