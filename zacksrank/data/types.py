"""Type aliases for data structures."""

# Any decoded JSON value
JSONValue = str | int | float | bool | None | list["JSONValue"] | dict[str, "JSONValue"]

# One entry of the Yahoo search "quotes" array
YahooQuoteDict = dict[str, str | int | float | bool | None]

# Zacks quote feed body: ticker -> raw quote record
ZacksResponseDict = dict[str, dict[str, JSONValue]]

# RecentTicker.model_dump() output, as stored in the JSON list
RecentTickerDict = dict[str, str | int]
