"""Query-string validation and option normalization.

Turns the raw ``key -> string`` mapping of a request's query string into a
typed, defaulted, immutable options record per endpoint.

Rules shared by both endpoints:
  - A required key that is absent or empty is missing; all missing keys are
    reported together in one ``InvalidParametersError``.
  - ``timeframe`` defaults to ``y`` and ``period`` to ``1m`` when absent or
    empty. Unknown timeframes are rejected.
  - Numbers are coerced leniently (see ``coerce_number``): unparsable input
    becomes NaN rather than an error unless ``strict_numeric`` is set.
  - Timestamps arrive in seconds and are stored in milliseconds.
"""

import math
import re
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from tradeview.exceptions import InvalidParametersError

DEFAULT_PERIOD = "1m"
MS_PER_SECOND = 1000

Number = int | float

# ASCII digits only; \d would also accept other scripts' digits
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_PREFIXED_INTEGER = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"[+-]?Infinity")


class Timeframe(str, Enum):
    """Coarse granularity tag accepted by the filtering endpoints."""

    YEAR = "y"
    DAY = "d"
    HOUR = "h"


DEFAULT_TIMEFRAME = Timeframe.YEAR

CANDLE_REQUIRED_FIELDS = ("exchange", "pair")
PRIVATE_TRADE_REQUIRED_FIELDS = (
    "account",
    "exchange",
    "pair",
    "minPrice",
    "maxPrice",
    "minTimestamp",
    "maxTimestamp",
)

# (query-string key, options field, scale)
_NUMERIC_FIELDS = (
    ("minPrice", "min_price", 1),
    ("maxPrice", "max_price", 1),
    ("minTimestamp", "min_timestamp", MS_PER_SECOND),
    ("maxTimestamp", "max_timestamp", MS_PER_SECOND),
)


class CandleQueryOptions(BaseModel):
    """Filter for pre-aggregated candles of one exchange/pair."""

    model_config = ConfigDict(frozen=True)

    exchange: str = Field(..., min_length=1)
    pair: str = Field(..., min_length=1)
    timeframe: Timeframe = DEFAULT_TIMEFRAME
    period: str = DEFAULT_PERIOD


class PrivateTradeQueryOptions(BaseModel):
    """Filter for an account's executed trades within a price and time window.

    Timestamps are in milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    account: str = Field(..., min_length=1)
    exchange: str = Field(..., min_length=1)
    pair: str = Field(..., min_length=1)
    timeframe: Timeframe = DEFAULT_TIMEFRAME
    period: str = DEFAULT_PERIOD
    min_price: Number
    max_price: Number
    min_timestamp: Number
    max_timestamp: Number


def coerce_number(raw: str) -> Number:
    """Parse a query-string value into a number without ever raising.

    Accepts surrounding whitespace, decimal and exponent notation,
    ``Infinity``, and ``0x``/``0o``/``0b`` prefixed integers. Blank input is
    0, anything else unparsable is NaN. Integral finite results come back as
    ``int``.

    >>> coerce_number(" 42 ")
    42
    >>> coerce_number("1.5e1")
    15
    >>> coerce_number("abc")
    nan
    """
    text = raw.strip()
    if not text:
        return 0
    if _PREFIXED_INTEGER.fullmatch(text):
        return int(text, 0)
    if _INFINITY.fullmatch(text):
        return float(text.replace("Infinity", "inf"))
    if not _DECIMAL.fullmatch(text):
        return math.nan
    return _integral(float(text))


def _integral(value: Number) -> Number:
    if isinstance(value, int):
        return value
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def _is_finite(value: Number) -> bool:
    # ints from prefixed literals can exceed float range
    return isinstance(value, int) or math.isfinite(value)


def _missing_fields(
    params: Mapping[str, str | None], required: tuple[str, ...]
) -> tuple[str, ...]:
    return tuple(key for key in required if not params.get(key))


def _timeframe(params: Mapping[str, str | None]) -> Timeframe:
    raw = params.get("timeframe")
    if not raw:
        return DEFAULT_TIMEFRAME
    try:
        return Timeframe(raw)
    except ValueError:
        raise InvalidParametersError(
            f"Unsupported timeframe: {raw!r}", invalid=("timeframe",)
        ) from None


def parse_candle_options(params: Mapping[str, str | None]) -> CandleQueryOptions:
    """Validate candle query parameters.

    Raises:
        InvalidParametersError: exchange or pair is missing, or the timeframe
            is not one of y/d/h.
    """
    missing = _missing_fields(params, CANDLE_REQUIRED_FIELDS)
    if missing:
        raise InvalidParametersError(missing=missing)

    return CandleQueryOptions(
        exchange=params["exchange"],
        pair=params["pair"],
        timeframe=_timeframe(params),
        period=params.get("period") or DEFAULT_PERIOD,
    )


def parse_private_trade_options(
    params: Mapping[str, str | None],
    *,
    strict_numeric: bool = False,
) -> PrivateTradeQueryOptions:
    """Validate private-trade query parameters.

    Prices and timestamps are coerced with ``coerce_number``; timestamps are
    scaled from seconds to milliseconds. Non-numeric input propagates as NaN
    unless ``strict_numeric`` is set, in which case any non-finite value is
    rejected.

    Raises:
        InvalidParametersError: one of the seven required fields is missing,
            the timeframe is unknown, or (strict mode) a number is not finite.
    """
    missing = _missing_fields(params, PRIVATE_TRADE_REQUIRED_FIELDS)
    if missing:
        raise InvalidParametersError(missing=missing)

    numbers = {
        field: _integral(coerce_number(params[source]) * scale)
        for source, field, scale in _NUMERIC_FIELDS
    }

    if strict_numeric:
        invalid = tuple(
            source
            for source, field, _ in _NUMERIC_FIELDS
            if not _is_finite(numbers[field])
        )
        if invalid:
            raise InvalidParametersError(
                f"Non-numeric query params: {', '.join(invalid)}", invalid=invalid
            )

    return PrivateTradeQueryOptions(
        account=params["account"],
        exchange=params["exchange"],
        pair=params["pair"],
        timeframe=_timeframe(params),
        period=params.get("period") or DEFAULT_PERIOD,
        **numbers,
    )
