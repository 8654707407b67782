"""Query layer: request parameter validation and statement dispatch."""

from .dispatcher import (
    QueryDispatcher,
    SqlStatement,
    build_candle_statement,
    build_private_trade_statement,
)
from .options import (
    CandleQueryOptions,
    PrivateTradeQueryOptions,
    Timeframe,
    coerce_number,
    parse_candle_options,
    parse_private_trade_options,
)

__all__ = [
    "CandleQueryOptions",
    "PrivateTradeQueryOptions",
    "QueryDispatcher",
    "SqlStatement",
    "Timeframe",
    "build_candle_statement",
    "build_private_trade_statement",
    "coerce_number",
    "parse_candle_options",
    "parse_private_trade_options",
]
