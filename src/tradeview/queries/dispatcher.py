"""Statement building and dispatch for the filtering endpoints.

Each endpoint maps to exactly one fixed SQL statement. Values never enter the
SQL text: they travel in ``SqlStatement.params`` and are bound by the driver
to the ``$n`` placeholders.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tradeview.exceptions import InvalidParametersError
from tradeview.infrastructure.database import IDatabaseAdapter
from tradeview.infrastructure.observability import get_query_logger

from .options import (
    CandleQueryOptions,
    PrivateTradeQueryOptions,
    parse_candle_options,
    parse_private_trade_options,
)

logger = get_query_logger()

Row = dict[str, Any]

CANDLE_SQL = (
    "SELECT timestamp, open, high, low, close, volume FROM public_candle "
    "WHERE exchange = $1 AND pair = $2 AND period = $3"
)

PRIVATE_TRADE_SQL = (
    "SELECT timestamp, side, price, size FROM private_trade "
    "WHERE account = $1 AND exchange = $2 AND pair = $3 "
    "AND price BETWEEN $4 AND $5 AND timestamp BETWEEN $6 AND $7 "
    "ORDER BY timestamp"
)


@dataclass(frozen=True)
class SqlStatement:
    name: str
    sql: str
    params: tuple[Any, ...]


def build_candle_statement(options: CandleQueryOptions) -> SqlStatement:
    # timeframe is accepted but not part of the filter; period sets granularity
    return SqlStatement(
        name="candles",
        sql=CANDLE_SQL,
        params=(options.exchange, options.pair, options.period),
    )


def build_private_trade_statement(options: PrivateTradeQueryOptions) -> SqlStatement:
    return SqlStatement(
        name="private_trades",
        sql=PRIVATE_TRADE_SQL,
        params=(
            options.account,
            options.exchange,
            options.pair,
            options.min_price,
            options.max_price,
            options.min_timestamp,
            options.max_timestamp,
        ),
    )


class QueryDispatcher:
    """Validates raw query parameters and runs the matching statement.

    Every call performs at most one round-trip through ``db``. Invalid
    parameters raise ``InvalidParametersError`` before anything is sent;
    execution failures surface as ``QueryExecutionError`` from the adapter.
    """

    def __init__(self, db: IDatabaseAdapter, strict_numeric: bool = False):
        self.db = db
        self.strict_numeric = strict_numeric

    async def fetch_candles(self, params: Mapping[str, str | None]) -> list[Row]:
        """Candles for one exchange/pair/period."""
        try:
            options = parse_candle_options(params)
        except InvalidParametersError as e:
            self._log_rejected("candles", e)
            raise

        return await self._run(build_candle_statement(options))

    async def fetch_private_trades(self, params: Mapping[str, str | None]) -> list[Row]:
        """An account's trades in a price/time window, oldest first."""
        try:
            options = parse_private_trade_options(
                params, strict_numeric=self.strict_numeric
            )
        except InvalidParametersError as e:
            self._log_rejected("private_trades", e)
            raise

        return await self._run(build_private_trade_statement(options))

    async def _run(self, statement: SqlStatement) -> list[Row]:
        rows = await self.db.fetch_all(statement.sql, *statement.params)
        logger.info("query_dispatched", statement=statement.name, rows=len(rows))
        return rows

    @staticmethod
    def _log_rejected(statement: str, error: InvalidParametersError) -> None:
        logger.warning(
            "parameters_rejected",
            statement=statement,
            missing=list(error.missing),
            invalid=list(error.invalid),
        )
