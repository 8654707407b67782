"""
Tradeview Exception Hierarchy

Separates client mistakes (bad query parameters) from failures of the
database round-trip so the HTTP layer can map each to its own response.
"""


class TradeviewError(Exception):
    """Base exception for all tradeview errors."""


class InvalidParametersError(TradeviewError):
    """Required query parameters are missing or hold unusable values."""

    def __init__(
        self,
        message: str = "Invalid query params",
        missing: tuple[str, ...] = (),
        invalid: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.missing = tuple(missing)
        self.invalid = tuple(invalid)


class QueryExecutionError(TradeviewError):
    """The database could not run a statement (connectivity, SQL error)."""

    def __init__(self, message: str, statement: str | None = None):
        super().__init__(message)
        self.statement = statement
