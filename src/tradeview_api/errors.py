"""Translate tradeview exceptions into HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradeview.exceptions import InvalidParametersError, QueryExecutionError
from tradeview.infrastructure.observability import get_api_logger

logger = get_api_logger("error-handler")


async def invalid_parameters_handler(
    request: Request, exc: InvalidParametersError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "missing": list(exc.missing),
            "invalid": list(exc.invalid),
        },
    )


async def query_execution_handler(
    request: Request, exc: QueryExecutionError
) -> JSONResponse:
    # Driver messages can leak schema details; keep them in the logs only
    logger.error(
        "query_execution_failed",
        path=request.url.path,
        error=str(exc),
        cause=type(exc.__cause__).__name__ if exc.__cause__ else None,
    )
    return JSONResponse(status_code=500, content={"detail": "Query execution failed"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidParametersError, invalid_parameters_handler)
    app.add_exception_handler(QueryExecutionError, query_execution_handler)
