from typing import Any

from fastapi import APIRouter, Depends, Query

from tradeview.queries import QueryDispatcher

from ..deps import get_dispatcher

router = APIRouter()


@router.get("/private-trade")
async def get_private_trades(
    account: str | None = Query(None),
    exchange: str | None = Query(None),
    pair: str | None = Query(None),
    timeframe: str | None = Query(None, description="y, d or h (default y)"),
    period: str | None = Query(None, description="Grouping period (default 1m)"),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    min_timestamp: str | None = Query(
        None, alias="minTimestamp", description="Unix seconds"
    ),
    max_timestamp: str | None = Query(
        None, alias="maxTimestamp", description="Unix seconds"
    ),
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
) -> list[dict[str, Any]]:
    """Trades of one account, ordered by timestamp."""
    return await dispatcher.fetch_private_trades(
        {
            "account": account,
            "exchange": exchange,
            "pair": pair,
            "timeframe": timeframe,
            "period": period,
            "minPrice": min_price,
            "maxPrice": max_price,
            "minTimestamp": min_timestamp,
            "maxTimestamp": max_timestamp,
        }
    )
