from typing import Any

from fastapi import APIRouter, Depends, Query

from tradeview.queries import QueryDispatcher

from ..deps import get_dispatcher

router = APIRouter()


# Parameters are declared optional so that missing ones reach the dispatcher,
# which reports them as InvalidParametersError rather than a framework 422.
@router.get("/kline")
async def get_kline(
    exchange: str | None = Query(None, description="Exchange, e.g. binance"),
    pair: str | None = Query(None, description="Trading pair, e.g. BTCUSD"),
    timeframe: str | None = Query(None, description="y, d or h (default y)"),
    period: str | None = Query(None, description="Candle period (default 1m)"),
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
) -> list[dict[str, Any]]:
    return await dispatcher.fetch_candles(
        {
            "exchange": exchange,
            "pair": pair,
            "timeframe": timeframe,
            "period": period,
        }
    )
