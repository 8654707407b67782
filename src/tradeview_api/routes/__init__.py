from .kline import router as kline_router
from .private_trade import router as private_trade_router

__all__ = ["kline_router", "private_trade_router"]
