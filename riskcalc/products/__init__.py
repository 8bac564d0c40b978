"""Products and trades: FX non-deliverable forward, Ibor future option."""

from riskcalc.products.fx import FxIndex, FxNdf, FxNdfTrade, ResolvedFxNdf, ResolvedFxNdfTrade
from riskcalc.products.ibor import (
    IborFuture,
    IborFutureOption,
    IborFutureOptionTrade,
    IborIndex,
    PutCall,
    ResolvedIborFuture,
    ResolvedIborFutureOption,
    ResolvedIborFutureOptionTrade,
)
from riskcalc.products.trade import TradeInfo

__all__ = [
    "TradeInfo",
    "FxIndex",
    "FxNdf",
    "FxNdfTrade",
    "ResolvedFxNdf",
    "ResolvedFxNdfTrade",
    "IborIndex",
    "IborFuture",
    "IborFutureOption",
    "IborFutureOptionTrade",
    "PutCall",
    "ResolvedIborFuture",
    "ResolvedIborFutureOption",
    "ResolvedIborFutureOptionTrade",
]
