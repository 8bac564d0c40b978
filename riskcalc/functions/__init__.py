"""Calculation functions, one per target type."""

from riskcalc.functions.base import CalculationFunction, resolved_target
from riskcalc.functions.fx_ndf import FxNdfMeasureCalculations, FxNdfTradeCalculationFunction
from riskcalc.functions.ibor_future_option import (
    IborFutureOptionMeasureCalculations,
    IborFutureOptionTradeCalculationFunction,
)

__all__ = [
    "CalculationFunction",
    "resolved_target",
    "FxNdfMeasureCalculations",
    "FxNdfTradeCalculationFunction",
    "IborFutureOptionMeasureCalculations",
    "IborFutureOptionTradeCalculationFunction",
]
