"""Scenario calculation engine: measures, calculation functions, lookups, market data, results."""

from riskcalc.basics import (
    Currency,
    CurrencyAmount,
    CurrencyPair,
    FxRate,
    MultiCurrencyAmount,
)
from riskcalc.config import CalcSettings
from riskcalc.curves import ZeroRateCurve
from riskcalc.engine import CalculationFunctions, create_default_functions
from riskcalc.errors import (
    CalcError,
    MarketDataNotFoundError,
    NotConfiguredError,
    ReferenceDataNotFoundError,
    UnsupportedTargetError,
    ValidationError,
)
from riskcalc.functions import (
    CalculationFunction,
    FxNdfTradeCalculationFunction,
    IborFutureOptionTradeCalculationFunction,
)
from riskcalc.interfaces import ResolvableTarget, ScenarioLookup
from riskcalc.lookup import IborFutureOptionMarketDataLookup, RatesMarketDataLookup
from riskcalc.market import (
    CurveId,
    FixingSeriesId,
    FxRateId,
    MarketData,
    ScenarioMarketData,
    VolatilityId,
)
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.refdata import HolidayCalendar, ReferenceData
from riskcalc.requirements import MarketDataRequirements
from riskcalc.result import Failure, FailureError, FailureReason, Result, Success, capture

__all__ = [
    "Currency",
    "CurrencyAmount",
    "CurrencyPair",
    "FxRate",
    "MultiCurrencyAmount",
    "CalcSettings",
    "ZeroRateCurve",
    "CalculationFunctions",
    "create_default_functions",
    "CalcError",
    "MarketDataNotFoundError",
    "NotConfiguredError",
    "ReferenceDataNotFoundError",
    "UnsupportedTargetError",
    "ValidationError",
    "CalculationFunction",
    "FxNdfTradeCalculationFunction",
    "IborFutureOptionTradeCalculationFunction",
    "ResolvableTarget",
    "ScenarioLookup",
    "IborFutureOptionMarketDataLookup",
    "RatesMarketDataLookup",
    "CurveId",
    "FixingSeriesId",
    "FxRateId",
    "MarketData",
    "ScenarioMarketData",
    "VolatilityId",
    "Measure",
    "CalculationParameters",
    "HolidayCalendar",
    "ReferenceData",
    "MarketDataRequirements",
    "Failure",
    "FailureError",
    "FailureReason",
    "Result",
    "Success",
    "capture",
]
