"""
Calculation engine: routes each target to the calculation function for its type.

Design intent:
- Targets are **data only**; everything about how to price them lives in a
  `CalculationFunction`, one per target type.
- This router is a **registry keyed by target type**, enabling:
  - Adding new target types without modifying engine code
  - Swapping calculation functions per target type
- Functions are read-only after registration, so one router can serve
  concurrent calculations.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import structlog

from riskcalc.config import CalcSettings
from riskcalc.errors import UnsupportedTargetError
from riskcalc.functions.base import CalculationFunction
from riskcalc.market import ScenarioMarketData
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.refdata import ReferenceData
from riskcalc.requirements import MarketDataRequirements
from riskcalc.result import Failure, Result

logger = structlog.get_logger(__name__)


class CalculationFunctions:
    """
    Registry-based router.

    A target is dispatched to the function registered for its exact type, or
    failing that for the nearest base class in its MRO.
    """

    def __init__(self) -> None:
        self._functions: dict[type, CalculationFunction[Any]] = {}

    def register(self, function: CalculationFunction[Any]) -> None:
        """Register a function for its target type. One function per type."""
        target_type = function.target_type()
        if target_type in self._functions:
            raise ValueError(
                f"A calculation function is already registered for {target_type.__name__}"
            )
        self._functions[target_type] = function

    @property
    def target_types(self) -> frozenset[type]:
        return frozenset(self._functions)

    def find_function(self, target: Any) -> CalculationFunction[Any] | None:
        for cls in type(target).__mro__:
            function = self._functions.get(cls)
            if function is not None:
                return function
        return None

    def function_for(self, target: Any) -> CalculationFunction[Any]:
        """Function for the target's type. Raises UnsupportedTargetError if none is registered."""
        function = self.find_function(target)
        if function is None:
            raise UnsupportedTargetError(
                f"No calculation function registered for {type(target).__name__}. "
                "Register one with functions.register(function)."
            )
        return function

    def requirements(
        self,
        target: Any,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> MarketDataRequirements:
        return self.function_for(target).requirements(target, measures, parameters, ref_data)

    def calculate(
        self,
        target: Any,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        market_data: ScenarioMarketData,
        ref_data: ReferenceData,
    ) -> dict[Measure, Result]:
        """
        Calculate measures for one target.

        Requirements are gathered first and checked against the market data so
        that missing inputs are reported up front; calculation still proceeds,
        and measures that need the missing data fail individually.
        """
        function = self.function_for(target)
        measures = list(dict.fromkeys(measures))
        identifier = function.identifier(target)
        requirements = function.requirements(target, measures, parameters, ref_data)
        missing = market_data.missing_keys(requirements)
        if missing:
            logger.warning(
                "Required market data missing",
                target_type=function.target_name,
                identifier=identifier,
                missing=sorted(str(key) for key in missing),
            )
        logger.info(
            "Calculating target",
            target_type=function.target_name,
            identifier=identifier,
            measures=[str(m) for m in measures],
            scenarios=market_data.scenario_count,
        )
        return function.calculate(target, measures, parameters, market_data, ref_data)

    def calculate_all(
        self,
        targets: Sequence[Any],
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        market_data: ScenarioMarketData,
        ref_data: ReferenceData,
        max_workers: int | None = None,
    ) -> list[dict[Measure, Result]]:
        """
        Calculate measures for many targets; results are in target order.

        A target that cannot be calculated at all (invalid, unsupported type,
        missing configuration) gets a failure for each requested measure; other
        targets are unaffected. With max_workers set, targets run on a thread pool.
        """
        measures = list(dict.fromkeys(measures))

        def run(target: Any) -> dict[Measure, Result]:
            try:
                return self.calculate(target, measures, parameters, market_data, ref_data)
            except Exception as exc:
                logger.error(
                    "Target calculation failed",
                    target_type=type(target).__name__,
                    error=str(exc),
                )
                failure = Failure.from_exception(
                    exc, f"Unable to calculate {type(target).__name__}: {exc}"
                )
                return {measure: failure for measure in measures}

        if max_workers is None:
            return [run(target) for target in targets]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(run, targets))


def create_default_functions(settings: CalcSettings | None = None) -> CalculationFunctions:
    """Factory for a router with all built-in calculation functions registered."""
    from riskcalc.functions import (
        FxNdfMeasureCalculations,
        FxNdfTradeCalculationFunction,
        IborFutureOptionMeasureCalculations,
        IborFutureOptionTradeCalculationFunction,
    )
    from riskcalc.risk import CurveSensitivityCalculator

    settings = settings or CalcSettings.from_env()
    sensitivity = CurveSensitivityCalculator(bump_bp=settings.sensitivity_bump_bp)

    functions = CalculationFunctions()
    functions.register(
        FxNdfTradeCalculationFunction(FxNdfMeasureCalculations(sensitivity_calculator=sensitivity))
    )
    functions.register(
        IborFutureOptionTradeCalculationFunction(
            IborFutureOptionMeasureCalculations(sensitivity_calculator=sensitivity)
        )
    )
    return functions
