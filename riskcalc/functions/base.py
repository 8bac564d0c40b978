"""
Base class for calculation functions.

A calculation function handles one target type. It declares the measures it
supports, the market data it needs, and calculates any subset of those
measures for every scenario of a scenario market data set.

The dispatch loop resolves the target once, narrows the market data once,
and then calculates each requested measure independently: an unsupported
measure or a calculator error fails that measure only. Errors raised while
resolving the target or reading the calculation parameters leave nothing to
calculate, so they propagate to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar

import structlog

from riskcalc.basics import Currency
from riskcalc.interfaces import ResolvableTarget, SingleMeasureCalculation
from riskcalc.market import ScenarioMarketData
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.refdata import ReferenceData
from riskcalc.requirements import MarketDataRequirements
from riskcalc.result import Failure, FailureReason, Result, capture

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=ResolvableTarget)


def resolved_target(resolved: Any, market_data: Any) -> Any:
    """Calculator for Measure.RESOLVED_TARGET: the resolved target itself, no market data used."""
    return resolved


class CalculationFunction(ABC, Generic[T]):
    """
    Calculation function for one target type.

    Subclasses pass their calculator registry and the measures they declare;
    the two must agree exactly, which is checked here rather than on every call.
    Instances are read-only after construction and may be shared between threads.
    """

    def __init__(
        self,
        calculators: Mapping[Measure, SingleMeasureCalculation],
        measures: Iterable[Measure],
    ) -> None:
        registry = MappingProxyType(dict(calculators))
        declared = frozenset(measures)
        if declared != frozenset(registry):
            missing = sorted(str(m) for m in declared - registry.keys())
            undeclared = sorted(str(m) for m in registry.keys() - declared)
            raise ValueError(
                f"{type(self).__name__}: supported measures must match registered calculators; "
                f"no calculator for {missing}, undeclared calculators for {undeclared}"
            )
        self._calculators: Mapping[Measure, SingleMeasureCalculation] = registry
        self._measures = declared

    @abstractmethod
    def target_type(self) -> type[T]:
        """The target type handled by this function."""
        ...

    def supported_measures(self) -> frozenset[Measure]:
        return self._measures

    def identifier(self, target: T) -> str | None:
        """Trade reference of the target, if it has one. Diagnostics only."""
        info = getattr(target, "info", None)
        return getattr(info, "id", None)

    @abstractmethod
    def natural_currency(self, target: T, ref_data: ReferenceData) -> Currency:
        """The currency the target is intrinsically denominated in."""
        ...

    @abstractmethod
    def requirements(
        self,
        target: T,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> MarketDataRequirements:
        """Market data needed to calculate measures for target; needs no market data itself."""
        ...

    @abstractmethod
    def market_data_view(
        self, target: T, parameters: CalculationParameters, market_data: ScenarioMarketData
    ) -> Any:
        """Narrow scenario market data into the view passed to every calculator."""
        ...

    @property
    def target_name(self) -> str:
        return self.target_type().__name__

    def calculate(
        self,
        target: T,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        market_data: ScenarioMarketData,
        ref_data: ReferenceData,
    ) -> dict[Measure, Result]:
        """Result for every requested measure, each calculated for all scenarios."""
        # resolve the target once for all measures and all scenarios
        resolved = target.resolve(ref_data)
        identifier = self.identifier(target)
        logger.debug("Resolved calculation target", target_type=self.target_name, identifier=identifier)

        view = self.market_data_view(target, parameters, market_data)

        results: dict[Measure, Result] = {}
        for measure in measures:
            if measure not in results:
                results[measure] = self._calculate_measure(measure, resolved, view, identifier)
        return results

    def _calculate_measure(
        self, measure: Measure, resolved: Any, view: Any, identifier: str | None
    ) -> Result:
        calculator = self._calculators.get(measure)
        if calculator is None:
            logger.warning(
                "Unsupported measure requested",
                measure=str(measure),
                target_type=self.target_name,
                identifier=identifier,
            )
            return Failure.of(
                FailureReason.UNSUPPORTED, f"Unsupported measure for {self.target_name}: {measure}"
            )
        result = capture(calculator, resolved, view)
        if isinstance(result, Failure) and result.cause is not None:
            logger.warning(
                "Measure calculation failed",
                measure=str(measure),
                target_type=self.target_name,
                identifier=identifier,
                reason=result.reason.value,
                error=result.message,
            )
            result = Failure(
                result.reason,
                f"Error calculating {measure} for {self.target_name}: {result.message}",
                result.cause,
            )
        return result
