"""Tests for the per-measure dispatch loop shared by all calculation functions."""

from collections.abc import Iterable
from typing import Any

import pytest
from structlog.testing import capture_logs

from riskcalc.basics import USD, Currency
from riskcalc.functions.base import CalculationFunction, resolved_target
from riskcalc.interfaces import ResolvableTarget
from riskcalc.market import MarketData, ScenarioMarketData
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.products import FxNdfTrade, IborFutureOptionTrade
from riskcalc.refdata import ReferenceData
from riskcalc.requirements import MarketDataRequirements
from riskcalc.result import Failure, FailureReason, Success

from tests.conftest import VALUATION_DATE


class CountingTarget:
    """Target that records how often it is resolved."""

    def __init__(self) -> None:
        self.resolve_calls = 0

    def resolve(self, ref_data: ReferenceData) -> "CountingTarget":
        self.resolve_calls += 1
        return self


def _broken(target: Any, market_data: Any) -> float:
    raise ZeroDivisionError("float division by zero")


class CountingFunction(CalculationFunction[CountingTarget]):
    MEASURES = frozenset({Measure.PRESENT_VALUE, Measure.UNIT_PRICE, Measure.RESOLVED_TARGET})

    def __init__(self) -> None:
        super().__init__(
            {
                Measure.PRESENT_VALUE: lambda target, md: md.scenario_count * 1.5,
                Measure.UNIT_PRICE: _broken,
                Measure.RESOLVED_TARGET: resolved_target,
            },
            self.MEASURES,
        )
        self.view_calls = 0

    def target_type(self) -> type[CountingTarget]:
        return CountingTarget

    def natural_currency(self, target: CountingTarget, ref_data: ReferenceData) -> Currency:
        return USD

    def requirements(
        self,
        target: CountingTarget,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> MarketDataRequirements:
        return MarketDataRequirements.empty()

    def market_data_view(
        self, target: CountingTarget, parameters: CalculationParameters, market_data: ScenarioMarketData
    ) -> ScenarioMarketData:
        self.view_calls += 1
        return market_data


@pytest.fixture
def empty_market() -> ScenarioMarketData:
    return ScenarioMarketData([MarketData(VALUATION_DATE), MarketData(VALUATION_DATE)])


def test_resolves_once_for_all_measures(empty_market: ScenarioMarketData) -> None:
    """The target is resolved and the view built once, however many measures are asked for."""
    target = CountingTarget()
    function = CountingFunction()
    measures = [Measure.PRESENT_VALUE, Measure.UNIT_PRICE, Measure.RESOLVED_TARGET, Measure.PAR_RATE]
    function.calculate(target, measures, CalculationParameters.empty(), empty_market, ReferenceData.standard())
    assert target.resolve_calls == 1
    assert function.view_calls == 1


def test_result_keys_match_request(empty_market: ScenarioMarketData) -> None:
    """Every requested measure gets exactly one result; duplicates collapse."""
    measures = [Measure.PRESENT_VALUE, Measure.CASH_FLOWS, Measure.PRESENT_VALUE]
    results = CountingFunction().calculate(
        CountingTarget(), measures, CalculationParameters.empty(), empty_market, ReferenceData.standard()
    )
    assert set(results) == {Measure.PRESENT_VALUE, Measure.CASH_FLOWS}
    assert results[Measure.PRESENT_VALUE] == Success(3.0)


def test_empty_request_gives_empty_result(empty_market: ScenarioMarketData) -> None:
    results = CountingFunction().calculate(
        CountingTarget(), [], CalculationParameters.empty(), empty_market, ReferenceData.standard()
    )
    assert results == {}


def test_unsupported_measure_fails_alone(empty_market: ScenarioMarketData) -> None:
    with capture_logs() as logs:
        results = CountingFunction().calculate(
            CountingTarget(),
            [Measure.PAR_RATE, Measure.PRESENT_VALUE],
            CalculationParameters.empty(),
            empty_market,
            ReferenceData.standard(),
        )
    assert results[Measure.PAR_RATE] == Failure.of(
        FailureReason.UNSUPPORTED, "Unsupported measure for CountingTarget: ParRate"
    )
    assert results[Measure.PRESENT_VALUE].is_success
    warnings = [e for e in logs if e["event"] == "Unsupported measure requested"]
    assert warnings[0]["measure"] == "ParRate"
    assert warnings[0]["log_level"] == "warning"


def test_calculator_error_is_isolated(empty_market: ScenarioMarketData) -> None:
    """An exception in one calculator becomes that measure's failure; siblings still succeed."""
    target = CountingTarget()
    with capture_logs() as logs:
        results = CountingFunction().calculate(
            target,
            [Measure.UNIT_PRICE, Measure.PRESENT_VALUE, Measure.RESOLVED_TARGET],
            CalculationParameters.empty(),
            empty_market,
            ReferenceData.standard(),
        )
    failure = results[Measure.UNIT_PRICE]
    assert failure.reason is FailureReason.CALCULATION_FAILED
    assert failure.message == "Error calculating UnitPrice for CountingTarget: float division by zero"
    assert isinstance(failure.cause, ZeroDivisionError)
    assert results[Measure.PRESENT_VALUE].is_success
    assert results[Measure.RESOLVED_TARGET].get_value() is target
    assert any(e["event"] == "Measure calculation failed" for e in logs)


def test_declared_measures_must_match_calculators() -> None:
    class Mismatched(CountingFunction):
        MEASURES = frozenset({Measure.PRESENT_VALUE, Measure.PAR_RATE})

    with pytest.raises(ValueError, match="supported measures must match registered calculators"):
        Mismatched()


def test_supported_measures_and_identifier() -> None:
    function = CountingFunction()
    assert function.supported_measures() == CountingFunction.MEASURES
    assert function.identifier(CountingTarget()) is None
    assert function.target_name == "CountingTarget"


def test_targets_are_resolvable(ndf_trade: FxNdfTrade, option_trade: IborFutureOptionTrade) -> None:
    """Any object with a resolve method can be a target, including the built-in trades."""
    assert isinstance(CountingTarget(), ResolvableTarget)
    assert isinstance(ndf_trade, ResolvableTarget)
    assert isinstance(option_trade, ResolvableTarget)
    assert not isinstance(object(), ResolvableTarget)
