"""Tests for market data containers, requirements and calculation parameters."""

from datetime import date

import pytest

from riskcalc.basics import EUR, USD
from riskcalc.errors import MarketDataNotFoundError, NotConfiguredError
from riskcalc.market import CurveId, FixingSeriesId, FxRateId, MarketData, ScenarioMarketData
from riskcalc.parameters import CalculationParameters
from riskcalc.lookup import RatesMarketDataLookup
from riskcalc.requirements import MarketDataRequirements

from tests.conftest import EUR_DISC, USD_DISC, VALUATION_DATE


def test_curve_and_fx_ids() -> None:
    """FX rate ids are keyed by the conventional pair whatever the argument order."""
    assert FxRateId.of(USD, EUR) == FxRateId.of(EUR, USD)
    assert str(FxRateId.of(USD, EUR)) == "FxRate:EUR/USD"
    assert str(CurveId("Default", "USD-Disc")) == "Default/USD-Disc"


def test_market_data_get_value_missing(market_data: MarketData) -> None:
    with pytest.raises(MarketDataNotFoundError, match="Market data not found for 'Fixings:X'") as exc:
        market_data.get_value(FixingSeriesId("X"))
    assert exc.value.key == FixingSeriesId("X")
    assert market_data.find_value(FixingSeriesId("X")) is None


def test_market_data_with_value_copies(market_data: MarketData) -> None:
    """with_value leaves the original untouched."""
    key = FixingSeriesId("EUR/USD-ECB")
    updated = market_data.with_value(key, {date(2024, 2, 28): 1.079})
    assert updated.contains_value(key)
    assert not market_data.contains_value(key)
    assert updated.valuation_date == market_data.valuation_date


def test_scenario_market_data_requires_common_date(market_data: MarketData) -> None:
    with pytest.raises(ValueError, match="at least one scenario"):
        ScenarioMarketData([])
    other = MarketData(date(2024, 3, 4))
    with pytest.raises(ValueError, match="share a valuation date"):
        ScenarioMarketData([market_data, other])


def test_curve_shift_scenarios(market_data: MarketData) -> None:
    """from_curve_shifts produces one scenario per shift of the chosen curve only."""
    smd = ScenarioMarketData.from_curve_shifts(market_data, USD_DISC, [0.0, 10.0, -10.0])
    assert smd.scenario_count == 3
    assert smd.valuation_date == VALUATION_DATE
    usd_rates = [md.get_value(USD_DISC).zero_rates_cc[0] for md in smd]
    assert abs(usd_rates[1] - 0.051) < 1e-12
    assert abs(usd_rates[2] - 0.049) < 1e-12
    assert all(md.get_value(EUR_DISC) == market_data.get_value(EUR_DISC) for md in smd)


def test_missing_keys_ignores_optional(scenario_data: ScenarioMarketData) -> None:
    missing_curve = CurveId("Default", "GBP-Disc")
    reqs = MarketDataRequirements.of(
        required=[USD_DISC, missing_curve], optional=[FixingSeriesId("EUR/USD-ECB")]
    )
    assert scenario_data.missing_keys(reqs) == frozenset({missing_curve})


def test_requirements_required_wins_over_optional() -> None:
    """A key that is both required and optional is treated as required."""
    a = MarketDataRequirements.of(required=[USD_DISC], output_currencies=[USD])
    b = MarketDataRequirements.of(required=[EUR_DISC], optional=[USD_DISC], output_currencies=[EUR])
    combined = a.combined_with(b)
    assert combined.required == frozenset({USD_DISC, EUR_DISC})
    assert combined.optional == frozenset()
    assert combined.output_currencies == frozenset({USD, EUR})
    assert combined.key_flags == {USD_DISC: True, EUR_DISC: True}
    assert len(MarketDataRequirements.empty()) == 0


def test_requirements_value_equality() -> None:
    a = MarketDataRequirements.of([USD_DISC, EUR_DISC], [], [USD])
    b = MarketDataRequirements.of([EUR_DISC, USD_DISC], [], [USD])
    assert a == b
    assert hash(a) == hash(b)


def test_parameters_lookup_by_type(rates_lookup: RatesMarketDataLookup) -> None:
    params = CalculationParameters.of(rates_lookup)
    assert params.get_parameter(RatesMarketDataLookup) is rates_lookup
    assert RatesMarketDataLookup in params
    assert params.find_parameter(str) is None


def test_parameters_missing_raises() -> None:
    with pytest.raises(NotConfiguredError, match="No calculation parameter of type RatesMarketDataLookup"):
        CalculationParameters.empty().get_parameter(RatesMarketDataLookup)


def test_parameters_duplicate_type_rejected(rates_lookup: RatesMarketDataLookup) -> None:
    with pytest.raises(ValueError, match="Duplicate calculation parameter"):
        CalculationParameters.of(rates_lookup, rates_lookup)


def test_parameters_combine(rates_lookup: RatesMarketDataLookup) -> None:
    """with_parameter replaces by type; combined_with keeps self on a clash."""
    other = RatesMarketDataLookup.of({USD: USD_DISC})
    params = CalculationParameters.of(rates_lookup)
    assert params.with_parameter(other).get_parameter(RatesMarketDataLookup) is other
    combined = params.combined_with(CalculationParameters.of(other))
    assert combined.get_parameter(RatesMarketDataLookup) is rates_lookup
    assert len(combined) == 1
