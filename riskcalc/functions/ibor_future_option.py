"""Calculations for trades in options on Ibor futures."""

from __future__ import annotations

from collections.abc import Iterable

from riskcalc.basics import Currency
from riskcalc.functions.base import CalculationFunction, resolved_target
from riskcalc.interfaces import ScenarioLookup
from riskcalc.lookup import (
    IborFutureOptionMarketData,
    IborFutureOptionMarketDataLookup,
    IborFutureOptionScenarioMarketData,
    RatesMarketDataLookup,
)
from riskcalc.market import ScenarioMarketData
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.pricers.ibor_future_option_pricer import NormalIborFutureOptionPricer
from riskcalc.products.ibor import IborFutureOptionTrade, ResolvedIborFutureOptionTrade
from riskcalc.refdata import ReferenceData
from riskcalc.requirements import MarketDataRequirements
from riskcalc.risk.pv01 import CurveSensitivities, CurveSensitivityCalculator
from riskcalc.scenario import CurrencyScenarioArray, MultiCurrencyScenarioArray, ScenarioArray


class IborFutureOptionMeasureCalculations:
    """Multi-scenario measure calculations for Ibor future option trades."""

    def __init__(
        self,
        pricer: NormalIborFutureOptionPricer | None = None,
        sensitivity_calculator: CurveSensitivityCalculator | None = None,
    ) -> None:
        self.pricer = pricer or NormalIborFutureOptionPricer()
        self.sensitivity_calculator = sensitivity_calculator or CurveSensitivityCalculator()

    def present_value(
        self, trade: ResolvedIborFutureOptionTrade, market_data: IborFutureOptionScenarioMarketData
    ) -> CurrencyScenarioArray:
        return CurrencyScenarioArray.of(
            self.pricer.present_value(trade, market_data.scenario(i))
            for i in range(market_data.scenario_count)
        )

    def unit_price(
        self, trade: ResolvedIborFutureOptionTrade, market_data: IborFutureOptionScenarioMarketData
    ) -> ScenarioArray[float]:
        return ScenarioArray.of(
            self.pricer.price(trade.product, market_data.scenario(i))
            for i in range(market_data.scenario_count)
        )

    def pv01_calibrated_sum(
        self, trade: ResolvedIborFutureOptionTrade, market_data: IborFutureOptionScenarioMarketData
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of(
            self._calibrated(trade, market_data.scenario(i)).total()
            for i in range(market_data.scenario_count)
        )

    def pv01_calibrated_bucketed(
        self, trade: ResolvedIborFutureOptionTrade, market_data: IborFutureOptionScenarioMarketData
    ) -> ScenarioArray[CurveSensitivities]:
        return ScenarioArray.of(
            self._calibrated(trade, market_data.scenario(i)) for i in range(market_data.scenario_count)
        )

    def _calibrated(
        self, trade: ResolvedIborFutureOptionTrade, md: IborFutureOptionMarketData
    ) -> CurveSensitivities:
        curve_id = md.rates.lookup.forward_curve_id(trade.product.index.name)
        return self.sensitivity_calculator.calibrated_bucketed(
            lambda rates: self.pricer.present_value(trade, md.with_rates(rates)), md.rates, [curve_id]
        )


_DEFAULT_CALCULATIONS = IborFutureOptionMeasureCalculations()


class IborFutureOptionTradeCalculationFunction(CalculationFunction[IborFutureOptionTrade]):
    """
    Calculations on a single IborFutureOptionTrade for each of a set of scenarios.

    Requires a RatesMarketDataLookup (forward curve of the index) and an
    IborFutureOptionMarketDataLookup (normal volatility) in the calculation
    parameters. The natural currency is the currency of the underlying future.
    """

    MEASURES = frozenset({
        Measure.PRESENT_VALUE,
        Measure.UNIT_PRICE,
        Measure.PV01_CALIBRATED_SUM,
        Measure.PV01_CALIBRATED_BUCKETED,
        Measure.RESOLVED_TARGET,
    })

    def __init__(self, calculations: IborFutureOptionMeasureCalculations | None = None) -> None:
        calcs = calculations or _DEFAULT_CALCULATIONS
        super().__init__(
            {
                Measure.PRESENT_VALUE: calcs.present_value,
                Measure.UNIT_PRICE: calcs.unit_price,
                Measure.PV01_CALIBRATED_SUM: calcs.pv01_calibrated_sum,
                Measure.PV01_CALIBRATED_BUCKETED: calcs.pv01_calibrated_bucketed,
                Measure.RESOLVED_TARGET: resolved_target,
            },
            self.MEASURES,
        )

    def target_type(self) -> type[IborFutureOptionTrade]:
        return IborFutureOptionTrade

    def natural_currency(self, trade: IborFutureOptionTrade, ref_data: ReferenceData) -> Currency:
        return trade.product.underlying_future.currency

    def requirements(
        self,
        trade: IborFutureOptionTrade,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> MarketDataRequirements:
        future = trade.product.underlying_future
        rates_lookup = parameters.get_parameter(RatesMarketDataLookup)
        vol_lookup = parameters.get_parameter(IborFutureOptionMarketDataLookup)
        return rates_lookup.requirements({future.currency}, [future.index]).combined_with(
            vol_lookup.requirements([future.index.name])
        )

    def market_data_view(
        self,
        trade: IborFutureOptionTrade,
        parameters: CalculationParameters,
        market_data: ScenarioMarketData,
    ) -> IborFutureOptionScenarioMarketData:
        rates_lookup: ScenarioLookup = parameters.get_parameter(RatesMarketDataLookup)
        rates = rates_lookup.market_data_view(market_data)
        return parameters.get_parameter(IborFutureOptionMarketDataLookup).market_data_view(rates)
