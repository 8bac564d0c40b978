"""
Calculations for FX non-deliverable forward trades.

`FxNdfMeasureCalculations` computes each measure for every scenario;
`FxNdfTradeCalculationFunction` binds measures to those calculations and
uses a `RatesMarketDataLookup` from the calculation parameters to declare
requirements and build the rates view.
"""

from __future__ import annotations

from collections.abc import Iterable

from riskcalc.basics import Currency
from riskcalc.functions.base import CalculationFunction, resolved_target
from riskcalc.interfaces import ScenarioLookup
from riskcalc.lookup import RatesMarketData, RatesMarketDataLookup, RatesScenarioMarketData
from riskcalc.market import ScenarioMarketData
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.pricers.fx_ndf_pricer import DiscountingFxNdfPricer
from riskcalc.products.fx import FxNdfTrade, ResolvedFxNdfTrade
from riskcalc.refdata import ReferenceData
from riskcalc.requirements import MarketDataRequirements
from riskcalc.risk.pv01 import CurveSensitivities, CurveSensitivityCalculator
from riskcalc.scenario import CurrencyScenarioArray, MultiCurrencyScenarioArray, ScenarioArray


class FxNdfMeasureCalculations:
    """Multi-scenario measure calculations for NDF trades."""

    def __init__(
        self,
        pricer: DiscountingFxNdfPricer | None = None,
        sensitivity_calculator: CurveSensitivityCalculator | None = None,
    ) -> None:
        self.pricer = pricer or DiscountingFxNdfPricer()
        self.sensitivity_calculator = sensitivity_calculator or CurveSensitivityCalculator()

    def present_value(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> CurrencyScenarioArray:
        return CurrencyScenarioArray.of(
            self.pricer.present_value(trade.product, md) for md in market_data.scenarios()
        )

    def pv01_calibrated_sum(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of(
            self._calibrated(trade, md).total() for md in market_data.scenarios()
        )

    def pv01_calibrated_bucketed(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> ScenarioArray[CurveSensitivities]:
        return ScenarioArray.of(self._calibrated(trade, md) for md in market_data.scenarios())

    def pv01_market_quote_sum(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of(
            self._market_quote(trade, md).total() for md in market_data.scenarios()
        )

    def pv01_market_quote_bucketed(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> ScenarioArray[CurveSensitivities]:
        return ScenarioArray.of(self._market_quote(trade, md) for md in market_data.scenarios())

    def currency_exposure(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> MultiCurrencyScenarioArray:
        return MultiCurrencyScenarioArray.of(
            self.pricer.currency_exposure(trade.product, md) for md in market_data.scenarios()
        )

    def current_cash(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> CurrencyScenarioArray:
        return CurrencyScenarioArray.of(
            self.pricer.current_cash(trade.product, md) for md in market_data.scenarios()
        )

    def forward_fx_rate(
        self, trade: ResolvedFxNdfTrade, market_data: RatesScenarioMarketData
    ) -> ScenarioArray:
        return ScenarioArray.of(
            self.pricer.forward_fx_rate(trade.product, md) for md in market_data.scenarios()
        )

    def _calibrated(self, trade: ResolvedFxNdfTrade, md: RatesMarketData) -> CurveSensitivities:
        product = trade.product
        curve_ids = [
            md.lookup.discount_curve_id(product.settlement_currency),
            md.lookup.discount_curve_id(product.non_deliverable_currency),
        ]
        return self.sensitivity_calculator.calibrated_bucketed(
            lambda provider: self.pricer.present_value(product, provider), md, curve_ids
        )

    def _market_quote(self, trade: ResolvedFxNdfTrade, md: RatesMarketData) -> CurveSensitivities:
        return self.sensitivity_calculator.market_quote_bucketed(self._calibrated(trade, md), md)


_DEFAULT_CALCULATIONS = FxNdfMeasureCalculations()


class FxNdfTradeCalculationFunction(CalculationFunction[FxNdfTrade]):
    """
    Calculations on a single FxNdfTrade for each of a set of scenarios.

    Uses the standard discounting method and requires a RatesMarketDataLookup
    in the calculation parameters. The natural currency is the settlement
    currency of the trade.
    """

    MEASURES = frozenset({
        Measure.PRESENT_VALUE,
        Measure.PV01_CALIBRATED_SUM,
        Measure.PV01_CALIBRATED_BUCKETED,
        Measure.PV01_MARKET_QUOTE_SUM,
        Measure.PV01_MARKET_QUOTE_BUCKETED,
        Measure.CURRENCY_EXPOSURE,
        Measure.CURRENT_CASH,
        Measure.FORWARD_FX_RATE,
        Measure.RESOLVED_TARGET,
    })

    def __init__(self, calculations: FxNdfMeasureCalculations | None = None) -> None:
        calcs = calculations or _DEFAULT_CALCULATIONS
        super().__init__(
            {
                Measure.PRESENT_VALUE: calcs.present_value,
                Measure.PV01_CALIBRATED_SUM: calcs.pv01_calibrated_sum,
                Measure.PV01_CALIBRATED_BUCKETED: calcs.pv01_calibrated_bucketed,
                Measure.PV01_MARKET_QUOTE_SUM: calcs.pv01_market_quote_sum,
                Measure.PV01_MARKET_QUOTE_BUCKETED: calcs.pv01_market_quote_bucketed,
                Measure.CURRENCY_EXPOSURE: calcs.currency_exposure,
                Measure.CURRENT_CASH: calcs.current_cash,
                Measure.FORWARD_FX_RATE: calcs.forward_fx_rate,
                Measure.RESOLVED_TARGET: resolved_target,
            },
            self.MEASURES,
        )

    def target_type(self) -> type[FxNdfTrade]:
        return FxNdfTrade

    def natural_currency(self, trade: FxNdfTrade, ref_data: ReferenceData) -> Currency:
        return trade.product.settlement_currency

    def requirements(
        self,
        trade: FxNdfTrade,
        measures: Iterable[Measure],
        parameters: CalculationParameters,
        ref_data: ReferenceData,
    ) -> MarketDataRequirements:
        # every supported measure needs the same rates data, so measures are not consulted
        ndf = trade.product
        currencies = {ndf.settlement_currency, ndf.non_deliverable_currency}
        rates_lookup = parameters.get_parameter(RatesMarketDataLookup)
        return rates_lookup.requirements(currencies, [ndf.index])

    def market_data_view(
        self, trade: FxNdfTrade, parameters: CalculationParameters, market_data: ScenarioMarketData
    ) -> RatesScenarioMarketData:
        lookup: ScenarioLookup = parameters.get_parameter(RatesMarketDataLookup)
        return lookup.market_data_view(market_data)
