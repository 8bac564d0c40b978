"""Demo: USD/EUR curves, three curve-shift scenarios, NDF and Ibor future option measures."""

from datetime import date

from riskcalc.basics import EUR, USD, CurrencyAmount, CurrencyPair, FxRate
from riskcalc.config import CalcSettings
from riskcalc.curves import ZeroRateCurve
from riskcalc.engine import create_default_functions
from riskcalc.logging import configure_from_settings
from riskcalc.lookup import IborFutureOptionMarketDataLookup, RatesMarketDataLookup
from riskcalc.market import CurveId, FxRateId, MarketData, ScenarioMarketData, VolatilityId
from riskcalc.measure import Measure
from riskcalc.parameters import CalculationParameters
from riskcalc.products import (
    FxIndex,
    FxNdf,
    FxNdfTrade,
    IborFuture,
    IborFutureOption,
    IborFutureOptionTrade,
    IborIndex,
    PutCall,
    TradeInfo,
)
from riskcalc.refdata import ReferenceData


def main() -> None:
    settings = CalcSettings.from_env()
    configure_from_settings(settings)
    functions = create_default_functions(settings)
    ref_data = ReferenceData.standard()

    valuation_date = date(2024, 3, 1)
    pillars = [0.5, 1.0, 2.0, 5.0, 10.0]
    usd_id = CurveId("Default", "USD-Disc")
    eur_id = CurveId("Default", "EUR-Disc")
    libor_id = CurveId("Default", "USD-LIBOR-3M")
    usd_curve = ZeroRateCurve(name="USD-Disc", pillars=pillars, zero_rates_cc=[0.045, 0.043, 0.040, 0.038, 0.037])
    eur_curve = ZeroRateCurve(name="EUR-Disc", pillars=pillars, zero_rates_cc=[0.040, 0.038, 0.036, 0.034, 0.033])
    libor_curve = ZeroRateCurve(name="USD-LIBOR-3M", pillars=pillars, zero_rates_cc=[0.047, 0.045, 0.042, 0.040, 0.039])

    base = MarketData(
        valuation_date,
        {
            usd_id: usd_curve,
            eur_id: eur_curve,
            libor_id: libor_curve,
            FxRateId.of(EUR, USD): FxRate.of(EUR, USD, 1.08),
            VolatilityId("USD-LIBOR-3M-NormalVol"): 0.008,
        },
    )
    # Base, -10bp and +10bp on the USD discount curve
    scenarios = ScenarioMarketData.from_curve_shifts(base, usd_id, [0.0, -10.0, 10.0])

    libor = IborIndex(name="USD-LIBOR-3M", currency=USD, tenor_months=3)
    parameters = CalculationParameters.of(
        RatesMarketDataLookup.of({USD: usd_id, EUR: eur_id}, {libor.name: libor_id}),
        IborFutureOptionMarketDataLookup.of({libor.name: VolatilityId("USD-LIBOR-3M-NormalVol")}),
    )

    ndf = FxNdfTrade(
        product=FxNdf(
            settlement_currency_notional=CurrencyAmount(USD, 10_000_000),
            agreed_fx_rate=FxRate.of(EUR, USD, 1.085),
            index=FxIndex(name="EUR/USD-ECB", currency_pair=CurrencyPair(EUR, USD)),
            payment_date=date(2025, 3, 3),
        ),
        info=TradeInfo(id="NDF-0001"),
    )
    option = IborFutureOptionTrade(
        product=IborFutureOption(
            put_call=PutCall.CALL,
            strike_price=0.955,
            expiration_date=date(2024, 9, 16),
            underlying_future=IborFuture(
                currency=USD,
                notional=1_000_000,
                accrual_factor=0.25,
                last_trade_date=date(2024, 9, 16),
                index=libor,
            ),
        ),
        quantity=10,
        price=0.002,
        info=TradeInfo(id="IFO-0001"),
    )

    ndf_measures = [
        Measure.PRESENT_VALUE,
        Measure.CURRENCY_EXPOSURE,
        Measure.FORWARD_FX_RATE,
        Measure.PV01_CALIBRATED_SUM,
        Measure.PV01_MARKET_QUOTE_SUM,
        Measure.PAR_RATE,
    ]
    option_measures = [Measure.PRESENT_VALUE, Measure.UNIT_PRICE, Measure.PV01_CALIBRATED_SUM]

    print("=== Scenario Calculation Demo ===\n")
    print(f"Valuation date {valuation_date}, {scenarios.scenario_count} scenarios (USD curve +0, -10, +10bp)\n")
    for trade, measures in ((ndf, ndf_measures), (option, option_measures)):
        print(f"{trade.info.id} ({type(trade).__name__})")
        results = functions.calculate(trade, measures, parameters, scenarios, ref_data)
        for measure in measures:
            result = results[measure]
            if result.is_success:
                print(f"   {str(measure):<22} {result.value}")
            else:
                print(f"   {str(measure):<22} FAILED [{result.reason.value}] {result.message}")
        print()
    print("Done.")


if __name__ == "__main__":
    main()
