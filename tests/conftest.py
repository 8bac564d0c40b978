"""Shared fixtures: a USD/EUR market on 2024-03-01, lookups, and sample trades."""

from datetime import date

import pytest

from riskcalc.basics import EUR, USD, CurrencyAmount, CurrencyPair, FxRate
from riskcalc.curves import ZeroRateCurve
from riskcalc.lookup import IborFutureOptionMarketDataLookup, RatesMarketDataLookup
from riskcalc.market import CurveId, FxRateId, MarketData, ScenarioMarketData, VolatilityId
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

VALUATION_DATE = date(2024, 3, 1)
USD_DISC = CurveId("Default", "USD-Disc")
EUR_DISC = CurveId("Default", "EUR-Disc")
USD_LIBOR_3M = CurveId("Default", "USD-LIBOR-3M")
LIBOR_VOL = VolatilityId("USD-LIBOR-3M-NormalVol")
EURUSD_ECB = FxIndex(name="EUR/USD-ECB", currency_pair=CurrencyPair(EUR, USD))
LIBOR_3M = IborIndex(name="USD-LIBOR-3M", currency=USD, tenor_months=3)


@pytest.fixture
def ref_data() -> ReferenceData:
    return ReferenceData.standard()


@pytest.fixture
def market_data() -> MarketData:
    pillars = [0.5, 1.0, 2.0, 5.0]
    return MarketData(
        VALUATION_DATE,
        {
            USD_DISC: ZeroRateCurve(name="USD-Disc", pillars=pillars, zero_rates_cc=[0.05] * 4),
            EUR_DISC: ZeroRateCurve(name="EUR-Disc", pillars=pillars, zero_rates_cc=[0.03] * 4),
            USD_LIBOR_3M: ZeroRateCurve(name="USD-LIBOR-3M", pillars=pillars, zero_rates_cc=[0.045] * 4),
            FxRateId.of(EUR, USD): FxRate.of(EUR, USD, 1.08),
            LIBOR_VOL: 0.01,
        },
    )


@pytest.fixture
def scenario_data(market_data: MarketData) -> ScenarioMarketData:
    """Two scenarios: base and USD discount curve +10bp."""
    return ScenarioMarketData.from_curve_shifts(market_data, USD_DISC, [0.0, 10.0])


@pytest.fixture
def rates_lookup() -> RatesMarketDataLookup:
    return RatesMarketDataLookup.of({USD: USD_DISC, EUR: EUR_DISC}, {LIBOR_3M.name: USD_LIBOR_3M})


@pytest.fixture
def parameters(rates_lookup: RatesMarketDataLookup) -> CalculationParameters:
    return CalculationParameters.of(
        rates_lookup,
        IborFutureOptionMarketDataLookup.of({LIBOR_3M.name: LIBOR_VOL}),
    )


@pytest.fixture
def ndf_trade() -> FxNdfTrade:
    """Settles in USD against EUR, pays 2025-03-03 (a Monday)."""
    return FxNdfTrade(
        product=FxNdf(
            settlement_currency_notional=CurrencyAmount(USD, 1_000_000),
            agreed_fx_rate=FxRate.of(EUR, USD, 1.085),
            index=EURUSD_ECB,
            payment_date=date(2025, 3, 3),
        ),
        info=TradeInfo(id="NDF-1"),
    )


@pytest.fixture
def option_trade() -> IborFutureOptionTrade:
    return IborFutureOptionTrade(
        product=IborFutureOption(
            put_call=PutCall.CALL,
            strike_price=0.955,
            expiration_date=date(2024, 9, 16),
            underlying_future=IborFuture(
                currency=USD,
                notional=1_000_000,
                accrual_factor=0.25,
                last_trade_date=date(2024, 9, 16),
                index=LIBOR_3M,
            ),
        ),
        quantity=10,
        price=0.002,
        info=TradeInfo(id="IFO-1"),
    )
