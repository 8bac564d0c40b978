"""Pricer for options on Ibor futures (normal / Bachelier model on the futures price)."""

from __future__ import annotations

import math

from riskcalc.basics import CurrencyAmount
from riskcalc.dates import year_fraction_act365f
from riskcalc.lookup import IborFutureOptionMarketData, RatesMarketData
from riskcalc.products.ibor import (
    PutCall,
    ResolvedIborFuture,
    ResolvedIborFutureOption,
    ResolvedIborFutureOptionTrade,
)


def _norm_cdf(x: float) -> float:
    return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))


def _norm_pdf(x: float) -> float:
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


class NormalIborFutureOptionPricer:
    """
    Futures price P = 1 - forward rate over the underlying deposit period.
    Option price with normal volatility sigma and expiry T (ACT/365F):
    call = (P - K) N(d) + sigma sqrt(T) n(d), d = (P - K) / (sigma sqrt(T)); put by symmetry.
    """

    def future_price(self, future: ResolvedIborFuture, rates: RatesMarketData) -> float:
        forward = rates.ibor_forward_rate(future.index.name, future.start_date, future.end_date)
        return 1.0 - forward

    def price(self, option: ResolvedIborFutureOption, market: IborFutureOptionMarketData) -> float:
        future_price = self.future_price(option.underlying_future, market.rates)
        sign = 1.0 if option.put_call is PutCall.CALL else -1.0
        moneyness = sign * (future_price - option.strike_price)
        expiry = year_fraction_act365f(market.rates.valuation_date, option.expiration_date)
        if expiry <= 0:
            return max(moneyness, 0.0)
        std_dev = market.volatility(option.index.name) * math.sqrt(expiry)
        if std_dev == 0:
            return max(moneyness, 0.0)
        d = moneyness / std_dev
        return moneyness * _norm_cdf(d) + std_dev * _norm_pdf(d)

    def present_value(
        self, trade: ResolvedIborFutureOptionTrade, market: IborFutureOptionMarketData
    ) -> CurrencyAmount:
        """Margined PV: (price - trade price) * notional * accrual factor * quantity."""
        option = trade.product
        future = option.underlying_future
        unit = self.price(option, market)
        amount = (unit - trade.price) * future.notional * future.accrual_factor * trade.quantity
        return CurrencyAmount(option.currency, amount)
