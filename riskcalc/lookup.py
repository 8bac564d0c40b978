"""
Market data lookups.

A lookup is supplied through the calculation parameters and decides which
market data a target needs, for example which curve discounts USD cash flows.
It serves two purposes:
- translate currencies and indices into market data requirements, before any
  market data exists;
- narrow generic scenario market data into a domain view (e.g. a rates view)
  that the per-measure calculations consume.

Keeping this choice out of the target lets the same trade be priced under
different model configurations chosen by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping

from riskcalc.basics import Currency
from riskcalc.curves import ZeroRateCurve
from riskcalc.dates import year_fraction_act360, year_fraction_act365f
from riskcalc.errors import MarketDataNotFoundError, NotConfiguredError
from riskcalc.market import (
    CurveId,
    FixingSeriesId,
    FxRateId,
    MarketData,
    ScenarioMarketData,
    VolatilityId,
)
from riskcalc.products.fx import FxIndex
from riskcalc.requirements import MarketDataRequirements


@dataclass(frozen=True)
class RatesMarketDataLookup:
    """
    Rates lookup: discount curve per currency, forward curve per Ibor index name.
    """

    discount_curves: Mapping[Currency, CurveId]
    forward_curves: Mapping[str, CurveId] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "discount_curves", MappingProxyType(dict(self.discount_curves)))
        object.__setattr__(self, "forward_curves", MappingProxyType(dict(self.forward_curves)))

    @classmethod
    def of(
        cls,
        discount_curves: Mapping[Currency, CurveId],
        forward_curves: Mapping[str, CurveId] | None = None,
    ) -> RatesMarketDataLookup:
        return cls(discount_curves, forward_curves or {})

    def __hash__(self) -> int:
        return hash((frozenset(self.discount_curves.items()), frozenset(self.forward_curves.items())))

    @property
    def discount_currencies(self) -> frozenset[Currency]:
        return frozenset(self.discount_curves)

    def discount_curve_id(self, currency: Currency) -> CurveId:
        try:
            return self.discount_curves[currency]
        except KeyError:
            raise NotConfiguredError(
                f"Rates lookup has no discount curve defined for currency '{currency}'"
            ) from None

    def forward_curve_id(self, index_name: str) -> CurveId:
        try:
            return self.forward_curves[index_name]
        except KeyError:
            raise NotConfiguredError(
                f"Rates lookup has no forward curve defined for index '{index_name}'"
            ) from None

    def requirements(
        self, currencies: Iterable[Currency], indices: Iterable[Any] = ()
    ) -> MarketDataRequirements:
        """
        Requirements for pricing in the given currencies against the given indices.

        Discount curves and spot FX between every pair of currencies are required.
        An Ibor index requires its forward curve; an FX index asks for its fixing
        history, which is optional because it only matters once a fixing date has passed.
        """
        ccys = sorted(set(currencies))
        required: set[Any] = {self.discount_curve_id(ccy) for ccy in ccys}
        for i, first in enumerate(ccys):
            for second in ccys[i + 1:]:
                required.add(FxRateId.of(first, second))
        optional: set[Any] = set()
        for index in indices:
            if isinstance(index, FxIndex):
                optional.add(FixingSeriesId(index.name))
            else:
                required.add(self.forward_curve_id(index.name))
        return MarketDataRequirements.of(required, optional, ccys)

    def market_data_view(self, market_data: ScenarioMarketData) -> RatesScenarioMarketData:
        return RatesScenarioMarketData(self, market_data)


class RatesScenarioMarketData:
    """Rates view over all scenarios of a ScenarioMarketData."""

    def __init__(self, lookup: RatesMarketDataLookup, market_data: ScenarioMarketData) -> None:
        self.lookup = lookup
        self.market_data = market_data

    @property
    def valuation_date(self) -> date:
        return self.market_data.valuation_date

    @property
    def scenario_count(self) -> int:
        return self.market_data.scenario_count

    def scenario(self, index: int) -> RatesMarketData:
        return RatesMarketData(self.lookup, self.market_data.scenario(index))

    def scenarios(self) -> list[RatesMarketData]:
        return [self.scenario(i) for i in range(self.scenario_count)]


class RatesMarketData:
    """
    Rates view of a single scenario: discount factors, spot and forward FX,
    Ibor forward rates. Read-only; with_curve returns a new view.
    """

    def __init__(self, lookup: RatesMarketDataLookup, market_data: MarketData) -> None:
        self.lookup = lookup
        self.market_data = market_data

    @property
    def valuation_date(self) -> date:
        return self.market_data.valuation_date

    def curve(self, curve_id: CurveId) -> ZeroRateCurve:
        return self.market_data.get_value(curve_id)

    def discount_factor(self, currency: Currency, payment_date: date) -> float:
        """Discount factor from payment_date to the valuation date; 1 on or before valuation."""
        t = year_fraction_act365f(self.valuation_date, payment_date)
        if t <= 0:
            return 1.0
        return self.curve(self.lookup.discount_curve_id(currency)).df(t)

    def fx_rate(self, base: Currency, counter: Currency) -> float:
        """Spot FX: units of counter per unit of base."""
        if base == counter:
            return 1.0
        rate = self.market_data.get_value(FxRateId.of(base, counter))
        return rate.fx_rate(base, counter)

    def fx_index_rate(
        self, index: FxIndex, fixing_date: date, maturity_date: date, base: Currency
    ) -> float:
        """
        Rate of `base` in the other currency of the index pair for one observation.

        A fixing is used when the fixing date has passed, or is today and the fixing
        is already recorded; otherwise the forward implied by covered interest parity.
        """
        pair = index.currency_pair
        counter = pair.counter if base == pair.base else pair.base
        if fixing_date <= self.valuation_date:
            fixings = self.market_data.find_value(FixingSeriesId(index.name)) or {}
            fixing = fixings.get(fixing_date)
            if fixing is not None:
                return fixing if base == pair.base else 1.0 / fixing
            if fixing_date < self.valuation_date:
                raise MarketDataNotFoundError(
                    f"Unable to get fixing for {index} on date {fixing_date.isoformat()}",
                    key=FixingSeriesId(index.name),
                )
        spot = self.fx_rate(base, counter)
        df_base = self.discount_factor(base, maturity_date)
        df_counter = self.discount_factor(counter, maturity_date)
        return spot * df_base / df_counter

    def ibor_forward_rate(self, index_name: str, start_date: date, end_date: date) -> float:
        """Simple forward rate over [start, end] from the index forward curve (ACT/360 accrual)."""
        curve = self.curve(self.lookup.forward_curve_id(index_name))
        t_start = max(year_fraction_act365f(self.valuation_date, start_date), 0.0)
        t_end = max(year_fraction_act365f(self.valuation_date, end_date), 0.0)
        accrual = year_fraction_act360(start_date, end_date)
        return (curve.df(t_start) / curve.df(t_end) - 1.0) / accrual

    def with_curve(self, curve_id: CurveId, curve: ZeroRateCurve) -> RatesMarketData:
        return RatesMarketData(self.lookup, self.market_data.with_value(curve_id, curve))


@dataclass(frozen=True)
class IborFutureOptionMarketDataLookup:
    """Normal (Bachelier) volatility per Ibor index name."""

    volatility_ids: Mapping[str, VolatilityId]

    def __post_init__(self) -> None:
        object.__setattr__(self, "volatility_ids", MappingProxyType(dict(self.volatility_ids)))

    @classmethod
    def of(cls, volatility_ids: Mapping[str, VolatilityId]) -> IborFutureOptionMarketDataLookup:
        return cls(volatility_ids)

    def __hash__(self) -> int:
        return hash(frozenset(self.volatility_ids.items()))

    def volatility_id(self, index_name: str) -> VolatilityId:
        try:
            return self.volatility_ids[index_name]
        except KeyError:
            raise NotConfiguredError(
                f"Ibor future option lookup has no volatilities defined for index '{index_name}'"
            ) from None

    def requirements(self, index_names: Iterable[str]) -> MarketDataRequirements:
        return MarketDataRequirements.of(required=[self.volatility_id(name) for name in index_names])

    def market_data_view(self, rates: RatesScenarioMarketData) -> IborFutureOptionScenarioMarketData:
        return IborFutureOptionScenarioMarketData(self, rates)


class IborFutureOptionScenarioMarketData:
    """Volatility view layered over a rates view, for all scenarios."""

    def __init__(self, lookup: IborFutureOptionMarketDataLookup, rates: RatesScenarioMarketData) -> None:
        self.lookup = lookup
        self.rates = rates

    @property
    def scenario_count(self) -> int:
        return self.rates.scenario_count

    def scenario(self, index: int) -> IborFutureOptionMarketData:
        return IborFutureOptionMarketData(self.lookup, self.rates.scenario(index))


class IborFutureOptionMarketData:
    def __init__(self, lookup: IborFutureOptionMarketDataLookup, rates: RatesMarketData) -> None:
        self.lookup = lookup
        self.rates = rates

    def volatility(self, index_name: str) -> float:
        vol = self.rates.market_data.get_value(self.lookup.volatility_id(index_name))
        if vol < 0:
            raise ValueError(f"Normal volatility for {index_name} must not be negative, got {vol}")
        return vol

    def with_rates(self, rates: RatesMarketData) -> IborFutureOptionMarketData:
        return IborFutureOptionMarketData(self.lookup, rates)
