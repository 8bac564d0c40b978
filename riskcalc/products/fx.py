"""
FX non-deliverable forward (NDF).

An NDF settles the difference between an agreed FX rate and the fixing of an
FX index, paid in the settlement currency only. The other currency of the
index pair is never exchanged.

`FxNdfTrade` is the target handled by the NDF calculation function; resolving
it applies holiday calendars once so that every measure and scenario prices
the same normalized dates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from riskcalc.basics import Currency, CurrencyAmount, CurrencyPair, FxRate
from riskcalc.errors import ValidationError
from riskcalc.products.trade import TradeInfo
from riskcalc.refdata import SAT_SUN, ReferenceData


@dataclass(frozen=True)
class FxIndex:
    """
    FX index, e.g. 'USD/INR-FBIL'.
    The fixing is observed `maturity_days` business days before the maturity date.
    """

    name: str
    currency_pair: CurrencyPair
    fixing_calendar: str = SAT_SUN
    maturity_days: int = 2

    def fixing_date(self, maturity_date: date, ref_data: ReferenceData) -> date:
        calendar = ref_data.holiday_calendar(self.fixing_calendar)
        return calendar.shift(maturity_date, -self.maturity_days)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FxNdf:
    """
    NDF product. The sign of the notional gives the direction: positive receives
    the settlement currency notional and pays the agreed rate equivalent.
    """

    settlement_currency_notional: CurrencyAmount
    agreed_fx_rate: FxRate
    index: FxIndex
    payment_date: date
    payment_calendar: str = SAT_SUN

    def __post_init__(self) -> None:
        pair = self.index.currency_pair
        settle = self.settlement_currency_notional.currency
        if not pair.contains(settle):
            raise ValidationError(
                f"Settlement currency {settle} must be one of the index currencies {pair}"
            )
        agreed = self.agreed_fx_rate.pair
        if agreed != pair and not agreed.is_inverse(pair):
            raise ValidationError(f"Agreed FX rate pair {agreed} must match index pair {pair}")

    @property
    def settlement_currency(self) -> Currency:
        return self.settlement_currency_notional.currency

    @property
    def non_deliverable_currency(self) -> Currency:
        pair = self.index.currency_pair
        return pair.counter if pair.base == self.settlement_currency else pair.base

    def resolve(self, ref_data: ReferenceData) -> ResolvedFxNdf:
        payment_date = ref_data.holiday_calendar(self.payment_calendar).next_or_same(self.payment_date)
        fixing_date = self.index.fixing_date(payment_date, ref_data)
        return ResolvedFxNdf(
            settlement_currency_notional=self.settlement_currency_notional,
            agreed_fx_rate=self.agreed_fx_rate,
            index=self.index,
            fixing_date=fixing_date,
            payment_date=payment_date,
        )


@dataclass(frozen=True)
class ResolvedFxNdf:
    """NDF with business-day adjusted payment date and computed fixing date."""

    settlement_currency_notional: CurrencyAmount
    agreed_fx_rate: FxRate
    index: FxIndex
    fixing_date: date
    payment_date: date

    def __post_init__(self) -> None:
        if self.fixing_date > self.payment_date:
            raise ValidationError(
                f"Fixing date {self.fixing_date} must be on or before payment date {self.payment_date}"
            )

    @property
    def settlement_currency(self) -> Currency:
        return self.settlement_currency_notional.currency

    @property
    def non_deliverable_currency(self) -> Currency:
        pair = self.index.currency_pair
        return pair.counter if pair.base == self.settlement_currency else pair.base


@dataclass(frozen=True)
class FxNdfTrade:
    """Trade in an NDF."""

    product: FxNdf
    info: TradeInfo = field(default_factory=TradeInfo)

    def resolve(self, ref_data: ReferenceData) -> ResolvedFxNdfTrade:
        return ResolvedFxNdfTrade(info=self.info, product=self.product.resolve(ref_data))


@dataclass(frozen=True)
class ResolvedFxNdfTrade:
    info: TradeInfo
    product: ResolvedFxNdf
