"""
Ibor future and option on Ibor future.

The option is the target handled by the Ibor future option calculation
function. Resolution adjusts the future's last trade date to a business day
and derives the underlying deposit period; an option that would expire after
the future stops trading cannot be resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from riskcalc.basics import Currency
from riskcalc.dates import add_months, year_fraction_act360
from riskcalc.errors import ValidationError
from riskcalc.products.trade import TradeInfo
from riskcalc.refdata import SAT_SUN, ReferenceData


class PutCall(Enum):
    PUT = "Put"
    CALL = "Call"


@dataclass(frozen=True)
class IborIndex:
    """Ibor index, e.g. 'USD-LIBOR-3M'."""

    name: str
    currency: Currency
    tenor_months: int
    fixing_calendar: str = SAT_SUN
    effective_offset_days: int = 2

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IborFuture:
    """Futures contract on an Ibor rate; price is quoted as 1 - rate."""

    currency: Currency
    notional: float
    accrual_factor: float
    last_trade_date: date
    index: IborIndex

    def __post_init__(self) -> None:
        if self.currency != self.index.currency:
            raise ValidationError(
                f"Future currency {self.currency} must match index currency {self.index.currency}"
            )
        if self.notional <= 0:
            raise ValidationError("notional must be positive")
        if self.accrual_factor <= 0:
            raise ValidationError("accrual_factor must be positive")

    def resolve(self, ref_data: ReferenceData) -> ResolvedIborFuture:
        calendar = ref_data.holiday_calendar(self.index.fixing_calendar)
        last_trade_date = calendar.previous_or_same(self.last_trade_date)
        start_date = calendar.shift(last_trade_date, self.index.effective_offset_days)
        end_date = calendar.next_or_same(add_months(start_date, self.index.tenor_months))
        return ResolvedIborFuture(
            currency=self.currency,
            notional=self.notional,
            accrual_factor=self.accrual_factor,
            last_trade_date=last_trade_date,
            index=self.index,
            start_date=start_date,
            end_date=end_date,
        )


@dataclass(frozen=True)
class ResolvedIborFuture:
    currency: Currency
    notional: float
    accrual_factor: float
    last_trade_date: date
    index: IborIndex
    start_date: date
    end_date: date

    @property
    def period_year_fraction(self) -> float:
        return year_fraction_act360(self.start_date, self.end_date)


@dataclass(frozen=True)
class IborFutureOption:
    """Option on an Ibor future, margined daily (no premium discounting)."""

    put_call: PutCall
    strike_price: float
    expiration_date: date
    underlying_future: IborFuture

    def resolve(self, ref_data: ReferenceData) -> ResolvedIborFutureOption:
        # checked against the last trade date as agreed, before business day adjustment
        last_trade_date = self.underlying_future.last_trade_date
        if self.expiration_date > last_trade_date:
            raise ValidationError(
                f"expiration_date {self.expiration_date} must be on or before "
                f"the future's last_trade_date {last_trade_date}"
            )
        future = self.underlying_future.resolve(ref_data)
        return ResolvedIborFutureOption(
            put_call=self.put_call,
            strike_price=self.strike_price,
            expiration_date=self.expiration_date,
            underlying_future=future,
        )


@dataclass(frozen=True)
class ResolvedIborFutureOption:
    put_call: PutCall
    strike_price: float
    expiration_date: date
    underlying_future: ResolvedIborFuture

    @property
    def currency(self) -> Currency:
        return self.underlying_future.currency

    @property
    def index(self) -> IborIndex:
        return self.underlying_future.index


@dataclass(frozen=True)
class IborFutureOptionTrade:
    """Trade in an Ibor future option: signed quantity at a traded price."""

    product: IborFutureOption
    quantity: float
    price: float
    info: TradeInfo = field(default_factory=TradeInfo)

    def resolve(self, ref_data: ReferenceData) -> ResolvedIborFutureOptionTrade:
        return ResolvedIborFutureOptionTrade(
            info=self.info,
            product=self.product.resolve(ref_data),
            quantity=self.quantity,
            price=self.price,
        )


@dataclass(frozen=True)
class ResolvedIborFutureOptionTrade:
    info: TradeInfo
    product: ResolvedIborFutureOption
    quantity: float
    price: float
