"""
Currency value types.

Plain immutable values with value equality. Amounts are floats; this library
does not attempt currency-specific rounding.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# Market convention for which currency is quoted as the base of a pair.
_PAIR_PRIORITY = ("EUR", "GBP", "AUD", "NZD", "USD", "CAD", "CHF", "JPY")


@dataclass(frozen=True, order=True)
class Currency:
    """ISO-4217 style three-letter currency code."""

    code: str

    def __post_init__(self) -> None:
        if len(self.code) != 3 or not self.code.isalpha() or not self.code.isupper():
            raise ValueError(f"Invalid currency code '{self.code}', expected three upper-case letters")

    @classmethod
    def of(cls, code: str) -> Currency:
        return cls(code.upper())

    def __str__(self) -> str:
        return self.code


USD = Currency("USD")
EUR = Currency("EUR")
GBP = Currency("GBP")
JPY = Currency("JPY")
INR = Currency("INR")


def _priority(ccy: Currency) -> tuple[int, str]:
    try:
        return _PAIR_PRIORITY.index(ccy.code), ccy.code
    except ValueError:
        return len(_PAIR_PRIORITY), ccy.code


@dataclass(frozen=True)
class CurrencyPair:
    """Ordered pair of currencies, e.g. EUR/USD (base EUR, counter USD)."""

    base: Currency
    counter: Currency

    @classmethod
    def of(cls, base: Currency, counter: Currency) -> CurrencyPair:
        return cls(base, counter)

    @classmethod
    def parse(cls, text: str) -> CurrencyPair:
        """Parse 'EUR/USD' (or 'EURUSD')."""
        cleaned = text.replace("/", "").strip()
        if len(cleaned) != 6:
            raise ValueError(f"Invalid currency pair '{text}'")
        return cls(Currency.of(cleaned[:3]), Currency.of(cleaned[3:]))

    @classmethod
    def conventional(cls, first: Currency, second: Currency) -> CurrencyPair:
        """Return the pair in market-quoting order regardless of argument order."""
        if _priority(first) <= _priority(second):
            return cls(first, second)
        return cls(second, first)

    def inverse(self) -> CurrencyPair:
        return CurrencyPair(self.counter, self.base)

    def is_inverse(self, other: CurrencyPair) -> bool:
        return self.base == other.counter and self.counter == other.base

    def contains(self, currency: Currency) -> bool:
        return currency in (self.base, self.counter)

    def __str__(self) -> str:
        return f"{self.base}/{self.counter}"


@dataclass(frozen=True)
class CurrencyAmount:
    """An amount of money in a single currency."""

    currency: Currency
    amount: float

    @classmethod
    def zero(cls, currency: Currency) -> CurrencyAmount:
        return cls(currency, 0.0)

    def plus(self, other: CurrencyAmount) -> CurrencyAmount:
        if other.currency != self.currency:
            raise ValueError(f"Currency mismatch: {self.currency} and {other.currency}")
        return CurrencyAmount(self.currency, self.amount + other.amount)

    def multiplied_by(self, factor: float) -> CurrencyAmount:
        return CurrencyAmount(self.currency, self.amount * factor)

    def negated(self) -> CurrencyAmount:
        return CurrencyAmount(self.currency, -self.amount)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"


class MultiCurrencyAmount:
    """
    Amounts in several currencies, at most one amount per currency.
    Immutable: plus() returns a new instance.
    """

    __slots__ = ("_amounts",)

    def __init__(self, amounts: Mapping[Currency, float] | None = None) -> None:
        self._amounts: Mapping[Currency, float] = MappingProxyType(dict(amounts or {}))

    @classmethod
    def of(cls, *amounts: CurrencyAmount) -> MultiCurrencyAmount:
        totals: dict[Currency, float] = {}
        for ca in amounts:
            totals[ca.currency] = totals.get(ca.currency, 0.0) + ca.amount
        return cls(totals)

    @classmethod
    def total(cls, items: Iterable[MultiCurrencyAmount | CurrencyAmount]) -> MultiCurrencyAmount:
        result = cls()
        for item in items:
            result = result.plus(item)
        return result

    @property
    def currencies(self) -> frozenset[Currency]:
        return frozenset(self._amounts)

    @property
    def amounts(self) -> tuple[CurrencyAmount, ...]:
        return tuple(CurrencyAmount(c, a) for c, a in sorted(self._amounts.items()))

    def get_amount(self, currency: Currency) -> CurrencyAmount:
        """Return the amount in currency; zero if the currency is not present."""
        return CurrencyAmount(currency, self._amounts.get(currency, 0.0))

    def plus(self, other: MultiCurrencyAmount | CurrencyAmount) -> MultiCurrencyAmount:
        totals = dict(self._amounts)
        others = other.amounts if isinstance(other, MultiCurrencyAmount) else (other,)
        for ca in others:
            totals[ca.currency] = totals.get(ca.currency, 0.0) + ca.amount
        return MultiCurrencyAmount(totals)

    def convert_to(
        self, currency: Currency, fx_rate: Callable[[Currency, Currency], float]
    ) -> CurrencyAmount:
        """Convert to a single currency; fx_rate(base, counter) gives counter units per base unit."""
        total = 0.0
        for ccy, amount in self._amounts.items():
            total += amount if ccy == currency else amount * fx_rate(ccy, currency)
        return CurrencyAmount(currency, total)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiCurrencyAmount):
            return NotImplemented
        return dict(self._amounts) == dict(other._amounts)

    def __hash__(self) -> int:
        return hash(frozenset(self._amounts.items()))

    def __len__(self) -> int:
        return len(self._amounts)

    def __repr__(self) -> str:
        inner = ", ".join(str(ca) for ca in self.amounts)
        return f"MultiCurrencyAmount({inner})"


@dataclass(frozen=True)
class FxRate:
    """FX rate for a pair: `rate` units of counter per one unit of base."""

    pair: CurrencyPair
    rate: float

    def __post_init__(self) -> None:
        if self.pair.base == self.pair.counter and self.rate != 1.0:
            raise ValueError(f"FX rate for identical currencies must be 1, got {self.rate}")
        if not self.rate > 0:
            raise ValueError(f"FX rate must be positive, got {self.rate}")

    @classmethod
    def of(cls, base: Currency, counter: Currency, rate: float) -> FxRate:
        return cls(CurrencyPair(base, counter), rate)

    def fx_rate(self, base: Currency, counter: Currency) -> float:
        """Rate in the requested orientation (the pair or its inverse)."""
        if base == counter:
            return 1.0
        if base == self.pair.base and counter == self.pair.counter:
            return self.rate
        if base == self.pair.counter and counter == self.pair.base:
            return 1.0 / self.rate
        raise ValueError(f"FX rate {self.pair} cannot provide a rate for {base}/{counter}")

    def inverse(self) -> FxRate:
        return FxRate(self.pair.inverse(), 1.0 / self.rate)

    def __str__(self) -> str:
        return f"{self.pair} {self.rate:.6f}"
