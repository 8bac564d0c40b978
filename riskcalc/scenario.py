"""Per-scenario result containers: one value per market data scenario."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from riskcalc.basics import Currency, CurrencyAmount, MultiCurrencyAmount

T = TypeVar("T")


@dataclass(frozen=True)
class ScenarioArray(Generic[T]):
    """Values of one measure, indexed by scenario."""

    values: tuple[T, ...]

    @classmethod
    def of(cls, values: Iterable[T]) -> ScenarioArray[T]:
        return cls(tuple(values))

    @property
    def scenario_count(self) -> int:
        return len(self.values)

    def get(self, scenario_index: int) -> T:
        return self.values[scenario_index]

    def map(self, fn: Callable[[T], Any]) -> ScenarioArray[Any]:
        return ScenarioArray(tuple(fn(v) for v in self.values))

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class CurrencyScenarioArray:
    """Amounts in a single currency, indexed by scenario."""

    currency: Currency
    values: tuple[float, ...]

    @classmethod
    def of(cls, amounts: Iterable[CurrencyAmount]) -> CurrencyScenarioArray:
        amounts = list(amounts)
        if not amounts:
            raise ValueError("CurrencyScenarioArray requires at least one amount")
        currency = amounts[0].currency
        if any(ca.currency != currency for ca in amounts):
            raise ValueError("All amounts in a CurrencyScenarioArray must share one currency")
        return cls(currency, tuple(ca.amount for ca in amounts))

    @property
    def scenario_count(self) -> int:
        return len(self.values)

    def get(self, scenario_index: int) -> CurrencyAmount:
        return CurrencyAmount(self.currency, self.values[scenario_index])

    def __iter__(self) -> Iterator[CurrencyAmount]:
        return (CurrencyAmount(self.currency, v) for v in self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class MultiCurrencyScenarioArray:
    """Multi-currency amounts, indexed by scenario."""

    amounts: tuple[MultiCurrencyAmount, ...]

    @classmethod
    def of(cls, amounts: Iterable[MultiCurrencyAmount]) -> MultiCurrencyScenarioArray:
        return cls(tuple(amounts))

    @property
    def scenario_count(self) -> int:
        return len(self.amounts)

    @property
    def currencies(self) -> frozenset[Currency]:
        result: frozenset[Currency] = frozenset()
        for mca in self.amounts:
            result |= mca.currencies
        return result

    def get(self, scenario_index: int) -> MultiCurrencyAmount:
        return self.amounts[scenario_index]

    def get_values(self, currency: Currency) -> tuple[float, ...]:
        """Amounts in one currency across scenarios (zero where absent)."""
        return tuple(mca.get_amount(currency).amount for mca in self.amounts)

    def __iter__(self) -> Iterator[MultiCurrencyAmount]:
        return iter(self.amounts)

    def __len__(self) -> int:
        return len(self.amounts)
