"""
Market data containers.

`MarketData` is one market-data universe (one scenario): values keyed by an
identifier, all observed at a single valuation date.
`ScenarioMarketData` bundles several of them so that each measure can be
computed for every scenario in one pass.

Both are read-only from the engine's point of view: perturbations such as
curve bumps go through `with_value`, which returns a new instance.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Hashable, TypeAlias

from riskcalc.basics import Currency, CurrencyPair
from riskcalc.errors import MarketDataNotFoundError

if TYPE_CHECKING:
    from riskcalc.requirements import MarketDataRequirements


@dataclass(frozen=True)
class CurveId:
    """Identifies a curve by curve group and curve name (e.g. 'Default', 'USD-Disc')."""

    group: str
    name: str

    def __str__(self) -> str:
        return f"{self.group}/{self.name}"


@dataclass(frozen=True)
class FxRateId:
    """Identifies a spot FX rate. Always stored under the conventional pair."""

    pair: CurrencyPair

    @classmethod
    def of(cls, first: Currency, second: Currency) -> FxRateId:
        return cls(CurrencyPair.conventional(first, second))

    def __str__(self) -> str:
        return f"FxRate:{self.pair}"


@dataclass(frozen=True)
class FixingSeriesId:
    """Identifies the history of fixings of an index (mapping date -> fixing)."""

    index_name: str

    def __str__(self) -> str:
        return f"Fixings:{self.index_name}"


@dataclass(frozen=True)
class VolatilityId:
    """Identifies a volatility value."""

    name: str

    def __str__(self) -> str:
        return f"Volatility:{self.name}"


MarketDataId: TypeAlias = Hashable


class MarketData:
    """
    Market data for one scenario: values by id at a single valuation date.
    Immutable-style: with_value returns a new MarketData.
    """

    def __init__(self, valuation_date: date, values: dict[MarketDataId, Any] | None = None) -> None:
        self.valuation_date = valuation_date
        # Copy so that later changes to the caller's dict do not leak into the snapshot.
        self._values: dict[MarketDataId, Any] = dict(values) if values else {}

    @property
    def ids(self) -> frozenset[MarketDataId]:
        return frozenset(self._values)

    def contains_value(self, key: MarketDataId) -> bool:
        return key in self._values

    def get_value(self, key: MarketDataId) -> Any:
        """Return the value for key. Raises MarketDataNotFoundError if absent."""
        try:
            return self._values[key]
        except KeyError:
            raise MarketDataNotFoundError(
                f"Market data not found for '{key}' on {self.valuation_date.isoformat()}", key=key
            ) from None

    def find_value(self, key: MarketDataId) -> Any | None:
        return self._values.get(key)

    def with_value(self, key: MarketDataId, value: Any) -> MarketData:
        """Return a new MarketData with the value added or replaced."""
        new_values = dict(self._values)
        new_values[key] = value
        return MarketData(self.valuation_date, new_values)

    def __repr__(self) -> str:
        return f"MarketData({self.valuation_date.isoformat()}, {len(self._values)} values)"


class ScenarioMarketData:
    """Several market data scenarios sharing one valuation date."""

    def __init__(self, scenarios: Sequence[MarketData]) -> None:
        if not scenarios:
            raise ValueError("ScenarioMarketData requires at least one scenario")
        dates = {md.valuation_date for md in scenarios}
        if len(dates) != 1:
            raise ValueError(f"All scenarios must share a valuation date, found {sorted(dates)}")
        self._scenarios: tuple[MarketData, ...] = tuple(scenarios)

    @classmethod
    def of_single(cls, market_data: MarketData) -> ScenarioMarketData:
        return cls([market_data])

    @classmethod
    def from_perturbations(
        cls,
        base: MarketData,
        key: MarketDataId,
        perturbations: Iterable[Callable[[Any], Any]],
    ) -> ScenarioMarketData:
        """One scenario per perturbation, each applied to the base value for key."""
        value = base.get_value(key)
        return cls([base.with_value(key, perturb(value)) for perturb in perturbations])

    @classmethod
    def from_curve_shifts(
        cls, base: MarketData, curve_id: CurveId, shifts_bp: Iterable[float]
    ) -> ScenarioMarketData:
        """One scenario per parallel shift (in basis points) of the given curve."""
        return cls.from_perturbations(
            base,
            curve_id,
            [lambda curve, s=shift: curve.bumped(s / 10000.0) for shift in shifts_bp],
        )

    @property
    def valuation_date(self) -> date:
        return self._scenarios[0].valuation_date

    @property
    def scenario_count(self) -> int:
        return len(self._scenarios)

    def scenario(self, index: int) -> MarketData:
        return self._scenarios[index]

    def __iter__(self):
        return iter(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def contains_value(self, key: MarketDataId) -> bool:
        """True if every scenario holds a value for key."""
        return all(md.contains_value(key) for md in self._scenarios)

    def missing_keys(self, requirements: MarketDataRequirements) -> frozenset[MarketDataId]:
        """Required keys that are absent from at least one scenario. Optional keys are ignored."""
        return frozenset(key for key in requirements.required if not self.contains_value(key))
