"""
Market data requirements.

Requirements describe what a target needs before it can be priced: which
market data keys must be present (required), which are used if present
(optional), and which currencies results may be reported in. They are
computed from the target and the calculation parameters alone, never from
market data, so they can be gathered before any market data is queried.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Mapping

from riskcalc.basics import Currency
from riskcalc.market import MarketDataId


@dataclass(frozen=True)
class MarketDataRequirements:
    """Value-equal, immutable description of the market data a target needs."""

    required: frozenset[MarketDataId] = field(default_factory=frozenset)
    optional: frozenset[MarketDataId] = field(default_factory=frozenset)
    output_currencies: frozenset[Currency] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "required", frozenset(self.required))
        # A key that is required somewhere is required, full stop.
        object.__setattr__(self, "optional", frozenset(self.optional) - self.required)
        object.__setattr__(self, "output_currencies", frozenset(self.output_currencies))

    @classmethod
    def empty(cls) -> MarketDataRequirements:
        return cls()

    @classmethod
    def of(
        cls,
        required: Iterable[MarketDataId] = (),
        optional: Iterable[MarketDataId] = (),
        output_currencies: Iterable[Currency] = (),
    ) -> MarketDataRequirements:
        return cls(frozenset(required), frozenset(optional), frozenset(output_currencies))

    @property
    def key_flags(self) -> Mapping[MarketDataId, bool]:
        """Every key mapped to whether its presence is required."""
        flags = {key: False for key in self.optional}
        flags.update({key: True for key in self.required})
        return flags

    def is_required(self, key: MarketDataId) -> bool:
        return key in self.required

    def combined_with(self, other: MarketDataRequirements) -> MarketDataRequirements:
        """Union of both requirement sets; required wins over optional."""
        return MarketDataRequirements(
            required=self.required | other.required,
            optional=self.optional | other.optional,
            output_currencies=self.output_currencies | other.output_currencies,
        )

    def __len__(self) -> int:
        return len(self.required) + len(self.optional)
