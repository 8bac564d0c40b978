"""
Protocol-based interfaces for the collaborators of the calculation engine.

Targets, lookups and per-measure calculations are matched structurally: any
object with the right methods can be used without inheriting from anything
in this library.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from riskcalc.market import ScenarioMarketData
    from riskcalc.refdata import ReferenceData


@runtime_checkable
class ResolvableTarget(Protocol):
    """A calculation target (e.g. a trade) that can be resolved against reference data.

    Resolution does the expensive normalization once (holiday calendars, derived
    dates) and may raise ValidationError if the target is structurally invalid.
    """

    def resolve(self, ref_data: ReferenceData) -> Any:
        ...


@runtime_checkable
class ScenarioLookup(Protocol):
    """A lookup that narrows scenario market data into a domain-specific view."""

    def market_data_view(self, market_data: ScenarioMarketData) -> Any:
        ...


# (resolved target, domain market data view) -> value for every scenario
SingleMeasureCalculation: TypeAlias = Callable[[Any, Any], Any]
