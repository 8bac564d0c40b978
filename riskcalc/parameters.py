"""Calculation parameters: a bag of configuration objects looked up by type."""

from __future__ import annotations

from typing import Any, TypeVar

from riskcalc.errors import NotConfiguredError

P = TypeVar("P")


class CalculationParameters:
    """
    Parameters that control a calculation, such as market data lookups.

    Each parameter is stored under its concrete type; at most one parameter
    per type. Lookup by a base class returns the first parameter that is an
    instance of it.
    """

    def __init__(self, *parameters: Any) -> None:
        by_type: dict[type, Any] = {}
        for param in parameters:
            if type(param) in by_type:
                raise ValueError(f"Duplicate calculation parameter of type {type(param).__name__}")
            by_type[type(param)] = param
        self._parameters = by_type

    @classmethod
    def of(cls, *parameters: Any) -> CalculationParameters:
        return cls(*parameters)

    @classmethod
    def empty(cls) -> CalculationParameters:
        return cls()

    def find_parameter(self, param_type: type[P]) -> P | None:
        """Return the parameter of the given type, or None."""
        param = self._parameters.get(param_type)
        if param is not None:
            return param
        for candidate in self._parameters.values():
            if isinstance(candidate, param_type):
                return candidate
        return None

    def get_parameter(self, param_type: type[P]) -> P:
        """Return the parameter of the given type. Raises NotConfiguredError if absent."""
        param = self.find_parameter(param_type)
        if param is None:
            raise NotConfiguredError(
                f"No calculation parameter of type {param_type.__name__} has been configured"
            )
        return param

    def with_parameter(self, param: Any) -> CalculationParameters:
        """Return new parameters with param added, replacing any of the same type."""
        merged = dict(self._parameters)
        merged[type(param)] = param
        return CalculationParameters(*merged.values())

    def combined_with(self, other: CalculationParameters) -> CalculationParameters:
        """Combine two sets; parameters in self win on a type clash."""
        merged = dict(other._parameters)
        merged.update(self._parameters)
        return CalculationParameters(*merged.values())

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, param_type: type) -> bool:
        return self.find_parameter(param_type) is not None

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._parameters)
        return f"CalculationParameters({names})"
