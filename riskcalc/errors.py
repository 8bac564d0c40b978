"""
Exception hierarchy for the calculation engine.

Each error carries the `FailureReason` used when it is captured into a
per-measure `Failure`. Errors raised while resolving a target or reading the
calculation parameters are not captured: they abort the whole calculation.
"""

from __future__ import annotations

from riskcalc.result import FailureReason


class CalcError(Exception):
    """Base class for calculation engine errors."""

    reason: FailureReason = FailureReason.CALCULATION_FAILED


class ValidationError(CalcError, ValueError):
    """A target or resolved target violates a structural invariant."""

    reason = FailureReason.INVALID


class NotConfiguredError(CalcError, LookupError):
    """A required calculation parameter or lookup entry is missing."""

    reason = FailureReason.NOT_CONFIGURED


class MarketDataNotFoundError(CalcError, LookupError):
    """A market data value needed by a calculation is not available."""

    reason = FailureReason.MISSING_DATA

    def __init__(self, message: str, key: object | None = None) -> None:
        super().__init__(message)
        self.key = key


class ReferenceDataNotFoundError(CalcError, LookupError):
    """A reference data item (e.g. a holiday calendar) is not available."""

    reason = FailureReason.MISSING_DATA


class UnsupportedTargetError(CalcError, TypeError):
    """No calculation function is registered for a target type."""

    reason = FailureReason.UNSUPPORTED
