"""
Per-measure calculation results.

A result is either a `Success` holding the calculated value or a `Failure`
describing why the value could not be produced. Results are never partially
filled: one measure yields exactly one of the two.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeAlias, TypeVar

V = TypeVar("V")


class FailureReason(Enum):
    """Classification of a failed calculation."""

    UNSUPPORTED = "UNSUPPORTED"
    INVALID = "INVALID"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    MISSING_DATA = "MISSING_DATA"
    CALCULATION_FAILED = "CALCULATION_FAILED"


@dataclass(frozen=True)
class Success(Generic[V]):
    """Successful result wrapping the calculated value."""

    value: V

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def get_value(self) -> V:
        return self.value


@dataclass(frozen=True)
class Failure:
    """
    Failed result.

    `cause` keeps the original exception for diagnostics; it takes no part in
    equality so two failures with the same reason and message compare equal.
    """

    reason: FailureReason
    message: str
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def get_value(self) -> Any:
        """Raise FailureError; a failure has no value."""
        raise FailureError(self)

    @classmethod
    def of(cls, reason: FailureReason, message: str) -> Failure:
        return cls(reason=reason, message=message)

    @classmethod
    def from_exception(cls, exc: Exception, message: str | None = None) -> Failure:
        """Build a failure from an exception, using its `reason` attribute if it has one."""
        reason = getattr(exc, "reason", None)
        if not isinstance(reason, FailureReason):
            reason = FailureReason.CALCULATION_FAILED
        if message is None:
            message = str(exc) or type(exc).__name__
        return cls(reason=reason, message=message, cause=exc)


Result: TypeAlias = Success[Any] | Failure


class FailureError(Exception):
    """Raised when the value of a Failure is requested."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure


def capture(fn: Callable[..., Any], *args: Any) -> Result:
    """
    Invoke fn and wrap the outcome as a Result.

    Exceptions become a Failure; a Success or Failure returned by fn is passed
    through unchanged so calculators may report failures explicitly.
    """
    try:
        value = fn(*args)
    except Exception as exc:
        return Failure.from_exception(exc)
    if isinstance(value, (Success, Failure)):
        return value
    return Success(value)
