"""Tests for per-measure results and the error hierarchy."""

import pytest

from riskcalc.errors import MarketDataNotFoundError, NotConfiguredError, ValidationError
from riskcalc.result import Failure, FailureError, FailureReason, Success, capture


def test_success_wraps_value() -> None:
    result = capture(lambda x, y: x + y, 1, 2)
    assert result == Success(3)
    assert result.is_success and not result.is_failure
    assert result.get_value() == 3


def test_capture_maps_error_reason() -> None:
    """Engine errors keep their reason; other exceptions are CALCULATION_FAILED."""

    def missing() -> None:
        raise MarketDataNotFoundError("no curve")

    def broken() -> None:
        raise ZeroDivisionError("division by zero")

    missing_result = capture(missing)
    assert missing_result.reason is FailureReason.MISSING_DATA
    assert missing_result.message == "no curve"
    assert isinstance(missing_result.cause, MarketDataNotFoundError)

    broken_result = capture(broken)
    assert broken_result.reason is FailureReason.CALCULATION_FAILED
    assert broken_result.is_failure


def test_capture_passes_results_through() -> None:
    failure = Failure.of(FailureReason.INVALID, "bad")
    assert capture(lambda: failure) is failure


def test_failure_get_value_raises() -> None:
    failure = Failure.of(FailureReason.UNSUPPORTED, "Unsupported measure")
    with pytest.raises(FailureError, match="Unsupported measure") as exc:
        failure.get_value()
    assert exc.value.failure is failure


def test_failure_equality_ignores_cause() -> None:
    a = Failure(FailureReason.INVALID, "bad", cause=ValueError("x"))
    b = Failure.of(FailureReason.INVALID, "bad")
    assert a == b


def test_error_hierarchy_reasons() -> None:
    """Errors are also the matching builtin exceptions."""
    assert isinstance(ValidationError("x"), ValueError)
    assert isinstance(NotConfiguredError("x"), LookupError)
    assert Failure.from_exception(ValidationError("x")).reason is FailureReason.INVALID
    assert Failure.from_exception(NotConfiguredError("x"), "custom").message == "custom"
