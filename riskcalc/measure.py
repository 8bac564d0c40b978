"""Measures: the closed set of analytic outputs a calculation can be asked for."""

from __future__ import annotations

from enum import Enum


class Measure(Enum):
    """
    Enumerated analytic output.

    Each member's value is its display name. Not every calculation function
    supports every measure; asking a function for a measure it does not
    support yields an UNSUPPORTED failure for that measure only.
    """

    PRESENT_VALUE = "PresentValue"
    PV01_CALIBRATED_SUM = "PV01CalibratedSum"
    PV01_CALIBRATED_BUCKETED = "PV01CalibratedBucketed"
    PV01_MARKET_QUOTE_SUM = "PV01MarketQuoteSum"
    PV01_MARKET_QUOTE_BUCKETED = "PV01MarketQuoteBucketed"
    CURRENCY_EXPOSURE = "CurrencyExposure"
    CURRENT_CASH = "CurrentCash"
    FORWARD_FX_RATE = "ForwardFxRate"
    UNIT_PRICE = "UnitPrice"
    PAR_RATE = "ParRate"
    PAR_SPREAD = "ParSpread"
    CASH_FLOWS = "CashFlows"
    # Passthrough of the resolved target, for inspecting normalized trade state.
    RESOLVED_TARGET = "ResolvedTarget"

    @classmethod
    def of(cls, name: str) -> Measure:
        """Look up by display name ('PresentValue') or member name ('PRESENT_VALUE')."""
        for measure in cls:
            if name in (measure.value, measure.name):
                return measure
        raise ValueError(f"Unknown measure '{name}'")

    def __str__(self) -> str:
        return self.value
