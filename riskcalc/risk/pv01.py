"""
PV01 sensitivities by bump-and-reprice.

Calibrated sensitivities bump one curve pillar at a time by `bump_bp` basis
points and reprice. Market quote sensitivities chain those through the curve
calibration Jacobian, so they need curves that carry one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from riskcalc.basics import Currency, CurrencyAmount, MultiCurrencyAmount
from riskcalc.errors import MarketDataNotFoundError
from riskcalc.lookup import RatesMarketData
from riskcalc.market import CurveId


@dataclass(frozen=True)
class CurveSensitivity:
    """Change in PV, in `currency`, for a bump of each pillar of one curve."""

    curve_id: CurveId
    currency: Currency
    sensitivity: tuple[float, ...]

    def total(self) -> CurrencyAmount:
        return CurrencyAmount(self.currency, sum(self.sensitivity))

    def multiplied_by(self, factor: float) -> CurveSensitivity:
        return CurveSensitivity(self.curve_id, self.currency, tuple(s * factor for s in self.sensitivity))


@dataclass(frozen=True)
class CurveSensitivities:
    """Sensitivities to several curves."""

    entries: tuple[CurveSensitivity, ...] = ()

    def get(self, curve_id: CurveId) -> CurveSensitivity:
        for entry in self.entries:
            if entry.curve_id == curve_id:
                return entry
        raise KeyError(curve_id)

    @property
    def curve_ids(self) -> tuple[CurveId, ...]:
        return tuple(entry.curve_id for entry in self.entries)

    def total(self) -> MultiCurrencyAmount:
        """Sum over all curves and pillars, per currency."""
        return MultiCurrencyAmount.of(*(entry.total() for entry in self.entries))

    def multiplied_by(self, factor: float) -> CurveSensitivities:
        return CurveSensitivities(tuple(entry.multiplied_by(factor) for entry in self.entries))

    def __iter__(self) -> Iterator[CurveSensitivity]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CurveSensitivityCalculator:
    """Bucketed PV01 per curve pillar (bump-and-reprice)."""

    bump_bp: float = 1.0

    def __post_init__(self) -> None:
        if not self.bump_bp > 0:
            raise ValueError(f"bump_bp must be positive, got {self.bump_bp}")

    def calibrated_bucketed(
        self,
        pv_fn: Callable[[RatesMarketData], CurrencyAmount],
        market_data: RatesMarketData,
        curve_ids: Iterable[CurveId],
    ) -> CurveSensitivities:
        """PV(bumped pillar) - PV(base) for every pillar of every curve, once per curve id."""
        bump = self.bump_bp / 10000.0
        base = pv_fn(market_data)
        entries = []
        for curve_id in dict.fromkeys(curve_ids):
            curve = market_data.curve(curve_id)
            deltas = []
            for i in range(curve.size):
                bumped_md = market_data.with_curve(curve_id, curve.bumped_node(i, bump))
                deltas.append(pv_fn(bumped_md).amount - base.amount)
            entries.append(CurveSensitivity(curve_id, base.currency, tuple(deltas)))
        return CurveSensitivities(tuple(entries))

    def market_quote_bucketed(
        self, sensitivities: CurveSensitivities, market_data: RatesMarketData
    ) -> CurveSensitivities:
        """Convert zero-rate sensitivities to market-quote sensitivities: s_mq[j] = sum_i s[i] * J[i][j]."""
        entries = []
        for entry in sensitivities:
            curve = market_data.curve(entry.curve_id)
            if curve.jacobian is None:
                raise MarketDataNotFoundError(
                    f"Curve '{entry.curve_id}' has no calibration Jacobian, "
                    "market quote sensitivity cannot be computed",
                    key=entry.curve_id,
                )
            n = curve.size
            converted = tuple(
                sum(entry.sensitivity[i] * curve.jacobian[i][j] for i in range(n)) for j in range(n)
            )
            entries.append(CurveSensitivity(entry.curve_id, entry.currency, converted))
        return CurveSensitivities(tuple(entries))
