"""
Interest-rate curve primitives.

Curve math is kept minimal and explicit:
- Times are **year fractions** measured from the valuation date.
- Rates are **continuously compounded zero rates**.
- Interpolation is **linear in zero rates** between pillar points, flat beyond them.

A curve may carry its calibration Jacobian, `jacobian[i][j] = d(zero_i)/d(quote_j)`,
which is what turns zero-rate sensitivities into market-quote sensitivities.
Curves without one can still be priced and bumped.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ZeroRateCurve:
    """
    Zero rate curve (continuously compounded) with linear interpolation.

    - **Pillars** are strictly increasing times where the curve is defined.
    - `zero_rates_cc[i]` is the CC zero rate at `pillars[i]`.
    - `jacobian`, if present, is square with one row per pillar.
    """

    name: str
    pillars: Sequence[float]
    zero_rates_cc: Sequence[float]
    jacobian: Sequence[Sequence[float]] | None = None

    def __post_init__(self) -> None:
        # Store tuples so the curve stays hashable and cannot be mutated through the caller's lists.
        object.__setattr__(self, "pillars", tuple(self.pillars))
        object.__setattr__(self, "zero_rates_cc", tuple(self.zero_rates_cc))
        if self.jacobian is not None:
            object.__setattr__(self, "jacobian", tuple(tuple(row) for row in self.jacobian))
        self._validate()

    def _validate(self) -> None:
        if not self.pillars:
            raise ValueError("curve has no pillars")
        if len(self.pillars) != len(self.zero_rates_cc):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        for i in range(1, len(self.pillars)):
            if self.pillars[i] <= self.pillars[i - 1]:
                raise ValueError("pillars must be strictly increasing")
        if self.jacobian is not None:
            n = len(self.pillars)
            if len(self.jacobian) != n or any(len(row) != n for row in self.jacobian):
                raise ValueError(f"jacobian must be {n}x{n} to match the pillars")

    @property
    def size(self) -> int:
        return len(self.pillars)

    def zero_rate_cc(self, t: float) -> float:
        """
        Continuously compounded zero rate at time t (year-fraction).
        Linear interpolation in zero rates. t must be >= 0.
        """
        if t < 0:
            raise ValueError("t must be >= 0")
        if t <= self.pillars[0]:
            return self.zero_rates_cc[0]
        if t >= self.pillars[-1]:
            return self.zero_rates_cc[-1]
        for i in range(len(self.pillars) - 1):
            if self.pillars[i] <= t <= self.pillars[i + 1]:
                t0, t1 = self.pillars[i], self.pillars[i + 1]
                r0, r1 = self.zero_rates_cc[i], self.zero_rates_cc[i + 1]
                return r0 + (r1 - r0) * (t - t0) / (t1 - t0)
        return self.zero_rates_cc[-1]

    def df(self, t: float) -> float:
        r"""
        Discount factor to time t.

        With CC zero rate r(t), the discount factor is:
        DF(t) = exp(-r(t)*t).
        """
        r = self.zero_rate_cc(t)
        return math.exp(-r * t)

    def bumped(self, bump: float) -> ZeroRateCurve:
        """
        Return a new curve with a *parallel* additive shift to all zero rates.

        `bump` is expressed in absolute rate terms (e.g. 1bp = 0.0001).
        """
        new_rates = [r + bump for r in self.zero_rates_cc]
        return ZeroRateCurve(
            name=self.name,
            pillars=self.pillars,
            zero_rates_cc=new_rates,
            jacobian=self.jacobian,
        )

    def bumped_node(self, index: int, bump: float) -> ZeroRateCurve:
        """Return a new curve with only the zero rate at pillar `index` shifted."""
        if not 0 <= index < self.size:
            raise IndexError(f"pillar index {index} out of range for curve '{self.name}'")
        new_rates = list(self.zero_rates_cc)
        new_rates[index] += bump
        return ZeroRateCurve(
            name=self.name,
            pillars=self.pillars,
            zero_rates_cc=new_rates,
            jacobian=self.jacobian,
        )
