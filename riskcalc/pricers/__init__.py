"""Product pricers used by the per-measure calculations."""

from riskcalc.pricers.fx_ndf_pricer import DiscountingFxNdfPricer
from riskcalc.pricers.ibor_future_option_pricer import NormalIborFutureOptionPricer

__all__ = [
    "DiscountingFxNdfPricer",
    "NormalIborFutureOptionPricer",
]
