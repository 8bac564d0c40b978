"""
Risk measures implemented via "bump and reprice".
"""

from riskcalc.risk.pv01 import CurveSensitivities, CurveSensitivity, CurveSensitivityCalculator

__all__ = [
    "CurveSensitivity",
    "CurveSensitivities",
    "CurveSensitivityCalculator",
]
