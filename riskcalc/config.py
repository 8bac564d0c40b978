"""
Engine settings read from environment variables.

RISKCALC_LOG_LEVEL            logging level name (default INFO)
RISKCALC_LOG_JSON             render logs as JSON: 1/true/yes/on (default off)
RISKCALC_SENSITIVITY_BUMP_BP  bump size in basis points for PV01 measures (default 1.0)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class CalcSettings:
    log_level: str = "INFO"
    log_json: bool = False
    sensitivity_bump_bp: float = 1.0

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"RISKCALC_LOG_LEVEL: unknown logging level '{self.log_level}'")
        if not self.sensitivity_bump_bp > 0:
            raise ValueError(
                f"RISKCALC_SENSITIVITY_BUMP_BP must be positive, got {self.sensitivity_bump_bp}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CalcSettings:
        env = os.environ if environ is None else environ
        log_json = env.get("RISKCALC_LOG_JSON", "").strip().lower()
        if log_json not in _TRUE | _FALSE:
            raise ValueError(f"RISKCALC_LOG_JSON: expected a boolean, got '{log_json}'")
        bump = env.get("RISKCALC_SENSITIVITY_BUMP_BP", "1.0")
        try:
            bump_bp = float(bump)
        except ValueError:
            raise ValueError(f"RISKCALC_SENSITIVITY_BUMP_BP: expected a number, got '{bump}'") from None
        return cls(
            log_level=env.get("RISKCALC_LOG_LEVEL", "INFO").upper(),
            log_json=log_json in _TRUE,
            sensitivity_bump_bp=bump_bp,
        )
