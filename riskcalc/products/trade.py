"""Trade-level information shared by all trade types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TradeInfo:
    """Optional trade reference and trade date. Used for diagnostics only."""

    id: str | None = None
    trade_date: date | None = None

    @classmethod
    def empty(cls) -> TradeInfo:
        return cls()
