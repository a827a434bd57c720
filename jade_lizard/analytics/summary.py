"""Headline numbers for a strategy's payoff table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from ..data.schema import PNL_COL, SPOT_COL

BREAKEVEN_DECIMALS = 2


@dataclass(frozen=True)
class StrategySummary:
    strategy: str
    net_credit: float
    max_profit: float
    max_profit_spot: float
    max_loss: float
    max_loss_spot: float
    breakevens: Tuple[float, ...]
    # No upside risk (Jade Lizard) / no downside risk (Reverse Jade Lizard)
    capped_side_risk_free: bool


def find_breakevens(spots: np.ndarray, pnl: np.ndarray) -> Tuple[float, ...]:
    """
    Spot prices where PnL crosses zero.

    Sign changes between adjacent rows are linearly interpolated; rows that sit
    exactly on zero are reported as-is.
    """
    spots = np.asarray(spots, dtype=float)
    pnl = np.asarray(pnl, dtype=float)
    if len(pnl) == 0:
        return ()

    signs = np.sign(pnl)
    idx = np.where(signs[:-1] * signs[1:] < 0)[0]
    crossings = spots[idx] + pnl[idx] / (pnl[idx] - pnl[idx + 1]) * (spots[idx + 1] - spots[idx])
    exact = spots[pnl == 0]

    points = np.round(np.concatenate([crossings, exact]), BREAKEVEN_DECIMALS)
    return tuple(float(x) for x in np.unique(points))


def summarize(inputs, table: pd.DataFrame) -> StrategySummary:
    """Summarize a payoff table built from `inputs` (a lizard inputs record)."""
    spots = table[SPOT_COL].to_numpy(dtype=float)
    pnl = table[PNL_COL].to_numpy(dtype=float)
    hi = int(np.argmax(pnl))
    lo = int(np.argmin(pnl))
    net_credit = round(inputs.net_credit, BREAKEVEN_DECIMALS)
    return StrategySummary(
        strategy=inputs.name,
        net_credit=net_credit,
        max_profit=float(pnl[hi]),
        max_profit_spot=float(spots[hi]),
        max_loss=float(pnl[lo]),
        max_loss_spot=float(spots[lo]),
        breakevens=find_breakevens(spots, pnl),
        capped_side_risk_free=bool(inputs.net_credit >= inputs.capped_side_width),
    )
