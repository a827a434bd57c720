"""Expiration payoff tables for multi-leg option positions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import isfinite
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..data.schema import (
    PNL_COL,
    PROFITABLE_COL,
    SPOT_COL,
    TABLE_COLUMNS,
    OptionType,
    PayoffPoint,
)
from .errors import InvalidPremiumError, InvalidRangeError

LOGGER = logging.getLogger(__name__)

PNL_DECIMALS = 2
# Products like 0.29 * 100 land just under the integer in binary floats
RANGE_BOUND_DECIMALS = 9


@dataclass(frozen=True)
class Leg:
    option_type: OptionType
    strike: float
    is_long: bool  # True if bought, False if sold
    premium: float  # Paid if long, received if short

    @property
    def direction(self) -> int:
        return 1 if self.is_long else -1

    def intrinsic(self, spots: np.ndarray) -> np.ndarray:
        """Intrinsic value per unit at expiration for each spot."""
        if self.option_type == OptionType.CALL:
            return np.maximum(spots - self.strike, 0.0)
        return np.maximum(self.strike - spots, 0.0)


def validate_range(ST: float, hl: float, hu: float) -> None:
    """Reject spot/multiplier combinations that cannot yield an ascending range."""
    for name, value in (("ST", ST), ("hl", hl), ("hu", hu)):
        if not isfinite(value):
            raise InvalidRangeError(f"{name} must be finite, got {value}")
    if ST <= 0:
        raise InvalidRangeError(f"ST must be positive, got {ST}")
    if hl < 0:
        raise InvalidRangeError(f"hl must be non-negative, got {hl}")
    if hu <= hl:
        raise InvalidRangeError(f"hu must be greater than hl, got hl={hl} hu={hu}")


def validate_premiums(**premiums: float) -> None:
    for name, value in premiums.items():
        if not isfinite(value) or value < 0:
            raise InvalidPremiumError(f"{name} must be a finite non-negative premium, got {value}")


def spot_range(ST: float, hl: float, hu: float) -> np.ndarray:
    """
    Unit-step spot prices from floor(ST*hl) to floor(ST*hu), inclusive.

    Both bounds are truncated toward the lower integer, so the table always
    holds floor(ST*hu) - floor(ST*hl) + 1 rows.
    """
    validate_range(ST, hl, hu)
    lo = int(np.floor(round(ST * hl, RANGE_BOUND_DECIMALS)))
    hi = int(np.floor(round(ST * hu, RANGE_BOUND_DECIMALS)))
    return np.arange(lo, hi + 1, dtype=float)


def evaluate_legs(legs: Sequence[Leg], spots: np.ndarray, net_credit: float) -> np.ndarray:
    """
    Per-unit PnL at expiration.

    Sums the signed intrinsic value of every leg and adds the net credit
    collected at entry. Premiums are not re-applied per leg; the caller passes
    the position's net credit.
    """
    pnl = np.zeros_like(spots, dtype=float)
    for leg in legs:
        pnl = pnl + leg.direction * leg.intrinsic(spots)
    return pnl + net_credit


def classify(pnl: Iterable[float]) -> np.ndarray:
    return np.asarray(pnl, dtype=float) >= 0


def build_table(spots: np.ndarray, pnl: np.ndarray) -> pd.DataFrame:
    """Round spot and PnL to cents, then tag each row profitable or not."""
    table = pd.DataFrame(
        {
            SPOT_COL: np.round(np.asarray(spots, dtype=float), PNL_DECIMALS),
            PNL_COL: np.round(np.asarray(pnl, dtype=float), PNL_DECIMALS),
        }
    )
    table[PROFITABLE_COL] = classify(table[PNL_COL])
    LOGGER.debug(
        "Built payoff table: %d rows, spot %.2f..%.2f",
        len(table),
        table[SPOT_COL].iloc[0] if len(table) else float("nan"),
        table[SPOT_COL].iloc[-1] if len(table) else float("nan"),
    )
    return table[TABLE_COLUMNS]


def payoff_table(legs: Sequence[Leg], net_credit: float, ST: float, hl: float, hu: float) -> pd.DataFrame:
    spots = spot_range(ST, hl, hu)
    return build_table(spots, evaluate_legs(legs, spots, net_credit))


def to_points(table: pd.DataFrame) -> List[PayoffPoint]:
    return [
        PayoffPoint(spot=float(row.spot), pnl=float(row.pnl), profitable=bool(row.profitable))
        for row in table.itertuples(index=False)
    ]


def legs_net_credit(legs: Sequence[Leg]) -> float:
    """Net credit at entry: premiums received minus premiums paid."""
    return float(sum(-leg.direction * leg.premium for leg in legs))
