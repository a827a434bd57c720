from dataclasses import dataclass
from enum import Enum


class OptionType(str, Enum):
    CALL = 'C'
    PUT = 'P'


@dataclass(frozen=True)
class PayoffPoint:
    spot: float
    pnl: float
    profitable: bool


# Column names of a payoff table (pandas DataFrame, one row per spot)
SPOT_COL = "spot"
PNL_COL = "pnl"
PROFITABLE_COL = "profitable"
TABLE_COLUMNS = [SPOT_COL, PNL_COL, PROFITABLE_COL]
