"""
Jade Lizard and Reverse Jade Lizard expiration payoffs.

Jade Lizard (slightly bullish to neutral): OTM short put plus an OTM bear call
spread, i.e. short a lower-strike call and long a higher-strike call. When the
total credit exceeds the call spread width the position has no upside risk.

Reverse Jade Lizard, a.k.a. twisted sister (slightly bearish to neutral): OTM
short call plus an OTM bull put spread, i.e. long a lower-strike put and short
a higher-strike put. When the total credit exceeds the put spread width the
position has no downside risk.

All values are per unit of the underlying, held to expiration. Premiums are
user supplied; nothing here prices options.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import pandas as pd

from ..analytics.summary import summarize
from ..data.schema import OptionType
from ..plotting.payoff_chart import PayoffChart, render
from .errors import InvalidStrikeOrderingError
from .payoff import Leg, legs_net_credit, payoff_table, validate_premiums, validate_range

LOGGER = logging.getLogger(__name__)

JADE_LIZARD = "jade_lizard"
REVERSE_JADE_LIZARD = "reverse_jade_lizard"

X_LABEL = "Spot Price($) at Expiration"
Y_LABEL = "PnL($) at Expiration"
CAPTION = "jadeLizardOptions"


def _check_spread(name: str, lower: float, upper: float, strict: bool) -> None:
    if lower < upper:
        return
    msg = f"{name}: lower strike {lower} must be below upper strike {upper}"
    if strict:
        raise InvalidStrikeOrderingError(msg)
    LOGGER.warning("Implausible strikes, evaluating anyway. %s", msg)


@dataclass(frozen=True)
class JadeLizardInputs:
    ST: float  # reference spot
    XHU: float  # long call strike (upper leg of the bear call spread)
    XHL: float  # short call strike (lower leg of the bear call spread)
    XM: float  # short put strike
    lcp: float  # long call premium, paid
    scp: float  # short call premium, received
    spp: float  # short put premium, received
    hl: float = 0.0
    hu: float = 1.9

    name = JADE_LIZARD
    title = "Jade Lizard Option Strategy"
    subtitle = "Bullish to Neutral Outlook"
    label_nudge = -0.8

    @property
    def net_credit(self) -> float:
        return legs_net_credit(self.legs)

    @property
    def capped_side_width(self) -> float:
        """Width of the call spread; the credit must cover it for no upside risk."""
        return self.XHU - self.XHL

    @property
    def legs(self) -> List[Leg]:
        return [
            Leg(OptionType.CALL, self.XHU, True, self.lcp),
            Leg(OptionType.CALL, self.XHL, False, self.scp),
            Leg(OptionType.PUT, self.XM, False, self.spp),
        ]

    def validate(self, strict: bool = False) -> None:
        validate_range(self.ST, self.hl, self.hu)
        validate_premiums(lcp=self.lcp, scp=self.scp, spp=self.spp)
        _check_spread("bear call spread (XHL, XHU)", self.XHL, self.XHU, strict)
        if self.XM >= self.XHL:
            LOGGER.warning("Short put strike XM=%s is not below short call strike XHL=%s", self.XM, self.XHL)


@dataclass(frozen=True)
class ReverseJadeLizardInputs:
    ST: float  # reference spot
    XLL: float  # long put strike (lower leg of the bull put spread)
    XLU: float  # short put strike (upper leg of the bull put spread)
    XH: float  # short call strike
    lpp: float  # long put premium, paid
    spp: float  # short put premium, received
    scp: float  # short call premium, received
    hl: float = 0.4
    hu: float = 2.5

    name = REVERSE_JADE_LIZARD
    title = "Reverse Jade Lizard Option Strategy"
    subtitle = "Bearish to Neutral Outlook"
    label_nudge = -1.0

    @property
    def net_credit(self) -> float:
        return legs_net_credit(self.legs)

    @property
    def capped_side_width(self) -> float:
        """Width of the put spread; the credit must cover it for no downside risk."""
        return self.XLU - self.XLL

    @property
    def legs(self) -> List[Leg]:
        return [
            Leg(OptionType.PUT, self.XLL, True, self.lpp),
            Leg(OptionType.PUT, self.XLU, False, self.spp),
            Leg(OptionType.CALL, self.XH, False, self.scp),
        ]

    def validate(self, strict: bool = False) -> None:
        validate_range(self.ST, self.hl, self.hu)
        validate_premiums(lpp=self.lpp, spp=self.spp, scp=self.scp)
        _check_spread("bull put spread (XLL, XLU)", self.XLL, self.XLU, strict)
        if self.XLU >= self.XH:
            LOGGER.warning("Short put strike XLU=%s is not below short call strike XH=%s", self.XLU, self.XH)


STRATEGIES = {
    JADE_LIZARD: JadeLizardInputs,
    REVERSE_JADE_LIZARD: ReverseJadeLizardInputs,
}


def strategy_table(inputs, strict: bool = False) -> pd.DataFrame:
    """Validate inputs, then build the rounded and classified payoff table."""
    inputs.validate(strict=strict)
    return payoff_table(inputs.legs, inputs.net_credit, inputs.ST, inputs.hl, inputs.hu)


def strategy_chart(inputs, strict: bool = False) -> PayoffChart:
    table = strategy_table(inputs, strict=strict)
    figure = render(
        table,
        title=inputs.title,
        subtitle=inputs.subtitle,
        axis_labels={"x": X_LABEL, "y": Y_LABEL},
        caption=CAPTION,
        label_nudge=inputs.label_nudge,
    )
    return PayoffChart(figure=figure, table=table, summary=summarize(inputs, table))


def jade_lizard_table(ST, XHU, XHL, XM, lcp, scp, spp, hl=0.0, hu=1.9, strict=False) -> pd.DataFrame:
    return strategy_table(JadeLizardInputs(ST, XHU, XHL, XM, lcp, scp, spp, hl, hu), strict=strict)


def reverse_jade_lizard_table(ST, XLL, XLU, XH, lpp, spp, scp, hl=0.4, hu=2.5, strict=False) -> pd.DataFrame:
    return strategy_table(ReverseJadeLizardInputs(ST, XLL, XLU, XH, lpp, spp, scp, hl, hu), strict=strict)


def jade_lizard_pnl(ST, XHU, XHL, XM, lcp, scp, spp, hl=0.0, hu=1.9, strict=False) -> PayoffChart:
    """
    Per-unit PnL at expiration for a Jade Lizard, drawn as a bar chart.

    Examples:
    - jade_lizard_pnl(10, 17, 12, 15, 1, 2, 5)
    - jade_lizard_pnl(40, 45, 34, 40, 2, 6, 11, hl=0.25, hu=1.25)
    - jade_lizard_pnl(383.7, 405, 395, 385, 3.85, 6.35, 11, hl=0.92, hu=1.075)
    """
    return strategy_chart(JadeLizardInputs(ST, XHU, XHL, XM, lcp, scp, spp, hl, hu), strict=strict)


def reverse_jade_lizard_pnl(ST, XLL, XLU, XH, lpp, spp, scp, hl=0.4, hu=2.5, strict=False) -> PayoffChart:
    """
    Per-unit PnL at expiration for a Reverse Jade Lizard, drawn as a bar chart.

    Examples:
    - reverse_jade_lizard_pnl(15, 11, 14, 17, 3, 8, 1)
    - reverse_jade_lizard_pnl(46, 42, 47, 50, 5, 9, 3, hl=0.8, hu=1.65)
    - reverse_jade_lizard_pnl(410, 395, 405, 420, 11, 20, 4, hl=0.94, hu=1.12)
    """
    return strategy_chart(ReverseJadeLizardInputs(ST, XLL, XLU, XH, lpp, spp, scp, hl, hu), strict=strict)
