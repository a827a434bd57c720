import numpy as np
import pytest

from jade_lizard.data.schema import PayoffPoint
from jade_lizard.strategy import lizards as jl
from jade_lizard.strategy import payoff as po
from jade_lizard.strategy.errors import InvalidPremiumError, InvalidRangeError, InvalidStrikeOrderingError


def _pnl_at(table, spot):
    return float(table.loc[table["spot"] == spot, "pnl"].iloc[0])


def test_jade_lizard_scenario_small():
    table = jl.jade_lizard_table(10, 17, 12, 15, 1, 2, 5)
    assert list(table["spot"]) == list(range(0, 20))
    # V0 = 5 + 2 - 1 = 6; 0 - 3 - 0 + 6
    assert _pnl_at(table, 15) == pytest.approx(3.0)

    expected = [s - 9 for s in range(0, 9)] + [0, 1, 2, 3, 3, 3, 3, 2, 1, 1, 1]
    assert list(table["pnl"]) == pytest.approx(expected)


def test_jade_lizard_scenario_custom_range():
    table = jl.jade_lizard_table(40, 45, 34, 40, 2, 6, 11, hl=0.25, hu=1.25)
    assert table["spot"].iloc[0] == 10
    assert table["spot"].iloc[-1] == 50
    assert len(table) == 41
    # V0 = 15; 0 - 6 - 0 + 15
    assert _pnl_at(table, 40) == pytest.approx(9.0)


def test_reverse_jade_lizard_scenario_small():
    table = jl.reverse_jade_lizard_table(15, 11, 14, 17, 3, 8, 1)
    assert table["spot"].iloc[0] == 6
    assert table["spot"].iloc[-1] == 37
    assert _pnl_at(table, 14) == pytest.approx(6.0)
    # Put spread floor below XLL, unbounded loss above XH
    assert _pnl_at(table, 6) == pytest.approx(3.0)
    assert _pnl_at(table, 23) == pytest.approx(0.0)
    assert _pnl_at(table, 37) == pytest.approx(-14.0)


def test_jade_lizard_fractional_premiums_are_rounded_to_cents():
    table = jl.jade_lizard_table(383.7, 405, 395, 385, 3.85, 6.35, 11, hl=0.92, hu=1.075)
    assert _pnl_at(table, 390) == pytest.approx(13.5)
    assert _pnl_at(table, 400) == pytest.approx(8.5)
    assert _pnl_at(table, 353) == pytest.approx(-18.5)
    assert np.array_equal(np.round(table["pnl"], 2), table["pnl"])
    assert np.array_equal(np.round(table["spot"], 2), table["spot"])


def test_jade_lizard_pnl_at_long_call_strike():
    XHU, XHL = 17, 12
    table = jl.jade_lizard_table(10, XHU, XHL, 15, 1, 2, 5)
    v0 = 5 + 2 - 1
    assert _pnl_at(table, XHU) == pytest.approx(v0 - max(XHU - XHL, 0))


@pytest.mark.parametrize(
    "build",
    [
        lambda: jl.jade_lizard_table(10, 17, 12, 15, 1, 2, 5),
        lambda: jl.reverse_jade_lizard_table(46, 42, 47, 50, 5, 9, 3, hl=0.8, hu=1.65),
    ],
)
def test_profitable_flag_matches_sign(build):
    table = build()
    assert (table["profitable"] == (table["pnl"] >= 0)).all()


def test_jade_lizard_consecutive_differences_follow_legs():
    ST, XHU, XHL, XM = 40, 45, 34, 40
    table = jl.jade_lizard_table(ST, XHU, XHL, XM, 2, 6, 11, hl=0.25, hu=1.25)
    spots = table["spot"].to_numpy()
    pnl = table["pnl"].to_numpy()
    for s, step in zip(spots[:-1], np.diff(pnl)):
        expected = (
            max(s + 1 - XHU, 0) - max(s - XHU, 0)
            - (max(s + 1 - XHL, 0) - max(s - XHL, 0))
            - (max(XM - s - 1, 0) - max(XM - s, 0))
        )
        assert step == pytest.approx(expected)


def test_legs_reproduce_net_credit_structure():
    inputs = jl.JadeLizardInputs(10, 17, 12, 15, 1, 2, 5)
    assert inputs.net_credit == pytest.approx(6.0)
    assert [leg.direction for leg in inputs.legs] == [1, -1, -1]
    reverse = jl.ReverseJadeLizardInputs(15, 11, 14, 17, 3, 8, 1)
    assert reverse.net_credit == pytest.approx(6.0)
    assert [leg.strike for leg in reverse.legs] == [11, 14, 17]


def test_to_points_returns_payoff_points():
    table = jl.jade_lizard_table(10, 17, 12, 15, 1, 2, 5)
    points = po.to_points(table)
    assert len(points) == len(table)
    assert points[15] == PayoffPoint(spot=15.0, pnl=3.0, profitable=True)
    assert points[0].profitable is False


def test_invalid_range_is_rejected_before_building():
    with pytest.raises(InvalidRangeError):
        jl.jade_lizard_table(10, 17, 12, 15, 1, 2, 5, hl=1.0, hu=0.5)
    with pytest.raises(InvalidRangeError):
        jl.reverse_jade_lizard_table(0, 11, 14, 17, 3, 8, 1)


def test_negative_premium_is_rejected():
    with pytest.raises(InvalidPremiumError):
        jl.jade_lizard_table(10, 17, 12, 15, -1, 2, 5)


def test_inverted_spread_warns_unless_strict(caplog):
    with caplog.at_level("WARNING"):
        table = jl.jade_lizard_table(10, 12, 17, 15, 1, 2, 5)
    assert len(table) == 20
    assert "Implausible strikes" in caplog.text

    with pytest.raises(InvalidStrikeOrderingError):
        jl.jade_lizard_table(10, 12, 17, 15, 1, 2, 5, strict=True)
    with pytest.raises(InvalidStrikeOrderingError):
        jl.reverse_jade_lizard_table(15, 14, 11, 17, 3, 8, 1, strict=True)


def test_net_credit_comes_from_leg_premiums():
    inputs = jl.JadeLizardInputs(383.7, 405, 395, 385, 3.85, 6.35, 11)
    assert inputs.net_credit == po.legs_net_credit(inputs.legs)
    # V0 = spp + scp - lcp
    assert inputs.net_credit == pytest.approx(11 + 6.35 - 3.85)
    assert [leg.premium for leg in inputs.legs] == [3.85, 6.35, 11]
    reverse = jl.ReverseJadeLizardInputs(410, 395, 405, 420, 11, 20, 4)
    assert po.legs_net_credit(reverse.legs) == pytest.approx(13.0)
