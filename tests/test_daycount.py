import pandas as pd
import pytest

from cashflow_engine.daycount import (
    Act365,
    ActISDA,
    DayCountFactor,
    DayCountRef,
    EU200848EC,
    EU30360,
    US30360,
    get_convention,
)
from cashflow_engine.errors import ConfigurationError


def test_factor_proof_string():
    pf = DayCountFactor(0.375)
    pf.log_operands(6, 12)
    pf.log_operands(3, 12)
    assert str(pf) == "(6/12) + (3/12) = 0.37500000"
    assert pf.operand_log == ["(6/12)", "(3/12)"]


def test_operand_log_is_a_copy():
    pf = DayCountFactor(0.5)
    pf.log_operands(6, 12)
    pf.operand_log.append("(1/1)")
    assert pf.operand_log == ["(6/12)"]


def test_act365():
    pf = Act365().compute_factor(pd.Timestamp("2019-01-01"), pd.Timestamp("2019-02-01"))
    assert pf.factor == 31 / 365
    assert str(pf) == "(31/365) = 0.08493151"


def test_act365_leap_day_counted_over_365():
    pf = Act365().compute_factor("2020-02-01", "2020-03-01")
    assert pf.factor == 29 / 365


@pytest.mark.parametrize(
    "d1, d2, expected",
    [
        ("2020-01-28", "2020-02-28", 0.08469945355191257),
        ("2019-01-28", "2019-02-28", 0.08493150684931507),
        ("2017-12-31", "2019-12-31", 2.0),
        ("2018-12-31", "2020-12-31", 2.0),
        ("2019-06-30", "2021-06-30", 2.0),
    ],
)
def test_act_isda(d1, d2, expected):
    assert ActISDA().compute_factor(d1, d2).factor == expected


def test_act_isda_proof_splits_at_year_end():
    pf = ActISDA().compute_factor("2019-06-30", "2021-06-30")
    assert str(pf) == "(184/365) + (366/366) + (181/365) = 2.00000000"

    pf = ActISDA().compute_factor("2018-12-31", "2020-12-31")
    assert pf.operand_log == ["(365/365)", "(366/366)"], "a period starting on 31-Dec has no first-year operand"


@pytest.mark.parametrize(
    "d1, d2, expected",
    [
        ("2020-01-28", "2020-02-29", 0.08611111111111111),
        ("2019-01-28", "2019-02-28", 0.08333333333333333),
        ("2019-06-16", "2019-07-31", 0.125),
        ("2017-12-31", "2019-12-31", 2.0),
        ("2018-12-31", "2020-12-31", 2.0),
        ("2019-06-30", "2021-06-30", 2.0),
    ],
)
def test_us_30360(d1, d2, expected):
    assert US30360().compute_factor(d1, d2).factor == expected


def test_eu_30360_clamps_both_ends():
    assert EU30360().compute_factor("2019-06-16", "2019-07-31").factor == 44 / 360
    assert EU30360().compute_factor("2020-01-28", "2020-02-29").factor == 31 / 360
    assert str(EU30360().compute_factor("2019-01-31", "2019-03-31")) == "(60/360) = 0.16666667"


def test_thirty_360_is_order_independent():
    assert US30360().compute_factor("2019-02-01", "2019-01-01").factor == 30 / 360


@pytest.mark.parametrize(
    "d1, d2, expected",
    [
        ("2019-01-12", "2020-01-12", 1.0),
        ("2012-01-12", "2012-02-15", 0.0915525114155251),
        ("2012-01-12", "2012-03-15", 0.17488584474885843),
        ("2012-01-12", "2012-04-15", 0.2582191780821918),
        ("2013-01-12", "2013-02-15", 0.09153005464480873),
        ("2013-01-12", "2013-03-15", 0.17486338797814208),
        ("2013-01-12", "2013-04-15", 0.2581967213114754),
        ("2013-02-25", "2013-03-28", 0.09153005464480873),
        ("2013-02-26", "2013-03-29", 0.08879781420765027),
        ("2012-02-26", "2012-03-29", 0.09153005464480873),
        ("2012-02-26", "2012-02-26", 0.0),
    ],
)
def test_eu_200848ec_monthly(d1, d2, expected):
    assert EU200848EC().compute_factor(d1, d2).factor == expected


@pytest.mark.parametrize(
    "d1, d2, expected",
    [
        ("2012-01-12", "2012-02-15", 0.09315068493150686),
        ("2012-01-12", "2013-02-15", 1.093150684931507),
        ("2012-01-12", "2014-02-15", 2.0931506849315067),
        ("2020-01-01", "2021-03-15", 1.2021857923497268),
        ("2020-01-01", "2020-01-01", 0.0),
    ],
)
def test_eu_200848ec_yearly(d1, d2, expected):
    assert EU200848EC(EU200848EC.YEAR).compute_factor(d1, d2).factor == expected


@pytest.mark.parametrize(
    "d1, d2, expected",
    [
        ("2012-01-12", "2012-01-26", 0.038461538461538464),
        ("2012-01-12", "2013-01-10", 1.0),
        ("2012-01-12", "2012-01-30", 0.0494204425711275),
        ("2012-01-12", "2013-01-12", 1.0054794520547945),
        ("2012-01-12", "2012-01-12", 0.0),
    ],
)
def test_eu_200848ec_weekly(d1, d2, expected):
    assert EU200848EC(EU200848EC.WEEK).compute_factor(d1, d2).factor == expected


def test_eu_200848ec_proofs():
    pf = EU200848EC().compute_factor("2012-01-12", "2012-03-15")
    assert pf.operand_log == ["(2/12)", "(3/365)"]

    pf = EU200848EC(EU200848EC.WEEK).compute_factor("2012-01-12", "2012-01-12")
    assert str(pf) == "(0/365) = 0.00000000", "a zero length period still shows its operands"


def test_eu_200848ec_rejects_unknown_frequency():
    with pytest.raises(ConfigurationError):
        EU200848EC("fortnight")


def test_convention_flags():
    dc = US30360()
    assert dc.use_posting_dates and not dc.incl_non_fin_flows
    assert dc.day_count_ref == DayCountRef.NEIGHBOUR
    assert US30360(use_xirr_method=True).day_count_ref == DayCountRef.DRAWDOWN

    apr = EU200848EC()
    assert apr.day_count_ref == DayCountRef.DRAWDOWN
    assert apr.use_posting_dates and apr.incl_non_fin_flows


def test_get_convention():
    assert isinstance(get_convention("ACT/365"), Act365)
    assert isinstance(get_convention("act/act"), ActISDA)
    assert isinstance(get_convention("30E/360"), EU30360)

    dc = get_convention("30/360", use_xirr_method=True)
    assert isinstance(dc, US30360)
    assert dc.day_count_ref == DayCountRef.DRAWDOWN

    assert get_convention("EU2008/48/EC", frequency="week").periods_in_year == 52


def test_get_convention_unknown_name():
    with pytest.raises(ConfigurationError, match="Unsupported day count convention"):
        get_convention("BUS/252")
