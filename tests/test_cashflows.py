import pandas as pd
import pytest

from cashflow_engine.cashflows import CashFlowAdvance, CashFlowCharge, CashFlowPayment
from cashflow_engine.errors import ConfigurationError, InvalidDateRange


def test_advance_is_stored_negative():
    adv = CashFlowAdvance("2019-01-01", value=1000.0)
    assert adv.value == -1000.0
    assert adv.is_known
    assert adv.value_date == adv.posting_date == pd.Timestamp("2019-01-01")
    assert adv.period_factor is None
    assert adv.kind == "advance"

    assert CashFlowAdvance("2019-01-01", value=-250.0).value == -250.0


def test_advance_value_date_after_posting():
    adv = CashFlowAdvance("2019-01-01", "2019-01-16", 400.0)
    assert adv.value_date == pd.Timestamp("2019-01-16")


def test_value_date_before_posting_date_raises():
    with pytest.raises(InvalidDateRange):
        CashFlowAdvance("2019-01-16", "2019-01-01", 400.0)
    assert issubclass(InvalidDateRange, ConfigurationError)


def test_unknown_value_defaults_to_zero():
    pmt = CashFlowPayment("2019-02-01")
    assert not pmt.is_known
    assert pmt.value == 0.0
    assert pmt.is_int_capitalised
    assert pmt.interest == 0.0


def test_payment_and_charge_are_stored_positive():
    assert CashFlowPayment("2019-02-01", -340.02).value == 340.02
    charge = CashFlowCharge("2019-01-01", -10.0, label="Fee")
    assert charge.value == 10.0
    assert charge.is_known
    assert charge.posting_date == charge.value_date
    assert charge.weighting == 1.0
    assert charge.label == "Fee"


@pytest.mark.parametrize("weighting", [0.0, -1.0])
def test_weighting_must_be_positive(weighting):
    with pytest.raises(ConfigurationError):
        CashFlowPayment("2019-02-01", weighting=weighting)


def test_update_value_applies_weighting():
    pmt = CashFlowPayment("2019-02-01", weighting=2.0)
    pmt.update_value(1333.3353)
    assert pmt.value == 2666.6706, "unrounded while iterating"

    pmt.update_value(1333.335, 2)
    assert pmt.value == 2666.67


def test_update_value_rounds_half_to_even():
    pmt = CashFlowPayment("2019-02-01")
    pmt.update_value(1.525, 2)
    assert pmt.value == 1.52


def test_repr_shows_unknown_as_none():
    assert "value=None" in repr(CashFlowPayment("2019-02-01", label="Rental"))
    assert "value=-1000.0" in repr(CashFlowAdvance("2019-01-01", value=1000.0))
