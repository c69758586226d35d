from __future__ import annotations

from typing import Optional

import pandas as pd

from .daycount import DayCountFactor
from .errors import ConfigurationError, InvalidDateRange
from .utils import gauss_round, to_utc_midnight


class CashFlow:
    """
    A dated movement of money, signed from the lender's perspective.

    value=None marks the cash flow as unknown (to be solved); its value is
    then 0.0 until the solver writes a guess through update_value().
    """

    kind = "cashflow"

    def __init__(
        self,
        posting_date,
        value_date,
        value: Optional[float] = None,
        weighting: float = 1.0,
        label: str = "",
    ):
        self._posting_date = to_utc_midnight(posting_date)
        self._value_date = to_utc_midnight(value_date)
        if self._value_date < self._posting_date:
            raise InvalidDateRange(
                f"Cash flow value-date {self._value_date.date()} cannot predate "
                f"the posting-date {self._posting_date.date()}."
            )
        if not weighting > 0:
            raise ConfigurationError(f"Cash flow weighting must be greater than 0, got {weighting}.")

        self._is_known = value is not None
        self._value = float(value) if value is not None else 0.0
        self._weighting = float(weighting)
        self._label = label
        self.period_factor: Optional[DayCountFactor] = None

    @property
    def posting_date(self) -> pd.Timestamp:
        return self._posting_date

    @property
    def value_date(self) -> pd.Timestamp:
        return self._value_date

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_known(self) -> bool:
        return self._is_known

    @property
    def weighting(self) -> float:
        return self._weighting

    @property
    def label(self) -> str:
        return self._label

    def update_value(self, value: float, precision: Optional[int] = None) -> None:
        """
        Set the weighted value. Round only once the value is final: rounding
        during iteration breaks the solver's derivative estimates.
        """
        if precision is None:
            self._value = value * self._weighting
        else:
            self._value = gauss_round(value * self._weighting, precision)

    def __repr__(self) -> str:
        value = self._value if self._is_known else None
        return (
            f"{type(self).__name__}(posting_date={self._posting_date.date()}, "
            f"value_date={self._value_date.date()}, value={value!r}, label={self._label!r})"
        )


class CashFlowAdvance(CashFlow):
    """Lender outflow, e.g. a loan drawdown or a lessor's net investment. Stored negative."""

    kind = "advance"

    def __init__(
        self,
        posting_date,
        value_date=None,
        value: Optional[float] = None,
        weighting: float = 1.0,
        label: str = "",
    ):
        super().__init__(
            posting_date,
            posting_date if value_date is None else value_date,
            None if value is None else -abs(value),
            weighting,
            label,
        )


class CashFlowPayment(CashFlow):
    """
    Interest bearing lender inflow, e.g. a loan repayment or lease rental.

    is_int_capitalised=False rolls the interest accrued to date forward to the
    next capitalising payment instead of adding it to the balance now.
    `interest` is populated by Profile.update_amort_int.
    """

    kind = "payment"

    def __init__(
        self,
        posting_date,
        value: Optional[float] = None,
        weighting: float = 1.0,
        is_int_capitalised: bool = True,
        label: str = "",
    ):
        super().__init__(
            posting_date,
            posting_date,
            None if value is None else abs(value),
            weighting,
            label,
        )
        self._is_int_capitalised = is_int_capitalised
        self.interest = 0.0

    @property
    def is_int_capitalised(self) -> bool:
        return self._is_int_capitalised


class CashFlowCharge(CashFlow):
    """
    Non interest bearing inflow such as a fee. Always known.

    Charges are skipped when solving values; a convention may include them
    when solving rates (e.g. an APR of charge).
    """

    kind = "charge"

    def __init__(self, posting_date, value: float, label: str = ""):
        super().__init__(posting_date, posting_date, abs(value), 1.0, label)
