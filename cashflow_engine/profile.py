from __future__ import annotations

from typing import Iterable, List, Optional

import logging

import pandas as pd

from .cashflows import CashFlow, CashFlowAdvance, CashFlowCharge, CashFlowPayment
from .daycount import Convention, DayCountRef, US30360
from .errors import ConfigurationError
from .utils import gauss_round

logger = logging.getLogger(__name__)

SUPPORTED_PRECISIONS = (0, 2, 3, 4)


def first_advance(cash_flows: Iterable[CashFlow]) -> Optional[CashFlowAdvance]:
    """Advance with the earliest posting date, ties broken by earliest value date."""
    advances = [cf for cf in cash_flows if isinstance(cf, CashFlowAdvance)]
    if not advances:
        return None
    return min(advances, key=lambda cf: (cf.posting_date, cf.value_date))


def has_payment(cash_flows: Iterable[CashFlow]) -> bool:
    return any(isinstance(cf, CashFlowPayment) for cf in cash_flows)


def is_unknowns_valid(cash_flows: Iterable[CashFlow]) -> bool:
    """
    Unknown values are solved on advances or on payments, never both.
    No unknowns at all is valid (solving for a rate).
    """
    cash_flows = list(cash_flows)
    advance_unknown = any(isinstance(cf, CashFlowAdvance) and not cf.is_known for cf in cash_flows)
    payment_unknown = any(isinstance(cf, CashFlowPayment) and not cf.is_known for cf in cash_flows)
    return not (advance_unknown and payment_unknown)


def is_int_cap_valid(cash_flows: Iterable[CashFlow]) -> bool:
    """
    At least one payment on the final payment date must capitalise interest,
    otherwise interest rolled forward would never be settled.
    """
    payments = [cf for cf in cash_flows if isinstance(cf, CashFlowPayment)]
    if not payments:
        return False
    last_date = max(cf.posting_date for cf in payments)
    return any(cf.is_int_capitalised for cf in payments if cf.posting_date == last_date)


class Profile:
    """
    An ordered series of advances, payments and charges.

    The profile is mutable working state for the solvers: assign_factors
    re-sorts it in place and update_values rewrites unknown values on every
    guess, so one profile must not be solved by two callers at once.
    """

    def __init__(self, cash_flows: Iterable[CashFlow], precision: int = 2):
        if precision not in SUPPORTED_PRECISIONS:
            raise ConfigurationError(
                f"The precision of {precision} is unsupported. Valid options are 0, 2, 3 or 4"
            )
        self._cash_flows: List[CashFlow] = list(cash_flows)
        self._precision = precision
        self._day_count: Convention = US30360()

        if not self._cash_flows:
            raise ConfigurationError("The profile must contain at least one cash flow.")

        drawdown = first_advance(self._cash_flows)
        if drawdown is None:
            raise ConfigurationError("The profile must have at least one CashFlowAdvance defined.")
        self._drawdown_pdate = drawdown.posting_date
        self._drawdown_vdate = drawdown.value_date

        if not has_payment(self._cash_flows):
            raise ConfigurationError("The profile must have at least one CashFlowPayment defined.")

        if not is_unknowns_valid(self._cash_flows):
            raise ConfigurationError(
                "The profile should not contain a mix of CashFlowAdvance and "
                "CashFlowPayment objects with unknown values."
            )

        if not is_int_cap_valid(self._cash_flows):
            raise ConfigurationError(
                "The last CashFlowPayment in the profile must have is_int_capitalised set to True."
            )

    @property
    def cash_flows(self) -> List[CashFlow]:
        return self._cash_flows

    @property
    def day_count(self) -> Convention:
        return self._day_count

    @property
    def drawdown_pdate(self) -> pd.Timestamp:
        return self._drawdown_pdate

    @property
    def drawdown_vdate(self) -> pd.Timestamp:
        return self._drawdown_vdate

    @property
    def precision(self) -> int:
        return self._precision

    def _relevant_date(self, cash_flow: CashFlow) -> pd.Timestamp:
        return cash_flow.posting_date if self._day_count.use_posting_dates else cash_flow.value_date

    def _is_excluded(self, cash_flow: CashFlow) -> bool:
        return isinstance(cash_flow, CashFlowCharge) and not self._day_count.incl_non_fin_flows

    def assign_factors(self, day_count: Convention) -> None:
        """Sort the series for `day_count` and assign every cash flow its period factor."""
        self._day_count = day_count
        self._sort_cash_flows()
        self._compute_factors()

    def _sort_cash_flows(self) -> None:
        # date asc; advances first; non-capitalising payments before other inflows
        def sort_key(cf: CashFlow):
            is_advance = isinstance(cf, CashFlowAdvance)
            rolls_interest = isinstance(cf, CashFlowPayment) and not cf.is_int_capitalised
            return (self._relevant_date(cf), 0 if is_advance else 1, 0 if rolls_interest else 1)

        self._cash_flows.sort(key=sort_key)

    def _compute_factors(self) -> None:
        dc = self._day_count
        drawdown_date = self._drawdown_pdate if dc.use_posting_dates else self._drawdown_vdate
        neighbour_date = None

        for cf in self._cash_flows:
            cf_date = self._relevant_date(cf)
            if neighbour_date is None:
                neighbour_date = cf_date

            if self._is_excluded(cf) or cf_date <= drawdown_date:
                cf.period_factor = dc.compute_factor(cf_date, cf_date)
                continue

            if dc.day_count_ref == DayCountRef.DRAWDOWN:
                cf.period_factor = dc.compute_factor(drawdown_date, cf_date)
            else:
                cf.period_factor = dc.compute_factor(neighbour_date, cf_date)
                neighbour_date = cf_date

        logger.debug(
            "Assigned factors to %s cash flows using %s (%s)",
            len(self._cash_flows), type(dc).__name__, dc.day_count_ref.value,
        )

    def update_values(self, value: float, is_rounded: bool = False) -> float:
        """
        Write `value` (times each weighting) to every unknown cash flow.

        Round to the profile precision only once the value is final.
        Returns `value` unchanged.
        """
        precision = self._precision if is_rounded else None
        for cf in self._cash_flows:
            if not cf.is_known:
                cf.update_value(value, precision)
        return value

    def update_amort_int(self, rate: float) -> None:
        """
        Amortise interest into payments at the annual effective `rate`.

        Requires assign_factors. The cumulative rounding residue is absorbed
        into the interest of the last payment so the balance closes at zero.
        """
        cap_bal = 0.0
        accrued_int = 0.0

        for cf in self._cash_flows:
            if isinstance(cf, CashFlowCharge):
                continue
            period_int = gauss_round(cap_bal * rate * cf.period_factor.factor, self._precision)
            if isinstance(cf, CashFlowPayment):
                if cf.is_int_capitalised:
                    cf.interest = gauss_round(accrued_int + period_int, self._precision)
                    cap_bal += cf.interest + cf.value
                    accrued_int = 0.0
                else:
                    cf.interest = 0.0
                    accrued_int += period_int
                    cap_bal += cf.value
                continue
            cap_bal += period_int + cf.value

        for cf in reversed(self._cash_flows):
            if isinstance(cf, CashFlowPayment):
                cf.interest = gauss_round(cf.interest - cap_bal, self._precision)
                break

        logger.debug("Amortised interest at rate %s, residue %s absorbed", rate, cap_bal)

    def to_frame(self) -> pd.DataFrame:
        """Amortisation schedule, one row per cash flow in profile order."""
        rows = []
        for cf in self._cash_flows:
            interest = cf.interest if isinstance(cf, CashFlowPayment) else 0.0
            pf = cf.period_factor
            rows.append(
                {
                    "posting_date": cf.posting_date,
                    "value_date": cf.value_date,
                    "label": cf.label,
                    "kind": cf.kind,
                    "value": cf.value,
                    "is_known": cf.is_known,
                    "interest": interest,
                    "capital": cf.value + interest,
                    "period_factor": pf.factor if pf is not None else float("nan"),
                    "factor_proof": str(pf) if pf is not None else "",
                }
            )
        return pd.DataFrame(
            rows,
            columns=[
                "posting_date", "value_date", "label", "kind", "value", "is_known",
                "interest", "capital", "period_factor", "factor_proof",
            ],
        )
