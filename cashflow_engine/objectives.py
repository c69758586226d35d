from __future__ import annotations

from .cashflows import CashFlowCharge, CashFlowPayment
from .daycount import Convention, DayCountRef
from .profile import Profile


class SolveNfv:
    """
    Net future value of a profile's cash flows at a candidate annual effective rate.

    The rate at which this is zero is the IRR (NEIGHBOUR conventions) or the
    XIRR/APR (DRAWDOWN conventions). Periods may be irregular.
    Constructing the objective assigns `day_count` factors to the profile.
    """

    def __init__(self, profile: Profile, day_count: Convention):
        self.profile = profile
        self.day_count = day_count
        profile.assign_factors(day_count)

    def label(self) -> str:
        return "Net Future Value"

    def compute(self, rate_guess: float) -> float:
        dc = self.profile.day_count
        cap_bal = 0.0

        if dc.day_count_ref == DayCountRef.DRAWDOWN:
            for cf in self.profile.cash_flows:
                if isinstance(cf, CashFlowCharge) and not dc.incl_non_fin_flows:
                    continue
                cap_bal += cf.value * (1 + rate_guess) ** (-cf.period_factor.factor)
            return cap_bal

        accrued_int = 0.0
        for cf in self.profile.cash_flows:
            if isinstance(cf, CashFlowCharge) and not dc.incl_non_fin_flows:
                continue

            period_int = cap_bal * rate_guess * cf.period_factor.factor

            if isinstance(cf, CashFlowPayment):
                if cf.is_int_capitalised:
                    cap_bal += accrued_int + period_int + cf.value
                    accrued_int = 0.0
                else:
                    accrued_int += period_int
                    cap_bal += cf.value
                continue

            cap_bal += period_int
            cap_bal += cf.value
        return cap_bal


class SolveCashFlow:
    """
    Net future value at a fixed rate as a function of the unknown cash flow value.

    Its root is the value which, written to every unknown cash flow (times
    its weighting), brings the net future value to zero at `effective_rate`.
    """

    def __init__(self, profile: Profile, day_count: Convention, effective_rate: float):
        self.profile = profile
        self.day_count = day_count
        self.effective_rate = effective_rate
        profile.assign_factors(day_count)

    def label(self) -> str:
        return "Cash Flow Value"

    def compute(self, guess: float) -> float:
        self.profile.update_values(guess)
        return SolveNfv(self.profile, self.day_count).compute(self.effective_rate)
