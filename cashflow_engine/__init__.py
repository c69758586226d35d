"""
Cash Flow Engine

Solves unknown cash flow values, or the implicit interest rate, of dated
advance/payment/charge schedules used to model loans and leases.

Modules:
- daycount: day count conventions + period factors with calculation proofs
- cashflows: advance, payment and charge cash flows
- profile: ordered cash flow series, factor assignment, interest amortisation
- rootfinding: enhanced Newton-Raphson root finder
- objectives: net future value objectives (solve rate / solve value)
- calculator: solve_value / solve_rate facade
- scenarios: what-if runners over independently built profiles
- utils: calendar + banker's rounding helpers
"""
from .calculator import Calculator
from .cashflows import CashFlow, CashFlowAdvance, CashFlowCharge, CashFlowPayment
from .daycount import (
    Act365,
    ActISDA,
    Convention,
    DayCountFactor,
    DayCountRef,
    EU200848EC,
    EU30360,
    US30360,
    get_convention,
)
from .errors import ConfigurationError, ConvergenceError, InvalidDateRange
from .objectives import SolveCashFlow, SolveNfv
from .profile import Profile
from .rootfinding import solve_root

__all__ = [
    "Act365",
    "ActISDA",
    "Calculator",
    "CashFlow",
    "CashFlowAdvance",
    "CashFlowCharge",
    "CashFlowPayment",
    "ConfigurationError",
    "ConvergenceError",
    "Convention",
    "DayCountFactor",
    "DayCountRef",
    "EU200848EC",
    "EU30360",
    "InvalidDateRange",
    "Profile",
    "SolveCashFlow",
    "SolveNfv",
    "US30360",
    "get_convention",
    "solve_root",
]
