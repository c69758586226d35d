"""
Day count conventions and the period factors they produce.

Every convention answers four questions for a Profile:
- day_count_ref: measure periods from the first drawdown (XIRR/APR style)
  or from the neighbouring cash flow (compounding between cash flows)
- use_posting_dates: posting dates (default) or value dates
- incl_non_fin_flows: whether charges take part in rate calculations
- compute_factor(d1, d2): the year fraction between d1 <= d2
"""
from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Type

import logging

from .errors import ConfigurationError
from .utils import (
    actual_days,
    gauss_round,
    has_leap_year,
    is_leap_year,
    roll_days,
    roll_months,
    to_utc_midnight,
)

logger = logging.getLogger(__name__)


class DayCountRef(str, enum.Enum):
    DRAWDOWN = "drawdown"
    NEIGHBOUR = "neighbour"


class DayCountFactor:
    """
    A period factor plus the (numerator/denominator) operands it was derived from.

    The operand log is append-only and exists to render calculation proofs,
    e.g. str(factor) == '(6/12) + (3/12) = 0.37500000'.
    """

    def __init__(self, factor: float = 0.0):
        self.factor = factor
        self._operand_log: List[str] = []

    @property
    def operand_log(self) -> List[str]:
        return list(self._operand_log)

    def log_operands(self, numerator: int, denominator: int) -> None:
        self._operand_log.append(f"({numerator}/{denominator})")

    def __str__(self) -> str:
        return f"{' + '.join(self._operand_log)} = {gauss_round(self.factor, 8):.8f}"

    def __repr__(self) -> str:
        return f"DayCountFactor({self.factor!r}, {self._operand_log!r})"


class Convention(ABC):
    @property
    @abstractmethod
    def day_count_ref(self) -> DayCountRef:
        ...

    @property
    @abstractmethod
    def use_posting_dates(self) -> bool:
        ...

    @property
    @abstractmethod
    def incl_non_fin_flows(self) -> bool:
        ...

    @abstractmethod
    def compute_factor(self, d1, d2) -> DayCountFactor:
        """Period factor between d1 and d2, where d1 is the earlier date."""


@dataclass(frozen=True)
class _StandardConvention(Convention):
    """
    Shared flags of the general purpose conventions.

    use_xirr_method=True measures every period from the first drawdown date,
    as Excel's XIRR does, instead of compounding between neighbouring flows.
    """
    use_posting_dates: bool = True
    incl_non_fin_flows: bool = False
    use_xirr_method: bool = False

    @property
    def day_count_ref(self) -> DayCountRef:
        return DayCountRef.DRAWDOWN if self.use_xirr_method else DayCountRef.NEIGHBOUR


@dataclass(frozen=True)
class Act365(_StandardConvention):
    """Actual/365 Fixed: actual days divided by 365."""

    def compute_factor(self, d1, d2) -> DayCountFactor:
        numerator = actual_days(d1, d2)
        pf = DayCountFactor(numerator / 365)
        pf.log_operands(numerator, 365)
        return pf


@dataclass(frozen=True)
class ActISDA(_StandardConvention):
    """
    Actual/Actual (ISDA).

    Days falling in a leap year are divided by 366, the rest by 365. Periods
    spanning a leap year are split at each 31-Dec.
    Assumes d1 <= d2.
    """

    def compute_factor(self, d1, d2) -> DayCountFactor:
        d1 = to_utc_midnight(d1)
        d2 = to_utc_midnight(d2)
        start_year = d1.year
        end_year = d2.year

        if start_year == end_year:
            numerator = actual_days(d1, d2)
            denominator = 366 if is_leap_year(start_year) else 365
            pf = DayCountFactor(numerator / denominator)
            pf.log_operands(numerator, denominator)
            return pf

        if not has_leap_year(start_year, end_year):
            numerator = actual_days(d1, d2)
            pf = DayCountFactor(numerator / 365)
            pf.log_operands(numerator, 365)
            return pf

        pf = DayCountFactor()
        factor = 0.0
        while start_year != end_year:
            year_end = to_utc_midnight(f"{start_year}-12-31")
            numerator = actual_days(d1, year_end)
            denominator = 366 if is_leap_year(start_year) else 365
            factor += numerator / denominator
            # zero when d1 is itself a 31-Dec
            if numerator > 0:
                pf.log_operands(numerator, denominator)
            d1 = year_end
            start_year += 1

        numerator = actual_days(d1, d2)
        denominator = 366 if is_leap_year(end_year) else 365
        factor += numerator / denominator

        pf.factor = factor
        pf.log_operands(numerator, denominator)
        return pf


def _thirty_360_factor(d1, d2, *, us: bool) -> DayCountFactor:
    d1 = to_utc_midnight(d1)
    d2 = to_utc_midnight(d2)

    dd1 = 30 if d1.day == 31 else d1.day
    if us:
        dd2 = 30 if (d2.day == 31 and dd1 == 30) else d2.day
    else:
        dd2 = 30 if d2.day == 31 else d2.day

    dt1 = 360 * d1.year + 30 * d1.month + dd1
    dt2 = 360 * d2.year + 30 * d2.month + dd2

    numerator = abs(dt2 - dt1)
    pf = DayCountFactor(numerator / 360)
    pf.log_operands(numerator, 360)
    return pf


@dataclass(frozen=True)
class EU30360(_StandardConvention):
    """30E/360 (Eurobond basis): a day-of-month of 31 becomes 30 at both ends."""

    def compute_factor(self, d1, d2) -> DayCountFactor:
        return _thirty_360_factor(d1, d2, us=False)


@dataclass(frozen=True)
class US30360(_StandardConvention):
    """
    30/360 US (bond basis).

    D1 of 31 becomes 30; D2 of 31 becomes 30 only when D1 is then 30,
    so 16-Jun -> 31-Jul counts 45 days.
    """

    def compute_factor(self, d1, d2) -> DayCountFactor:
        return _thirty_360_factor(d1, d2, us=True)


_PERIODS_IN_YEAR: Dict[str, int] = {"year": 1, "month": 12, "week": 52}


@dataclass(frozen=True)
class EU200848EC(Convention):
    """
    EU Consumer Credit Directive 2008/48/EC, Annex I, used for the APRC.

    Time is counted from the first drawdown in whole periods (years, months or
    weeks), walking back from the cash flow date. Any remainder is expressed in
    days over the actual days of the preceding 12 months.
    Assumes d1 (drawdown) <= d2.
    """
    frequency: str = "month"

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"

    def __post_init__(self):
        if self.frequency not in _PERIODS_IN_YEAR:
            raise ConfigurationError(
                f"Unsupported EU200848EC frequency {self.frequency!r}. "
                f"Valid options are {', '.join(_PERIODS_IN_YEAR)}"
            )

    @property
    def periods_in_year(self) -> int:
        return _PERIODS_IN_YEAR[self.frequency]

    @property
    def day_count_ref(self) -> DayCountRef:
        return DayCountRef.DRAWDOWN

    @property
    def use_posting_dates(self) -> bool:
        return True

    @property
    def incl_non_fin_flows(self) -> bool:
        return True

    def _step_back(self, date):
        if self.frequency == self.YEAR:
            return roll_months(date, -12)
        if self.frequency == self.WEEK:
            return roll_days(date, -7)
        return roll_months(date, -1)

    def compute_factor(self, d1, d2) -> DayCountFactor:
        d1 = to_utc_midnight(d1)
        start_whole_period = to_utc_midnight(d2)

        whole_periods = 0
        while True:
            prior = self._step_back(start_whole_period)
            if prior < d1:
                break
            start_whole_period = prior
            whole_periods += 1

        pf = DayCountFactor(0.0)
        factor = 0.0
        if whole_periods > 0:
            factor = whole_periods / self.periods_in_year
            pf.factor = factor
            pf.log_operands(whole_periods, self.periods_in_year)

        if start_whole_period >= d1:
            numerator = actual_days(d1, start_whole_period)
            denominator = actual_days(roll_months(start_whole_period, -12), start_whole_period)
            pf.factor = factor + numerator / denominator
            if numerator > 0 or not pf.operand_log:
                pf.log_operands(numerator, denominator)

        return pf


_REGISTRY: Dict[str, Type[Convention]] = {
    "ACT/365": Act365,
    "ACT/365F": Act365,
    "ACT/ACT": ActISDA,
    "ACT/ISDA": ActISDA,
    "30E/360": EU30360,
    "30/360": US30360,
    "30/360US": US30360,
    "EU2008/48/EC": EU200848EC,
}


def get_convention(name: str, **kwargs) -> Convention:
    """
    Build a convention from its market name, e.g. get_convention("30/360", use_xirr_method=True).
    """
    key = name.upper().replace(" ", "")
    try:
        cls = _REGISTRY[key]
    except KeyError as exc:
        raise ConfigurationError(f"Unsupported day count convention: {name}") from exc
    logger.debug("Resolved day count %s -> %s", name, cls.__name__)
    return cls(**kwargs)
