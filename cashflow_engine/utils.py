from __future__ import annotations

import math
from typing import Optional

import pandas as pd


def to_utc_midnight(date) -> pd.Timestamp:
    """
    Calendar date of `date` as a tz-naive midnight Timestamp.

    The year/month/day seen by the caller is kept and the time of day dropped,
    so tz-aware inputs are not shifted into another day. Naive timestamps
    carry no daylight-saving offsets, hence day differences are exact.
    """
    ts = pd.Timestamp(date)
    return pd.Timestamp(year=ts.year, month=ts.month, day=ts.day)


def actual_days(d1, d2) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((to_utc_midnight(d1) - to_utc_midnight(d2)).days)


def is_leap_year(year: int) -> bool:
    if year % 4 != 0:
        return False
    if year % 100 != 0:
        return True
    return year % 400 == 0


def has_leap_year(year_from: int, year_to: int) -> bool:
    """True if any year in the inclusive range [year_from, year_to] is a leap year."""
    return any(is_leap_year(y) for y in range(year_from, year_to + 1))


def roll_months(date, months: int, preferred_day: Optional[int] = None) -> pd.Timestamp:
    """
    Shift a date by whole calendar months (negative rolls backward).

    The day of month is kept, or replaced by preferred_day when given, and
    clamped to the last day of the target month (31-Mar - 1M = 28/29-Feb).
    """
    rolled = to_utc_midnight(date) + pd.DateOffset(months=months)
    if preferred_day is not None and preferred_day > 0:
        rolled = rolled.replace(day=min(preferred_day, rolled.days_in_month))
    return rolled


def roll_days(date, days: int) -> pd.Timestamp:
    return to_utc_midnight(date) + pd.Timedelta(days=days)


def gauss_round(value: float, precision: int = 0) -> float:
    """
    Banker's rounding: halves go to the nearest even digit at `precision` decimals.

    The scaled value is first fixed to 8 decimals so representation noise such
    as 1.535 * 100 = 153.49999999999997 is treated as the tie it denotes.
    """
    scale = 10 ** precision
    n = round(value * scale if precision else value, 8)
    i = math.floor(n)
    f = n - i
    eps = 1e-8
    if 0.5 - eps < f < 0.5 + eps:
        r = i if i % 2 == 0 else i + 1
    else:
        r = math.floor(n + 0.5)
    return r / scale if precision else float(r)
