from __future__ import annotations

from typing import Callable, Iterable, Mapping

import numpy as np
import pandas as pd

from .calculator import Calculator
from .cashflows import CashFlowPayment
from .daycount import Convention
from .profile import Profile

ProfileFactory = Callable[[], Profile]


def compare_conventions(
    profile_factory: ProfileFactory,
    conventions: Mapping[str, Convention],
) -> pd.DataFrame:
    """
    Implicit rate of the same cash flows under several day count conventions,
    e.g. {"IRR": US30360(), "XIRR": US30360(use_xirr_method=True), "APRC": EU200848EC()}.

    Every scenario solves its own freshly built profile.
    """
    rows = []
    for name, day_count in conventions.items():
        rate = Calculator(profile_factory()).solve_rate(day_count)
        rows.append(
            {
                "scenario": name,
                "convention": type(day_count).__name__,
                "day_count_ref": day_count.day_count_ref.value,
                "rate": rate,
            }
        )
    return pd.DataFrame(rows, columns=["scenario", "convention", "day_count_ref", "rate"])


def value_rate_grid(
    profile_factory: ProfileFactory,
    day_count: Convention,
    rates: Iterable[float],
) -> pd.DataFrame:
    """
    Solved unknown value and total amortised interest for each rate in `rates`.
    """
    rows = []
    for rate in rates:
        profile = profile_factory()
        value = Calculator(profile).solve_value(day_count, float(rate))
        interest = np.array(
            [cf.interest for cf in profile.cash_flows if isinstance(cf, CashFlowPayment)],
            dtype=float,
        )
        rows.append(
            {
                "rate": float(rate),
                "value": value,
                "total_interest": float(np.sum(interest)),
            }
        )

    out = pd.DataFrame(rows, columns=["rate", "value", "total_interest"])
    return out.sort_values("rate").reset_index(drop=True)
