from __future__ import annotations

import logging

import pandas as pd

from .daycount import Convention
from .objectives import SolveCashFlow, SolveNfv
from .profile import Profile
from .rootfinding import DEFAULT_GUESS, MAX_ITER, TOLERANCE, solve_root
from .utils import gauss_round

logger = logging.getLogger(__name__)


class Calculator:
    """Entry point for solving unknown values or the implicit rate of a profile."""

    def __init__(self, profile: Profile):
        self.profile = profile

    @property
    def precision(self) -> int:
        return self.profile.precision

    def solve_value(
        self,
        day_count: Convention,
        rate: float,
        guess: float = DEFAULT_GUESS,
        *,
        tolerance: float = TOLERANCE,
        max_iter: int = MAX_ITER,
    ) -> float:
        """
        Solve the unknown cash flow value(s) at an annual effective `rate` (decimal).

        The rounded result is written to the unknown cash flows and interest is
        amortised into the payments. Returns the unweighted value, rounded.
        """
        value = solve_root(
            SolveCashFlow(self.profile, day_count, rate),
            guess,
            tolerance=tolerance,
            max_iter=max_iter,
        )
        value = self.profile.update_values(value, is_rounded=True)
        self.profile.update_amort_int(rate)
        logger.debug("Solved value %s at rate %s using %s", value, rate, type(day_count).__name__)
        return gauss_round(value, self.precision)

    def solve_rate(
        self,
        day_count: Convention,
        guess: float = DEFAULT_GUESS,
        *,
        tolerance: float = TOLERANCE,
        max_iter: int = MAX_ITER,
    ) -> float:
        """Solve the annual effective rate implicit in the profile, as a decimal."""
        rate = solve_root(
            SolveNfv(self.profile, day_count),
            guess,
            tolerance=tolerance,
            max_iter=max_iter,
        )
        logger.debug("Solved rate %s using %s", rate, type(day_count).__name__)
        return rate

    def amortisation_schedule(self) -> pd.DataFrame:
        return self.profile.to_frame()
