"""Enhanced Newton-Raphson root finder (NC Shammas, 'Enhancing Newton's Method', 2002)."""

from __future__ import annotations

from typing import Protocol

import logging

import numpy as np

from .errors import ConvergenceError

logger = logging.getLogger(__name__)

MAX_ITER = 50
TOLERANCE = 1.0e-7
DEFAULT_GUESS = 0.1


class Objective(Protocol):
    def label(self) -> str:
        """Name of the quantity being solved, used in error messages."""
        ...

    def compute(self, guess: float) -> float:
        ...


def solve_root(
    objective: Objective,
    guess: float = DEFAULT_GUESS,
    *,
    tolerance: float = TOLERANCE,
    max_iter: int = MAX_ITER,
) -> float:
    """
    Find x with objective.compute(x) == 0.

    Each iteration estimates the first and second derivatives by central
    differences around the guess and applies a second-order corrected
    Newton step. Stops once the step is below `tolerance`.

    Raises
    ------
    ConvergenceError
        If `max_iter` iterations pass without convergence, or the guess
        becomes NaN/inf (e.g. a flat objective with zero derivative).
    """
    x = np.float64(guess)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for iteration in range(1, max_iter + 1):
            offset = 0.01 * x if abs(x) > 1.0 else np.float64(0.01)

            f0 = np.float64(objective.compute(x))
            fp = np.float64(objective.compute(x + offset))
            fm = np.float64(objective.compute(x - offset))

            deriv1 = (fp - fm) / (2 * offset)
            deriv2 = (fp - 2 * f0 + fm) / (offset * offset)

            g0 = x - f0 / deriv1
            g1 = x - f0 / (deriv1 + deriv2 * (g0 - x) / 2)
            step = f0 / (deriv1 + deriv2 * (g1 - x) / 2)
            x -= step

            logger.debug("%s iter %s: x=%s f=%s step=%s", objective.label(), iteration, x, f0, step)
            if abs(step) <= tolerance:
                break
        else:
            raise ConvergenceError(
                f"Unable to solve the {objective.label()} within a maximum {max_iter} attempts."
            )

    if not np.isfinite(x):
        raise ConvergenceError(
            f"Unable to solve the {objective.label()} within a maximum {max_iter} attempts."
        )
    return float(x)
