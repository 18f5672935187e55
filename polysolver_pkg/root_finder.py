"""Durand-Kerner simultaneous iteration for polynomial roots.

All roots are refined together: every sweep replaces each guess ``r_i`` by
``r_i - P(r_i) / prod_{j != i}(r_i - r_j)`` using the previous sweep's
guesses. After convergence a few Newton steps on the original (non-monic)
polynomial polish each root, and the largest residual ``|P(r)|`` is reported
so callers can judge the numerical quality of the answer.
"""

from __future__ import annotations

import cmath
import math
import sys
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from . import config
from .complex_value import ComplexValue
from .logging_config import get_logger
from .types import DegreeMismatchError, InvalidArgumentError, RootFinderResult

logger = get_logger("root_finder")

Coefficient = Union[float, complex, ComplexValue]

# Residuals within this many ulps of the evaluation's rounding error count as zero
_ROUNDING_SLACK = 16.0


@dataclass
class RootFinderOptions:
    """Iteration controls; ``None`` fields take the configured defaults."""

    max_iterations: Optional[int] = None
    tolerance: Optional[float] = None
    polish_roots: Optional[bool] = None
    polish_steps: Optional[int] = None

    def resolved(self) -> RootFinderOptions:
        return RootFinderOptions(
            max_iterations=(
                config.ROOT_FINDER_MAX_ITERATIONS
                if self.max_iterations is None
                else self.max_iterations
            ),
            tolerance=(
                config.ROOT_FINDER_TOLERANCE if self.tolerance is None else self.tolerance
            ),
            polish_roots=(
                config.ROOT_FINDER_POLISH if self.polish_roots is None else self.polish_roots
            ),
            polish_steps=(
                config.ROOT_FINDER_POLISH_STEPS
                if self.polish_steps is None
                else self.polish_steps
            ),
        )


def evaluate_polynomial(coefficients: Sequence[complex], z: complex) -> complex:
    """Horner evaluation of an ascending coefficient list at ``z``."""
    result = 0j
    for coefficient in reversed(coefficients):
        result = result * z + coefficient
    return result


def evaluate_derivative(coefficients: Sequence[complex], z: complex) -> complex:
    result = 0j
    for power in range(len(coefficients) - 1, 0, -1):
        result = result * z + power * coefficients[power]
    return result


def _rounding_bound(coefficients: Sequence[complex], z: complex) -> float:
    """Upper bound on the floating point error of evaluating P at ``z``."""
    magnitude = abs(z)
    bound = 0.0
    for coefficient in reversed(coefficients):
        bound = bound * magnitude + abs(coefficient)
    return _ROUNDING_SLACK * sys.float_info.epsilon * bound


def initial_guesses(monic: Sequence[complex]) -> list[complex]:
    """Spread guesses on a circle that encloses every root.

    The radius ``1 + max|c_k|`` bounds the roots of a monic polynomial; the
    per-index offset keeps guesses off the real axis and away from each other.
    """
    degree = len(monic) - 1
    radius = 1.0 + max(abs(c) for c in monic[:-1])
    offset = config.ROOT_FINDER_PERTURBATION
    return [
        cmath.rect(radius, 2.0 * math.pi * k / degree)
        + complex(offset * k, -offset * (degree - k))
        for k in range(degree)
    ]


def _weierstrass_sweep(monic: Sequence[complex], roots: list[complex]) -> tuple[list[complex], float]:
    updated = []
    max_step = 0.0
    for i, root in enumerate(roots):
        denominator = 1 + 0j
        for j, other in enumerate(roots):
            if i == j:
                continue
            difference = root - other
            if abs(difference) < config.ROOT_FINDER_PAIR_GUARD:
                difference += complex(config.ROOT_FINDER_NUDGE, config.ROOT_FINDER_NUDGE)
            denominator *= difference
        step = evaluate_polynomial(monic, root) / denominator
        updated.append(root - step)
        max_step = max(max_step, abs(step))
    return updated, max_step


def _polish(coefficients: Sequence[complex], root: complex, steps: int) -> complex:
    for _ in range(steps):
        slope = evaluate_derivative(coefficients, root)
        if abs(slope) < config.POLY_EPSILON:
            break
        root -= evaluate_polynomial(coefficients, root) / slope
    return root


def find_roots(
    coefficients: Sequence[Coefficient], options: Optional[RootFinderOptions] = None
) -> RootFinderResult:
    """Find every complex root of a polynomial.

    Args:
        coefficients: Ascending coefficients, leading (last) one non-zero
        options: Iteration budget, tolerance and polishing controls

    Returns:
        RootFinderResult with ``degree`` roots, the number of sweeps performed,
        the last sweep's largest step and the largest residual ``|P(root)|``.
        ``converged`` is False when the budget ran out.

    Raises:
        InvalidArgumentError: If fewer than two coefficients are given
        DegreeMismatchError: If the leading coefficient is (near) zero
    """
    opts = (options or RootFinderOptions()).resolved()
    coeffs = [complex(c) for c in coefficients]
    if len(coeffs) < 2:
        raise InvalidArgumentError("Polynomial must have degree at least 1")
    leading = coeffs[-1]
    if abs(leading) < config.POLY_EPSILON:
        raise DegreeMismatchError("Leading coefficient must be non-zero")

    degree = len(coeffs) - 1
    monic = [c / leading for c in coeffs]
    if degree == 1:
        roots = [-monic[0]]
        return RootFinderResult(
            roots=[ComplexValue.coerce(roots[0])],
            converged=True,
            iterations=1,
            max_residual=abs(evaluate_polynomial(coeffs, roots[0])),
        )

    tolerance = max(opts.tolerance, 10.0 * sys.float_info.epsilon)
    roots = initial_guesses(monic)
    converged = False
    iterations = 0
    max_step = math.inf

    for iterations in range(1, opts.max_iterations + 1):
        roots, max_step = _weierstrass_sweep(monic, roots)
        scale = max(1.0, max(abs(r) for r in roots))
        if max_step < tolerance * scale:
            converged = True
            break
        # Steps around a multiple root stall at rounding noise; accept the
        # sweep once every residual is indistinguishable from zero.
        if all(
            abs(evaluate_polynomial(monic, r)) <= _rounding_bound(monic, r) for r in roots
        ):
            converged = True
            break

    if converged and opts.polish_roots:
        roots = [_polish(coeffs, r, opts.polish_steps) for r in roots]

    max_residual = max(abs(evaluate_polynomial(coeffs, r)) for r in roots)
    logger.debug(
        "Durand-Kerner degree=%d converged=%s iterations=%d max_step=%.3g max_residual=%.3g",
        degree,
        converged,
        iterations,
        max_step,
        max_residual,
    )
    return RootFinderResult(
        roots=[ComplexValue.coerce(r) for r in roots],
        converged=converged,
        iterations=iterations,
        max_step=max_step,
        max_residual=max_residual,
    )
