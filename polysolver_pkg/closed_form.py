"""Degree-specific solvers for polynomial equations of degree 1 to 5.

Every solver takes an ascending coefficient list and returns a
:class:`RootFinderResult` whose ``roots`` hold one value per degree, counted
with multiplicity. Degrees 1 to 3 are solved by formula, degree 4 by the
biquadratic substitution when the odd-power coefficients vanish and by
Durand-Kerner otherwise, degree 5 always by Durand-Kerner.
"""

from __future__ import annotations

import cmath
import math
from typing import Callable, Sequence

from . import config
from .complex_value import ComplexValue, Number
from .formatting import format_number
from .logging_config import get_logger
from .root_finder import evaluate_polynomial, find_roots
from .types import (
    ConvergenceError,
    DegreeMismatchError,
    InfiniteSolutionsError,
    NoSolutionError,
    RootFinderResult,
)

logger = get_logger("closed_form")


def _cbrt(value: float) -> float:
    """Real cube root, negative for negative input."""
    return math.copysign(abs(value) ** (1.0 / 3.0), value)


def _direct_result(
    coefficients: Sequence[float], roots: Sequence[Number], method: str = "closed_form"
) -> RootFinderResult:
    residual = max(abs(evaluate_polynomial(coefficients, complex(r))) for r in roots)
    return RootFinderResult(
        roots=[ComplexValue.coerce(r) for r in roots],
        converged=True,
        iterations=1,
        max_step=0.0,
        max_residual=residual,
        method=method,
    )


def _require_leading(coefficients: Sequence[float], degree: int) -> None:
    if len(coefficients) != degree + 1:
        raise DegreeMismatchError(
            f"{config.DEGREE_NAMES[degree]} solver expects {degree + 1} coefficients, "
            f"got {len(coefficients)}"
        )
    if abs(coefficients[degree]) < config.POLY_EPSILON:
        raise DegreeMismatchError(f"Leading coefficient of x^{degree} must be non-zero")


def solve_linear(coefficients: Sequence[float]) -> RootFinderResult:
    """Solve ``a*x + b = 0``.

    Raises:
        InfiniteSolutionsError: If ``a == 0`` and ``b == 0``
        NoSolutionError: If ``a == 0`` and ``b != 0``
    """
    b, a = coefficients[0], coefficients[1]
    if abs(a) < config.POLY_EPSILON:
        if abs(b) < config.POLY_EPSILON:
            raise InfiniteSolutionsError("Infinite solutions (equation is 0 = 0)")
        raise NoSolutionError(f"No solution (equation is {format_number(b)} = 0)")
    return _direct_result(coefficients, [-b / a])


def solve_quadratic(coefficients: Sequence[float]) -> RootFinderResult:
    """Solve ``a*x^2 + b*x + c = 0`` through the discriminant.

    A negative discriminant yields the conjugate pair with the positive
    imaginary part first. A vanishing one yields the double root twice.
    """
    _require_leading(coefficients, 2)
    c, b, a = coefficients
    discriminant = b * b - 4.0 * a * c
    scale = max(1.0, b * b, abs(4.0 * a * c))

    if abs(discriminant) <= config.DISCRIMINANT_TOLERANCE * scale:
        root = -b / (2.0 * a)
        return _direct_result(coefficients, [root, root])

    if discriminant < 0:
        real = -b / (2.0 * a)
        upper = ComplexValue(real, abs(math.sqrt(-discriminant) / (2.0 * a)))
        return _direct_result(coefficients, [upper, upper.conjugate()])

    # q keeps the sign of b so the subtraction below never cancels
    root_d = math.sqrt(discriminant)
    q = -0.5 * (b + math.copysign(root_d, b))
    first, second = q / a, c / q
    lower, upper = (first, second) if b >= 0 else (second, first)
    return _direct_result(coefficients, [lower, upper])


def solve_cubic(coefficients: Sequence[float]) -> RootFinderResult:
    """Solve a cubic with Cardano's method.

    The cubic is made monic and depressed with ``x = t - b/3`` into
    ``t^3 + p*t + q = 0``; the sign of ``q^2/4 + p^3/27`` selects one real root
    and a conjugate pair, repeated real roots, or the trigonometric form for
    three distinct real roots. Real roots are listed before complex ones.
    """
    _require_leading(coefficients, 3)
    d, c, b, a = coefficients
    b, c, d = b / a, c / a, d / a

    p = c - b * b / 3.0
    q = 2.0 * b ** 3 / 27.0 - b * c / 3.0 + d
    delta = q * q / 4.0 + p ** 3 / 27.0
    shift = -b / 3.0
    tolerance = config.DISCRIMINANT_TOLERANCE
    # both tests are relative to the magnitude of the terms that cancel
    delta_scale = max(1.0, q * q / 4.0, abs(p ** 3 / 27.0))
    q_scale = max(1.0, abs(2.0 * b ** 3 / 27.0), abs(b * c / 3.0), abs(d))

    if abs(delta) < tolerance * delta_scale:
        if abs(q) < tolerance * q_scale:
            roots: list[Number] = [shift, shift, shift]
        else:
            u = _cbrt(-q / 2.0)
            roots = [2.0 * u + shift, -u + shift, -u + shift]
    elif delta > 0:
        sqrt_delta = math.sqrt(delta)
        u = _cbrt(-q / 2.0 + sqrt_delta)
        v = _cbrt(-q / 2.0 - sqrt_delta)
        real = -(u + v) / 2.0 + shift
        upper = ComplexValue(real, abs((u - v) * math.sqrt(3.0) / 2.0))
        roots = [u + v + shift, upper, upper.conjugate()]
    else:
        rho = math.sqrt(-(p ** 3) / 27.0)
        theta = math.acos(max(-1.0, min(1.0, -q / (2.0 * rho))))
        magnitude = 2.0 * _cbrt(rho)
        roots = [
            magnitude * math.cos((theta + 2.0 * math.pi * k) / 3.0) + shift
            for k in range(3)
        ]

    return _direct_result(coefficients, roots)


def is_biquadratic(coefficients: Sequence[float]) -> bool:
    """True when a quartic has no x^3 and no x term."""
    leading = coefficients[4]
    return (
        abs(coefficients[3] / leading) < config.POLY_EPSILON
        and abs(coefficients[1] / leading) < config.POLY_EPSILON
    )


def solve_quartic(coefficients: Sequence[float]) -> RootFinderResult:
    """Solve a quartic.

    ``a*x^4 + c*x^2 + e`` is solved as a quadratic in ``x^2`` followed by
    principal square roots. Any other quartic goes to Durand-Kerner with
    Newton polishing.

    Raises:
        ConvergenceError: If the iteration budget is exhausted
    """
    _require_leading(coefficients, 4)
    if is_biquadratic(coefficients):
        e, _, c, _, a = coefficients
        p, q = c / a, e / a
        root_disc = cmath.sqrt(p * p - 4.0 * q)
        y1 = (-p + root_disc) / 2.0
        y2 = (-p - root_disc) / 2.0
        s1, s2 = cmath.sqrt(y1), cmath.sqrt(y2)
        logger.debug("Quartic solved as biquadratic: y1=%s y2=%s", y1, y2)
        return _direct_result(coefficients, [s1, -s1, s2, -s2], method="biquadratic")

    result = find_roots(coefficients)
    if not result.converged:
        raise ConvergenceError(
            f"Quartic solver failed to converge within {result.iterations} iterations",
            result.iterations,
        )
    return result


def solve_quintic(coefficients: Sequence[float]) -> RootFinderResult:
    """Solve a quintic numerically with Durand-Kerner."""
    _require_leading(coefficients, 5)
    result = find_roots(coefficients)
    if not result.converged:
        raise ConvergenceError(
            f"Quintic solver failed to converge within {result.iterations} iterations",
            result.iterations,
        )
    return result


SOLVERS: dict[int, Callable[[Sequence[float]], RootFinderResult]] = {
    1: solve_linear,
    2: solve_quadratic,
    3: solve_cubic,
    4: solve_quartic,
    5: solve_quintic,
}


def solve_closed_form(coefficients: Sequence[float]) -> RootFinderResult:
    """Dispatch to the solver matching ``len(coefficients) - 1``."""
    degree = len(coefficients) - 1
    solver = SOLVERS.get(degree)
    if solver is None:
        raise DegreeMismatchError(
            f"Polynomial degree exceeds supported maximum x^{config.MAX_POLYNOMIAL_DEGREE}"
        )
    return solver(coefficients)
