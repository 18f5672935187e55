"""Symbolic root finding through SymPy.

Coefficients are converted to exact rationals before SymPy sees them, so a
float such as 0.1 reaches the backend as 1/10. The adapter never raises: it
returns one of

- :class:`SymbolicRoots`: explicit closed forms in display notation
- :class:`NonFiniteSolutionSet`: SymPy answered, but only implicitly
  (``ConditionSet``, ``CRootOf``) or with an infinite set
- :class:`NoSymbolicResult`: nothing usable, the caller solves numerically
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

import sympy as sp

from . import config
from .logging_config import get_logger
from .rational import Fraction
from .types import (
    NonFiniteSolutionSet,
    NoSymbolicResult,
    SymbolicOutcome,
    SymbolicRoots,
)

logger = get_logger("symbolic")

_X = sp.Symbol("x")
_CUBE_ROOT_MARKER = "^(1/3)"
_IMAGINARY_UNIT = re.compile(r"\bI\b")


def to_exact(value: float) -> sp.Rational:
    """Represent a coefficient as an integer or integer ratio."""
    if abs(value) <= config.SYMBOLIC_ZERO_TOLERANCE:
        return sp.Integer(0)
    fraction = Fraction.from_double(value)
    return sp.Rational(fraction.numerator, fraction.denominator)


def _base_start(text: str, end: int) -> int:
    """Index where the base of an exponent ending at ``end`` starts."""
    if end > 0 and text[end - 1] == ")":
        depth = 0
        for pos in range(end - 1, -1, -1):
            if text[pos] == ")":
                depth += 1
            elif text[pos] == "(":
                depth -= 1
                if depth == 0:
                    while pos > 0 and (text[pos - 1].isalnum() or text[pos - 1] == "_"):
                        pos -= 1
                    return pos
        return 0
    pos = end
    while pos > 0 and (text[pos - 1].isalnum() or text[pos - 1] in "._"):
        pos -= 1
    return pos


def _strip_outer_parens(text: str) -> str:
    if not (text.startswith("(") and text.endswith(")")):
        return text
    depth = 0
    for pos, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and pos != len(text) - 1:
                return text
    return text[1:-1]


def to_display(expression: sp.Basic) -> str:
    """Render a SymPy expression in calculator notation.

    ``**`` becomes ``^``, ``I`` becomes ``i`` and ``(...)^(1/3)`` becomes
    ``cbrt(...)``.
    """
    text = sp.sstr(expression).replace("**", "^")
    index = text.find(_CUBE_ROOT_MARKER)
    while index != -1:
        start = _base_start(text, index)
        base = _strip_outer_parens(text[start:index])
        text = f"{text[:start]}cbrt({base}){text[index + len(_CUBE_ROOT_MARKER):]}"
        index = text.find(_CUBE_ROOT_MARKER)
    return _IMAGINARY_UNIT.sub("i", text)


def _flatten_solution_set(solution_set: sp.Set) -> Optional[list[sp.Basic]]:
    """Elements of a FiniteSet or a Union of FiniteSets; None for anything else."""
    if isinstance(solution_set, sp.FiniteSet):
        return list(solution_set.args)
    if isinstance(solution_set, sp.Union):
        elements: list[sp.Basic] = []
        for part in solution_set.args:
            flattened = _flatten_solution_set(part)
            if flattened is None:
                return None
            elements.extend(flattened)
        return elements
    return None


def build_polynomial(coefficients: Sequence[float]) -> sp.Expr:
    return sp.Add(*[to_exact(c) * _X ** power for power, c in enumerate(coefficients)])


def try_solve_symbolic(coefficients: Sequence[float]) -> SymbolicOutcome:
    """Attempt an exact solution of the polynomial with ascending ``coefficients``.

    Args:
        coefficients: Ascending coefficients, at least two, leading non-zero

    Returns:
        SymbolicRoots, NonFiniteSolutionSet or NoSymbolicResult
    """
    if len(coefficients) < 2:
        return NoSymbolicResult("Polynomial must have degree at least 1")
    if to_exact(coefficients[-1]) == 0:
        return NoSymbolicResult("Leading coefficient must be non-zero")

    polynomial = build_polynomial(coefficients)
    try:
        solution_set = sp.solveset(polynomial, _X, domain=sp.S.Complexes)
    except (NotImplementedError, ValueError, TypeError, sp.PolynomialError) as exc:
        logger.debug("SymPy could not solve %s: %s", polynomial, exc)
        return NoSymbolicResult(str(exc) or type(exc).__name__)
    except Exception as exc:
        logger.warning("Unexpected SymPy failure on %s", polynomial, exc_info=True)
        return NoSymbolicResult(str(exc) or type(exc).__name__)

    roots = _flatten_solution_set(solution_set)
    if roots is None or any(root.has(sp.CRootOf) for root in roots):
        logger.debug("Implicit solution set for %s: %s", polynomial, solution_set)
        return NonFiniteSolutionSet(sp.sstr(solution_set))
    if not roots:
        return NoSymbolicResult("Empty solution set")

    rendered = [to_display(root) for root in roots]
    if any(len(text) > config.SYMBOLIC_MAX_ROOT_LENGTH for text in rendered):
        logger.debug("Closed form for %s exceeds display limit", polynomial)
        return NoSymbolicResult("Closed form too long to display")
    return SymbolicRoots(rendered)
