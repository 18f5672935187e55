"""Equation solving pipeline.

This module handles:
- ``equation(...)`` input: parse, try SymPy, fall back to closed forms and
  Durand-Kerner, render the roots
- ``equation2(...)`` input: linear systems by Gaussian elimination
- plain arithmetic expressions

Failures propagate as :class:`CalculatorError` subclasses; turning them into
``Error: <message>`` lines is left to :mod:`polysolver_pkg.api`.
"""

from __future__ import annotations

from typing import Optional

from . import config
from .closed_form import solve_closed_form
from .complex_value import ComplexValue
from .equation_parser import parse_equation
from .formatting import (
    FormatOptions,
    format_complex,
    format_number,
    format_root_list,
    format_root_of,
    format_roots,
)
from .linear_system import solve_linear_system
from .logging_config import get_logger
from .parser import evaluate_expression
from .symbolic import try_solve_symbolic
from .types import (
    ConvergenceError,
    EquationRequest,
    NonFiniteSolutionSet,
    SolveResult,
    SolverError,
    SymbolicRoots,
)

logger = get_logger("solver")

VALID_METHODS = ("auto", "symbolic", "numeric")


def _resolve_method(method: Optional[str]) -> str:
    method = (method or config.SOLVER_METHOD or "auto").lower()
    if method not in VALID_METHODS:
        raise SolverError(
            f"Unknown solver method '{method}' (expected one of {', '.join(VALID_METHODS)})",
            "INVALID_METHOD",
        )
    return method


def solve_polynomial(
    request: EquationRequest,
    method: Optional[str] = None,
    options: Optional[FormatOptions] = None,
) -> SolveResult:
    """Solve a parsed polynomial equation.

    SymPy is tried first unless ``method`` is "numeric". A quintic whose
    solution set SymPy can only describe implicitly is answered with
    ``RootOf`` placeholders; every other symbolic miss falls through to the
    degree-specific numeric solver.

    Args:
        request: Degree and ascending coefficients
        method: "auto", "symbolic" or "numeric" (None = SOLVER_METHOD)
        options: Formatting options for the rendered roots

    Returns:
        Successful SolveResult carrying the output line and diagnostics

    Raises:
        CalculatorError: Any degenerate input or numeric failure
    """
    method = _resolve_method(method)
    coefficients = list(request.coefficients)
    degree = request.degree
    symbolic_failure: Optional[str] = None

    if method != "numeric":
        outcome = try_solve_symbolic(coefficients)
        if isinstance(outcome, SymbolicRoots):
            logger.debug("Symbolic solution for degree %d: %s", degree, outcome.roots)
            return SolveResult(
                ok=True,
                result_type="equation",
                output=format_root_list(outcome.roots),
                roots=list(outcome.roots),
                degree=degree,
                method="symbolic",
            )
        if isinstance(outcome, NonFiniteSolutionSet):
            symbolic_failure = f"non-finite solution set {outcome.description}"
            if degree == 5:
                rendered, output = format_root_of(coefficients, options)
                return SolveResult(
                    ok=True,
                    result_type="equation",
                    output=output,
                    roots=rendered,
                    degree=degree,
                    method="root_of",
                )
        else:
            symbolic_failure = outcome.reason
        logger.debug("No symbolic answer (%s), using numeric path", symbolic_failure)
        if method == "symbolic" and degree == 5:
            raise SolverError(f"Symbolic quintic solve failed: {symbolic_failure}")

    try:
        numeric = solve_closed_form(coefficients)
    except ConvergenceError as exc:
        if degree == 5 and symbolic_failure is not None:
            raise ConvergenceError(
                f"Symbolic quintic solve failed: {symbolic_failure}; "
                f"numeric fallback failed: {exc.message}",
                exc.iterations,
            ) from exc
        raise

    rendered, output = format_roots(numeric.roots, options)
    return SolveResult(
        ok=True,
        result_type="equation",
        output=output,
        roots=rendered,
        degree=degree,
        method=numeric.method,
        iterations=numeric.iterations,
        converged=numeric.converged,
        max_residual=numeric.max_residual,
    )


def solve_equation_text(
    text: str, method: Optional[str] = None, options: Optional[FormatOptions] = None
) -> SolveResult:
    """Parse and solve ``equation(<lhs>=<rhs>)`` text."""
    return solve_polynomial(parse_equation(text), method, options)


def solve_system_text(text: str, options: Optional[FormatOptions] = None) -> SolveResult:
    """Parse and solve ``equation2(...)`` text."""
    solution = solve_linear_system(text, options)
    return SolveResult(
        ok=True,
        result_type="system",
        output=solution.output,
        roots=[format_number(value, options) for value in solution.values],
        degree=1,
        method="gaussian_elimination",
    )


def evaluate_text(
    text: str, options: Optional[FormatOptions] = None
) -> tuple[ComplexValue, str]:
    """Evaluate an arithmetic expression, returning the value and its rendering."""
    value = evaluate_expression(text)
    return value, format_complex(value, options)


def dispatch(
    text: str, method: Optional[str] = None, options: Optional[FormatOptions] = None
) -> str:
    """Route one input line to the system solver, equation solver or evaluator.

    Returns:
        The output line

    Raises:
        CalculatorError: On any failure
    """
    if text.startswith("equation2"):
        return solve_system_text(text, options).output
    if text.startswith("equation"):
        return solve_equation_text(text, method, options).output
    return evaluate_text(text, options)[1]
