"""Public API for Polysolver - returns structured objects without side effects."""

from __future__ import annotations

from typing import Optional

from .formatting import FormatOptions
from .logging_config import get_logger
from .parser import validate_input
from .solver import dispatch, evaluate_text, solve_equation_text, solve_system_text
from .types import CalculatorError, EvalResult, SolveResult

logger = get_logger("api")

NUMERIC_ERROR = "NUMERIC_ERROR"


def evaluate(expression: str, options: Optional[FormatOptions] = None) -> EvalResult:
    """Evaluate an arithmetic expression.

    Args:
        expression: Expression string (e.g., "3 + 5 * (2 - 8)^2", "sqrt(-4)")
        options: Formatting options for the rendered result

    Returns:
        EvalResult with the rendered value and its real/imaginary parts

    Example:
        >>> from polysolver_pkg.api import evaluate
        >>> evaluate("sqrt(16) + 3").result
        '7'
        >>> evaluate("1 / 0").error
        'Division by zero'
    """
    try:
        value, rendered = evaluate_text(validate_input(expression), options)
    except CalculatorError as exc:
        return EvalResult(ok=False, error=exc.message, error_code=exc.code)
    except (ArithmeticError, ValueError) as exc:
        logger.error("Unexpected numeric failure for %r", expression, exc_info=True)
        return EvalResult(ok=False, error=str(exc), error_code=NUMERIC_ERROR)
    return EvalResult(ok=True, result=rendered, real=value.real, imag=value.imag)


def solve_equation(
    equation: str,
    method: Optional[str] = None,
    options: Optional[FormatOptions] = None,
) -> SolveResult:
    """Solve a single polynomial equation of degree 1 to 5.

    Args:
        equation: Equation string (e.g., "equation(x^2-5x+6=0)")
        method: "auto", "symbolic" or "numeric"
        options: Formatting options for the rendered roots

    Returns:
        SolveResult with roots and solve diagnostics

    Example:
        >>> from polysolver_pkg.api import solve_equation
        >>> solve_equation("equation(2x-3=7)").output
        'x = 5'
        >>> solve_equation("equation(x^2-5x+6=0)").roots
        ['2', '3']
    """
    try:
        return solve_equation_text(validate_input(equation), method, options)
    except CalculatorError as exc:
        return SolveResult(
            ok=False, result_type="equation", error=exc.message, error_code=exc.code
        )
    except (ArithmeticError, ValueError) as exc:
        logger.error("Unexpected numeric failure for %r", equation, exc_info=True)
        return SolveResult(
            ok=False, result_type="equation", error=str(exc), error_code=NUMERIC_ERROR
        )


def solve_system(
    equations: str, options: Optional[FormatOptions] = None
) -> SolveResult:
    """Solve a linear system of two or three equations.

    Args:
        equations: System string (e.g., "equation2(x+y=5,x-y=1)")
        options: Formatting options for the rendered values

    Returns:
        SolveResult whose ``roots`` follow the sorted variable order

    Example:
        >>> from polysolver_pkg.api import solve_system
        >>> solve_system("equation2(x+y=5,x-y=1)").output
        'x = 3, y = 2'
    """
    try:
        return solve_system_text(validate_input(equations), options)
    except CalculatorError as exc:
        return SolveResult(
            ok=False, result_type="system", error=exc.message, error_code=exc.code
        )
    except (ArithmeticError, ValueError) as exc:
        logger.error("Unexpected numeric failure for %r", equations, exc_info=True)
        return SolveResult(
            ok=False, result_type="system", error=str(exc), error_code=NUMERIC_ERROR
        )


def process_input(
    text: str, method: Optional[str] = None, options: Optional[FormatOptions] = None
) -> str:
    """Handle one input line and return exactly one output line.

    Failures never raise: they are rendered as ``Error: <message>``.

    Example:
        >>> process_input("equation2(x+y=5,x-y=1)")
        'x = 3, y = 2'
        >>> process_input("1 / 0")
        'Error: Division by zero'
    """
    try:
        return dispatch(validate_input(text), method, options)
    except CalculatorError as exc:
        logger.debug("Input %r failed with %s: %s", text, exc.code, exc.message)
        return f"Error: {exc.message}"
    except (ArithmeticError, ValueError, RecursionError) as exc:
        logger.error("Unexpected numeric failure for %r", text, exc_info=True)
        return f"Error: {exc}"
