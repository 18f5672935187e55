"""Parsing of ``equation(<lhs>=<rhs>)`` text into coefficient vectors.

A single term scanner handles every degree. Each left-hand side term has the
shape ``[sign] [coefficient] [*] [x[^exponent]]`` and is accumulated into
``coefficients[exponent]``. The right-hand side is an arbitrary expression
that must evaluate to a real constant; it is moved to the left by
subtracting it from the constant term.
"""

from __future__ import annotations

import math
import re

from .config import (
    DEGREE_NAMES,
    EQUATION_HINT,
    EQUATION_PREFIX,
    EXPONENT_TOKEN_PATTERN,
    MAX_POLYNOMIAL_DEGREE,
    NUMBER_PATTERN,
)
from .logging_config import get_logger
from .parser import evaluate_expression
from .types import (
    DegreeMismatchError,
    EquationRequest,
    FormatError,
    InvalidArgumentError,
    NoVariableError,
    RequiresRealConstantError,
)

logger = get_logger("equation_parser")

_EXPONENT_DIGITS = re.compile(r"\d+")


def unwrap_call(text: str, prefix: str, hint: str, label: str = "equation") -> str:
    """Return the body of ``prefix...)`` or raise FormatError with a usage hint."""
    stripped = text.strip()
    if not stripped.startswith(prefix) or not stripped.endswith(")"):
        raise FormatError(f"Invalid {label} format. Use: {hint}")
    return stripped[len(prefix) : -1]


def split_sides(equation: str) -> tuple[str, str]:
    if "=" not in equation:
        raise FormatError("Equation must contain '=' sign")
    lhs, rhs = equation.split("=", 1)
    if "=" in rhs:
        raise FormatError("Equation must contain exactly one '=' sign")
    return lhs, rhs


def evaluate_real_constant(text: str, kind: str) -> float:
    """Evaluate a right-hand side, insisting on an (approximately) real value.

    Args:
        text: Expression text; blank means zero
        kind: Label used in the error message, e.g. "Quadratic" or "Systems of"

    Raises:
        RequiresRealConstantError: If the value has a non-negligible imaginary part
    """
    if not text.strip():
        return 0.0
    value = evaluate_expression(text)
    if not value.is_approximately_real():
        raise RequiresRealConstantError(f"{kind} equations require real constants")
    return value.real


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def scan_polynomial_terms(
    lhs: str, max_degree: int, variable: str = "x"
) -> tuple[list[float], bool]:
    """Scan a polynomial left-hand side into ascending coefficients.

    Args:
        lhs: Text such as ``"3x^2 - 2*x + 1"``
        max_degree: Highest exponent accepted
        variable: Name of the unknown

    Returns:
        Tuple ``(coefficients, has_leading_term)``. ``has_leading_term`` is
        True when a term of exponent ``max_degree`` was written, even with a
        zero coefficient.

    Raises:
        FormatError: On an unexpected character or an exponent above max_degree
    """
    coefficients = [0.0] * (max_degree + 1)
    has_leading_term = False
    pos = _skip_spaces(lhs, 0)
    if pos >= len(lhs):
        raise FormatError("Equation left-hand side is empty")

    while pos < len(lhs):
        sign = 1.0
        if lhs[pos] in "+-":
            sign = -1.0 if lhs[pos] == "-" else 1.0
            pos = _skip_spaces(lhs, pos + 1)
            if pos >= len(lhs):
                raise FormatError("Incomplete term at end of equation")

        coefficient = 1.0
        has_number = False
        match = NUMBER_PATTERN.match(lhs, pos)
        if match:
            coefficient = float(match.group())
            has_number = True
            pos = _skip_spaces(lhs, match.end())
            if pos < len(lhs) and lhs[pos] == "*":
                pos = _skip_spaces(lhs, pos + 1)
                if pos >= len(lhs) or lhs[pos] != variable:
                    raise FormatError("Invalid character in equation: *")

        exponent = 0
        if pos < len(lhs) and lhs[pos] == variable:
            exponent = 1
            pos = _skip_spaces(lhs, pos + 1)
            if pos < len(lhs) and lhs[pos] == "^":
                digits = _EXPONENT_DIGITS.match(lhs, _skip_spaces(lhs, pos + 1))
                if digits is None:
                    raise FormatError("Invalid character in equation: ^")
                exponent = int(digits.group())
                pos = _skip_spaces(lhs, digits.end())
        elif not has_number:
            raise FormatError(f"Invalid character in equation: {lhs[pos]}")

        if exponent > max_degree:
            raise FormatError(
                f"Polynomial degree exceeds supported maximum x^{max_degree}"
            )
        coefficients[exponent] += sign * coefficient
        if exponent == max_degree:
            has_leading_term = True

        if pos < len(lhs) and lhs[pos] not in "+-":
            raise FormatError(f"Invalid character in equation: {lhs[pos]}")

    return coefficients, has_leading_term


def parse_polynomial(text: str, degree: int) -> list[float]:
    """Parse ``equation(...)`` text as a polynomial of the given degree.

    Args:
        text: Full input, e.g. ``"equation(x^2-5x+6=0)"``
        degree: Expected degree, 1 to 5

    Returns:
        Coefficient vector in ascending powers, of length ``degree + 1``

    Raises:
        FormatError: Malformed wrapper, missing '=', bad term or exponent
        RequiresRealConstantError: Right-hand side is not real
        NoVariableError: Degree 1 input without any x term
        DegreeMismatchError: No x^degree term present for degree >= 2
    """
    body = unwrap_call(text, EQUATION_PREFIX, EQUATION_HINT)
    lhs, rhs = split_sides(body)
    name = DEGREE_NAMES[degree]
    coefficients, has_leading_term = scan_polynomial_terms(lhs, degree)
    coefficients[0] -= evaluate_real_constant(rhs, name)
    if not all(math.isfinite(c) for c in coefficients):
        raise InvalidArgumentError("Equation coefficients must be finite numbers")
    if not has_leading_term:
        if degree == 1:
            raise NoVariableError("Equation must contain variable x")
        raise DegreeMismatchError(f"{name} equation must contain x^{degree} term")
    return coefficients


def infer_degree(text: str) -> int:
    """Return the highest ``x^k`` exponent written in ``text`` (bare x counts as 1)."""
    exponents = [int(token) for token in EXPONENT_TOKEN_PATTERN.findall(text)]
    return max([1] + exponents)


def parse_equation(text: str) -> EquationRequest:
    """Parse ``equation(...)`` text, inferring its degree from the exponents used."""
    degree = infer_degree(text)
    if degree > MAX_POLYNOMIAL_DEGREE:
        raise FormatError(
            f"Polynomial degree exceeds supported maximum x^{MAX_POLYNOMIAL_DEGREE}"
        )
    coefficients = parse_polynomial(text, degree)
    logger.debug("Parsed degree %d equation: %s", degree, coefficients)
    return EquationRequest(degree=degree, coefficients=tuple(coefficients))
