"""Linear systems written as ``equation2(<eq1>,<eq2>[,<eq3>])``.

Unknowns are the subset of ``x``, ``y`` and ``z`` that occurs, in sorted
order, and there must be exactly one equation per unknown. The system is
solved by Gaussian elimination with partial pivoting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from . import config
from .equation_parser import evaluate_real_constant, split_sides, unwrap_call
from .formatting import FormatOptions, format_assignments
from .logging_config import get_logger
from .parser import split_top_level_commas
from .types import (
    FormatError,
    InvalidArgumentError,
    NoVariableError,
    SingularMatrixError,
)

logger = get_logger("linear_system")


@dataclass(frozen=True)
class SystemSolution:
    variables: tuple[str, ...]
    values: tuple[float, ...]
    output: str


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def scan_linear_terms(
    lhs: str, variables: Sequence[str]
) -> tuple[list[float], float]:
    """Scan ``[sign][coefficient][*][variable]`` terms of one equation side.

    Args:
        lhs: Text such as ``"2x + 3*y - 1"``
        variables: Unknowns, defining the order of the returned coefficients

    Returns:
        Tuple of (coefficients aligned with ``variables``, constant term)
    """
    coefficients = [0.0] * len(variables)
    constant = 0.0
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

        value = 1.0
        has_number = False
        match = config.NUMBER_PATTERN.match(lhs, pos)
        if match:
            value = float(match.group())
            has_number = True
            pos = _skip_spaces(lhs, match.end())
            if pos < len(lhs) and lhs[pos] == "*":
                pos = _skip_spaces(lhs, pos + 1)
                if pos >= len(lhs) or lhs[pos] not in variables:
                    raise FormatError("Invalid character in equation: *")

        if pos < len(lhs) and lhs[pos] in variables:
            coefficients[variables.index(lhs[pos])] += sign * value
            pos = _skip_spaces(lhs, pos + 1)
        elif has_number:
            constant += sign * value
        else:
            raise FormatError(f"Invalid character in equation: {lhs[pos]}")

        if pos < len(lhs) and lhs[pos] not in "+-":
            raise FormatError(f"Invalid character in equation: {lhs[pos]}")

    return coefficients, constant


def gaussian_elimination(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """Solve ``matrix @ v = rhs`` with partial pivoting.

    Raises:
        SingularMatrixError: If a pivot falls below PIVOT_TOLERANCE
    """
    augmented = np.column_stack((matrix.astype(float), rhs.astype(float)))
    size = augmented.shape[0]
    for col in range(size):
        pivot = col + int(np.argmax(np.abs(augmented[col:, col])))
        if abs(augmented[pivot, col]) < config.PIVOT_TOLERANCE:
            raise SingularMatrixError("System has no unique solution (singular matrix)")
        if pivot != col:
            augmented[[col, pivot]] = augmented[[pivot, col]]
        factors = augmented[col + 1 :, col] / augmented[col, col]
        augmented[col + 1 :] -= np.outer(factors, augmented[col])

    solution = np.zeros(size)
    for row in range(size - 1, -1, -1):
        tail = augmented[row, row + 1 : size] @ solution[row + 1 :]
        solution[row] = (augmented[row, -1] - tail) / augmented[row, row]
    solution[np.abs(solution) < config.PIVOT_TOLERANCE] = 0.0
    return solution


def parse_system(text: str) -> tuple[list[str], np.ndarray, np.ndarray]:
    """Parse ``equation2(...)`` into (variables, coefficient matrix, right-hand sides)."""
    body = unwrap_call(text, config.SYSTEM_PREFIX, config.SYSTEM_HINT, label="equation2")
    equations = split_top_level_commas(body)
    if not equations:
        raise FormatError("No equations provided")
    if len(equations) < 2:
        raise FormatError("System must contain at least 2 equations")

    sides = []
    for equation in equations:
        if "=" not in equation:
            raise FormatError("Each equation must contain '=' sign")
        sides.append(split_sides(equation))

    variables = sorted(
        {name for lhs, _ in sides for name in config.SYSTEM_VARIABLES if name in lhs}
    )
    if not variables:
        raise NoVariableError("System must contain at least one of the variables x, y, z")
    if len(variables) != len(equations):
        raise InvalidArgumentError(
            f"System needs one equation per variable: got {len(equations)} "
            f"equations for {len(variables)} variables ({', '.join(variables)})"
        )

    rows = []
    constants = []
    for lhs, rhs in sides:
        coefficients, constant = scan_linear_terms(lhs, variables)
        rows.append(coefficients)
        constants.append(evaluate_real_constant(rhs, "Systems of") - constant)
    matrix = np.array(rows, dtype=float)
    rhs = np.array(constants, dtype=float)
    if not (np.all(np.isfinite(matrix)) and np.all(np.isfinite(rhs))):
        raise InvalidArgumentError("Equation coefficients must be finite numbers")
    return variables, matrix, rhs


def solve_linear_system(
    text: str, options: Optional[FormatOptions] = None
) -> SystemSolution:
    """Solve an ``equation2(...)`` input.

    Example:
        >>> solve_linear_system("equation2(x+y=5,x-y=1)").output
        'x = 3, y = 2'
    """
    variables, matrix, rhs = parse_system(text)
    values = [float(v) for v in gaussian_elimination(matrix, rhs)]
    logger.debug("Solved %dx%d system: %s", len(variables), len(variables), values)
    return SystemSolution(
        variables=tuple(variables),
        values=tuple(values),
        output=format_assignments(variables, values, options),
    )
