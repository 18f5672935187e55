"""Centralized configuration for Polysolver.

This module defines:
- Solver method selection and numeric fallback behaviour
- Tolerances used by the evaluator, closed-form solvers and root finder
- Input validation limits (length, nesting depth)
- Output formatting defaults
- Grammar tables and regex patterns for parsing

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with POLYSOLVER_)
"""

import math
import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("polysolver")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Solver configuration
SOLVER_METHOD = os.getenv(
    "POLYSOLVER_SOLVER_METHOD", "auto"
)  # "auto", "symbolic", "numeric"
OUTPUT_PRECISION = int(
    os.getenv("POLYSOLVER_OUTPUT_PRECISION", "10")
)  # decimal places in rendered roots

# Rational approximation
MAX_DENOMINATOR = int(os.getenv("POLYSOLVER_MAX_DENOMINATOR", "1000000"))
INTEGER_TOLERANCE = float(os.getenv("POLYSOLVER_INTEGER_TOLERANCE", "1e-9"))

# Numeric tolerance constants
COMPLEX_EPSILON = float(
    os.getenv("POLYSOLVER_COMPLEX_EPSILON", "1e-9")
)  # "approximately real" and division guard
POLY_EPSILON = float(
    os.getenv("POLYSOLVER_POLY_EPSILON", "1e-12")
)  # leading coefficient / biquadratic detection
DISCRIMINANT_TOLERANCE = float(
    os.getenv("POLYSOLVER_DISCRIMINANT_TOLERANCE", "1e-12")
)
PIVOT_TOLERANCE = float(os.getenv("POLYSOLVER_PIVOT_TOLERANCE", "1e-10"))

# Iterative root finder (Durand-Kerner)
ROOT_FINDER_MAX_ITERATIONS = int(
    os.getenv("POLYSOLVER_ROOT_FINDER_MAX_ITERATIONS", "200")
)
ROOT_FINDER_TOLERANCE = float(
    os.getenv("POLYSOLVER_ROOT_FINDER_TOLERANCE", "1e-14")
)
ROOT_FINDER_POLISH = os.getenv("POLYSOLVER_ROOT_FINDER_POLISH", "true").lower() == "true"
ROOT_FINDER_POLISH_STEPS = int(os.getenv("POLYSOLVER_ROOT_FINDER_POLISH_STEPS", "2"))
ROOT_FINDER_PAIR_GUARD = 1e-15  # pairwise differences below this are nudged
ROOT_FINDER_NUDGE = 1e-12
ROOT_FINDER_PERTURBATION = 1e-3  # per-index offset of the initial guesses

# Symbolic adapter
SYMBOLIC_ZERO_TOLERANCE = float(
    os.getenv("POLYSOLVER_SYMBOLIC_ZERO_TOLERANCE", "1e-12")
)  # coefficients below this are passed as exact zero
SYMBOLIC_MAX_ROOT_LENGTH = int(
    os.getenv("POLYSOLVER_SYMBOLIC_MAX_ROOT_LENGTH", "400")
)  # longer radical expressions fall back to numerics

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("POLYSOLVER_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_NESTING_DEPTH = int(
    os.getenv("POLYSOLVER_MAX_NESTING_DEPTH", "100")
)  # nested function calls / parentheses

# Grammar tables
OPERATOR_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "^": 3}
FUNCTION_NAMES = ("sqrt", "sin", "cos", "sind", "cosd")
CONSTANTS = {"pi": math.pi, "e": math.e}
SYSTEM_VARIABLES = ("x", "y", "z")
MAX_POLYNOMIAL_DEGREE = 5
DEGREE_NAMES = {
    1: "Linear",
    2: "Quadratic",
    3: "Cubic",
    4: "Quartic",
    5: "Quintic",
}

EQUATION_PREFIX = "equation("
SYSTEM_PREFIX = "equation2("
EQUATION_HINT = "equation(x^2+2x+1=0)"
SYSTEM_HINT = "equation2(x+y=5,x-y=1)"

# Regex patterns for parsing
NUMBER_PATTERN = re.compile(r"\d+(?:\.\d*)?|\.\d+")
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z]+")
EXPONENT_TOKEN_PATTERN = re.compile(r"x\s*\^\s*(\d+)")
