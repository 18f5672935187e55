"""Type definitions, error taxonomy and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .complex_value import ComplexValue


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CalculatorError(Exception):
    """Base class for every failure surfaced as ``Error: <message>``."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(CalculatorError):
    """Raised when raw input violates a size or nesting limit."""

    default_code = "VALIDATION_ERROR"


class FormatError(CalculatorError):
    """Raised when equation or expression syntax is malformed."""

    default_code = "FORMAT_ERROR"


class ParseError(FormatError):
    """Raised when an arithmetic expression cannot be evaluated."""

    default_code = "PARSE_ERROR"


class UnmatchedParenthesisError(ParseError):
    default_code = "UNMATCHED_PARENTHESIS"


class DivisionByZeroError(CalculatorError):
    default_code = "DIVISION_BY_ZERO"


class InvalidArgumentError(CalculatorError):
    """Raised when a value is structurally valid but unusable."""

    default_code = "INVALID_ARGUMENT"


class RequiresRealConstantError(InvalidArgumentError):
    default_code = "REQUIRES_REAL_CONSTANT"


class SingularMatrixError(InvalidArgumentError):
    default_code = "SINGULAR_MATRIX"


class DegreeMismatchError(CalculatorError):
    """Raised when the expected leading term of an equation is absent."""

    default_code = "DEGREE_MISMATCH"


class NoVariableError(DegreeMismatchError):
    default_code = "NO_VARIABLE"


class SolverError(CalculatorError):
    """Raised when solving fails."""

    default_code = "SOLVER_ERROR"


class NoSolutionError(SolverError):
    default_code = "NO_SOLUTION"


class InfiniteSolutionsError(SolverError):
    default_code = "INFINITE_SOLUTIONS"


class ConvergenceError(SolverError):
    """Raised when the iterative root finder exhausts its iteration budget."""

    default_code = "CONVERGENCE_FAILURE"

    def __init__(self, message: str, iterations: int = 0, code: str | None = None):
        super().__init__(message, code)
        self.iterations = iterations


# ---------------------------------------------------------------------------
# Symbolic adapter outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SymbolicRoots:
    """Finite set of explicit root expressions, already in display notation."""

    roots: list[str]


@dataclass(frozen=True)
class NonFiniteSolutionSet:
    """The backend described the solution set implicitly or as infinite."""

    description: str


@dataclass(frozen=True)
class NoSymbolicResult:
    """The backend produced nothing usable; the caller falls back to numerics."""

    reason: str


SymbolicOutcome = Union[SymbolicRoots, NonFiniteSolutionSet, NoSymbolicResult]


# ---------------------------------------------------------------------------
# Solve pipeline values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EquationRequest:
    """Parsed ``equation(...)`` input.

    ``coefficients`` are in ascending powers, so ``coefficients[k]`` multiplies
    ``x^k`` and ``len(coefficients) == degree + 1``.
    """

    degree: int
    coefficients: tuple[float, ...]

    @property
    def leading(self) -> float:
        return self.coefficients[self.degree]


@dataclass
class RootFinderResult:
    """Roots plus convergence diagnostics of a numeric solve."""

    roots: list[ComplexValue]
    converged: bool
    iterations: int
    max_step: float = 0.0
    max_residual: float = 0.0
    method: str = "durand_kerner"


# ---------------------------------------------------------------------------
# Public API results
# ---------------------------------------------------------------------------


@dataclass
class EvalResult:
    """Result of evaluating an arithmetic expression."""

    ok: bool
    result: str | None = None
    real: float | None = None
    imag: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.real is not None:
            result_dict["real"] = self.real
        if self.imag is not None:
            result_dict["imag"] = self.imag
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, result={self.result!r})"


@dataclass
class SolveResult:
    """Result of solving a polynomial equation or a linear system."""

    ok: bool
    result_type: str  # "equation" or "system"
    output: str | None = None
    roots: list[str] = field(default_factory=list)
    degree: int | None = None
    method: str | None = None
    iterations: int | None = None
    converged: bool | None = None
    max_residual: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": self.result_type}
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["error_code"] = self.error_code
            return result_dict
        result_dict["output"] = self.output
        result_dict["roots"] = list(self.roots)
        for key in ("degree", "method", "iterations", "converged", "max_residual"):
            value = getattr(self, key)
            if value is not None:
                result_dict[key] = value
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"SolveResult(ok=False, result_type={self.result_type!r}, "
                f"error={self.error!r})"
            )
        parts = [f"ok={self.ok}", f"result_type={self.result_type!r}"]
        parts.append(f"output={self.output!r}")
        if self.method is not None:
            parts.append(f"method={self.method!r}")
        if self.iterations is not None:
            parts.append(f"iterations={self.iterations!r}")
        return f"SolveResult({', '.join(parts)})"
