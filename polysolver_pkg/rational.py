"""Rational approximation of floating point values.

``Fraction.from_double`` decides whether a computed value is a "nice" number:
an integer, or a ratio with a bounded denominator. The formatter uses the
result to print ``3`` instead of ``2.9999999999999996``.
"""

from __future__ import annotations

import fractions
import math
from dataclasses import dataclass

from .config import INTEGER_TOLERANCE, MAX_DENOMINATOR, OUTPUT_PRECISION
from .types import DivisionByZeroError


@dataclass(frozen=True)
class Fraction:
    """Immutable fraction kept in lowest terms with a positive denominator.

    A zero denominator is rejected with ``DivisionByZeroError``.
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        num, den = int(self.numerator), int(self.denominator)
        if den == 0:
            raise DivisionByZeroError("Division by zero")
        if den < 0:
            num, den = -num, -den
        divisor = math.gcd(num, den) or 1
        object.__setattr__(self, "numerator", num // divisor)
        object.__setattr__(self, "denominator", den // divisor)

    @classmethod
    def from_double(
        cls, value: float, max_denominator: int = MAX_DENOMINATOR
    ) -> Fraction:
        """Return the best fraction approximating ``value``.

        Values within ``INTEGER_TOLERANCE`` of an integer snap to that integer.
        Otherwise the result is the closest fraction whose denominator does
        not exceed ``max_denominator``. Infinities and NaN have no rational
        approximation and map to ``0/1``.

        Args:
            value: Float to approximate
            max_denominator: Upper bound on the denominator searched

        Returns:
            Fraction in lowest terms
        """
        if not math.isfinite(value):
            return cls(0, 1)
        nearest = round(value)
        if abs(value - nearest) < INTEGER_TOLERANCE:
            return cls(int(nearest), 1)
        best = fractions.Fraction(value).limit_denominator(max(1, max_denominator))
        return cls(best.numerator, best.denominator)

    @property
    def is_integer(self) -> bool:
        return self.denominator == 1

    def to_double(self) -> float:
        return self.numerator / self.denominator

    def to_ratio_string(self) -> str:
        """Render as ``a/b`` (or ``a`` for integers)."""
        if self.is_integer:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def to_string(self, precision: int = OUTPUT_PRECISION) -> str:
        """Render as an integer or a fixed-precision decimal expansion."""
        if self.is_integer:
            return str(self.numerator)
        return f"{self.to_double():.{precision}f}"

    def __str__(self) -> str:
        return self.to_string()

    def __float__(self) -> float:
        return self.to_double()

