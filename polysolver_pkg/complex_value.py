"""Immutable complex value used by the expression evaluator and solvers."""

from __future__ import annotations

import cmath
from dataclasses import dataclass
from typing import Union

from .config import COMPLEX_EPSILON
from .types import DivisionByZeroError, InvalidArgumentError

Number = Union[int, float, complex, "ComplexValue"]


@dataclass(frozen=True)
class ComplexValue:
    """Real and imaginary pair with field arithmetic.

    Every operation returns a new value. Division is the only partial
    operation: it raises ``DivisionByZeroError`` when the divisor's squared
    modulus is below ``COMPLEX_EPSILON``.
    """

    real: float = 0.0
    imag: float = 0.0

    @classmethod
    def coerce(cls, value: Number) -> ComplexValue:
        if isinstance(value, ComplexValue):
            return value
        value = complex(value)
        return cls(value.real, value.imag)

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def __add__(self, other: Number) -> ComplexValue:
        other = ComplexValue.coerce(other)
        return ComplexValue(self.real + other.real, self.imag + other.imag)

    __radd__ = __add__

    def __sub__(self, other: Number) -> ComplexValue:
        other = ComplexValue.coerce(other)
        return ComplexValue(self.real - other.real, self.imag - other.imag)

    def __rsub__(self, other: Number) -> ComplexValue:
        return ComplexValue.coerce(other) - self

    def __mul__(self, other: Number) -> ComplexValue:
        other = ComplexValue.coerce(other)
        return ComplexValue(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> ComplexValue:
        other = ComplexValue.coerce(other)
        denominator = other.real * other.real + other.imag * other.imag
        if denominator < COMPLEX_EPSILON:
            raise DivisionByZeroError("Division by zero")
        return ComplexValue(
            (self.real * other.real + self.imag * other.imag) / denominator,
            (self.imag * other.real - self.real * other.imag) / denominator,
        )

    def __rtruediv__(self, other: Number) -> ComplexValue:
        return ComplexValue.coerce(other) / self

    def __neg__(self) -> ComplexValue:
        return ComplexValue(-self.real, -self.imag)

    def __abs__(self) -> float:
        return abs(complex(self))

    def pow(self, exponent: Number) -> ComplexValue:
        """Principal complex power ``self ** exponent``."""
        exponent = ComplexValue.coerce(exponent)
        try:
            result = complex(self) ** complex(exponent)
        except ZeroDivisionError as exc:
            raise DivisionByZeroError("Division by zero") from exc
        except OverflowError as exc:
            raise InvalidArgumentError("Numeric overflow in exponentiation") from exc
        return ComplexValue.coerce(result)

    __pow__ = pow

    def _apply(self, function, name: str) -> ComplexValue:
        try:
            return ComplexValue.coerce(function(complex(self)))
        except (OverflowError, ValueError) as exc:
            raise InvalidArgumentError(f"{name} is undefined for {complex(self)}") from exc

    def sqrt_principal(self) -> ComplexValue:
        return self._apply(cmath.sqrt, "sqrt")

    def sin(self) -> ComplexValue:
        return self._apply(cmath.sin, "sin")

    def cos(self) -> ComplexValue:
        return self._apply(cmath.cos, "cos")

    def conjugate(self) -> ComplexValue:
        return ComplexValue(self.real, -self.imag)

    def is_approximately_real(self, epsilon: float = COMPLEX_EPSILON) -> bool:
        return abs(self.imag) < epsilon

    def __repr__(self) -> str:
        return f"ComplexValue({self.real!r}, {self.imag!r})"
