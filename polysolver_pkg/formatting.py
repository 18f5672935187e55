"""Rendering of numbers, complex roots and polynomials for output lines.

Formatting never touches global state: every function takes an optional
:class:`FormatOptions`, and ``None`` means the configured defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from . import config
from .complex_value import ComplexValue
from .rational import Fraction


@dataclass(frozen=True)
class FormatOptions:
    """Presentation choices threaded through every formatting call.

    Attributes:
        precision: Decimal places for non-integer values (None = OUTPUT_PRECISION)
        fraction_style: "decimal" prints 0.5, "ratio" prints 1/2
        ratio_max_denominator: Largest denominator shown in "ratio" style
    """

    precision: Optional[int] = None
    fraction_style: str = "decimal"
    ratio_max_denominator: int = 1000

    @property
    def digits(self) -> int:
        return config.OUTPUT_PRECISION if self.precision is None else self.precision


DEFAULT_OPTIONS = FormatOptions()


def _strip_decimal(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_number(value: float, options: Optional[FormatOptions] = None) -> str:
    """Format a real number, snapping near-integers and simple ratios.

    Args:
        value: Number to render
        options: Presentation options

    Returns:
        ``"3"`` for values within INTEGER_TOLERANCE of 3, ``"1/2"`` in ratio
        style for halves, otherwise a decimal with trailing zeros removed
    """
    opts = options or DEFAULT_OPTIONS
    if not math.isfinite(value):
        return str(value)
    fraction = Fraction.from_double(value)
    if fraction.is_integer and abs(fraction.to_double() - value) < config.INTEGER_TOLERANCE:
        return str(fraction.numerator)
    if opts.fraction_style == "ratio":
        ratio = Fraction.from_double(value, opts.ratio_max_denominator)
        if abs(ratio.to_double() - value) < config.INTEGER_TOLERANCE:
            return ratio.to_ratio_string()
    return _strip_decimal(f"{value:.{opts.digits}f}")


def format_complex(value: ComplexValue, options: Optional[FormatOptions] = None) -> str:
    """Format a complex value as ``a``, ``bi`` or ``a + bi`` / ``a - bi``.

    A unit imaginary coefficient is omitted (``i``, ``-i``, ``2 + i``).
    """
    value = ComplexValue.coerce(value)
    real_text = format_number(value.real, options)
    imag_text = format_number(abs(value.imag), options)
    if imag_text == "0":
        return real_text
    coefficient = "" if imag_text == "1" else imag_text
    if real_text == "0":
        sign = "-" if value.imag < 0 else ""
        return f"{sign}{coefficient}i"
    sign = "-" if value.imag < 0 else "+"
    return f"{real_text} {sign} {coefficient}i"


def distinct(rendered: Sequence[str]) -> list[str]:
    """Drop repeated root strings, keeping first-seen order."""
    seen: list[str] = []
    for text in rendered:
        if text not in seen:
            seen.append(text)
    return seen


def format_root_list(rendered: Sequence[str], variable: str = "x") -> str:
    """Join root strings as ``x = r`` or ``x1 = r1, x2 = r2, ...``."""
    if not rendered:
        return "No solution"
    if len(rendered) == 1:
        return f"{variable} = {rendered[0]}"
    return ", ".join(
        f"{variable}{index} = {text}" for index, text in enumerate(rendered, start=1)
    )


def format_roots(
    roots: Sequence[ComplexValue], options: Optional[FormatOptions] = None
) -> tuple[list[str], str]:
    """Render a root set; coincident roots are printed once.

    Returns:
        Tuple of (distinct rendered roots, output line)
    """
    rendered = distinct([format_complex(root, options) for root in roots])
    return rendered, format_root_list(rendered)


def polynomial_to_string(
    coefficients: Sequence[float],
    variable: str = "x",
    options: Optional[FormatOptions] = None,
) -> str:
    """Render ascending coefficients in descending powers, e.g. ``x^5 - x + 1``."""
    terms: list[str] = []
    for power in range(len(coefficients) - 1, -1, -1):
        coefficient = coefficients[power]
        if abs(coefficient) < config.POLY_EPSILON:
            continue
        magnitude = format_number(abs(coefficient), options)
        if power == 0:
            body = magnitude
        else:
            prefix = "" if magnitude == "1" else magnitude
            body = f"{prefix}{variable}" if power == 1 else f"{prefix}{variable}^{power}"
        if not terms:
            terms.append(f"-{body}" if coefficient < 0 else body)
        else:
            terms.append(f"- {body}" if coefficient < 0 else f"+ {body}")
    return " ".join(terms) if terms else "0"


def format_root_of(
    coefficients: Sequence[float], options: Optional[FormatOptions] = None
) -> tuple[list[str], str]:
    """Placeholders ``RootOf(<poly>, k)`` for each root of the polynomial."""
    polynomial = polynomial_to_string(coefficients, options=options)
    rendered = [
        f"RootOf({polynomial}, {index})" for index in range(len(coefficients) - 1)
    ]
    return rendered, format_root_list(rendered)


def format_assignments(
    names: Sequence[str], values: Sequence[float], options: Optional[FormatOptions] = None
) -> str:
    """Render ``x = 3, y = 2`` for a solved linear system."""
    return ", ".join(
        f"{name} = {format_number(value, options)}" for name, value in zip(names, values)
    )
