"""Input validation and the arithmetic expression evaluator.

The evaluator is an operator-precedence (shunting-yard) parser working over
:class:`ComplexValue`:

- ``+ -`` bind loosest, then ``* /``, then ``^``; equal precedence pops, so
  ``^`` is left-associative like the other operators
- a unary minus pushes ``0`` and ``-``
- ``%`` scales the value on top of the stack by 1/100
- ``sqrt sin cos sind cosd`` take a parenthesized argument evaluated by a
  recursive call
- ``pi``, ``e`` and ``i`` are only recognized as whole identifiers; a number
  immediately followed by ``i`` is an imaginary literal
"""

from __future__ import annotations

import math

from .complex_value import ComplexValue
from .config import (
    CONSTANTS,
    FUNCTION_NAMES,
    IDENTIFIER_PATTERN,
    MAX_INPUT_LENGTH,
    MAX_NESTING_DEPTH,
    NUMBER_PATTERN,
    OPERATOR_PRECEDENCE,
)
from .types import ParseError, UnmatchedParenthesisError, ValidationError

_DEGREES_TO_RADIANS = math.pi / 180.0


def validate_input(input_str: str) -> str:
    """Strip and check raw user input against the configured limits.

    Args:
        input_str: Raw input line

    Returns:
        Stripped input

    Raises:
        ValidationError: If the input is empty or longer than MAX_INPUT_LENGTH
    """
    text = (input_str or "").strip()
    if not text:
        raise ValidationError("Empty input", "EMPTY_INPUT")
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (max {MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    return text


def split_top_level_commas(input_str: str) -> list[str]:
    """Split string by commas that are not inside parentheses."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in input_str:
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        current.append(char)
    last = "".join(current).strip()
    if last or parts:
        parts.append(last)
    return [part for part in parts if part]


def _apply_operator(values: list[ComplexValue], operators: list[str]) -> None:
    op = operators.pop()
    if len(values) < 2:
        raise ParseError(f"Too few operands for operator {op}")
    right = values.pop()
    left = values.pop()
    if op == "+":
        values.append(left + right)
    elif op == "-":
        values.append(left - right)
    elif op == "*":
        values.append(left * right)
    elif op == "/":
        values.append(left / right)
    else:
        values.append(left.pow(right))


def _apply_function(name: str, argument: ComplexValue) -> ComplexValue:
    if name == "sqrt":
        return argument.sqrt_principal()
    if name == "sin":
        return argument.sin()
    if name == "cos":
        return argument.cos()
    if name == "sind":
        return (argument * _DEGREES_TO_RADIANS).sin()
    return (argument * _DEGREES_TO_RADIANS).cos()


def _extract_call_argument(text: str, pos: int, name: str) -> tuple[str, int]:
    """Return the text between the parentheses following a function name.

    ``pos`` points just past the function name. The returned index points
    just past the closing parenthesis.
    """
    while pos < len(text) and text[pos].isspace():
        pos += 1
    if pos >= len(text) or text[pos] != "(":
        raise ParseError(f"{name} requires parentheses")
    depth = 0
    for index in range(pos, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return text[pos + 1 : index], index + 1
    raise UnmatchedParenthesisError(f"Unmatched parentheses in {name}")


def _is_identifier_char(text: str, pos: int) -> bool:
    return pos < len(text) and text[pos].isalpha()


def evaluate_expression(text: str, _depth: int = 0) -> ComplexValue:
    """Evaluate an arithmetic expression over complex values.

    Args:
        text: Expression such as ``"3 + 5 * (2 - 8)^2"`` or ``"sqrt(-4) + 2i"``

    Returns:
        The value of the expression

    Raises:
        ParseError: If the expression is malformed
        UnmatchedParenthesisError: If parentheses do not pair up
        DivisionByZeroError: If a division by (near) zero occurs
        ValidationError: If function calls nest deeper than MAX_NESTING_DEPTH
    """
    if _depth > MAX_NESTING_DEPTH:
        raise ValidationError(
            f"Expression nesting exceeds maximum depth of {MAX_NESTING_DEPTH}",
            "TOO_DEEP",
        )

    values: list[ComplexValue] = []
    operators: list[str] = []
    expecting_operand = True
    open_parens = 0
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]

        if char.isspace():
            pos += 1
            continue

        if char.isdigit() or char == ".":
            match = NUMBER_PATTERN.match(text, pos)
            if match is None:
                raise ParseError(f"Invalid character in expression: {char}")
            number = float(match.group())
            pos = match.end()
            # "2i" is an imaginary literal, "2in" is not
            if pos < length and text[pos] == "i" and not _is_identifier_char(text, pos + 1):
                values.append(ComplexValue(0.0, number))
                pos += 1
            else:
                values.append(ComplexValue(number, 0.0))
            expecting_operand = False
            continue

        if char.isalpha():
            identifier = IDENTIFIER_PATTERN.match(text, pos)
            if identifier is None:
                raise ParseError(f"Invalid character in expression: {char}")
            name = identifier.group()
            pos += len(name)
            if name in FUNCTION_NAMES:
                inner, pos = _extract_call_argument(text, pos, name)
                argument = evaluate_expression(inner, _depth + 1)
                values.append(_apply_function(name, argument))
            elif name in CONSTANTS:
                values.append(ComplexValue(CONSTANTS[name], 0.0))
            elif name == "i":
                values.append(ComplexValue(0.0, 1.0))
            else:
                raise ParseError(f"Invalid character in expression: {char}")
            expecting_operand = False
            continue

        if char == "(":
            open_parens += 1
            if open_parens > MAX_NESTING_DEPTH:
                raise ValidationError(
                    f"Expression nesting exceeds maximum depth of {MAX_NESTING_DEPTH}",
                    "TOO_DEEP",
                )
            operators.append(char)
            expecting_operand = True
            pos += 1
            continue

        if char == ")":
            while operators and operators[-1] != "(":
                _apply_operator(values, operators)
            if not operators:
                raise UnmatchedParenthesisError("Unmatched closing parenthesis")
            operators.pop()
            open_parens -= 1
            expecting_operand = False
            pos += 1
            continue

        if char == "%":
            if expecting_operand or not values:
                raise ParseError("Invalid use of percent sign")
            values[-1] = values[-1] * 0.01
            pos += 1
            continue

        if char in OPERATOR_PRECEDENCE:
            if expecting_operand and char == "-":
                values.append(ComplexValue())
                operators.append("-")
                pos += 1
                continue
            if expecting_operand and char == "+":
                pos += 1
                continue
            precedence = OPERATOR_PRECEDENCE[char]
            while (
                operators
                and operators[-1] != "("
                and OPERATOR_PRECEDENCE[operators[-1]] >= precedence
            ):
                _apply_operator(values, operators)
            operators.append(char)
            expecting_operand = True
            pos += 1
            continue

        raise ParseError(f"Invalid character in expression: {char}")

    while operators:
        if operators[-1] == "(":
            raise UnmatchedParenthesisError("Unmatched opening parenthesis")
        _apply_operator(values, operators)

    if not values:
        raise ParseError("Invalid expression")
    if len(values) > 1:
        raise ParseError("Invalid expression format resulting in multiple values")
    return values[0]
