"""Fuzzing tests: random input never escapes process_input as an exception."""

import random
import string
import unittest

from polysolver_pkg.api import process_input
from polysolver_pkg.parser import evaluate_expression
from polysolver_pkg.types import CalculatorError

EXPRESSION_PIECES = [
    "1", "2.5", ".5", "7", "i", "2i", "pi", "e", "x", "+", "-", "*", "/", "^",
    "%", "(", ")", " ", "sqrt(", "sin(", "cosd(", "=", ",",
]


class TestProcessInputFuzzing(unittest.TestCase):
    """Random inputs always produce exactly one output line."""

    def setUp(self):
        self.rng = random.Random(20240501)

    def _assert_single_line(self, text):
        output = process_input(text)
        self.assertIsInstance(output, str)
        self.assertNotIn("\n", output)
        return output

    def test_random_printable_strings(self):
        for _ in range(200):
            length = self.rng.randint(1, 60)
            self._assert_single_line("".join(self.rng.choices(string.printable, k=length)))

    def test_random_expression_tokens(self):
        for _ in range(300):
            pieces = self.rng.choices(EXPRESSION_PIECES, k=self.rng.randint(1, 15))
            self._assert_single_line("".join(pieces))

    def test_random_equation_bodies(self):
        for _ in range(60):
            pieces = self.rng.choices(EXPRESSION_PIECES, k=self.rng.randint(1, 10))
            self._assert_single_line("equation(" + "".join(pieces) + ")")
            self._assert_single_line("equation2(" + "".join(pieces) + ")")

    def test_random_linear_equations(self):
        for _ in range(40):
            a, b = self.rng.randint(1, 9), self.rng.randint(-9, 9)
            output = self._assert_single_line(f"equation({a}x+{b}=0)".replace("+-", "-"))
            self.assertTrue(output.startswith("x = "), output)

    def test_malformed_expressions(self):
        malformed = ["(((", ")))", "1+*2", "2**", "*/1", "()", "sqrt()", "^2"]
        for text in malformed:
            with self.subTest(text=text):
                with self.assertRaises(CalculatorError):
                    evaluate_expression(text)
                self.assertTrue(process_input(text).startswith("Error: "))


if __name__ == "__main__":
    unittest.main()
