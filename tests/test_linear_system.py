"""Tests for equation2(...) linear systems."""

import numpy as np
import pytest

from polysolver_pkg.linear_system import (
    gaussian_elimination,
    parse_system,
    scan_linear_terms,
    solve_linear_system,
)
from polysolver_pkg.types import (
    FormatError,
    InvalidArgumentError,
    NoVariableError,
    RequiresRealConstantError,
    SingularMatrixError,
)


class TestScanLinearTerms:
    def test_coefficients_and_constant(self):
        assert scan_linear_terms("2x + 3*y - 1", ["x", "y"]) == ([2.0, 3.0], -1.0)

    def test_repeated_variables_accumulate(self):
        assert scan_linear_terms("x + x - z", ["x", "z"]) == ([2.0, -1.0], 0.0)

    def test_unknown_letter(self):
        with pytest.raises(FormatError, match="Invalid character in equation: q"):
            scan_linear_terms("x + q", ["x", "y"])


class TestGaussianElimination:
    def test_two_by_two(self):
        solution = gaussian_elimination(np.array([[2.0, 1.0], [1.0, 3.0]]), np.array([3.0, 5.0]))
        assert solution == pytest.approx([0.8, 1.4])

    def test_pivoting_handles_zero_diagonal(self):
        solution = gaussian_elimination(np.array([[0.0, 1.0], [1.0, 0.0]]), np.array([2.0, 3.0]))
        assert solution == pytest.approx([3.0, 2.0])

    def test_singular(self):
        with pytest.raises(SingularMatrixError):
            gaussian_elimination(np.array([[1.0, 1.0], [2.0, 2.0]]), np.array([2.0, 4.0]))


class TestSolveLinearSystem:
    def test_two_variables(self):
        solution = solve_linear_system("equation2(x+y=5,x-y=1)")
        assert solution.variables == ("x", "y")
        assert solution.values == pytest.approx((3.0, 2.0))
        assert solution.output == "x = 3, y = 2"

    def test_three_variables(self):
        solution = solve_linear_system("equation2(x+y+z=6, x-y+z=2, 2x+y-z=1)")
        assert solution.output == "x = 1, y = 2, z = 3"

    def test_non_integer_values(self):
        solution = solve_linear_system("equation2(2x+3y=12,4x-y=5)")
        assert solution.output == "x = 1.9285714286, y = 2.7142857143"

    def test_constants_on_both_sides(self):
        assert solve_linear_system("equation2(x+y+1=6,x-y=2*3-5)").output == "x = 3, y = 2"

    def test_variables_sorted_regardless_of_order(self):
        variables, matrix, rhs = parse_system("equation2(y+x=5,y-x=1)")
        assert variables == ["x", "y"]
        assert matrix.tolist() == [[1.0, 1.0], [-1.0, 1.0]]
        assert rhs.tolist() == [5.0, 1.0]


class TestSystemErrors:
    def test_bad_wrapper(self):
        with pytest.raises(FormatError, match=r"Invalid equation2 format"):
            parse_system("equation2(x+y=5,x-y=1")

    def test_single_equation(self):
        with pytest.raises(FormatError, match="at least 2 equations"):
            parse_system("equation2(x+y=5)")

    def test_empty_body(self):
        with pytest.raises(FormatError, match="No equations provided"):
            parse_system("equation2()")

    def test_missing_equals(self):
        with pytest.raises(FormatError, match="Each equation must contain '=' sign"):
            parse_system("equation2(x+y=5,x-y)")

    def test_no_variables(self):
        with pytest.raises(NoVariableError):
            parse_system("equation2(1=1,2=2)")

    def test_count_mismatch(self):
        with pytest.raises(InvalidArgumentError, match="one equation per variable"):
            parse_system("equation2(x+y=5,x-y=1,x=2)")

    def test_complex_right_hand_side(self):
        with pytest.raises(RequiresRealConstantError, match="Systems of equations require real constants"):
            parse_system("equation2(x+y=2i,x-y=1)")

    def test_singular_system(self):
        with pytest.raises(SingularMatrixError, match="no unique solution"):
            solve_linear_system("equation2(x+y=2,2x+2y=4)")
