"""Tests for the SymPy-backed symbolic adapter."""

import pytest
import sympy as sp

from polysolver_pkg import symbolic
from polysolver_pkg.symbolic import build_polynomial, to_display, to_exact, try_solve_symbolic
from polysolver_pkg.types import NonFiniteSolutionSet, NoSymbolicResult, SymbolicRoots


class TestExactCoefficients:
    def test_floats_become_rationals(self):
        assert to_exact(0.5) == sp.Rational(1, 2)
        assert to_exact(0.1) == sp.Rational(1, 10)
        assert to_exact(-3.0) == sp.Integer(-3)

    def test_tiny_values_become_zero(self):
        assert to_exact(1e-13) == 0

    def test_polynomial_is_exact(self):
        x = sp.Symbol("x")
        assert sp.expand(build_polynomial([0.5, 0, 2]) - (2 * x ** 2 + sp.Rational(1, 2))) == 0


class TestDisplayNotation:
    def test_power_and_imaginary_unit(self):
        x = sp.Symbol("x")
        assert to_display(x ** 2) == "x^2"
        assert to_display(sp.sqrt(3) * sp.I / 2) == "sqrt(3)*i/2"
        assert to_display(-sp.I) == "-i"

    def test_cube_roots(self):
        x = sp.Symbol("x")
        assert to_display(sp.cbrt(2)) == "cbrt(2)"
        assert to_display((x + 1) ** sp.Rational(1, 3)) == "cbrt(x + 1)"


class TestTrySolveSymbolic:
    def test_distinct_integer_roots(self):
        outcome = try_solve_symbolic([6, -5, 1])
        assert isinstance(outcome, SymbolicRoots)
        assert sorted(outcome.roots) == ["2", "3"]

    def test_repeated_root_listed_once(self):
        assert try_solve_symbolic([1, 2, 1]) == SymbolicRoots(["-1"])

    def test_complex_roots(self):
        outcome = try_solve_symbolic([1, 0, 1])
        assert isinstance(outcome, SymbolicRoots)
        assert set(outcome.roots) == {"i", "-i"}

    def test_rational_root(self):
        assert try_solve_symbolic([-5, 2]) == SymbolicRoots(["5/2"])

    def test_unsolvable_quintic_is_non_finite(self):
        outcome = try_solve_symbolic([1, -1, 0, 0, 0, 1])
        assert isinstance(outcome, NonFiniteSolutionSet)
        assert outcome.description

    def test_degenerate_inputs(self):
        assert isinstance(try_solve_symbolic([3]), NoSymbolicResult)
        assert isinstance(try_solve_symbolic([1, 1, 0]), NoSymbolicResult)

    def test_backend_failure_is_not_raised(self, monkeypatch):
        def fail(*args, **kwargs):
            raise NotImplementedError("unsupported")

        monkeypatch.setattr(symbolic.sp, "solveset", fail)
        outcome = try_solve_symbolic([6, -5, 1])
        assert outcome == NoSymbolicResult("unsupported")

    def test_unexpected_backend_error_is_not_raised(self, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(symbolic.sp, "solveset", fail)
        assert try_solve_symbolic([6, -5, 1]) == NoSymbolicResult("boom")

    def test_long_closed_forms_are_rejected(self, monkeypatch):
        monkeypatch.setattr(symbolic.config, "SYMBOLIC_MAX_ROOT_LENGTH", 1)
        outcome = try_solve_symbolic([1, 0, 1])
        assert isinstance(outcome, NoSymbolicResult)
