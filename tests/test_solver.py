"""Tests for the solve pipeline and input routing."""

import unittest
from unittest import mock

from polysolver_pkg.solver import (
    dispatch,
    evaluate_text,
    solve_equation_text,
    solve_polynomial,
    solve_system_text,
)
from polysolver_pkg.types import (
    ConvergenceError,
    EquationRequest,
    NonFiniteSolutionSet,
    NoSymbolicResult,
    SolverError,
)


class TestSolvePolynomial(unittest.TestCase):
    def test_symbolic_first(self):
        result = solve_polynomial(EquationRequest(2, (6.0, -5.0, 1.0)))
        self.assertTrue(result.ok)
        self.assertEqual(result.method, "symbolic")
        self.assertEqual(result.output, "x1 = 2, x2 = 3")
        self.assertEqual(result.degree, 2)

    def test_numeric_method_skips_symbolic(self):
        with mock.patch("polysolver_pkg.solver.try_solve_symbolic") as symbolic:
            result = solve_polynomial(EquationRequest(2, (6.0, -5.0, 1.0)), method="numeric")
        symbolic.assert_not_called()
        self.assertEqual(result.method, "closed_form")
        self.assertEqual(result.output, "x1 = 2, x2 = 3")
        self.assertEqual(result.iterations, 1)
        self.assertTrue(result.converged)

    def test_double_root_printed_once(self):
        result = solve_polynomial(EquationRequest(2, (1.0, 2.0, 1.0)), method="numeric")
        self.assertEqual(result.output, "x = -1")

    def test_cubic_double_root_with_large_coefficients(self):
        result = solve_equation_text("equation(x^3-400x^2+50000x-2000000=0)", method="numeric")
        self.assertEqual(result.output, "x1 = 200, x2 = 100")

    def test_implicit_quintic_gives_root_of(self):
        result = solve_polynomial(EquationRequest(5, (1.0, -1.0, 0.0, 0.0, 0.0, 1.0)))
        self.assertEqual(result.method, "root_of")
        self.assertEqual(len(result.roots), 5)
        self.assertTrue(result.output.startswith("x1 = RootOf(x^5 - x + 1, 0)"))

    def test_implicit_low_degree_falls_back_to_closed_form(self):
        with mock.patch(
            "polysolver_pkg.solver.try_solve_symbolic",
            return_value=NonFiniteSolutionSet("ConditionSet(x, Eq(x**2 - 1, 0), Complexes)"),
        ):
            result = solve_polynomial(EquationRequest(2, (-1.0, 0.0, 1.0)))
        self.assertEqual(result.method, "closed_form")
        self.assertEqual(result.output, "x1 = -1, x2 = 1")

    def test_quintic_numeric_fallback(self):
        with mock.patch(
            "polysolver_pkg.solver.try_solve_symbolic",
            return_value=NoSymbolicResult("unsupported"),
        ):
            result = solve_polynomial(EquationRequest(5, (1.0, -1.0, 0.0, 0.0, 0.0, 1.0)))
        self.assertEqual(result.method, "durand_kerner")
        self.assertTrue(result.converged)
        self.assertEqual(len(result.roots), 5)
        self.assertLess(result.max_residual, 1e-9)

    def test_symbolic_only_quintic_failure(self):
        with mock.patch(
            "polysolver_pkg.solver.try_solve_symbolic",
            return_value=NoSymbolicResult("unsupported"),
        ):
            with self.assertRaises(SolverError) as ctx:
                solve_polynomial(
                    EquationRequest(5, (1.0, -1.0, 0.0, 0.0, 0.0, 1.0)), method="symbolic"
                )
        self.assertEqual(ctx.exception.message, "Symbolic quintic solve failed: unsupported")

    def test_quintic_double_failure_message(self):
        failure = ConvergenceError("Quintic solver failed to converge within 200 iterations", 200)
        with mock.patch(
            "polysolver_pkg.solver.try_solve_symbolic",
            return_value=NoSymbolicResult("boom"),
        ), mock.patch("polysolver_pkg.solver.solve_closed_form", side_effect=failure):
            with self.assertRaises(ConvergenceError) as ctx:
                solve_polynomial(EquationRequest(5, (1.0, -1.0, 0.0, 0.0, 0.0, 1.0)))
        self.assertEqual(
            ctx.exception.message,
            "Symbolic quintic solve failed: boom; numeric fallback failed: "
            "Quintic solver failed to converge within 200 iterations",
        )
        self.assertEqual(ctx.exception.iterations, 200)

    def test_quartic_convergence_failure_propagates_unchanged(self):
        failure = ConvergenceError("Quartic solver failed to converge within 5 iterations", 5)
        with mock.patch("polysolver_pkg.solver.solve_closed_form", side_effect=failure):
            with self.assertRaises(ConvergenceError) as ctx:
                solve_polynomial(
                    EquationRequest(4, (24.0, -50.0, 35.0, -10.0, 1.0)), method="numeric"
                )
        self.assertIs(ctx.exception, failure)

    def test_unknown_method(self):
        with self.assertRaises(SolverError) as ctx:
            solve_polynomial(EquationRequest(1, (1.0, 1.0)), method="magic")
        self.assertEqual(ctx.exception.code, "INVALID_METHOD")


class TestTextEntryPoints(unittest.TestCase):
    def test_solve_equation_text(self):
        self.assertEqual(solve_equation_text("equation(2x-3=7)").output, "x = 5")

    def test_solve_system_text(self):
        result = solve_system_text("equation2(x+y=5,x-y=1)")
        self.assertEqual(result.result_type, "system")
        self.assertEqual(result.roots, ["3", "2"])
        self.assertEqual(result.method, "gaussian_elimination")

    def test_evaluate_text(self):
        value, rendered = evaluate_text("sqrt(-4)")
        self.assertEqual(rendered, "2i")
        self.assertAlmostEqual(value.imag, 2.0)


class TestDispatch(unittest.TestCase):
    def test_routes_by_prefix(self):
        self.assertEqual(dispatch("equation2(x+y=5,x-y=1)"), "x = 3, y = 2")
        self.assertEqual(dispatch("equation(x+1=0)"), "x = -1")
        self.assertEqual(dispatch("3 + 5 * (2 - 8)^2"), "183")


if __name__ == "__main__":
    unittest.main()
