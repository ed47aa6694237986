"""
Tests for the CPU Gauss-Jordan backend and the solution wrappers.

Validates:
    - Result envelope: info keys, timing sections, backend name
    - Near-zero pivot diagnostics are recorded by the backend and raised
      as RuntimeWarning at the caller of solve()
    - satisfies() picks its tolerance tier from those diagnostics
    - The input AugmentedMatrix is not modified
    - summary() and repr() of each outcome
    - AffineExpression evaluation and formatting
"""

import warnings

import numpy as np
import pytest

from pylinalg import AffineExpression, AugmentedMatrix, solve
from pylinalg.core.compute.tolerances import select_tolerance
from pylinalg.core.exceptions import ValidationError
from pylinalg.core.protocols import Backend
from pylinalg.systems import solution as solution_module
from pylinalg.systems.backends import CPURREFBackend
from pylinalg.systems.solution import SystemParams


# ═══════════════════════════════════════════════════════════════════════
# Backend
# ═══════════════════════════════════════════════════════════════════════


class TestCPURREFBackend:

    def test_name(self):
        assert CPURREFBackend().name == 'cpu_rref'

    def test_result_envelope(self):
        augmented = AugmentedMatrix([[1, 1], [1, -1]], [3, 1])
        result = CPURREFBackend().solve(augmented)
        assert isinstance(result.params, SystemParams)
        assert result.backend_name == 'cpu_rref'
        assert result.info['method'] == 'gauss_jordan'
        assert result.info['rank'] == 2
        assert result.info['pivot_columns'] == (1, 2)
        assert result.info['free_columns'] == ()
        assert result.info['consistent'] is True
        assert result.info['n_operations'] == len(result.params.reduction.operations)
        assert set(result.timing) == {'total_seconds', 'reduction', 'classification'}
        assert result.warnings == ()

    def test_inconsistent_rows_one_indexed(self):
        augmented = AugmentedMatrix([[1, 1], [1, 1], [2, 2]], [1, 5, 2])
        result = CPURREFBackend().solve(augmented)
        assert result.params.inconsistent_rows == (2,)
        assert result.info['consistent'] is False

    def test_input_not_modified(self):
        augmented = AugmentedMatrix([[2, 4], [1, 3]], [2, 1])
        before = augmented.to_array()
        CPURREFBackend().solve(augmented)
        np.testing.assert_array_equal(augmented.to_array(), before)

    def test_satisfies_backend_protocol(self):
        assert isinstance(CPURREFBackend(), Backend)

    def test_no_warning_for_ordinary_system(self):
        augmented = AugmentedMatrix([[1, 1], [1, -1]], [3, 1])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            CPURREFBackend().solve(augmented)


class TestNearZeroPivot:

    @pytest.fixture
    def tiny_pivot(self):
        return AugmentedMatrix([[1e-15, 1], [1, 1]], [1, 2])

    def test_warns(self, tiny_pivot):
        with pytest.warns(RuntimeWarning, match="pivot at row 1, column 1"):
            solve(tiny_pivot)

    def test_recorded_on_result(self, tiny_pivot):
        with pytest.warns(RuntimeWarning):
            result = solve(tiny_pivot)
        assert len(result.warnings) == 1
        assert "treated as non-zero" in result.warnings[0]

    def test_pivot_still_used(self, tiny_pivot):
        with pytest.warns(RuntimeWarning):
            result = solve(tiny_pivot)
        assert result.rank == 2
        assert result.kind == 'unique'

    def test_backend_records_without_warning(self, tiny_pivot):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = CPURREFBackend().solve(tiny_pivot)
        assert len(result.warnings) == 1

    def test_solve_warning_points_at_caller(self, tiny_pivot):
        with pytest.warns(RuntimeWarning) as record:
            solve(tiny_pivot)
        assert record[0].filename == __file__

    def test_method_warning_points_at_caller(self, tiny_pivot):
        with pytest.warns(RuntimeWarning) as record:
            tiny_pivot.solve()
        assert record[0].filename == __file__

    def test_satisfies_uses_ill_conditioned_tier(self, tiny_pivot, monkeypatch):
        calls = []

        def recording(is_ill_conditioned=False):
            calls.append(is_ill_conditioned)
            return select_tolerance(is_ill_conditioned)

        monkeypatch.setattr(solution_module, 'select_tolerance', recording)
        with pytest.warns(RuntimeWarning):
            result = solve(tiny_pivot)
        result.satisfies()
        assert calls == [True]

    def test_satisfies_uses_default_tier(self, unique_system, monkeypatch):
        calls = []

        def recording(is_ill_conditioned=False):
            calls.append(is_ill_conditioned)
            return select_tolerance(is_ill_conditioned)

        monkeypatch.setattr(solution_module, 'select_tolerance', recording)
        assert solve(unique_system).satisfies()
        assert calls == [False]


# ═══════════════════════════════════════════════════════════════════════
# Solution wrappers
# ═══════════════════════════════════════════════════════════════════════


class TestSummary:

    def test_unique(self, unique_system):
        text = solve(unique_system).summary()
        assert "Linear System Results" in text
        assert "Outcome: unique" in text
        assert "x = 2.0" in text
        assert "y = 1.0" in text
        assert "Backend: cpu_rref" in text

    def test_infinite(self):
        text = solve("x + y + z = 6, y - z = 1").summary()
        assert "Outcome: infinite" in text
        assert "Free variables: z" in text
        assert "x = 5 - 2z" in text

    def test_none(self, inconsistent_system):
        text = solve(inconsistent_system).summary()
        assert "Outcome: none" in text
        assert "reduced row(s) 2" in text

    def test_warnings_listed(self):
        with pytest.warns(RuntimeWarning):
            text = solve(AugmentedMatrix([[1e-15, 1], [1, 1]], [1, 2])).summary()
        assert "Warning: pivot at row 1" in text


class TestRepr:

    def test_unique(self, unique_system):
        assert repr(solve(unique_system)) == "UniqueSolution(values=[2.0, 1.0])"

    def test_infinite(self, dependent_system):
        assert repr(solve(dependent_system)) == (
            "InfiniteSolutions(free_variables=[2], n_unknowns=2)"
        )

    def test_none(self, inconsistent_system):
        assert repr(solve(inconsistent_system)) == (
            "NoSolution(n_equations=2, n_unknowns=2, rank=1)"
        )


class TestSolutionAccessors:

    def test_reduced_and_params(self, dependent_system):
        result = solve(dependent_system)
        assert isinstance(result.reduced, AugmentedMatrix)
        assert result.reduced.to_list() == [[1.0, 1.0, 2.0], [0.0, 0.0, 0.0]]
        assert result.pivot_columns == (1,)
        assert result.params.free_columns == (2,)
        assert result.n_unknowns == 2
        assert result.info['rank'] == 1


class TestAffineExpression:

    def test_evaluate(self):
        expression = AffineExpression({2: -1.0, 3: 2.0}, 4.0)
        assert expression.evaluate({2: 1.0, 3: 0.5}) == 4.0

    def test_evaluate_missing(self):
        with pytest.raises(ValidationError, match=r"\[3\]"):
            AffineExpression({3: 1.0}, 0.0).evaluate({2: 1.0})

    def test_format(self):
        names = ('x', 'y', 'z')
        assert AffineExpression({2: -1.0}, 2.0).format(names) == "2 - y"
        assert AffineExpression({2: 1.0, 3: -3.0}, 0.0).format(names) == "y - 3z"
        assert AffineExpression({2: -1.0}, 0.0).format(names) == "-y"
        assert AffineExpression({}, 0.0).format(names) == "0"

    def test_str_uses_default_names(self):
        assert str(AffineExpression({2: -1.0}, 2.0)) == "2 - x2"
