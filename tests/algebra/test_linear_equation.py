"""
Tests for LinearEquation and parse_system.

Validates:
    - Construction normalizes coefficients and constant to floats
    - Invalid construction is rejected
    - Parsing of terms on both sides, implicit and explicit products
    - parse_system over a shared, sorted set of unknowns
    - Evaluation, residuals and string form
"""

import pytest

from pylinalg import LinearEquation, parse_system
from pylinalg.core.exceptions import InvalidScalarError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_normalizes_to_float_tuple(self):
        eq = LinearEquation([1, 2], 3)
        assert eq.coefficients == (1.0, 2.0)
        assert eq.constant == 3.0
        assert isinstance(eq.constant, float)
        assert eq.variables is None

    def test_default_variable_names(self):
        eq = LinearEquation([1, 2, 3], 0)
        assert eq.n_unknowns == 3
        assert eq.variable_names == ('x1', 'x2', 'x3')

    def test_named_variables(self):
        eq = LinearEquation([1, -1], 0, ['a', 'b'])
        assert eq.variables == ('a', 'b')

    def test_equality(self):
        assert LinearEquation([1, 1], 3) == LinearEquation((1.0, 1.0), 3.0)

    def test_empty_coefficients(self):
        with pytest.raises(ValidationError, match="at least one unknown"):
            LinearEquation([], 1)

    def test_non_finite_coefficient(self):
        with pytest.raises(ValidationError, match="NaN"):
            LinearEquation([1, float('nan')], 1)

    def test_bad_constant(self):
        with pytest.raises(InvalidScalarError):
            LinearEquation([1], "3")

    def test_variable_count_mismatch(self):
        with pytest.raises(ValidationError, match="expected 2 names"):
            LinearEquation([1, 1], 3, ['x'])

    def test_duplicate_variables(self):
        with pytest.raises(ValidationError, match="duplicate"):
            LinearEquation([1, 1], 3, ['x', 'x'])

    def test_invalid_variable_name(self):
        with pytest.raises(ValidationError, match="not a valid name"):
            LinearEquation([1, 1], 3, ['x', '2y'])


# ═══════════════════════════════════════════════════════════════════════
# Parsing
# ═══════════════════════════════════════════════════════════════════════


class TestParse:

    def test_simple(self):
        eq = LinearEquation.parse("2x - y = 4")
        assert eq.variables == ('x', 'y')
        assert eq.coefficients == (2.0, -1.0)
        assert eq.constant == 4.0

    def test_explicit_product_and_decimals(self):
        eq = LinearEquation.parse("1.5*a + .5 * b = 2")
        assert eq.coefficients == (1.5, 0.5)

    def test_terms_on_both_sides(self):
        eq = LinearEquation.parse("x + 1 = 2y + 4")
        assert eq.coefficients == (1.0, -2.0)
        assert eq.constant == 3.0

    def test_repeated_variable_summed(self):
        eq = LinearEquation.parse("x + x + y = 0")
        assert eq.coefficients == (2.0, 1.0)

    def test_leading_minus(self):
        eq = LinearEquation.parse("-x + y = -1")
        assert eq.coefficients == (-1.0, 1.0)
        assert eq.constant == -1.0

    def test_given_variables_order_and_zeros(self):
        eq = LinearEquation.parse("x = 2y + 1", variables=['z', 'y', 'x'])
        assert eq.variables == ('z', 'y', 'x')
        assert eq.coefficients == (0.0, -2.0, 1.0)
        assert eq.constant == 1.0

    def test_unknown_variable(self):
        with pytest.raises(ValidationError, match=r"\['w'\]"):
            LinearEquation.parse("x + w = 1", variables=['x', 'y'])

    @pytest.mark.parametrize("text", [
        "x + y",
        "x = y = 1",
        "= 3",
        "x + = 3",
        "x y = 1",
        "2 * = 1",
        "x $ y = 1",
        "1 = 2",
    ])
    def test_malformed(self, text):
        with pytest.raises(ValidationError):
            LinearEquation.parse(text)


class TestParseSystem:

    def test_comma_separated(self):
        equations = parse_system("x + y = 10, x - y = 2")
        assert len(equations) == 2
        assert all(eq.variables == ('x', 'y') for eq in equations)
        assert equations[1].coefficients == (1.0, -1.0)

    def test_newlines_and_semicolons(self):
        equations = parse_system("a = 1;\nb = 2\n")
        assert [eq.constant for eq in equations] == [1.0, 2.0]

    def test_list_of_strings_shares_unknowns(self):
        first, second = parse_system(["x = 1", "y = 2"])
        assert first.variables == second.variables == ('x', 'y')
        assert first.coefficients == (1.0, 0.0)
        assert second.coefficients == (0.0, 1.0)

    def test_explicit_variables(self):
        (eq,) = parse_system(["b = a"], variables=['a', 'b'])
        assert eq.coefficients == (-1.0, 1.0)

    def test_empty(self):
        with pytest.raises(ValidationError, match="no equation"):
            parse_system(" , ;")

    def test_constant_only_equation(self):
        first, second = parse_system("x + y = 1, 0 = 1")
        assert second.variables == ('x', 'y')
        assert second.coefficients == (0.0, 0.0)
        assert second.constant == 1.0
        assert first.coefficients == (1.0, 1.0)

    def test_no_variable_anywhere(self):
        with pytest.raises(ValidationError, match="no variable found"):
            parse_system("1 = 2, 3 = 3")

    def test_constant_only_with_given_variables(self):
        eq = LinearEquation.parse("2 = 3", variables=['x'])
        assert eq.coefficients == (0.0,)
        assert eq.constant == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Evaluation and formatting
# ═══════════════════════════════════════════════════════════════════════


class TestEvaluation:

    def test_evaluate_and_residual(self):
        eq = LinearEquation([1, 1], 3)
        assert eq.evaluate([2, 1]) == 3.0
        assert eq.residual([2, 2]) == 1.0

    def test_is_satisfied_by(self):
        eq = LinearEquation([0.1, 0.2], 0.3)
        assert eq.is_satisfied_by([1, 1])
        assert not eq.is_satisfied_by([1, 2])

    def test_str(self):
        assert str(LinearEquation([1, 1], 3, ['x', 'y'])) == "x + y = 3"
        assert str(LinearEquation([2, -1], 4, ['x', 'y'])) == "2x - y = 4"
        assert str(LinearEquation([0, -1], 0)) == "-x2 = 0"
        assert str(LinearEquation([0, 0], 1)) == "0 = 1"

    def test_parse_round_trip_of_str(self):
        eq = LinearEquation.parse("3a - 2b + c = 7")
        assert LinearEquation.parse(str(eq)) == eq
