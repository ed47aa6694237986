"""
Tests for the elementary row operations.

Validates:
    - swap_rows, scale_row, divide_row and add_row_multiple return new matrices
    - The receiver is never modified
    - Each operation is undone by its inverse operation
    - Invalid rows and scalars are rejected
    - Overflow raises NumericalError instead of storing Inf
"""

import numpy as np
import pytest

from pylinalg import Matrix
from pylinalg.core.exceptions import IndexOutOfRangeError, InvalidScalarError, NumericalError


@pytest.fixture
def m():
    return Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 10]])


class TestSwapRows:

    def test_swap(self, m):
        swapped = m.swap_rows(1, 3)
        np.testing.assert_array_equal(swapped.row(1), [7, 8, 10])
        np.testing.assert_array_equal(swapped.row(3), [1, 2, 3])

    def test_original_untouched(self, m):
        before = m.to_list()
        m.swap_rows(1, 2)
        assert m.to_list() == before

    def test_swap_twice_is_identity(self, m):
        assert m.swap_rows(1, 2).swap_rows(1, 2) == m

    def test_swap_with_itself(self, m):
        assert m.swap_rows(2, 2) == m

    def test_out_of_range(self, m):
        with pytest.raises(IndexOutOfRangeError):
            m.swap_rows(1, 4)


class TestScaleRow:

    def test_scale(self, m):
        scaled = m.scale_row(2, 2)
        np.testing.assert_array_equal(scaled.row(2), [8, 10, 12])
        np.testing.assert_array_equal(m.row(2), [4, 5, 6])

    def test_scale_then_inverse(self, m):
        assert m.scale_row(1, 2).scale_row(1, 0.5) == m

    @pytest.mark.parametrize("k", [0, 0.0, float('nan'), float('inf'), "2", None])
    def test_invalid_scalar(self, m, k):
        with pytest.raises(InvalidScalarError):
            m.scale_row(1, k)

    def test_out_of_range(self, m):
        with pytest.raises(IndexOutOfRangeError):
            m.scale_row(0, 2)


class TestDivideRow:

    def test_divide(self, m):
        divided = m.divide_row(2, 4)
        np.testing.assert_array_equal(divided.row(2), [1, 1.25, 1.5])
        np.testing.assert_array_equal(m.row(2), [4, 5, 6])

    def test_subnormal_divisor(self):
        m = Matrix([[1e-310, 0.0]])
        assert m.divide_row(1, 1e-310).to_list() == [[1.0, 0.0]]

    def test_zero_divisor(self, m):
        with pytest.raises(InvalidScalarError):
            m.divide_row(1, 0)


class TestAddRowMultiple:

    def test_add(self, m):
        result = m.add_row_multiple(2, 1, -4)
        np.testing.assert_array_equal(result.row(2), [0, -3, -6])
        np.testing.assert_array_equal(m.row(2), [4, 5, 6])

    def test_inverse_operation(self, m):
        assert m.add_row_multiple(3, 1, 2).add_row_multiple(3, 1, -2) == m

    def test_same_row(self, m):
        result = m.add_row_multiple(1, 1, 1)
        np.testing.assert_array_equal(result.row(1), [2, 4, 6])

    def test_zero_multiple_allowed(self, m):
        assert m.add_row_multiple(1, 2, 0) == m

    def test_invalid_scalar(self, m):
        with pytest.raises(InvalidScalarError):
            m.add_row_multiple(1, 2, float('nan'))

    def test_out_of_range(self, m):
        with pytest.raises(IndexOutOfRangeError):
            m.add_row_multiple(1, 4, 1)


class TestChaining:

    def test_operations_compose(self, m):
        result = m.swap_rows(1, 2).scale_row(1, 0.25).add_row_multiple(2, 1, -1)
        np.testing.assert_allclose(result.row(1), [1, 1.25, 1.5])
        np.testing.assert_allclose(result.row(2), [0, 0.75, 1.5])
        assert m.entry(1, 1) == 1.0


class TestOverflow:

    def test_scale_overflow(self):
        m = Matrix([[1e300, 1.0]])
        with pytest.raises(NumericalError, match="scale_row: row 1"):
            m.scale_row(1, 1e10)
        assert m.to_list() == [[1e300, 1.0]]

    def test_divide_overflow(self):
        m = Matrix([[1e300, 1.0]])
        with pytest.raises(NumericalError, match="divide_row"):
            m.divide_row(1, 1e-10)

    def test_add_overflow(self):
        m = Matrix([[1e308, 0.0], [1e308, 0.0]])
        with pytest.raises(NumericalError, match="add_row_multiple: row 2"):
            m.add_row_multiple(2, 1, 1)
        assert m.entry(2, 1) == 1e308
