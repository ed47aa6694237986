"""
General dense matrices.

Matrix stores its entries in one flat row-major float64 buffer together
with cached row and column counts. The public API is 1-indexed; storage
is 0-indexed.

Every public operation that changes entries (row operations, element
assignment, reduction) returns a new, independent Matrix and leaves the
original untouched, so a computation can always be retried from its
input. The in-place primitives prefixed with an underscore exist for the
reduction engine, which works on a private clone.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import NumericalError, SingularMatrixError
from pylinalg.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_not_empty,
    check_index,
    check_scalar,
    check_nonzero_scalar,
    check_square,
)
from pylinalg.matrices._common import BaseMatrix

if TYPE_CHECKING:
    from pylinalg.matrices._reduction import Reduction


class Matrix(BaseMatrix):
    """
    Dense 2-D numeric matrix.

    Construction:
        Matrix([[1, 2], [3, 4]])        # from rows
        Matrix(np.eye(3))               # from a 2D array
        Matrix(IdentityMatrix(3))       # materialize any matrix

    Invariants:
        len(elements) == rows * columns, rows >= 1, columns >= 1,
        all entries finite.
    """

    def __init__(self, rows: ArrayLike | BaseMatrix):
        if isinstance(rows, BaseMatrix):
            array = rows.to_array()
        else:
            array = check_array(rows, 'rows')
            check_2d(array, 'rows')
            check_not_empty(array, 'rows')
            check_finite(array, 'rows')

        n_rows, n_columns = array.shape
        self._elements: NDArray[np.floating[Any]] = np.array(
            array, dtype=np.float64
        ).ravel()
        self._rows = int(n_rows)
        self._columns = int(n_columns)
        self._reductions: dict[int, Reduction] = {}

    @classmethod
    def _from_buffer(
        cls,
        elements: NDArray[np.floating[Any]],
        rows: int,
        columns: int,
    ) -> Matrix:
        """Wrap an already-validated flat buffer without copying it."""
        matrix = cls.__new__(cls)
        matrix._elements = elements
        matrix._rows = rows
        matrix._columns = columns
        matrix._reductions = {}
        return matrix

    def _derive(self, elements: NDArray[np.floating[Any]]) -> Matrix:
        """
        New matrix of the same class and shape over the given buffer.

        Subclasses that carry extra structure override this so row
        operations and clone() preserve it.
        """
        return Matrix._from_buffer(elements, self._rows, self._columns)

    # === Shape ===

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    @property
    def elements(self) -> NDArray[np.floating[Any]]:
        """Copy of the flat row-major entry buffer."""
        return self._elements.copy()

    def _view(self) -> NDArray[np.floating[Any]]:
        return self._elements.reshape(self._rows, self._columns)

    def _offset(self, r: int, c: int) -> int:
        return (r - 1) * self._columns + (c - 1)

    # === Accessors ===

    def entry(self, r: int, c: int) -> float:
        """
        Entry in row r and column c.

        Args:
            r: Row number (1-indexed)
            c: Column number (1-indexed)

        Raises:
            IndexOutOfRangeError: If r or c is outside the matrix
        """
        self._check_position(r, c)
        return float(self._elements[self._offset(r, c)])

    def row(self, r: int) -> NDArray[np.floating[Any]]:
        """Copy of row r (1-indexed)."""
        check_index(r, self._rows, 'row')
        start = (r - 1) * self._columns
        return self._elements[start:start + self._columns].copy()

    def column(self, c: int) -> NDArray[np.floating[Any]]:
        """Copy of column c (1-indexed)."""
        check_index(c, self._columns, 'column')
        return self._elements[c - 1::self._columns].copy()

    def main_diagonal(self) -> NDArray[np.floating[Any]]:
        """Entries (i, i) for i = 1 .. min(rows, columns)."""
        return np.diagonal(self._view()).copy()

    def to_array(self) -> NDArray[np.floating[Any]]:
        """Dense (rows x columns) copy."""
        return self._view().copy()

    # === Copies ===

    def clone(self) -> Matrix:
        """Independent deep copy, of the same class."""
        return self._derive(self._elements.copy())

    def transpose(self) -> Matrix:
        """New general Matrix with rows and columns swapped."""
        transposed = self._view().T.copy().ravel()
        return Matrix._from_buffer(transposed, self._columns, self._rows)

    def with_entry(self, r: int, c: int, value: float) -> Matrix:
        """Copy of this matrix with entry (r, c) replaced by value."""
        self._check_position(r, c)
        value = check_scalar(value, 'value')
        result = self.clone()
        result._elements[self._offset(r, c)] = value
        return result

    # === Elementary row operations (copy-returning) ===

    def swap_rows(self, i: int, j: int) -> Matrix:
        """
        Interchange rows i and j.

        Returns:
            New matrix; this one is unchanged
        """
        check_index(i, self._rows, 'row')
        check_index(j, self._rows, 'row')
        result = self.clone()
        result._swap_rows_inplace(i, j)
        return result

    def scale_row(self, i: int, k: float) -> Matrix:
        """
        Multiply row i by the non-zero scalar k.

        Raises:
            InvalidScalarError: If k is zero or not a finite real number
            NumericalError: If the scaled row overflows
        """
        check_index(i, self._rows, 'row')
        k = check_nonzero_scalar(k, 'k')
        result = self.clone()
        result._scale_row_inplace(i, k)
        result._check_row_finite(i, 'scale_row')
        return result

    def divide_row(self, i: int, k: float) -> Matrix:
        """
        Divide row i by the non-zero scalar k.

        The same step as scale_row(i, 1 / k), without forming 1 / k, which
        overflows for subnormal k.

        Raises:
            InvalidScalarError: If k is zero or not a finite real number
            NumericalError: If the divided row overflows
        """
        check_index(i, self._rows, 'row')
        k = check_nonzero_scalar(k, 'k')
        result = self.clone()
        result._divide_row_inplace(i, k)
        result._check_row_finite(i, 'divide_row')
        return result

    def add_row_multiple(self, i: int, j: int, k: float) -> Matrix:
        """
        Replace row i with row i + k * row j.

        i == j is allowed and scales row i by (1 + k).

        Raises:
            NumericalError: If the new row overflows
        """
        check_index(i, self._rows, 'row')
        check_index(j, self._rows, 'row')
        k = check_scalar(k, 'k')
        result = self.clone()
        result._add_row_multiple_inplace(i, j, k)
        result._check_row_finite(i, 'add_row_multiple')
        return result

    def _check_row_finite(self, i: int, operation: str) -> None:
        if not np.all(np.isfinite(self._view()[i - 1])):
            raise NumericalError(
                f"{operation}: row {i} overflowed to a non-finite value; "
                f"the matrix is unchanged"
            )

    # In-place primitives. Callers must own the matrix exclusively.

    def _swap_rows_inplace(self, i: int, j: int) -> None:
        view = self._view()
        view[[i - 1, j - 1]] = view[[j - 1, i - 1]]
        self._reductions.clear()

    def _scale_row_inplace(self, i: int, k: float) -> None:
        self._view()[i - 1] *= k
        self._reductions.clear()

    def _divide_row_inplace(self, i: int, divisor: float) -> None:
        self._view()[i - 1] /= divisor
        self._reductions.clear()

    def _add_row_multiple_inplace(self, i: int, j: int, k: float) -> None:
        view = self._view()
        view[i - 1] += k * view[j - 1]
        self._reductions.clear()

    # === Reduction ===

    def reduce(self, pivot_column_limit: int | None = None) -> Reduction:
        """
        Row-reduce this matrix to RREF.

        Args:
            pivot_column_limit: Only columns 1..limit may hold pivots.
                Defaults to all columns.

        Returns:
            Reduction record (reduced matrix, pivots, rank, operations).
            The record is cached; the matrix is never modified.
        """
        from pylinalg.matrices._reduction import reduce_rows

        limit = self._columns if pivot_column_limit is None else pivot_column_limit
        if limit not in self._reductions:
            self._reductions[limit] = reduce_rows(self, pivot_column_limit=limit)
        return self._reductions[limit]

    def rref(self) -> Matrix:
        """Reduced row-echelon form, as a new matrix of the same class."""
        return self.reduce().matrix

    @property
    def rank(self) -> int:
        """Number of pivots over all columns."""
        return Matrix.reduce(self, self._columns).rank

    def pivot_columns(self) -> tuple[int, ...]:
        """1-indexed columns holding a pivot in the RREF."""
        return self.reduce().pivot_columns

    def determinant(self) -> float:
        """
        Determinant, from the pivots met during reduction.

        Gauss-Jordan only swaps, scales and adds multiples of rows, so
        det = (-1)^swaps * product of the pivot values divided out.

        Raises:
            DimensionError: If the matrix is not square
        """
        check_square(self.size, 'matrix')
        reduction = Matrix.reduce(self, self._columns)
        if reduction.rank < self._rows:
            return 0.0
        sign = -1.0 if reduction.n_swaps % 2 else 1.0
        return sign * float(np.prod(reduction.pivot_values))

    def inverse(self) -> Matrix:
        """
        Inverse, read from the RREF of [A | I].

        Raises:
            DimensionError: If the matrix is not square
            SingularMatrixError: If fewer than n pivots are found
        """
        from pylinalg.matrices.augmented import AugmentedMatrix
        from pylinalg.matrices.special import IdentityMatrix

        check_square(self.size, 'matrix')
        augmented = AugmentedMatrix(self, IdentityMatrix(self._rows))
        reduction = augmented.reduce()
        if reduction.rank < self._rows:
            raise SingularMatrixError(
                f"Matrix is singular: rank {reduction.rank} < {self._rows}",
                matrix_name='matrix',
                rank=reduction.rank,
                expected_rank=self._rows,
            )
        return reduction.matrix.constant_matrix()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"
