"""
Read-only matrices with closed-form entries.

IdentityMatrix and ZeroMatrix answer the same read contract as Matrix
(entry, row, column, main_diagonal, rank, traversal) straight from their
closed form, without storing a buffer or running a reduction. They are
meant as operands and starting points: anything that would change an
entry raises UnsupportedOperationError. Call to_matrix() to obtain a
general, mutable copy.
"""

from __future__ import annotations

from typing import Any, NoReturn

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import UnsupportedOperationError, SingularMatrixError
from pylinalg.core.validation import check_index, check_size, check_square
from pylinalg.matrices._common import BaseMatrix
from pylinalg.matrices.matrix import Matrix


class ClosedFormMatrix(BaseMatrix):
    """
    Base class for read-only matrices defined by a formula.

    Subclasses implement _value(r, c) for in-range positions, rank,
    transpose() and clone().
    """

    def __init__(self, rows: int, columns: int):
        self._rows = check_size(rows, 'rows')
        self._columns = check_size(columns, 'columns')

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    def _value(self, r: int, c: int) -> float:
        raise NotImplementedError

    def entry(self, r: int, c: int) -> float:
        """Entry at row r, column c (1-indexed)."""
        self._check_position(r, c)
        return self._value(r, c)

    def row(self, r: int) -> NDArray[np.floating[Any]]:
        check_index(r, self._rows, 'row')
        return np.array(
            [self._value(r, c) for c in range(1, self._columns + 1)], dtype=np.float64
        )

    def column(self, c: int) -> NDArray[np.floating[Any]]:
        check_index(c, self._columns, 'column')
        return np.array(
            [self._value(r, c) for r in range(1, self._rows + 1)], dtype=np.float64
        )

    def to_array(self) -> NDArray[np.floating[Any]]:
        return np.array(
            [[self._value(r, c) for c in range(1, self._columns + 1)]
             for r in range(1, self._rows + 1)],
            dtype=np.float64,
        )

    def to_matrix(self) -> Matrix:
        """General, mutable copy."""
        return Matrix(self)

    def rref(self) -> ClosedFormMatrix:
        """Identity and zero matrices are already in RREF."""
        return self.clone()

    def clone(self) -> ClosedFormMatrix:
        raise NotImplementedError

    # === Rejected mutations ===

    def _unsupported(self, operation: str) -> NoReturn:
        name = type(self).__name__
        raise UnsupportedOperationError(
            f"{name} is read-only: {operation}() is not supported; "
            f"call to_matrix() for a mutable copy",
            operation=operation,
            matrix_name=name,
        )

    def swap_rows(self, i: int, j: int) -> NoReturn:
        self._unsupported('swap_rows')

    def scale_row(self, i: int, k: float) -> NoReturn:
        self._unsupported('scale_row')

    def divide_row(self, i: int, k: float) -> NoReturn:
        self._unsupported('divide_row')

    def add_row_multiple(self, i: int, j: int, k: float) -> NoReturn:
        self._unsupported('add_row_multiple')

    def with_entry(self, r: int, c: int, value: float) -> NoReturn:
        self._unsupported('with_entry')

    def __setitem__(self, key: Any, value: Any) -> NoReturn:
        self._unsupported('__setitem__')


class IdentityMatrix(ClosedFormMatrix):
    """
    Read-only n x n identity matrix.

    entry(r, c) is 1 when r == c, else 0. rank is n by construction.
    """

    def __init__(self, size: int):
        size = check_size(size, 'size')
        super().__init__(size, size)

    @property
    def order(self) -> int:
        return self._rows

    def _value(self, r: int, c: int) -> float:
        return 1.0 if r == c else 0.0

    @property
    def rank(self) -> int:
        return self._rows

    def main_diagonal(self) -> NDArray[np.floating[Any]]:
        return np.ones(self._rows, dtype=np.float64)

    def leading_coefficient(self, r: int) -> float:
        check_index(r, self._rows, 'row')
        return 1.0

    def to_array(self) -> NDArray[np.floating[Any]]:
        return np.eye(self._rows, dtype=np.float64)

    def transpose(self) -> IdentityMatrix:
        return self.clone()

    def clone(self) -> IdentityMatrix:
        return IdentityMatrix(self._rows)

    def determinant(self) -> float:
        return 1.0

    def inverse(self) -> IdentityMatrix:
        return self.clone()

    def __repr__(self) -> str:
        return f"IdentityMatrix({self._rows})"


class ZeroMatrix(ClosedFormMatrix):
    """
    Read-only all-zero matrix.

    ZeroMatrix(n) is n x n; ZeroMatrix(rows, columns) is rectangular.
    rank is 0.
    """

    def __init__(self, rows: int, columns: int | None = None):
        super().__init__(rows, rows if columns is None else columns)

    def _value(self, r: int, c: int) -> float:
        return 0.0

    @property
    def rank(self) -> int:
        return 0

    def main_diagonal(self) -> NDArray[np.floating[Any]]:
        return np.zeros(min(self._rows, self._columns), dtype=np.float64)

    def leading_coefficient(self, r: int) -> float:
        check_index(r, self._rows, 'row')
        return 0.0

    def to_array(self) -> NDArray[np.floating[Any]]:
        return np.zeros((self._rows, self._columns), dtype=np.float64)

    def transpose(self) -> ZeroMatrix:
        return ZeroMatrix(self._columns, self._rows)

    def clone(self) -> ZeroMatrix:
        return ZeroMatrix(self._rows, self._columns)

    def determinant(self) -> float:
        check_square(self.size, 'matrix')
        return 0.0

    def inverse(self) -> NoReturn:
        check_square(self.size, 'matrix')
        raise SingularMatrixError(
            "ZeroMatrix is singular",
            matrix_name='ZeroMatrix',
            rank=0,
            expected_rank=self._rows,
        )

    def __repr__(self) -> str:
        if self._rows == self._columns:
            return f"ZeroMatrix({self._rows})"
        return f"ZeroMatrix({self._rows}, {self._columns})"
