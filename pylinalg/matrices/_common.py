"""
Shared read behaviour for every matrix class.

BaseMatrix implements the parts of the MatrixLike contract that can be
expressed purely in terms of rows, columns, entry(), row(), column() and
to_array(): traversal, main diagonal, leading coefficients, equality and
arithmetic. Concrete classes supply those primitives and may override
the derived methods when they have a cheaper closed form.

Arithmetic always produces a general (mutable) Matrix, whatever the
operand types.
"""

from __future__ import annotations

import numbers
from typing import Any, Callable, Iterator, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.validation import check_same_shape, check_scalar, check_index
from pylinalg.core.exceptions import DimensionError
from pylinalg.algebra.vector_ops import linear_combination

if TYPE_CHECKING:
    from pylinalg.matrices.matrix import Matrix


class BaseMatrix:
    """Mixin providing the derived half of the MatrixLike read contract."""

    # === Shape ===

    @property
    def size(self) -> tuple[int, int]:
        """(rows, columns)."""
        return (self.rows, self.columns)

    @property
    def number_of_entries(self) -> int:
        return self.rows * self.columns

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    # === Accessors ===

    def main_diagonal(self) -> NDArray[np.floating[Any]]:
        """Entries (i, i) for i = 1 .. min(rows, columns)."""
        n = min(self.rows, self.columns)
        return np.array([self.entry(i, i) for i in range(1, n + 1)], dtype=np.float64)

    def leading_coefficient(self, r: int) -> float:
        """
        First non-zero entry of row r, or 0.0 if the row is all zeros.

        Args:
            r: Row number (1-indexed)
        """
        row = self.row(r)
        nonzero = np.flatnonzero(row)
        if nonzero.size == 0:
            return 0.0
        return float(row[nonzero[0]])

    def to_list(self) -> list[list[float]]:
        """Nested Python lists, one per row."""
        return self.to_array().tolist()

    # === Traversal ===
    # Generators hold no state between calls: every call starts over.

    def iter_rows(self) -> Iterator[tuple[NDArray[np.floating[Any]], int]]:
        """Yield (row, r) for r = 1 .. rows."""
        for r in range(1, self.rows + 1):
            yield self.row(r), r

    def iter_columns(self) -> Iterator[tuple[NDArray[np.floating[Any]], int]]:
        """Yield (column, c) for c = 1 .. columns."""
        for c in range(1, self.columns + 1):
            yield self.column(c), c

    def iter_entries(self) -> Iterator[tuple[float, int, int]]:
        """Yield (entry, r, c) in row-major order."""
        for row, r in self.iter_rows():
            for c, value in enumerate(row, start=1):
                yield float(value), r, c

    def for_each(self, callback: Callable[..., Any]) -> None:
        """
        Call callback(entry, r, c, index, matrix) for every entry.

        r and c are 1-indexed; index is the 0-indexed row-major offset.
        """
        for index, (entry, r, c) in enumerate(self.iter_entries()):
            callback(entry, r, c, index, self)

    def for_each_row(self, callback: Callable[..., Any]) -> None:
        """Call callback(row, r, matrix) for every row."""
        for row, r in self.iter_rows():
            callback(row, r, self)

    def for_each_column(self, callback: Callable[..., Any]) -> None:
        """Call callback(column, c, matrix) for every column."""
        for column, c in self.iter_columns():
            callback(column, c, self)

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseMatrix):
            return NotImplemented
        return self.size == other.size and bool(
            np.array_equal(self.to_array(), other.to_array())
        )

    __hash__ = None  # type: ignore[assignment]

    # === Arithmetic ===

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, BaseMatrix):
            return NotImplemented
        check_same_shape(self.size, other.size, names=('left', 'right'))
        return _general(self.to_array() + other.to_array())

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, BaseMatrix):
            return NotImplemented
        check_same_shape(self.size, other.size, names=('left', 'right'))
        return _general(self.to_array() - other.to_array())

    def __mul__(self, other: object) -> Matrix:
        if isinstance(other, bool) or not isinstance(other, numbers.Real):
            return NotImplemented
        k = check_scalar(other, 'scalar')
        return _general(self.to_array() * k)

    __rmul__ = __mul__

    def __neg__(self) -> Matrix:
        return _general(-self.to_array())

    def __matmul__(self, other: object) -> Matrix:
        """
        Matrix product.

        Each entry (r, c) is the linear combination of row r of the left
        operand with column c of the right operand.
        """
        if not isinstance(other, BaseMatrix):
            return NotImplemented
        if self.columns != other.rows:
            raise DimensionError(
                f"Cannot multiply {self.rows}x{self.columns} by "
                f"{other.rows}x{other.columns}: inner dimensions differ"
            )
        rows = [row for row, _ in self.iter_rows()]
        columns = [column for column, _ in other.iter_columns()]
        product = np.array(
            [[linear_combination(row, column) for column in columns] for row in rows],
            dtype=np.float64,
        )
        return _general(product)

    def _check_position(self, r: int, c: int) -> None:
        check_index(r, self.rows, 'row')
        check_index(c, self.columns, 'column')


def _general(array: NDArray[np.floating[Any]]) -> Matrix:
    from pylinalg.matrices.matrix import Matrix
    return Matrix(array)
