"""
Gauss-Jordan reduction to reduced row-echelon form.

Pivots are chosen by position, not magnitude: in each column the first
row (at or below the current pivot row) holding a non-zero entry wins.
The zero test is exact, so the same input always yields the same pivots
and a rounding residue such as 1e-17 counts as non-zero.

Algorithm:
    p = 1
    for c in 1 .. limit:
        find first r in p .. rows with entry(r, c) != 0, else skip column
        swap rows r and p (if r != p)
        divide row p by entry(p, c), making the pivot exactly 1
        for every other row i with entry(i, c) != 0:
            row i <- row i - entry(i, c) * row p
        p += 1, stop once p > rows
    rank = p - 1

Row operations always span the whole row, including columns beyond the
pivot limit (the constant block of an augmented matrix).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TYPE_CHECKING

import numpy as np

from pylinalg.core.exceptions import NumericalError, ValidationError

if TYPE_CHECKING:
    from pylinalg.matrices.matrix import Matrix


RowOperationKind = Literal['swap', 'scale', 'divide', 'add']


@dataclass(frozen=True)
class RowOperation:
    """
    One elementary row operation, 1-indexed.

    swap:   rows target and source are interchanged
    scale:  row target is multiplied by scalar
    divide: row target is divided by scalar
    add:    row target <- row target + scalar * row source
    """
    kind: RowOperationKind
    target: int
    source: int | None = None
    scalar: float | None = None

    def apply(self, matrix: Matrix) -> Matrix:
        """Apply this operation with the copy-returning Matrix API."""
        if self.kind == 'swap':
            return matrix.swap_rows(self.target, self.source)
        if self.kind == 'scale':
            return matrix.scale_row(self.target, self.scalar)
        if self.kind == 'divide':
            return matrix.divide_row(self.target, self.scalar)
        return matrix.add_row_multiple(self.target, self.source, self.scalar)

    def __str__(self) -> str:
        if self.kind == 'swap':
            return f"R{self.target} <-> R{self.source}"
        if self.kind == 'scale':
            return f"R{self.target} <- {self.scalar:g} * R{self.target}"
        if self.kind == 'divide':
            return f"R{self.target} <- R{self.target} / {self.scalar:g}"
        return f"R{self.target} <- R{self.target} + {self.scalar:g} * R{self.source}"


@dataclass(frozen=True)
class Reduction:
    """
    Record of one reduction.

    Attributes:
        matrix: The RREF, same class as the input (an AugmentedMatrix
            stays augmented)
        pivots: (row, column) of every pivot, 1-indexed, left to right
        pivot_values: Entry at each pivot before it was divided out
        operations: Every elementary row operation applied, in order
        pivot_column_limit: Columns 1..limit were searched for pivots
    """
    matrix: Matrix
    pivots: tuple[tuple[int, int], ...]
    pivot_values: tuple[float, ...]
    operations: tuple[RowOperation, ...]
    pivot_column_limit: int

    @property
    def rank(self) -> int:
        return len(self.pivots)

    @property
    def pivot_columns(self) -> tuple[int, ...]:
        return tuple(c for _, c in self.pivots)

    @property
    def free_columns(self) -> tuple[int, ...]:
        """Searched columns without a pivot (non-basic variables)."""
        pivot_columns = set(self.pivot_columns)
        return tuple(
            c for c in range(1, self.pivot_column_limit + 1) if c not in pivot_columns
        )

    @property
    def n_swaps(self) -> int:
        return sum(1 for op in self.operations if op.kind == 'swap')

    def replay(self, matrix: Matrix) -> Matrix:
        """
        Apply the recorded operations to another matrix of the same height.

        Replaying on the original input reproduces the RREF exactly:
        every step is replayed with the same arithmetic the reduction used.
        """
        if matrix.rows != self.matrix.rows:
            raise ValidationError(
                f"matrix: replay needs {self.matrix.rows} rows, got {matrix.rows}"
            )
        for operation in self.operations:
            matrix = operation.apply(matrix)
        return matrix


def reduce_rows(matrix: Matrix, pivot_column_limit: int | None = None) -> Reduction:
    """
    Reduce a matrix to RREF.

    Args:
        matrix: Matrix to reduce; it is cloned, never modified
        pivot_column_limit: Only columns 1..limit may hold pivots.
            Defaults to all columns.

    Returns:
        Reduction record

    Raises:
        ValidationError: If pivot_column_limit is outside [0, columns]
        NumericalError: If elimination overflows to a non-finite value
    """
    rows, columns = matrix.rows, matrix.columns
    limit = columns if pivot_column_limit is None else pivot_column_limit
    if not 0 <= limit <= columns:
        raise ValidationError(
            f"pivot_column_limit: must be in [0, {columns}], got {limit}"
        )

    work = matrix.clone()
    view = work._view()
    pivots: list[tuple[int, int]] = []
    pivot_values: list[float] = []
    operations: list[RowOperation] = []

    p = 1
    for c in range(1, limit + 1):
        if p > rows:
            break

        candidates = np.flatnonzero(view[p - 1:, c - 1] != 0)
        if candidates.size == 0:
            continue
        r = p + int(candidates[0])

        if r != p:
            work._swap_rows_inplace(r, p)
            operations.append(RowOperation('swap', target=p, source=r))

        pivot = float(view[p - 1, c - 1])
        work._divide_row_inplace(p, pivot)
        operations.append(RowOperation('divide', target=p, scalar=pivot))

        for i in range(1, rows + 1):
            if i == p:
                continue
            factor = float(view[i - 1, c - 1])
            if factor != 0:
                work._add_row_multiple_inplace(i, p, -factor)
                operations.append(RowOperation('add', target=i, source=p, scalar=-factor))

        pivots.append((p, c))
        pivot_values.append(pivot)
        p += 1

    if not np.all(np.isfinite(view)):
        raise NumericalError(
            "Row reduction produced non-finite entries (overflow); "
            "rescale the input"
        )

    return Reduction(
        matrix=work,
        pivots=tuple(pivots),
        pivot_values=tuple(pivot_values),
        operations=tuple(operations),
        pivot_column_limit=limit,
    )
