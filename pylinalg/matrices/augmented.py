"""
Augmented matrices [A | B].

An AugmentedMatrix is a Matrix whose columns are split into a coefficient
block A (one column per unknown) and a constant block B (one or more
columns). Row operations act on whole rows, so both blocks stay
consistent with the equations they represent, and every row operation
returns another AugmentedMatrix with the same split.

Reduction searches for pivots in the coefficient block only; that is what
solve() classifies.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import DimensionError, ValidationError
from pylinalg.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_not_empty,
    check_consistent_length,
)
from pylinalg.algebra.linear_equation import LinearEquation
from pylinalg.matrices._common import BaseMatrix
from pylinalg.matrices.matrix import Matrix

if TYPE_CHECKING:
    from pylinalg.matrices._reduction import Reduction
    from pylinalg.systems.solution import SystemSolution
    from pylinalg.systems.solvers import BackendChoice


class AugmentedMatrix(Matrix):
    """
    Coefficient block and constant block side by side.

    Construction:
        AugmentedMatrix([[1, 1], [1, -1]], [3, 1])            # A, b
        AugmentedMatrix(A, IdentityMatrix(3))                 # [A | I]
        AugmentedMatrix.from_equations([eq1, eq2])            # one row each
    """

    def __init__(
        self,
        coefficients: ArrayLike | BaseMatrix,
        constants: ArrayLike | BaseMatrix,
        variables: Sequence[str] | None = None,
    ):
        A = _as_block(coefficients, 'coefficients')
        B = _as_block(constants, 'constants', vector_as_column=True)
        check_consistent_length(A, B, names=('coefficients', 'constants'))

        super().__init__(np.hstack([A, B]))
        self._n_unknowns = A.shape[1]
        self._variables = None if variables is None else tuple(variables)
        if self._variables is not None and len(self._variables) != self._n_unknowns:
            raise DimensionError(
                f"variables: expected {self._n_unknowns} names, got {len(self._variables)}"
            )

    @classmethod
    def from_equations(cls, equations: Iterable[LinearEquation]) -> AugmentedMatrix:
        """
        One row per equation: coefficients, then the constant.

        Raises:
            ValidationError: If equations is empty or holds non-equations
            DimensionError: If the equations do not share the same unknowns
        """
        equations = list(equations)
        if not equations:
            raise ValidationError("equations: at least one equation is required")
        for i, equation in enumerate(equations, start=1):
            if not isinstance(equation, LinearEquation):
                raise ValidationError(
                    f"equations[{i}]: expected LinearEquation, got {type(equation).__name__}"
                )

        arities = [equation.n_unknowns for equation in equations]
        if len(set(arities)) > 1:
            details = ", ".join(f"equation {i}={n}" for i, n in enumerate(arities, start=1))
            raise DimensionError(f"Equations have different numbers of unknowns: {details}")

        named = [equation.variables for equation in equations if equation.variables is not None]
        if len(set(named)) > 1:
            raise DimensionError(
                f"Equations do not share the same unknowns: {sorted(set(named))}"
            )
        variables = named[0] if named else None

        coefficients = [equation.coefficients for equation in equations]
        constants = [equation.constant for equation in equations]
        return cls(coefficients, constants, variables=variables)

    def _derive(self, elements: NDArray[np.floating[Any]]) -> AugmentedMatrix:
        matrix = AugmentedMatrix._from_buffer(elements, self._rows, self._columns)
        matrix._n_unknowns = self._n_unknowns
        matrix._variables = self._variables
        return matrix

    # === Blocks ===

    @property
    def n_unknowns(self) -> int:
        """Columns in the coefficient block."""
        return self._n_unknowns

    @property
    def n_equations(self) -> int:
        return self._rows

    @property
    def n_constant_columns(self) -> int:
        return self._columns - self._n_unknowns

    @property
    def variables(self) -> tuple[str, ...] | None:
        return self._variables

    @property
    def variable_names(self) -> tuple[str, ...]:
        """Given names, or x1 .. xn."""
        if self._variables is not None:
            return self._variables
        return tuple(f"x{i}" for i in range(1, self._n_unknowns + 1))

    def coefficient_matrix(self) -> Matrix:
        """Coefficient block A as a general Matrix."""
        return Matrix(self._view()[:, :self._n_unknowns])

    def constant_matrix(self) -> Matrix:
        """Constant block B as a general Matrix."""
        return Matrix(self._view()[:, self._n_unknowns:])

    def constants(self) -> NDArray[np.floating[Any]]:
        """Constant block; 1D when there is a single constant column."""
        block = self._view()[:, self._n_unknowns:].copy()
        if block.shape[1] == 1:
            return block.ravel()
        return block

    def equations(self) -> tuple[LinearEquation, ...]:
        """
        The rows as LinearEquation objects.

        Raises:
            DimensionError: If there is more than one constant column
        """
        if self.n_constant_columns != 1:
            raise DimensionError(
                f"equations() needs exactly 1 constant column, got {self.n_constant_columns}"
            )
        view = self._view()
        return tuple(
            LinearEquation(tuple(row[:self._n_unknowns]), float(row[-1]), self._variables)
            for row in view
        )

    # === Reduction and solving ===

    def reduce(self, pivot_column_limit: int | None = None) -> Reduction:
        """
        Row-reduce with pivots restricted to the coefficient block.

        Pass pivot_column_limit=self.columns to reduce the whole matrix.
        """
        if pivot_column_limit is None:
            pivot_column_limit = self._n_unknowns
        return super().reduce(pivot_column_limit)

    @property
    def coefficient_rank(self) -> int:
        """Rank of the coefficient block (pivots found by reduce())."""
        return self.reduce().rank

    @property
    def rank(self) -> int:
        """
        Rank of the whole augmented matrix, constant columns included.

        Exceeds coefficient_rank exactly when the system is inconsistent.
        """
        return super().rank

    def pivot_columns(self) -> tuple[int, ...]:
        """
        Coefficient columns holding a pivot.

        Pivots are searched in the coefficient block only, so there are
        coefficient_rank of them, one fewer than rank for an inconsistent
        system.
        """
        return self.reduce().pivot_columns

    def solve(self, *, backend: BackendChoice = 'auto') -> SystemSolution:
        """
        Solve or classify the system.

        Near-zero pivot warnings are attributed to the caller of this method.

        Returns:
            NoSolution, UniqueSolution or InfiniteSolutions
        """
        from pylinalg.systems.solvers import _solve
        return _solve(self, backend, stacklevel=3)

    def __repr__(self) -> str:
        view = self._view()
        return (
            f"AugmentedMatrix(coefficients={view[:, :self._n_unknowns].tolist()!r}, "
            f"constants={view[:, self._n_unknowns:].tolist()!r})"
        )


def _as_block(
    block: ArrayLike | BaseMatrix,
    name: str,
    vector_as_column: bool = False,
) -> NDArray[np.floating[Any]]:
    """2D float64 array for one block; optionally a 1D vector becomes a column."""
    if isinstance(block, BaseMatrix):
        return block.to_array()
    array = check_array(block, name)
    if vector_as_column and array.ndim == 1:
        array = array.reshape(-1, 1)
    check_2d(array, name)
    check_not_empty(array, name)
    check_finite(array, name)
    return array
