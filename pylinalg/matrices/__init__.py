"""
Matrices and row reduction.

Public API:
    Matrix             - dense general matrix with copy-returning row operations
    AugmentedMatrix    - [A | B], built from LinearEquation rows, solvable
    IdentityMatrix     - read-only n x n identity
    ZeroMatrix         - read-only all-zero matrix
    reduce_rows(M)     - Gauss-Jordan reduction record (RREF, pivots, operations)

Example:
    >>> from pylinalg.matrices import Matrix
    >>> M = Matrix([[1, 2], [2, 4]])
    >>> M.rank
    1
    >>> M.rref()
    Matrix([[1.0, 2.0], [0.0, 0.0]])
"""

from pylinalg.matrices.matrix import Matrix
from pylinalg.matrices.augmented import AugmentedMatrix
from pylinalg.matrices.special import ClosedFormMatrix, IdentityMatrix, ZeroMatrix
from pylinalg.matrices._reduction import Reduction, RowOperation, reduce_rows

__all__ = [
    "Matrix",
    "AugmentedMatrix",
    "ClosedFormMatrix",
    "IdentityMatrix",
    "ZeroMatrix",
    "Reduction",
    "RowOperation",
    "reduce_rows",
]
