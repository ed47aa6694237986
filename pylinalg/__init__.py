"""
pylinalg: matrices, row reduction and linear systems for Python.

A small linear-algebra toolkit built around one Gauss-Jordan engine:
matrices (general, zero, identity, augmented), rank and reduced
row-echelon form, and solving or classifying systems of linear
equations.

Submodules:
    core: Exceptions, validation, Result envelope, protocols
    algebra: linear_combination, LinearEquation
    matrices: Matrix, AugmentedMatrix, IdentityMatrix, ZeroMatrix
    systems: solve() and its tagged outcomes
"""

__version__ = "0.1.0"

from pylinalg.algebra import linear_combination, LinearEquation, parse_system
from pylinalg.matrices import Matrix, AugmentedMatrix, IdentityMatrix, ZeroMatrix
from pylinalg.systems import (
    solve,
    NoSolution,
    UniqueSolution,
    InfiniteSolutions,
    AffineExpression,
)
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    InvalidScalarError,
    UnsupportedOperationError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    "__version__",
    # Algebra
    "linear_combination",
    "LinearEquation",
    "parse_system",
    # Matrices
    "Matrix",
    "AugmentedMatrix",
    "IdentityMatrix",
    "ZeroMatrix",
    # Systems
    "solve",
    "NoSolution",
    "UniqueSolution",
    "InfiniteSolutions",
    "AffineExpression",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "InvalidScalarError",
    "UnsupportedOperationError",
    "NumericalError",
    "SingularMatrixError",
]
