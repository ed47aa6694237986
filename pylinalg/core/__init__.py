"""
Core infrastructure for pylinalg.

This module provides shared abstractions and utilities used by the
domain subpackages (algebra, matrices, systems).

Key components:
    protocols: MatrixLike, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerances
"""

from pylinalg.core.protocols import MatrixLike, Backend
from pylinalg.core.result import Result
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
    # Protocols
    "MatrixLike",
    "Backend",
    # Result
    "Result",
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
