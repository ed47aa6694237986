"""
Exception hierarchy for pylinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all pylinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand dimensions are incorrect or inconsistent.
    
    Raised when array shapes don't match expected dimensions, when two
    operands have incompatible sizes, or when the equations of a system
    do not share the same unknowns.
    """
    pass


class IndexOutOfRangeError(ValidationError):
    """
    A 1-indexed row or column position is outside the matrix.
    
    Attributes:
        index: The offending position as given by the caller
        bound: Largest valid position along that axis
        axis: 'row' or 'column'
    """
    
    def __init__(
        self,
        message: str,
        index: int | None = None,
        bound: int | None = None,
        axis: str | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound
        self.axis = axis


class InvalidScalarError(ValidationError):
    """
    A scalar argument is not allowed for the requested operation.
    
    Raised by scale_row() and divide_row() when given zero, which is not
    an elementary (invertible) row operation.
    
    Attributes:
        scalar: The rejected scalar
    """
    
    def __init__(self, message: str, scalar: float | None = None):
        super().__init__(message)
        self.scalar = scalar


class UnsupportedOperationError(PyLinalgError):
    """
    Operation is not supported by this kind of matrix.
    
    Raised when a structural mutation (row operation, element assignment)
    is attempted on a read-only closed-form matrix such as IdentityMatrix
    or ZeroMatrix.
    
    Attributes:
        operation: Name of the rejected operation
        matrix_name: Class name of the matrix it was called on
    """
    
    def __init__(
        self,
        message: str,
        operation: str | None = None,
        matrix_name: str | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.matrix_name = matrix_name


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.
    
    Base class for errors arising from numerical issues during computation,
    e.g. an elimination step overflowing to Inf.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.
    
    Raised when an operation requires invertibility but row reduction
    found fewer pivots than the matrix has rows.
    
    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Rank found by row reduction
        expected_rank: Rank required (the matrix order)
    """
    
    def __init__(
        self, 
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
