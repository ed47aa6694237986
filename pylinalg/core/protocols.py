"""
Core protocols for pylinalg.

These define structural interfaces that concrete implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
the general Matrix and the closed-form read-only matrices can share one
read contract without sharing a base class.

Design Principles:
    - Minimal contracts: prescribe only what every matrix can answer
    - Reads only: MatrixLike has no mutating methods
    - Type-safe: use generics to preserve type information through backends
"""

from typing import Protocol, TypeVar, Any, Callable, Iterator, runtime_checkable

import numpy as np
from numpy.typing import NDArray

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design (input) type


@runtime_checkable
class MatrixLike(Protocol):
    """
    Read contract shared by Matrix, AugmentedMatrix, IdentityMatrix and
    ZeroMatrix.

    All positions are 1-indexed. Every accessor returns independent data:
    mutating a returned row, column or array never affects the matrix.

    Code that only reads a matrix (arithmetic operands, conversion to a
    general Matrix, equality) should accept MatrixLike rather than Matrix
    so the closed-form variants are handled uniformly.
    """

    @property
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    def columns(self) -> int:
        """Number of columns."""
        ...

    @property
    def rank(self) -> int:
        """Number of pivots found by row reduction."""
        ...

    def entry(self, r: int, c: int) -> float:
        """Entry at row r, column c."""
        ...

    def row(self, r: int) -> NDArray[np.floating[Any]]:
        """Copy of row r."""
        ...

    def column(self, c: int) -> NDArray[np.floating[Any]]:
        """Copy of column c."""
        ...

    def main_diagonal(self) -> NDArray[np.floating[Any]]:
        """Entries (i, i) for i up to min(rows, columns)."""
        ...

    def iter_entries(self) -> Iterator[tuple[float, int, int]]:
        """Yield (entry, r, c) in row-major order."""
        ...

    def iter_rows(self) -> Iterator[tuple[NDArray[np.floating[Any]], int]]:
        """Yield (row, r) top to bottom."""
        ...

    def iter_columns(self) -> Iterator[tuple[NDArray[np.floating[Any]], int]]:
        """Yield (column, c) left to right."""
        ...

    def for_each(self, callback: Callable[..., Any]) -> None:
        """Call callback(entry, r, c, index, matrix) for every entry."""
        ...

    def for_each_row(self, callback: Callable[..., Any]) -> None:
        """Call callback(row, r, matrix) for every row."""
        ...

    def for_each_column(self, callback: Callable[..., Any]) -> None:
        """Call callback(column, c, matrix) for every column."""
        ...

    def to_array(self) -> NDArray[np.floating[Any]]:
        """Dense (rows x columns) float64 copy."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a domain-specific design (for linear
    systems, an AugmentedMatrix) and produce a domain-specific parameter
    payload wrapped in a Result envelope.

    Backends are stateless: all configuration is passed at construction
    time. This makes them easy to test and swap.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_rref'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Args:
            design: Domain-specific input

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            NumericalError: If numerical issues prevent a result
            ValidationError: If design is invalid for this backend
        """
        ...
