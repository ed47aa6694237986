"""
Input validation utilities for pylinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import (
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    InvalidScalarError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (ragged rows, mixed types or non-numeric
    data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_not_empty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array has at least one entry along every axis.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If any axis has length zero
    """
    if array.size == 0:
        raise ValidationError(
            f"{name}: must not be empty, got shape {array.shape}"
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_same_shape(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two matrix shapes are identical.

    Raises:
        DimensionError: If the shapes differ
    """
    if tuple(shape_a) != tuple(shape_b):
        raise DimensionError(
            f"Shape mismatch: {names[0]}={tuple(shape_a)}, {names[1]}={tuple(shape_b)}"
        )


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape is square.

    Raises:
        DimensionError: If rows != columns
    """
    rows, columns = shape
    if rows != columns:
        raise DimensionError(
            f"{name}: expected a square matrix, got {rows}x{columns}"
        )


def check_index(index: int, bound: int, axis: str) -> None:
    """
    Verify a 1-indexed position lies in [1, bound].

    Booleans are rejected even though they are ints in Python.

    Args:
        index: Position supplied by the caller (1-indexed)
        bound: Number of rows or columns
        axis: 'row' or 'column', used in the error message

    Raises:
        IndexOutOfRangeError: If index is not an integer in [1, bound]
    """
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise IndexOutOfRangeError(
            f"{axis} index must be an integer, got {index!r}",
            index=index, bound=bound, axis=axis,
        )
    if not 1 <= index <= bound:
        raise IndexOutOfRangeError(
            f"{axis} index {index} out of range [1, {bound}]",
            index=int(index), bound=bound, axis=axis,
        )


def check_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite real number and return it as float.

    Raises:
        InvalidScalarError: If value is not a finite real number
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidScalarError(
            f"{name}: expected a real number, got {type(value).__name__}",
            scalar=value,
        )
    result = float(value)
    if not np.isfinite(result):
        raise InvalidScalarError(f"{name}: must be finite, got {result}", scalar=result)
    return result


def check_nonzero_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite, non-zero real number.

    Scaling a row by zero is not an elementary row operation: it destroys
    the row and cannot be undone.

    Raises:
        InvalidScalarError: If value is zero, non-finite or not a real number
    """
    result = check_scalar(value, name)
    if result == 0:
        raise InvalidScalarError(
            f"{name}: scaling factor must be non-zero", scalar=result
        )
    return result


def check_size(value: Any, name: str) -> int:
    """
    Verify value is a positive integer matrix dimension.

    Raises:
        ValidationError: If value is not an integer >= 1
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(f"{name}: expected an integer, got {value!r}")
    if value < 1:
        raise ValidationError(f"{name}: must be at least 1, got {value}")
    return int(value)
