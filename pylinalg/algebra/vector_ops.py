"""
Numeric vector operations.

Pure reductions over equal-length numeric sequences. These are the leaf
of the package: matrices and equations call into them, never the other
way round.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import check_array, check_1d, check_consistent_length


def linear_combination(p: ArrayLike, q: ArrayLike) -> float:
    """
    Linear combination of two sequences of numbers.

    Computes Σ p[i]·q[i]. An empty pair of sequences sums to 0.

    Args:
        p: First sequence of numbers
        q: Second sequence of numbers, same length as p

    Returns:
        The sum of pairwise products, as a float

    Raises:
        ValidationError: If either input is not numeric
        DimensionError: If either input is not 1D or the lengths differ

    Example:
        >>> linear_combination([1, 2, 3], [4, 5, 6])
        32.0
    """
    p_arr = _as_vector(p, 'p')
    q_arr = _as_vector(q, 'q')
    check_consistent_length(p_arr, q_arr, names=('p', 'q'))
    return float(np.dot(p_arr, q_arr))


def _as_vector(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(values, name)
    check_1d(arr, name)
    return arr
