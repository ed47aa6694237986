"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinalg import LinearEquation


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def unique_system():
    """x + y = 3, x - y = 1  ->  x = 2, y = 1."""
    return [
        LinearEquation([1, 1], 3, ('x', 'y')),
        LinearEquation([1, -1], 1, ('x', 'y')),
    ]


@pytest.fixture
def dependent_system():
    """x + y = 2, 2x + 2y = 4  ->  y free, x = 2 - y."""
    return [
        LinearEquation([1, 1], 2, ('x', 'y')),
        LinearEquation([2, 2], 4, ('x', 'y')),
    ]


@pytest.fixture
def inconsistent_system():
    """x + y = 1, x + y = 2  ->  no solution."""
    return [
        LinearEquation([1, 1], 1, ('x', 'y')),
        LinearEquation([1, 1], 2, ('x', 'y')),
    ]


@pytest.fixture
def integer_matrix(rng):
    """Random 4x5 integer matrix, exactly representable in float64."""
    return rng.integers(-5, 6, size=(4, 5)).astype(np.float64)
