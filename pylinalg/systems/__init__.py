"""
Systems of linear equations.

Public API:
    solve(system, ...) -> NoSolution | UniqueSolution | InfiniteSolutions

The solve() function is the only entry point. It handles:
    - Input normalisation (strings, LinearEquation, AugmentedMatrix)
    - Backend selection
    - Classification of the reduced system

Example:
    >>> from pylinalg.systems import solve, UniqueSolution
    >>> result = solve("x + y = 3, x - y = 1")
    >>> isinstance(result, UniqueSolution)
    True
    >>> print(result.summary())
"""

from pylinalg.systems.solution import (
    SystemParams,
    SystemSolution,
    NoSolution,
    UniqueSolution,
    InfiniteSolutions,
    AffineExpression,
)
from pylinalg.systems.solvers import solve

__all__ = [
    "solve",
    "SystemParams",
    "SystemSolution",
    "NoSolution",
    "UniqueSolution",
    "InfiniteSolutions",
    "AffineExpression",
]
