"""
Solver dispatch for linear systems.

This module provides the solve() function (public API) and backend selection.
"""

import warnings
from typing import Iterable, Literal, Union

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.protocols import Backend
from pylinalg.algebra.linear_equation import LinearEquation, parse_system
from pylinalg.matrices.augmented import AugmentedMatrix
from pylinalg.systems.solution import SystemParams, SystemSolution, classify
from pylinalg.systems.backends.cpu import CPURREFBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_rref']

SystemInput = Union[AugmentedMatrix, str, Iterable[Union[LinearEquation, str]]]


def solve(
    system: SystemInput,
    *,
    backend: BackendChoice = 'auto',
) -> SystemSolution:
    """
    Solve or classify a system of linear equations.

    This is the primary public API for linear systems. All input
    validation, design construction, backend selection and result
    classification happens here.

    Args:
        system: One of
            - an AugmentedMatrix
            - a sequence of LinearEquation
            - a sequence of equation strings, e.g. ["x + y = 3", "x - y = 1"]
            - a single string of equations separated by ',', ';' or newlines
        backend: Computational backend to use:
            - 'auto': Select best available (currently always CPU)
            - 'cpu': Use CPU backend (Gauss-Jordan)
            - 'cpu_rref': Explicitly use CPU Gauss-Jordan elimination

    Returns:
        NoSolution, UniqueSolution or InfiniteSolutions

    Raises:
        ValidationError: If the equations are malformed
        DimensionError: If the equations do not share the same unknowns
        ValueError: If backend is unknown

    Example:
        >>> from pylinalg.systems import solve
        >>> result = solve(["x + y = 3", "x - y = 1"])
        >>> result.values
        array([2., 1.])
        >>> print(result.summary())
    """
    return _solve(system, backend, stacklevel=3)


def _solve(system: SystemInput, backend: BackendChoice, *, stacklevel: int) -> SystemSolution:
    """
    Shared body of solve() and AugmentedMatrix.solve().

    stacklevel counts frames from warnings.warn in this function, so the
    public entry point passes 3 to point near-zero pivot warnings at its
    caller.
    """
    # === Select Backend ===
    backend_impl = _get_backend(backend)

    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = _build_design(system)

    # === Solve ===
    result = backend_impl.solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=stacklevel)

    # === Classify and Return ===
    return classify(result, design)


def _build_design(system: SystemInput) -> AugmentedMatrix:
    """Normalise every accepted input form to an AugmentedMatrix."""
    if isinstance(system, AugmentedMatrix):
        return system
    if isinstance(system, str):
        return AugmentedMatrix.from_equations(parse_system(system))

    try:
        items = list(system)
    except TypeError as e:
        raise ValidationError(
            f"system: expected AugmentedMatrix, equations or strings, "
            f"got {type(system).__name__}"
        ) from e

    if items and all(isinstance(item, str) for item in items):
        return AugmentedMatrix.from_equations(parse_system(items))
    if any(isinstance(item, str) for item in items):
        raise ValidationError(
            "system: mix of strings and LinearEquation objects; "
            "parse the strings with parse_system() first"
        )
    return AugmentedMatrix.from_equations(items)


def _get_backend(choice: BackendChoice) -> Backend[AugmentedMatrix, SystemParams]:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference

    Returns:
        Backend instance ready to solve

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_rref'):
        return CPURREFBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
