"""
Linear system solution types.

Contains the parameter payload produced by backends and the user-facing
tagged outcomes:

    NoSolution          - inconsistent system
    UniqueSolution      - one value per unknown
    InfiniteSolutions   - free variables plus an affine expression for
                          every basic variable

All three wrap the backend Result, so timing, backend name, warnings and
the reduced matrix are available whatever the outcome.

Unknowns are numbered from 1, like matrix columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.result import Result
from pylinalg.core.compute.tolerances import ToleranceTier, select_tolerance

if TYPE_CHECKING:
    from pylinalg.matrices.augmented import AugmentedMatrix
    from pylinalg.matrices._reduction import Reduction


@dataclass(frozen=True)
class SystemParams:
    """
    Parameter payload for a reduced linear system.

    This is the immutable data computed by backends.
    """
    reduction: Reduction
    inconsistent_rows: tuple[int, ...]
    n_unknowns: int

    @property
    def reduced(self) -> AugmentedMatrix:
        return self.reduction.matrix

    @property
    def rank(self) -> int:
        return self.reduction.rank

    @property
    def pivot_columns(self) -> tuple[int, ...]:
        return self.reduction.pivot_columns

    @property
    def free_columns(self) -> tuple[int, ...]:
        return self.reduction.free_columns


@dataclass(frozen=True)
class AffineExpression:
    """
    constant + Σ coefficients[j] * x_j over free variables j.

    With several constant columns, constant is an array with one entry
    per column.
    """
    coefficients: Mapping[int, float] = field(default_factory=dict)
    constant: float | NDArray[np.floating[Any]] = 0.0

    def evaluate(self, free_values: Mapping[int, float]) -> float | NDArray[np.floating[Any]]:
        """Value of the expression for the given free-variable values."""
        missing = sorted(set(self.coefficients) - set(free_values))
        if missing:
            raise ValidationError(f"free_values: missing free variables {missing}")
        total = self.constant
        for j, coefficient in self.coefficients.items():
            total = total + coefficient * float(free_values[j])
        return total

    def format(self, names: tuple[str, ...]) -> str:
        """Readable form using 1-indexed variable names, e.g. '2 - y'."""
        parts: list[str] = []
        if np.ndim(self.constant) == 0:
            if self.constant != 0 or not any(self.coefficients.values()):
                parts.append(f"{float(self.constant):g}")
        else:
            parts.append(np.array2string(np.asarray(self.constant), separator=', '))

        for j, coefficient in sorted(self.coefficients.items()):
            if coefficient == 0:
                continue
            name = names[j - 1]
            magnitude = abs(coefficient)
            term = name if magnitude == 1 else f"{magnitude:g}{name}"
            if not parts:
                parts.append(term if coefficient > 0 else f"-{term}")
            else:
                parts.append(f"+ {term}" if coefficient > 0 else f"- {term}")
        return " ".join(parts)

    def __str__(self) -> str:
        highest = max(self.coefficients, default=0)
        return self.format(tuple(f"x{i}" for i in range(1, highest + 1)))


@dataclass(eq=False)
class SystemSolution:
    """
    User-facing outcome of solving a linear system.

    Wraps the backend Result and the AugmentedMatrix that was solved.
    Use isinstance() or the kind attribute to tell outcomes apart.
    """
    _result: Result[SystemParams]
    _design: AugmentedMatrix

    kind: ClassVar[str] = 'system'

    @property
    def params(self) -> SystemParams:
        return self._result.params

    @property
    def augmented(self) -> AugmentedMatrix:
        """The system as solved (unreduced)."""
        return self._design

    @property
    def reduced(self) -> AugmentedMatrix:
        """RREF of the augmented matrix, pivots in the coefficient block."""
        return self._result.params.reduced

    @property
    def rank(self) -> int:
        """Rank of the coefficient block."""
        return self._result.params.rank

    @property
    def n_unknowns(self) -> int:
        return self._result.params.n_unknowns

    @property
    def pivot_columns(self) -> tuple[int, ...]:
        return self._result.params.pivot_columns

    @property
    def is_consistent(self) -> bool:
        return not self._result.params.inconsistent_rows

    @property
    def variable_names(self) -> tuple[str, ...]:
        return self._design.variable_names

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def _body_lines(self) -> list[str]:
        return []

    def summary(self) -> str:
        """Human-readable report of the outcome."""
        lines = [
            "Linear System Results",
            "=" * 60,
            f"Equations: {self._design.n_equations}",
            f"Unknowns: {self.n_unknowns}",
            f"Rank: {self.rank}",
            f"Outcome: {self.kind}",
            "-" * 60,
        ]
        lines.extend(self._body_lines())
        lines.append("-" * 60)
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_equations={self._design.n_equations}, "
            f"n_unknowns={self.n_unknowns}, rank={self.rank})"
        )


@dataclass(eq=False, repr=False)
class NoSolution(SystemSolution):
    """The equations contradict each other."""

    kind: ClassVar[str] = 'none'

    @property
    def inconsistent_rows(self) -> tuple[int, ...]:
        """Rows of the RREF reading 0 = non-zero (1-indexed)."""
        return self._result.params.inconsistent_rows

    def _body_lines(self) -> list[str]:
        rows = ", ".join(str(r) for r in self.inconsistent_rows)
        return [f"Inconsistent: reduced row(s) {rows} read 0 = non-zero"]


@dataclass(eq=False, repr=False)
class UniqueSolution(SystemSolution):
    """
    Exactly one solution.

    values has shape (n_unknowns,) for a single constant column and
    (n_unknowns, k) for k constant columns.
    """
    values: NDArray[np.floating[Any]] = field(default_factory=lambda: np.empty(0))

    kind: ClassVar[str] = 'unique'

    def as_dict(self) -> dict[str, float | NDArray[np.floating[Any]]]:
        """Values keyed by variable name."""
        return {name: self.values[i] for i, name in enumerate(self.variable_names)}

    def satisfies(self, tolerance: ToleranceTier | None = None) -> bool:
        """
        True when A @ values reproduces the constants within tolerance.

        Without an explicit tolerance, the ill-conditioned tier is used
        when the backend reported near-zero pivots, CPU_FP64 otherwise.
        """
        if tolerance is None:
            tolerance = select_tolerance(is_ill_conditioned=bool(self.warnings))
        A = self._design.coefficient_matrix().to_array()
        b = self._design.constants()
        return bool(np.allclose(A @ self.values, b, rtol=tolerance.rtol, atol=tolerance.atol))

    def _body_lines(self) -> list[str]:
        return [f"  {name} = {value}" for name, value in self.as_dict().items()]

    def __repr__(self) -> str:
        return f"UniqueSolution(values={self.values.tolist()!r})"


@dataclass(eq=False, repr=False)
class InfiniteSolutions(SystemSolution):
    """
    Infinitely many solutions.

    free_variables holds the 1-indexed unknowns without a pivot. Every
    other unknown j maps to expressions[j], an affine function of the
    free variables read off the RREF.
    """
    free_variables: frozenset[int] = frozenset()
    expressions: dict[int, AffineExpression] = field(default_factory=dict)

    kind: ClassVar[str] = 'infinite'

    def evaluate(self, free_values: Mapping[int, float]) -> NDArray[np.floating[Any]]:
        """
        Full solution vector for chosen free-variable values.

        Args:
            free_values: Value for every free variable, keyed by index

        Raises:
            ValidationError: If a free variable is missing, or a key is
                not a free variable
        """
        extra = sorted(set(free_values) - self.free_variables)
        if extra:
            raise ValidationError(f"free_values: {extra} are not free variables")
        missing = sorted(self.free_variables - set(free_values))
        if missing:
            raise ValidationError(f"free_values: missing free variables {missing}")

        k = self._design.n_constant_columns
        shape = (self.n_unknowns,) if k == 1 else (self.n_unknowns, k)
        values = np.zeros(shape, dtype=np.float64)
        for j in self.free_variables:
            values[j - 1] = float(free_values[j])
        for j, expression in self.expressions.items():
            values[j - 1] = expression.evaluate(free_values)
        return values

    def particular_solution(self) -> NDArray[np.floating[Any]]:
        """The solution with every free variable set to 0."""
        return self.evaluate({j: 0.0 for j in self.free_variables})

    def _body_lines(self) -> list[str]:
        names = self.variable_names
        free = ", ".join(names[j - 1] for j in sorted(self.free_variables))
        lines = [f"Free variables: {free}"]
        for j, expression in sorted(self.expressions.items()):
            lines.append(f"  {names[j - 1]} = {expression.format(names)}")
        return lines

    def __repr__(self) -> str:
        return (
            f"InfiniteSolutions(free_variables={sorted(self.free_variables)!r}, "
            f"n_unknowns={self.n_unknowns})"
        )


def classify(result: Result[SystemParams], design: AugmentedMatrix) -> SystemSolution:
    """
    Turn a reduced system into its tagged outcome.

    Inconsistent rows take precedence; otherwise the rank decides between
    a unique solution and a family parameterised by the free variables.
    """
    params = result.params
    if params.inconsistent_rows:
        return NoSolution(_result=result, _design=design)

    rref = params.reduced.to_array()
    n = params.n_unknowns
    k = design.n_constant_columns

    def constant_of(r: int) -> float | NDArray[np.floating[Any]]:
        block = rref[r - 1, n:]
        return float(block[0]) if k == 1 else block.copy()

    if params.rank == n:
        shape = (n,) if k == 1 else (n, k)
        values = np.zeros(shape, dtype=np.float64)
        for r, c in params.reduction.pivots:
            values[c - 1] = constant_of(r)
        return UniqueSolution(_result=result, _design=design, values=values)

    free = params.free_columns
    expressions = {
        c: AffineExpression(
            coefficients={j: -float(rref[r - 1, j - 1]) + 0.0 for j in free},
            constant=constant_of(r),
        )
        for r, c in params.reduction.pivots
    }
    return InfiniteSolutions(
        _result=result,
        _design=design,
        free_variables=frozenset(free),
        expressions=expressions,
    )
