"""
CPU reference backend for linear systems.

Runs Gauss-Jordan elimination on the augmented matrix with pivots
restricted to the coefficient block, then finds inconsistent rows.
The pivot test is exact; pivots that are tiny next to the input's
largest entry are recorded in Result.warnings, never skipped. The
solver entry points re-emit them as RuntimeWarning.
"""

from typing import Any

import numpy as np

from pylinalg.core.result import Result
from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import NEAR_ZERO_PIVOT_RTOL
from pylinalg.matrices.augmented import AugmentedMatrix
from pylinalg.systems.solution import SystemParams


class CPURREFBackend:
    """
    CPU backend using Gauss-Jordan elimination to RREF.

    Implements the Backend protocol for AugmentedMatrix -> SystemParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_rref'

    def solve(self, design: AugmentedMatrix) -> Result[SystemParams]:
        """
        Reduce and inspect an augmented matrix.

        Algorithm:
            1. Reduce to RREF, pivot search in columns 1..n_unknowns
            2. Flag rows whose coefficient part is all zero but whose
               constant part is not (0 = non-zero)
            3. Flag suspiciously small pivots

        Args:
            design: The system to solve

        Returns:
            Result containing SystemParams

        Raises:
            NumericalError: If elimination overflows
        """
        timer = Timer()
        timer.start()

        n = design.n_unknowns

        # === Reduction ===
        with timer.section('reduction'):
            reduction = design.reduce()

        # === Consistency ===
        with timer.section('classification'):
            rref = reduction.matrix.to_array()
            zero_coefficients = np.all(rref[:, :n] == 0, axis=1)
            nonzero_constants = np.any(rref[:, n:] != 0, axis=1)
            inconsistent_rows = tuple(
                int(i) + 1 for i in np.flatnonzero(zero_coefficients & nonzero_constants)
            )

        # === Diagnostics ===
        messages = _near_zero_pivots(design, reduction.pivots, reduction.pivot_values)

        timer.stop()

        params = SystemParams(
            reduction=reduction,
            inconsistent_rows=inconsistent_rows,
            n_unknowns=n,
        )

        info: dict[str, Any] = {
            'method': 'gauss_jordan',
            'rank': reduction.rank,
            'pivot_columns': reduction.pivot_columns,
            'free_columns': reduction.free_columns,
            'n_operations': len(reduction.operations),
            'consistent': not inconsistent_rows,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(messages),
        )


def _near_zero_pivots(
    design: AugmentedMatrix,
    pivots: tuple[tuple[int, int], ...],
    pivot_values: tuple[float, ...],
) -> list[str]:
    """Describe pivots below NEAR_ZERO_PIVOT_RTOL times the largest |entry|."""
    scale = float(np.max(np.abs(design.elements)))
    threshold = NEAR_ZERO_PIVOT_RTOL * scale
    return [
        f"pivot at row {r}, column {c} is {value:.3g}, below {threshold:.3g}; "
        f"it may be rounding residue but was treated as non-zero"
        for (r, c), value in zip(pivots, pivot_values)
        if abs(value) < threshold
    ]
