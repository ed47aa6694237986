"""
Shared compute infrastructure for pylinalg.

IMPORTANT: This is NOT where backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Verification tolerances and the near-zero pivot threshold
"""

from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import (
    ToleranceTier,
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    NEAR_ZERO_PIVOT_RTOL,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "CPU_FP64",
    "CPU_FP64_ILL_CONDITIONED",
    "NEAR_ZERO_PIVOT_RTOL",
    "select_tolerance",
]
