"""
Tolerance tiers for numerical verification.

Row reduction itself never uses a tolerance: pivots are chosen by exact
comparison to zero. Tolerances only apply when *checking* a result
against its equations (residuals), and to the near-zero pivot diagnostic.

Used by the test suite, LinearEquation.is_satisfied_by() and the CPU
backend's pivot diagnostic.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def close(self, actual: float, expected: float) -> bool:
        """True when |actual - expected| <= atol + rtol * |expected|."""
        return abs(actual - expected) <= self.atol + self.rtol * abs(expected)


# Well-conditioned double precision problems
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision',
)

# Ill-conditioned problems, where elimination loses several digits
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned',
)

# A pivot smaller than this fraction of the largest input magnitude is
# probably rounding residue. Reported as a warning only; the pivot test
# stays exact.
NEAR_ZERO_PIVOT_RTOL = 1e-12


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select appropriate tolerance tier for a verification."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
