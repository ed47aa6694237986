"""
Result envelope returned by every pylinalg backend.

A backend reduces or solves something and hands back its payload wrapped
in a Result, together with structured metadata, phase timings and any
diagnostics it raised. The user-facing solution classes read from this
envelope rather than from backend internals.

Layout:
    params        payload defined by the domain (e.g. SystemParams)
    info          method name, rank, pivot columns, consistency, ...
    timing        Timer.result() output, or None when not measured
    backend_name  which backend produced it
    warnings      diagnostic messages, also emitted via warnings.warn
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen backend output.

    Type Parameters:
        P: Payload type

    Examples:
        >>> Result(
        ...     params=SystemParams(...),
        ...     info={'method': 'gauss_jordan', 'rank': 2, 'consistent': True},
        ...     timing={'total_seconds': 0.001, 'reduction': 0.0008},
        ...     backend_name='cpu_rref',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if some diagnostic message contains substring."""
        return any(substring in message for message in self.warnings)
