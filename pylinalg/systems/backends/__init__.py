"""
Linear system backends.

Available backends:
    CPURREFBackend: CPU reference implementation using Gauss-Jordan elimination
"""

from pylinalg.systems.backends.cpu import CPURREFBackend

__all__ = [
    "CPURREFBackend",
]
