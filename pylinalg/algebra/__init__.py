"""
Algebraic helper routines and linear equations.

Public API:
    linear_combination(p, q)       - Σ p[i]·q[i] over two equal-length sequences
    LinearEquation                 - immutable c · x = k
    LinearEquation.parse(text)     - equation from text, e.g. "2x - y = 4"
    parse_system(texts)            - equations over a shared set of unknowns
"""

from pylinalg.algebra.vector_ops import linear_combination
from pylinalg.algebra.linear_equation import LinearEquation, parse_system

__all__ = [
    "linear_combination",
    "LinearEquation",
    "parse_system",
]
