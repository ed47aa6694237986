"""
Linear equations.

A LinearEquation represents c1*x1 + c2*x2 + ... + cn*xn = k as an
immutable tuple of coefficients and a constant, optionally with variable
names. Equations are the rows from which an AugmentedMatrix is built.

Equations can be written directly or parsed from text:
    LinearEquation([1, 1], 3)
    LinearEquation.parse("2x - y = 4")
    LinearEquation.parse("x = 2y + 1", variables=['x', 'y', 'z'])
    parse_system("x + y = 10, x - y = 2")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import check_array, check_1d, check_finite, check_scalar
from pylinalg.core.compute.tolerances import ToleranceTier, CPU_FP64
from pylinalg.algebra.vector_ops import linear_combination


_TERM = re.compile(
    r"""
    \s*(?P<sign>[+-])?
    \s*(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)?
    \s*(?P<star>\*)?
    \s*(?P<name>[A-Za-z_]\w*)?
    \s*
    """,
    re.VERBOSE,
)
_NAME = re.compile(r"[A-Za-z_]\w*\Z")
_SYSTEM_SEPARATORS = re.compile(r"[,;\n]")


@dataclass(frozen=True)
class LinearEquation:
    """
    Immutable linear equation c · x = constant.

    Attributes:
        coefficients: One coefficient per unknown, in order
        constant: Right-hand side
        variables: Optional unknown names, same length as coefficients
    """
    coefficients: tuple[float, ...]
    constant: float
    variables: tuple[str, ...] | None = None

    def __post_init__(self):
        coefficients = check_array(self.coefficients, 'coefficients')
        check_1d(coefficients, 'coefficients')
        check_finite(coefficients, 'coefficients')
        if coefficients.size == 0:
            raise ValidationError("coefficients: an equation needs at least one unknown")
        object.__setattr__(self, 'coefficients', tuple(float(v) for v in coefficients))

        constant = check_scalar(self.constant, 'constant')
        object.__setattr__(self, 'constant', constant)

        if self.variables is not None:
            object.__setattr__(self, 'variables', _check_names(self.variables, len(coefficients)))

    # === Construction ===

    @classmethod
    def parse(
        cls,
        text: str,
        variables: Sequence[str] | None = None,
    ) -> LinearEquation:
        """
        Parse an equation such as "2x + 3*y - z = 5".

        Terms may appear on either side of '='. A term is an optional
        sign, an optional number, an optional '*', and an optional
        variable name; repeated variables are summed.

        Args:
            text: Equation text with exactly one '='
            variables: Unknowns, in coefficient order. Defaults to the
                names found in text, sorted. Names listed but absent from
                text get coefficient 0.

        Raises:
            ValidationError: If text is malformed, or mentions a variable
                that is not in variables
        """
        left_terms, left_constant, right_terms, right_constant = _parse_equation(text)

        found = set(left_terms) | set(right_terms)
        if variables is None:
            names = tuple(sorted(found))
            if not names:
                raise ValidationError(f"equation: no variable found in {text!r}")
        else:
            names = _check_names(variables, len(variables))
            unknown = sorted(found - set(names))
            if unknown:
                raise ValidationError(
                    f"equation: variables {unknown} in {text!r} are not in {list(names)}"
                )

        coefficients = tuple(
            left_terms.get(name, 0.0) - right_terms.get(name, 0.0) for name in names
        )
        return cls(coefficients, right_constant - left_constant, names)

    # === Properties ===

    @property
    def n_unknowns(self) -> int:
        return len(self.coefficients)

    @property
    def variable_names(self) -> tuple[str, ...]:
        """Given names, or x1 .. xn when the equation is unnamed."""
        if self.variables is not None:
            return self.variables
        return tuple(f"x{i}" for i in range(1, self.n_unknowns + 1))

    # === Evaluation ===

    def evaluate(self, values: ArrayLike) -> float:
        """Left-hand side c · values."""
        return linear_combination(self.coefficients, values)

    def residual(self, values: ArrayLike) -> float:
        """c · values - constant."""
        return self.evaluate(values) - self.constant

    def is_satisfied_by(
        self,
        values: ArrayLike,
        tolerance: ToleranceTier = CPU_FP64,
    ) -> bool:
        """True when c · values matches the constant within tolerance."""
        return tolerance.close(self.evaluate(values), self.constant)

    def __str__(self) -> str:
        lhs = _format_terms(self.coefficients, self.variable_names)
        return f"{lhs} = {self.constant:g}"


def parse_system(
    equations: str | Iterable[str],
    variables: Sequence[str] | None = None,
) -> tuple[LinearEquation, ...]:
    """
    Parse several equations over a shared set of unknowns.

    Args:
        equations: Iterable of equation strings, or one string with
            equations separated by ',', ';' or newlines
        variables: Unknowns in coefficient order. Defaults to every name
            found in any equation, sorted. An equation without variables,
            such as "0 = 1", is a row of zero coefficients.

    Returns:
        Equations with identical variables, ready for
        AugmentedMatrix.from_equations()

    Example:
        >>> parse_system("x + y = 10, x - y = 2")
    """
    if isinstance(equations, str):
        texts = [t for t in _SYSTEM_SEPARATORS.split(equations) if t.strip()]
    else:
        texts = list(equations)
    if not texts:
        raise ValidationError("equations: no equation given")

    if variables is None:
        names: set[str] = set()
        for text in texts:
            left_terms, _, right_terms, _ = _parse_equation(text)
            names.update(left_terms)
            names.update(right_terms)
        if not names:
            raise ValidationError(f"equations: no variable found in {texts!r}")
        variables = sorted(names)

    return tuple(LinearEquation.parse(text, variables=variables) for text in texts)


def _parse_equation(text: str) -> tuple[dict[str, float], float, dict[str, float], float]:
    """Terms and constants of both sides of one equation."""
    sides = text.split('=')
    if len(sides) != 2:
        raise ValidationError(
            f"equation: expected exactly one '=', got {len(sides) - 1} in {text!r}"
        )
    left_terms, left_constant = _parse_side(sides[0], text)
    right_terms, right_constant = _parse_side(sides[1], text)
    return left_terms, left_constant, right_terms, right_constant


def _parse_side(side: str, text: str) -> tuple[dict[str, float], float]:
    """Sum the terms of one side into per-variable coefficients and a constant."""
    if not side.strip():
        raise ValidationError(f"equation: empty side in {text!r}")

    terms: dict[str, float] = {}
    constant = 0.0
    pos = 0
    first = True
    while pos < len(side):
        match = _TERM.match(side, pos)
        sign, number, star, name = match.group('sign', 'number', 'star', 'name')
        if match.end() == pos or (number is None and name is None) or (
            sign is None and not first
        ) or (star is not None and (number is None or name is None)):
            raise ValidationError(
                f"equation: cannot parse {side[pos:].strip()!r} in {text!r}"
            )

        value = float(number) if number is not None else 1.0
        if sign == '-':
            value = -value
        if name is None:
            constant += value
        else:
            terms[name] = terms.get(name, 0.0) + value

        pos = match.end()
        first = False

    return terms, constant


def _check_names(variables: Any, expected: int) -> tuple[str, ...]:
    names = tuple(variables)
    if len(names) != expected:
        raise ValidationError(
            f"variables: expected {expected} names, got {len(names)}"
        )
    for name in names:
        if not isinstance(name, str) or not _NAME.match(name):
            raise ValidationError(f"variables: {name!r} is not a valid name")
    if len(set(names)) != len(names):
        raise ValidationError(f"variables: duplicate names in {list(names)}")
    return names


def _format_terms(coefficients: Sequence[float], names: Sequence[str]) -> str:
    parts: list[str] = []
    for coefficient, name in zip(coefficients, names):
        if coefficient == 0:
            continue
        magnitude = abs(coefficient)
        term = name if magnitude == 1 else f"{magnitude:g}{name}"
        if not parts:
            parts.append(term if coefficient > 0 else f"-{term}")
        else:
            parts.append(f"+ {term}" if coefficient > 0 else f"- {term}")
    return " ".join(parts) if parts else "0"
