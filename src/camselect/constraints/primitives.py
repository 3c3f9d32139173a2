"""
CONTRACT: inline (source: src/camselect/constraints/primitives.md)
ROLE: Typed constraint values (integer, real, string set, boolean).

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - pure; O(1) except string membership

FAILURE MODES:
  - n/a (every operation is total)

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_constraint_primitives.py must cover epsilon matching

CONTRACT DETAILS (inline from src/camselect/constraints/primitives.md):
# Constraint primitives

- Numeric constraints carry optional min, max, exact and ideal.
- String constraints carry lists of acceptable exact and ideal values.
- Boolean constraints carry optional exact and ideal.
- exact acts as both the effective min and the effective max.
- Real comparisons tolerate CONSTRAINT_EPSILON to absorb formatting
  round-trip error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


# Observed error of doubles that went through a decimal string and back.
CONSTRAINT_EPSILON = 0.00001


def _emit_named(parts: List[str], name: str, value: Any) -> None:
    if value is None:
        return
    parts.append(f"{name}: {value}")


@dataclass
class LongConstraint:
    name: str
    min: Optional[int] = None
    max: Optional[int] = None
    exact: Optional[int] = None
    ideal: Optional[int] = None

    def is_constrained(self) -> bool:
        return self.min is not None or self.max is not None or self.exact is not None or self.ideal is not None

    def matches(self, value: int) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        if self.exact is not None and value != self.exact:
            return False
        return True

    def has_min(self) -> bool:
        return self.min is not None

    def has_max(self) -> bool:
        return self.max is not None

    def has_exact(self) -> bool:
        return self.exact is not None

    def has_ideal(self) -> bool:
        return self.ideal is not None

    def has_mandatory(self) -> bool:
        return self.has_min() or self.has_max() or self.has_exact()

    def reset(self) -> None:
        self.min = None
        self.max = None
        self.exact = None
        self.ideal = None

    def describe(self) -> str:
        parts: List[str] = []
        _emit_named(parts, "min", self.min)
        _emit_named(parts, "max", self.max)
        _emit_named(parts, "exact", self.exact)
        _emit_named(parts, "ideal", self.ideal)
        return "{" + ", ".join(parts) + "}"

    def __str__(self) -> str:
        return self.describe()


@dataclass
class DoubleConstraint:
    name: str
    min: Optional[float] = None
    max: Optional[float] = None
    exact: Optional[float] = None
    ideal: Optional[float] = None

    def is_constrained(self) -> bool:
        return self.min is not None or self.max is not None or self.exact is not None or self.ideal is not None

    def matches(self, value: float) -> bool:
        if self.min is not None and value < self.min - CONSTRAINT_EPSILON:
            return False
        if self.max is not None and value > self.max + CONSTRAINT_EPSILON:
            return False
        if self.exact is not None and abs(float(value) - self.exact) > CONSTRAINT_EPSILON:
            return False
        return True

    def has_min(self) -> bool:
        return self.min is not None

    def has_max(self) -> bool:
        return self.max is not None

    def has_exact(self) -> bool:
        return self.exact is not None

    def has_ideal(self) -> bool:
        return self.ideal is not None

    def has_mandatory(self) -> bool:
        return self.has_min() or self.has_max() or self.has_exact()

    def reset(self) -> None:
        self.min = None
        self.max = None
        self.exact = None
        self.ideal = None

    def describe(self) -> str:
        parts: List[str] = []
        _emit_named(parts, "min", self.min)
        _emit_named(parts, "max", self.max)
        _emit_named(parts, "exact", self.exact)
        _emit_named(parts, "ideal", self.ideal)
        return "{" + ", ".join(parts) + "}"

    def __str__(self) -> str:
        return self.describe()


@dataclass
class StringConstraint:
    """String-valued constraint; no min or max, but several acceptable values."""

    name: str
    exact: List[str] = field(default_factory=list)
    ideal: List[str] = field(default_factory=list)

    def is_constrained(self) -> bool:
        return bool(self.exact) or bool(self.ideal)

    def matches(self, value: str) -> bool:
        if not self.exact:
            return True
        return value in self.exact

    def has_min(self) -> bool:
        return False

    def has_max(self) -> bool:
        return False

    def has_exact(self) -> bool:
        return bool(self.exact)

    def has_ideal(self) -> bool:
        return bool(self.ideal)

    def has_mandatory(self) -> bool:
        return self.has_exact()

    def reset(self) -> None:
        self.exact = []
        self.ideal = []

    def describe(self) -> str:
        parts: List[str] = []
        if self.ideal:
            parts.append("ideal: [" + ", ".join(f'"{value}"' for value in self.ideal) + "]")
        if self.exact:
            parts.append("exact: [" + ", ".join(f'"{value}"' for value in self.exact) + "]")
        return "{" + ", ".join(parts) + "}"

    def __str__(self) -> str:
        return self.describe()


@dataclass
class BooleanConstraint:
    name: str
    exact: Optional[bool] = None
    ideal: Optional[bool] = None

    def is_constrained(self) -> bool:
        return self.exact is not None or self.ideal is not None

    def matches(self, value: bool) -> bool:
        if self.exact is not None and self.exact != value:
            return False
        return True

    def has_min(self) -> bool:
        return False

    def has_max(self) -> bool:
        return False

    def has_exact(self) -> bool:
        return self.exact is not None

    def has_ideal(self) -> bool:
        return self.ideal is not None

    def has_mandatory(self) -> bool:
        return self.has_exact()

    def reset(self) -> None:
        self.exact = None
        self.ideal = None

    def describe(self) -> str:
        parts: List[str] = []
        if self.exact is not None:
            parts.append(f"exact: {'true' if self.exact else 'false'}")
        if self.ideal is not None:
            parts.append(f"ideal: {'true' if self.ideal else 'false'}")
        return "{" + ", ".join(parts) + "}"

    def __str__(self) -> str:
        return self.describe()


Constraint = Union[LongConstraint, DoubleConstraint, StringConstraint, BooleanConstraint]
NumericConstraint = Union[LongConstraint, DoubleConstraint]


def constraint_has_min(constraint: NumericConstraint) -> bool:
    """True when the constraint bounds values from below (min or exact)."""
    return constraint.has_min() or constraint.has_exact()


def constraint_has_max(constraint: NumericConstraint) -> bool:
    """True when the constraint bounds values from above (max or exact)."""
    return constraint.has_max() or constraint.has_exact()


def constraint_min(constraint: NumericConstraint) -> float:
    if constraint.exact is not None:
        return constraint.exact
    if constraint.min is None:
        raise ValueError(f"constraint '{constraint.name}' has no lower bound")
    return constraint.min


def constraint_max(constraint: NumericConstraint) -> float:
    if constraint.exact is not None:
        return constraint.exact
    if constraint.max is None:
        raise ValueError(f"constraint '{constraint.name}' has no upper bound")
    return constraint.max
