"""
CONTRACT: inline (source: src/camselect/selection/ranges.md)
ROLE: Numeric interval algebra over optional bounds.

INPUTS:
  - Topic: n/a  Type: LongConstraint | DoubleConstraint
OUTPUTS:
  - Topic: n/a  Type: NumericRange

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - pure; O(1)

FAILURE MODES:
  - n/a

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_ranges_and_fitness.py must cover clamping and emptiness

CONTRACT DETAILS (inline from src/camselect/selection/ranges.md):
# Numeric ranges

- A range is Empty, Unbounded, or bounded on one or both sides.
- Emptiness is an explicit state; a bounded range is also empty when
  max < min after an intersection.
- A constraint clamped to native bounds can only tighten them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from camselect.constraints.primitives import (
    NumericConstraint,
    constraint_has_max,
    constraint_has_min,
    constraint_max,
    constraint_min,
)


@dataclass(frozen=True)
class NumericRange:
    min: Optional[float] = None
    max: Optional[float] = None
    empty: bool = False

    @classmethod
    def unbounded(cls) -> "NumericRange":
        return cls()

    @classmethod
    def empty_set(cls) -> "NumericRange":
        return cls(empty=True)

    @classmethod
    def from_value(cls, value: float) -> "NumericRange":
        return cls(value, value)

    @classmethod
    def from_constraint(
        cls,
        constraint: NumericConstraint,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
    ) -> "NumericRange":
        """Range requested by a constraint, optionally clamped to [lower, upper].

        Without bounds the constraint's effective min/max are taken as is.
        With bounds, a request that cannot overlap them is empty, and a
        requested bound outside them is dropped so the native bound applies.
        """
        has_min = constraint_has_min(constraint)
        has_max = constraint_has_max(constraint)
        low = constraint_min(constraint) if has_min else None
        high = constraint_max(constraint) if has_max else None
        if lower is None and upper is None:
            return cls(low, high)

        if (high is not None and lower is not None and high < lower) or (
            low is not None and upper is not None and low > upper
        ):
            return cls.empty_set()
        if low is not None and lower is not None and low < lower:
            low = None
        if high is not None and upper is not None and high > upper:
            high = None
        return cls(low, high)

    @property
    def is_unbounded(self) -> bool:
        return not self.empty and self.min is None and self.max is None

    def is_empty(self) -> bool:
        if self.empty:
            return True
        return self.min is not None and self.max is not None and self.max < self.min

    def intersection(self, other: "NumericRange") -> "NumericRange":
        if self.empty or other.empty:
            return NumericRange.empty_set()
        low = self.min
        if other.min is not None:
            low = other.min if low is None else max(low, other.min)
        high = self.max
        if other.max is not None:
            high = other.max if high is None else min(high, other.max)
        return NumericRange(low, high)

    def contains(self, value: float) -> bool:
        if self.empty:
            return False
        return (self.min is None or value >= self.min) and (self.max is None or value <= self.max)

    def __str__(self) -> str:
        if self.empty:
            return "[empty]"
        low = "-inf" if self.min is None else f"{self.min:g}"
        high = "inf" if self.max is None else f"{self.max:g}"
        return f"[{low}, {high}]"
