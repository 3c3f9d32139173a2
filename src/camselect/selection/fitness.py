"""
CONTRACT: inline (source: src/camselect/selection/fitness.md)
ROLE: Fitness distances between achievable values and ideal preferences.

INPUTS:
  - Topic: n/a  Type: Constraint, value
OUTPUTS:
  - Topic: n/a  Type: float (>= 0)

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - pure; O(1) except string membership

FAILURE MODES:
  - n/a

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_ranges_and_fitness.py must cover monotonic growth

CONTRACT DETAILS (inline from src/camselect/selection/fitness.md):
# Fitness distance

- 0 means no preference or a perfect match.
- Numeric distances are relative: |a - b| / max(|a|, |b|).
- A string preference is all-or-nothing (0 or 1).
"""

from __future__ import annotations

from camselect.constraints.primitives import CONSTRAINT_EPSILON, NumericConstraint, StringConstraint


def numeric_constraint_fitness_distance(value1: float, value2: float) -> float:
    delta = abs(value1 - value2)
    if delta <= CONSTRAINT_EPSILON:
        return 0.0
    return delta / max(abs(value1), abs(value2))


def numeric_value_fitness(constraint: NumericConstraint, value: float) -> float:
    if constraint.ideal is None:
        return 0.0
    return numeric_constraint_fitness_distance(value, constraint.ideal)


def numeric_range_fitness(constraint: NumericConstraint, low: float, high: float) -> float:
    if constraint.ideal is None:
        return 0.0
    ideal = constraint.ideal
    if ideal < low:
        return numeric_constraint_fitness_distance(low, ideal)
    if ideal > high:
        return numeric_constraint_fitness_distance(high, ideal)
    return 0.0


def string_fitness(value: str, constraint: StringConstraint) -> float:
    if not constraint.has_ideal():
        return 0.0
    return 0.0 if value in constraint.ideal else 1.0


def square_euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    x = x1 - x2
    y = y1 - y2
    return x * x + y * y
