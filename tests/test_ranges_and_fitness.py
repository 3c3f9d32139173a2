import math
import unittest

from camselect.constraints.primitives import DoubleConstraint, LongConstraint, StringConstraint
from camselect.selection.fitness import (
    numeric_constraint_fitness_distance,
    numeric_range_fitness,
    numeric_value_fitness,
    square_euclidean_distance,
    string_fitness,
)
from camselect.selection.ranges import NumericRange


class NumericRangeTests(unittest.TestCase):
    def test_exact_gives_point_range(self) -> None:
        value_range = NumericRange.from_constraint(LongConstraint("width", exact=5))
        self.assertEqual(value_range, NumericRange(5, 5))
        self.assertTrue(value_range.contains(5))
        self.assertFalse(value_range.contains(6))

    def test_unconstrained_is_unbounded(self) -> None:
        value_range = NumericRange.from_constraint(DoubleConstraint("frameRate", ideal=30.0))
        self.assertTrue(value_range.is_unbounded)
        self.assertTrue(value_range.contains(-1e9))
        self.assertTrue(value_range.contains(1e9))

    def test_open_bounds(self) -> None:
        value_range = NumericRange(min=10)
        self.assertTrue(value_range.contains(10))
        self.assertTrue(value_range.contains(math.inf))
        self.assertFalse(value_range.contains(9.9))
        self.assertFalse(value_range.is_unbounded)

    def test_intersection_is_commutative_and_idempotent(self) -> None:
        first = NumericRange(1, 10)
        second = NumericRange(min=5)
        self.assertEqual(first.intersection(second), second.intersection(first))
        self.assertEqual(first.intersection(second), NumericRange(5, 10))
        self.assertEqual(first.intersection(first), first)
        self.assertEqual(NumericRange().intersection(first), first)

    def test_disjoint_intersection_is_empty(self) -> None:
        result = NumericRange(1, 5).intersection(NumericRange(6, 9))
        self.assertTrue(result.is_empty())
        self.assertFalse(result.contains(5))

    def test_explicit_empty_propagates(self) -> None:
        empty = NumericRange.empty_set()
        self.assertTrue(empty.is_empty())
        self.assertFalse(empty.is_unbounded)
        self.assertTrue(NumericRange().intersection(empty).is_empty())
        self.assertTrue(empty.intersection(NumericRange(1, 2)).is_empty())
        self.assertEqual(str(empty), "[empty]")

    def test_clamp_drops_requests_outside_native_bounds(self) -> None:
        constraint = DoubleConstraint("frameRate", min=-5.0, max=2000.0)
        self.assertTrue(NumericRange.from_constraint(constraint, 0.0, 1000.0).is_unbounded)
        constraint = LongConstraint("width", min=640, max=1920)
        self.assertEqual(NumericRange.from_constraint(constraint, 1, 4096), NumericRange(640, 1920))

    def test_clamp_detects_impossible_requests(self) -> None:
        below = DoubleConstraint("frameRate", max=-1.0)
        above = DoubleConstraint("frameRate", min=2000.0)
        self.assertTrue(NumericRange.from_constraint(below, 0.0, 1000.0).is_empty())
        self.assertTrue(NumericRange.from_constraint(above, 0.0, 1000.0).is_empty())

    def test_str(self) -> None:
        self.assertEqual(str(NumericRange(min=1.5)), "[1.5, inf]")
        self.assertEqual(str(NumericRange.from_value(3)), "[3, 3]")


class FitnessTests(unittest.TestCase):
    def test_distance_is_relative(self) -> None:
        self.assertEqual(numeric_constraint_fitness_distance(640, 1280), 0.5)
        self.assertEqual(numeric_constraint_fitness_distance(30.0, 30.0 + 1e-6), 0.0)

    def test_value_fitness_grows_with_gap(self) -> None:
        constraint = LongConstraint("width", ideal=1280)
        self.assertEqual(numeric_value_fitness(constraint, 1280), 0.0)
        near = numeric_value_fitness(constraint, 1200)
        far = numeric_value_fitness(constraint, 640)
        self.assertGreater(near, 0.0)
        self.assertGreater(far, near)
        self.assertEqual(numeric_value_fitness(LongConstraint("width"), 1), 0.0)

    def test_range_fitness(self) -> None:
        constraint = DoubleConstraint("frameRate", ideal=60.0)
        self.assertEqual(numeric_range_fitness(constraint, 5.0, 30.0), 0.5)
        self.assertEqual(numeric_range_fitness(constraint, 30.0, 90.0), 0.0)
        self.assertEqual(numeric_range_fitness(DoubleConstraint("frameRate", ideal=15.0), 30.0, 60.0), 0.5)
        self.assertEqual(numeric_range_fitness(DoubleConstraint("frameRate"), 1.0, 2.0), 0.0)

    def test_string_fitness(self) -> None:
        constraint = StringConstraint("facingMode", ideal=["user", "left"])
        self.assertEqual(string_fitness("left", constraint), 0.0)
        self.assertEqual(string_fitness("environment", constraint), 1.0)
        self.assertEqual(string_fitness("environment", StringConstraint("facingMode", exact=["user"])), 0.0)

    def test_square_euclidean_distance(self) -> None:
        self.assertEqual(square_euclidean_distance(1280, 720, 640, 480), 640 * 640 + 240 * 240)
        self.assertEqual(square_euclidean_distance(1, 1, 1, 1), 0)


if __name__ == "__main__":
    unittest.main()
