"""
CONTRACT: inline (source: src/camselect/selection/candidate.md)
ROLE: Per (device, profile) evaluation state for constraint selection.

INPUTS:
  - Topic: n/a  Type: CameraDevice, VideoProfile, ConstraintSet
OUTPUTS:
  - Topic: n/a  Type: ApplyOutcome, CaptureSettings

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - pure; one instance per candidate per selection call

FAILURE MODES:
  - constraint set not satisfiable -> outcome names the failing field

LOG EVENTS:
  - n/a (the selector logs outcomes)

TESTS:
  - tests/test_candidate.py must cover frame-rate narrowing across sets

CONTRACT DETAILS (inline from src/camselect/selection/candidate.md):
# Candidate settings

- width, height and aspectRatio are accept/reject filters against the
  native profile; the resolution is never changed.
- frameRate narrows the candidate's frame-rate range; the narrowed range
  carries into every later constraint set (basic, then advanced in order).
- apply_constraint_set never mutates the receiver. It returns an outcome
  holding the next state, or the unchanged state plus the failing name.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from camselect.constraints.constraint_set import ConstraintSet
from camselect.constraints.primitives import StringConstraint
from camselect.devices.catalog import CameraDevice, FacingMode, PixelFormat, VideoProfile
from camselect.selection.fitness import numeric_range_fitness, numeric_value_fitness, string_fitness
from camselect.selection.ranges import NumericRange


MAX_DIMENSION = 2**31 - 1
MAX_FRAME_RATE = 1000.0


@dataclass(frozen=True)
class CaptureSettings:
    device_id: str
    width: int
    height: int
    frame_rate_min: float
    frame_rate_max: float
    pixel_format: PixelFormat

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deviceId": self.device_id,
            "width": self.width,
            "height": self.height,
            "frameRateMin": self.frame_rate_min,
            "frameRateMax": self.frame_rate_max,
            "pixelFormat": self.pixel_format.value,
        }

    def __str__(self) -> str:
        return (
            f"CaptureSettings {{deviceId: {self.device_id}, "
            f"resolution: {self.width}x{self.height}, "
            f"format: {self.pixel_format.value}, "
            f"framerate: {self.frame_rate_min:g}-{self.frame_rate_max:g}}}"
        )


@dataclass(frozen=True)
class ApplyOutcome:
    candidate: "CandidateSettings"
    failed_constraint_name: Optional[str] = None

    @property
    def satisfied(self) -> bool:
        return self.failed_constraint_name is None


@dataclass(frozen=True)
class CandidateSettings:
    device_id: str
    group_id: str
    facing_mode: FacingMode
    profile: VideoProfile
    frame_rate_range: Tuple[float, float]
    constrained_width: NumericRange = NumericRange()
    constrained_height: NumericRange = NumericRange()
    constrained_aspect_ratio: NumericRange = NumericRange()
    constrained_frame_rate: NumericRange = NumericRange()

    @classmethod
    def from_device(cls, device: CameraDevice, profile: VideoProfile) -> "CandidateSettings":
        return cls(
            device_id=device.device_id,
            group_id=device.group_id,
            facing_mode=device.facing_mode,
            profile=profile,
            frame_rate_range=(float(profile.frame_rate_min), float(profile.frame_rate_max)),
        )

    @property
    def target_width(self) -> int:
        return self.profile.width

    @property
    def target_height(self) -> int:
        return self.profile.height

    @property
    def target_aspect_ratio(self) -> float:
        return self.profile.aspect_ratio

    def current_min_frame_rate(self) -> float:
        low = self.frame_rate_range[0]
        if self.constrained_frame_rate.min is not None:
            return max(self.constrained_frame_rate.min, low)
        return low

    def current_max_frame_rate(self) -> float:
        high = self.frame_rate_range[1]
        if self.constrained_frame_rate.max is not None:
            return min(self.constrained_frame_rate.max, high)
        return high

    def apply_constraint_set(self, constraint_set: ConstraintSet) -> ApplyOutcome:
        # resizeMode is not supported; resolutions are only ever filtered.
        if not NumericRange.from_constraint(constraint_set.width).contains(self.target_width):
            return ApplyOutcome(self, constraint_set.width.name)
        if not NumericRange.from_constraint(constraint_set.height).contains(self.target_height):
            return ApplyOutcome(self, constraint_set.height.name)
        if not NumericRange.from_constraint(constraint_set.aspect_ratio).contains(self.target_aspect_ratio):
            return ApplyOutcome(self, constraint_set.aspect_ratio.name)

        requested = NumericRange.from_constraint(constraint_set.frame_rate, 0.0, MAX_FRAME_RATE)
        current = NumericRange(self.current_min_frame_rate(), self.current_max_frame_rate())
        narrowed = requested.intersection(current)
        if narrowed.is_empty():
            return ApplyOutcome(self, constraint_set.frame_rate.name)
        frame_rate_range = (
            narrowed.min if narrowed.min is not None else self.frame_rate_range[0],
            narrowed.max if narrowed.max is not None else self.frame_rate_range[1],
        )

        updated = dataclasses.replace(
            self,
            frame_rate_range=frame_rate_range,
            constrained_width=self.constrained_width.intersection(
                NumericRange.from_constraint(constraint_set.width, 1, MAX_DIMENSION)
            ),
            constrained_height=self.constrained_height.intersection(
                NumericRange.from_constraint(constraint_set.height, 1, MAX_DIMENSION)
            ),
            constrained_aspect_ratio=self.constrained_aspect_ratio.intersection(
                NumericRange.from_constraint(constraint_set.aspect_ratio, 0.0, math.inf)
            ),
            constrained_frame_rate=self.constrained_frame_rate.intersection(
                NumericRange.from_constraint(constraint_set.frame_rate, 0.0, MAX_FRAME_RATE)
            ),
        )
        return ApplyOutcome(updated)

    def fitness(self, constraint_set: ConstraintSet) -> float:
        return self.device_fitness(constraint_set) + self.profile_fitness(constraint_set)

    def device_fitness(self, constraint_set: ConstraintSet) -> float:
        return (
            string_fitness(self.device_id, constraint_set.device_id)
            + string_fitness(self.group_id, constraint_set.group_id)
            + string_fitness(self.facing_mode.constraint_value(), constraint_set.facing_mode)
        )

    def profile_fitness(self, constraint_set: ConstraintSet) -> float:
        return (
            numeric_value_fitness(constraint_set.width, self.target_width)
            + numeric_value_fitness(constraint_set.height, self.target_height)
            + numeric_value_fitness(constraint_set.aspect_ratio, self.target_aspect_ratio)
            + numeric_range_fitness(
                constraint_set.frame_rate,
                self.current_min_frame_rate(),
                self.current_max_frame_rate(),
            )
        )

    def get_setting(self) -> CaptureSettings:
        return CaptureSettings(
            device_id=self.device_id,
            width=self.target_width,
            height=self.target_height,
            frame_rate_min=self.frame_rate_range[0],
            frame_rate_max=self.frame_rate_range[1],
            pixel_format=self.profile.pixel_format,
        )


def facing_mode_satisfies_constraint(facing_mode: FacingMode, constraint: StringConstraint) -> bool:
    value = facing_mode.constraint_value()
    if not value:
        return not constraint.has_exact()
    return constraint.matches(value)


def device_satisfies_constraint_set(device: CameraDevice, constraint_set: ConstraintSet) -> Optional[str]:
    """Return the name of the first identity constraint the device violates."""
    if not constraint_set.device_id.matches(device.device_id):
        return constraint_set.device_id.name
    if not constraint_set.group_id.matches(device.group_id):
        return constraint_set.group_id.name
    if not facing_mode_satisfies_constraint(device.facing_mode, constraint_set.facing_mode):
        return constraint_set.facing_mode.name
    return None
