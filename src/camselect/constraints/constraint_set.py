"""
CONTRACT: inline (source: src/camselect/constraints/constraint_set.md)
ROLE: Named aggregate of track constraints (basic + advanced).

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - built once per selection call; read-only afterwards

FAILURE MODES:
  - n/a

LOG EVENTS:
  - module=selection.selector, event=selection_started, payload keys=constraints

TESTS:
  - tests/test_constraint_primitives.py must cover aggregate checks and lookup

CONTRACT DETAILS (inline from src/camselect/constraints/constraint_set.md):
# Constraint sets

- Attribute names are snake_case; every constraint keeps its camelCase
  wire name, which is what gets reported as the failed constraint.
- all_constraints() enumerates fields in declared order for aggregate
  checks and name lookup.
- Naked values mean "ideal" in the basic set and "exact" inside advanced
  sets; that distinction is applied by the parser, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from camselect.constraints.primitives import (
    BooleanConstraint,
    Constraint,
    DoubleConstraint,
    LongConstraint,
    StringConstraint,
)


def _long(name: str) -> Any:
    return field(default_factory=lambda: LongConstraint(name))


def _double(name: str) -> Any:
    return field(default_factory=lambda: DoubleConstraint(name))


def _string(name: str) -> Any:
    return field(default_factory=lambda: StringConstraint(name))


def _boolean(name: str) -> Any:
    return field(default_factory=lambda: BooleanConstraint(name))


@dataclass
class ConstraintSet:
    width: LongConstraint = _long("width")
    height: LongConstraint = _long("height")
    aspect_ratio: DoubleConstraint = _double("aspectRatio")
    frame_rate: DoubleConstraint = _double("frameRate")
    facing_mode: StringConstraint = _string("facingMode")
    resize_mode: StringConstraint = _string("resizeMode")
    sample_rate: LongConstraint = _long("sampleRate")
    sample_size: LongConstraint = _long("sampleSize")
    echo_cancellation: BooleanConstraint = _boolean("echoCancellation")
    auto_gain_control: BooleanConstraint = _boolean("autoGainControl")
    noise_suppression: BooleanConstraint = _boolean("noiseSuppression")
    latency: DoubleConstraint = _double("latency")
    channel_count: LongConstraint = _long("channelCount")
    device_id: StringConstraint = _string("deviceId")
    group_id: StringConstraint = _string("groupId")
    background_blur: BooleanConstraint = _boolean("backgroundBlur")
    display_surface: StringConstraint = _string("displaySurface")
    goog_echo_cancellation: BooleanConstraint = _boolean("googEchoCancellation")
    goog_auto_gain_control: BooleanConstraint = _boolean("googAutoGainControl")
    goog_noise_suppression: BooleanConstraint = _boolean("googNoiseSuppression")
    goog_highpass_filter: BooleanConstraint = _boolean("googHighpassFilter")
    goog_audio_mirroring: BooleanConstraint = _boolean("googAudioMirroring")
    screen_capture_mode: StringConstraint = _string("screenCaptureMode")
    screen_capture_display_id: LongConstraint = _long("screenCaptureDisplayId")
    screen_capture_mission_id: StringConstraint = _string("screenCaptureMissionId")
    screen_capture_window_filter: StringConstraint = _string("screenCaptureWindowFilter")
    screen_capture_audio_filter: StringConstraint = _string("screenCaptureAudioFilter")
    screen_capture_skip_privacy_mode: StringConstraint = _string("screenCaptureSkipPrivacyMode")
    screen_capture_auto_rotation: BooleanConstraint = _boolean("screenCaptureAutoRotation")

    def all_constraints(self) -> List[Constraint]:
        return [
            self.width,
            self.height,
            self.aspect_ratio,
            self.frame_rate,
            self.facing_mode,
            self.resize_mode,
            self.sample_rate,
            self.sample_size,
            self.echo_cancellation,
            self.auto_gain_control,
            self.noise_suppression,
            self.latency,
            self.channel_count,
            self.device_id,
            self.group_id,
            self.background_blur,
            self.display_surface,
            self.goog_echo_cancellation,
            self.goog_auto_gain_control,
            self.goog_noise_suppression,
            self.goog_highpass_filter,
            self.goog_audio_mirroring,
            self.screen_capture_mode,
            self.screen_capture_display_id,
            self.screen_capture_mission_id,
            self.screen_capture_window_filter,
            self.screen_capture_audio_filter,
            self.screen_capture_skip_privacy_mode,
            self.screen_capture_auto_rotation,
        ]

    def by_name(self) -> Dict[str, Constraint]:
        return {constraint.name: constraint for constraint in self.all_constraints()}

    def get(self, name: str) -> Optional[Constraint]:
        """Look up a constraint by its wire name."""
        for constraint in self.all_constraints():
            if constraint.name == name:
                return constraint
        return None

    def is_constrained(self) -> bool:
        return any(constraint.is_constrained() for constraint in self.all_constraints())

    def has_min(self) -> bool:
        return any(constraint.has_min() for constraint in self.all_constraints())

    def has_exact(self) -> bool:
        return any(constraint.has_exact() for constraint in self.all_constraints())

    def describe(self) -> str:
        return ", ".join(
            f"{constraint.name}: {constraint.describe()}"
            for constraint in self.all_constraints()
            if constraint.is_constrained()
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass
class Constraints:
    basic: ConstraintSet = field(default_factory=ConstraintSet)
    advanced: Tuple[ConstraintSet, ...] = ()

    def is_constrained(self) -> bool:
        return self.basic.is_constrained() or len(self.advanced) > 0

    def describe(self) -> str:
        if not self.is_constrained():
            return ""
        parts: List[str] = []
        basic = self.basic.describe()
        if basic:
            parts.append(basic)
        if self.advanced:
            parts.append("advanced: [" + ", ".join("{" + item.describe() + "}" for item in self.advanced) + "]")
        return "{" + ", ".join(parts) + "}"

    def __str__(self) -> str:
        return self.describe()
