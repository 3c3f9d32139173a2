"""
CONTRACT: inline (source: src/camselect/constraints/options.md)
ROLE: Read audio processing and screen capture options out of constraints.

INPUTS:
  - Topic: n/a  Type: Constraints
OUTPUTS:
  - Topic: n/a  Type: AudioOptions | ScreenCaptureOptions
  - Topic: stdout  Type: options JSON (main.run --options)

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - once per request

FAILURE MODES:
  - non-numeric id in an id list -> raise ValueError

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_constraint_parsing.py must cover exact-over-ideal precedence
  - tests/test_config_and_run.py must cover the --options output

CONTRACT DETAILS (inline from src/camselect/constraints/options.md):
# Options

- Only the basic constraint set is consulted; advanced sets are ignored.
- exact wins over ideal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from camselect.constraints.constraint_set import Constraints
from camselect.constraints.primitives import StringConstraint


@dataclass
class AudioOptions:
    echo_cancellation: Optional[bool] = None
    auto_gain_control: Optional[bool] = None
    noise_suppression: Optional[bool] = None


@dataclass
class ScreenCaptureOptions:
    width: Optional[int] = None
    height: Optional[int] = None
    capture_mode: Optional[str] = None
    display_id: Optional[int] = None
    mission_ids: List[int] = field(default_factory=list)
    filtered_window_ids: List[int] = field(default_factory=list)
    filtered_audio_contents: List[str] = field(default_factory=list)
    skip_privacy_mode_window_ids: List[int] = field(default_factory=list)
    auto_rotation: Optional[bool] = None


def _preferred(constraint: Any) -> Any:
    if constraint.has_exact():
        return constraint.exact
    if constraint.has_ideal():
        return constraint.ideal
    return None


def _preferred_strings(constraint: StringConstraint) -> List[str]:
    values = _preferred(constraint)
    return list(values) if values else []


def _as_ids(constraint: StringConstraint) -> List[int]:
    ids: List[int] = []
    for value in _preferred_strings(constraint):
        try:
            ids.append(int(value))
        except ValueError as exc:
            raise ValueError(f"{constraint.name}: '{value}' is not a numeric id") from exc
    return ids


def audio_options_from_constraints(constraints: Optional[Constraints]) -> AudioOptions:
    options = AudioOptions()
    if constraints is None:
        return options
    basic = constraints.basic
    options.echo_cancellation = _preferred(basic.echo_cancellation)
    options.auto_gain_control = _preferred(basic.auto_gain_control)
    options.noise_suppression = _preferred(basic.noise_suppression)
    return options


def screen_capture_options_from_constraints(constraints: Optional[Constraints]) -> ScreenCaptureOptions:
    options = ScreenCaptureOptions()
    if constraints is None:
        return options
    basic = constraints.basic
    options.width = _preferred(basic.width)
    options.height = _preferred(basic.height)
    modes = _preferred_strings(basic.screen_capture_mode)
    if modes:
        options.capture_mode = modes[0]
    options.display_id = _preferred(basic.screen_capture_display_id)
    options.mission_ids = _as_ids(basic.screen_capture_mission_id)
    options.filtered_window_ids = _as_ids(basic.screen_capture_window_filter)
    options.filtered_audio_contents = _preferred_strings(basic.screen_capture_audio_filter)
    options.skip_privacy_mode_window_ids = _as_ids(basic.screen_capture_skip_privacy_mode)
    options.auto_rotation = _preferred(basic.screen_capture_auto_rotation)
    return options
