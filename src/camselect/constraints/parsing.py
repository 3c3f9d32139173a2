"""
CONTRACT: inline (source: src/camselect/constraints/parsing.md)
ROLE: Build Constraints from plain mappings (YAML/JSON documents).

INPUTS:
  - Topic: n/a  Type: dict | bool | None
OUTPUTS:
  - Topic: n/a  Type: Constraints | None

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - once per request

FAILURE MODES:
  - string constraint too long -> raise ValueError -> log invalid_input

LOG EVENTS:
  - module=main.run, event=invalid_input, payload keys=error

TESTS:
  - tests/test_constraint_parsing.py must cover naked value handling

CONTRACT DETAILS (inline from src/camselect/constraints/parsing.md):
# Parsing

- A naked value is treated as "ideal" in the basic constraints, but as
  "exact" inside "advanced" constraint sets.
- Only names flagged as supported are copied; unknown names are ignored.
- `true` requests a track without constraints, `false` requests none.
- An empty constraints document is the same as `true`.
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

import yaml

from camselect.constraints.constraint_set import Constraints, ConstraintSet
from camselect.constraints.primitives import (
    BooleanConstraint,
    DoubleConstraint,
    LongConstraint,
    StringConstraint,
)


MAX_CONSTRAINT_STRING_LENGTH = 500
MAX_CONSTRAINT_STRING_SEQ_LENGTH = 100

KEY_MIN = "min"
KEY_MAX = "max"
KEY_EXACT = "exact"
KEY_IDEAL = "ideal"
KEY_ADVANCED = "advanced"


class NakedValue(enum.Enum):
    IDEAL = "ideal"
    EXACT = "exact"


SUPPORTED_CONSTRAINTS: Mapping[str, bool] = MappingProxyType(
    {
        "width": True,
        "height": True,
        "aspectRatio": True,
        "frameRate": True,
        "facingMode": True,
        "resizeMode": False,
        "sampleRate": False,
        "sampleSize": False,
        "echoCancellation": True,
        "autoGainControl": True,
        "noiseSuppression": True,
        "latency": False,
        "channelCount": False,
        "deviceId": True,
        "groupId": True,
        "displaySurface": False,
        "backgroundBlur": False,
        "googEchoCancellation": False,
        "googAutoGainControl": False,
        "googNoiseSuppression": False,
        "googHighpassFilter": False,
        "googAudioMirroring": False,
        "screenCaptureMode": True,
        "screenCaptureDisplayId": True,
        "screenCaptureMissionId": True,
        "screenCaptureAudioFilter": True,
        "screenCaptureWindowFilter": True,
        "screenCaptureSkipPrivacyMode": True,
        "screenCaptureAutoRotation": True,
    }
)


def is_constraint_supported(name: str) -> bool:
    """Names missing from the table are passed through as supported."""
    return SUPPORTED_CONSTRAINTS.get(name, True)


def get_supported_constraints() -> List[str]:
    return sorted(name for name, advertised in SUPPORTED_CONSTRAINTS.items() if advertised)


def parse_constraints(value: Any) -> Optional[Constraints]:
    """Parse a track constraints value.

    Returns None when no track is requested (`false`, `None` or any
    non-mapping value) and unconstrained Constraints for `true`.
    """
    if isinstance(value, bool):
        return Constraints() if value else None
    if not isinstance(value, Mapping):
        return None

    basic = parse_constraint_set(value, NakedValue.IDEAL)
    advanced: List[ConstraintSet] = []
    raw_advanced = value.get(KEY_ADVANCED)
    if raw_advanced is not None:
        if not isinstance(raw_advanced, list):
            raise ValueError("advanced must be a list of constraint sets")
        for index, element in enumerate(raw_advanced):
            if not isinstance(element, Mapping):
                raise ValueError(f"advanced[{index}] must be a mapping")
            advanced.append(parse_constraint_set(element, NakedValue.EXACT))
    return Constraints(basic=basic, advanced=tuple(advanced))


def load_constraints(path: str) -> Optional[Constraints]:
    """Load constraints from a YAML (or JSON) document; an empty one is unconstrained."""
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return Constraints()
    return parse_constraints(data)


def parse_constraint_set(values: Mapping[str, Any], naked: NakedValue = NakedValue.IDEAL) -> ConstraintSet:
    constraint_set = ConstraintSet()
    for constraint in constraint_set.all_constraints():
        if constraint.name not in values or not is_constraint_supported(constraint.name):
            continue
        raw = values[constraint.name]
        if isinstance(constraint, LongConstraint):
            _copy_numeric(raw, naked, constraint, int)
        elif isinstance(constraint, DoubleConstraint):
            _copy_numeric(raw, naked, constraint, float)
        elif isinstance(constraint, StringConstraint):
            _copy_string(raw, naked, constraint)
        elif isinstance(constraint, BooleanConstraint):
            _copy_boolean(raw, naked, constraint)
    return constraint_set


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _copy_numeric(raw: Any, naked: NakedValue, constraint: Any, convert: Any) -> None:
    if _is_number(raw):
        if naked is NakedValue.IDEAL:
            constraint.ideal = convert(raw)
        else:
            constraint.exact = convert(raw)
    elif isinstance(raw, Mapping):
        for key in (KEY_MIN, KEY_MAX, KEY_IDEAL, KEY_EXACT):
            if key in raw and _is_number(raw[key]):
                setattr(constraint, key, convert(raw[key]))


def _validate_string(value: str) -> None:
    if len(value) > MAX_CONSTRAINT_STRING_LENGTH:
        raise ValueError("Constraint string too long.")


def _string_values(raw: Any) -> Optional[List[str]]:
    """Normalize a string or a sequence of strings; None for other shapes."""
    if isinstance(raw, str):
        _validate_string(raw)
        return [raw]
    if isinstance(raw, (list, tuple)):
        if len(raw) > MAX_CONSTRAINT_STRING_SEQ_LENGTH:
            raise ValueError("Constraint string sequence too long.")
        values = [str(item) for item in raw]
        for item in values:
            _validate_string(item)
        return values
    return None


def _copy_string(raw: Any, naked: NakedValue, constraint: StringConstraint) -> None:
    if isinstance(raw, Mapping):
        ideal = _string_values(raw.get(KEY_IDEAL)) if KEY_IDEAL in raw else None
        exact = _string_values(raw.get(KEY_EXACT)) if KEY_EXACT in raw else None
        if ideal is not None:
            constraint.ideal = ideal
        if exact is not None:
            constraint.exact = exact
        return
    values = _string_values(raw)
    if values is None:
        raise ValueError(f"Constraint '{constraint.name}' must be a string, a list of strings or a mapping")
    if naked is NakedValue.IDEAL:
        constraint.ideal = values
    else:
        constraint.exact = values


def _copy_boolean(raw: Any, naked: NakedValue, constraint: BooleanConstraint) -> None:
    if isinstance(raw, bool):
        if naked is NakedValue.IDEAL:
            constraint.ideal = raw
        else:
            constraint.exact = raw
    elif isinstance(raw, Mapping):
        if isinstance(raw.get(KEY_IDEAL), bool):
            constraint.ideal = raw[KEY_IDEAL]
        if isinstance(raw.get(KEY_EXACT), bool):
            constraint.exact = raw[KEY_EXACT]
