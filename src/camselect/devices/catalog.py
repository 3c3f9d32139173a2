"""
CONTRACT: inline (source: src/camselect/devices/catalog.md)
ROLE: Immutable device catalog model and loader.

INPUTS:
  - Topic: n/a  Type: list[dict] (deviceId, groupId, facingMode, profiles)
OUTPUTS:
  - Topic: n/a  Type: CameraDevice[]

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - load once per selection

FAILURE MODES:
  - device without deviceId -> raise ValueError -> log invalid_input
  - profile without a positive width/height, or frameRateMin > frameRateMax -> raise ValueError -> log invalid_input

LOG EVENTS:
  - module=main.run, event=invalid_input, payload keys=error

TESTS:
  - tests/test_config_and_run.py must cover catalog loading

CONTRACT DETAILS (inline from src/camselect/devices/catalog.md):
# Device catalog

- The catalog is an already-enumerated snapshot; nothing here touches
  hardware.
- Profiles are physically offered capabilities and are never synthesized.
- Unknown facing modes map to "none", unknown pixel formats to
  "unsupported". A profile without pixelFormat is nv12.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

import yaml


class FacingMode(enum.Enum):
    NONE = "none"
    USER = "user"
    ENVIRONMENT = "environment"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Any) -> "FacingMode":
        try:
            return cls(str(value or "none").strip().lower())
        except ValueError:
            return cls.NONE

    def constraint_value(self) -> str:
        """String compared against facingMode constraints; empty for NONE."""
        return "" if self is FacingMode.NONE else self.value


class PixelFormat(enum.Enum):
    I420 = "i420"
    NV12 = "nv12"
    NV21 = "nv21"
    RGBA = "rgba"
    YUYV = "yuyv"
    MJPEG = "mjpeg"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, value: Any) -> "PixelFormat":
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.UNSUPPORTED


@dataclass(frozen=True)
class VideoProfile:
    width: int
    height: int
    frame_rate_min: float
    frame_rate_max: float
    pixel_format: PixelFormat = PixelFormat.NV12

    @property
    def aspect_ratio(self) -> float:
        return float(self.width) / float(self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}@{self.frame_rate_min:g}-{self.frame_rate_max:g} {self.pixel_format.value}"


@dataclass(frozen=True)
class CameraDevice:
    device_id: str
    group_id: str = "default"
    facing_mode: FacingMode = FacingMode.NONE
    profiles: Tuple[VideoProfile, ...] = ()
    label: str = ""


def profile_from_dict(raw: Mapping[str, Any]) -> VideoProfile:
    width = int(raw.get("width", 0) or 0)
    height = int(raw.get("height", 0) or 0)
    if width <= 0 or height <= 0:
        raise ValueError(f"profile needs a positive width and height, got {dict(raw)!r}")
    frame_rate_min = float(raw.get("frameRateMin", 0.0) or 0.0)
    frame_rate_max = float(raw.get("frameRateMax", 0.0) or 0.0)
    if not (math.isfinite(frame_rate_min) and math.isfinite(frame_rate_max)):
        raise ValueError(f"profile frame rates must be finite, got {dict(raw)!r}")
    if frame_rate_min > frame_rate_max:
        raise ValueError(f"profile frameRateMin {frame_rate_min:g} exceeds frameRateMax {frame_rate_max:g}")
    pixel_format = raw.get("pixelFormat")
    return VideoProfile(
        width=width,
        height=height,
        frame_rate_min=frame_rate_min,
        frame_rate_max=frame_rate_max,
        pixel_format=PixelFormat.NV12 if pixel_format is None else PixelFormat.parse(pixel_format),
    )


def device_from_dict(raw: Mapping[str, Any]) -> CameraDevice:
    device_id = raw.get("deviceId")
    if device_id is None or str(device_id) == "":
        raise ValueError(f"catalog entry is missing deviceId: {dict(raw)!r}")
    profiles_raw = raw.get("profiles") or []
    if not isinstance(profiles_raw, list):
        raise ValueError(f"profiles of device '{device_id}' must be a list")
    profiles = tuple(profile_from_dict(item) for item in profiles_raw if isinstance(item, Mapping))
    return CameraDevice(
        device_id=str(device_id),
        group_id=str(raw.get("groupId", "default") or ""),
        facing_mode=FacingMode.parse(raw.get("facingMode")),
        profiles=profiles,
        label=str(raw.get("label", "") or ""),
    )


def catalog_from_list(items: List[Mapping[str, Any]]) -> List[CameraDevice]:
    devices: List[CameraDevice] = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValueError(f"catalog entry {index} must be a mapping")
        devices.append(device_from_dict(item))
    return devices


def load_catalog(path: str) -> List[CameraDevice]:
    """Load a catalog document: a device list or a mapping with `devices`."""
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or []
    if isinstance(data, dict):
        data = data.get("devices", [])
    if not isinstance(data, list):
        raise ValueError(f"Catalog {path} must hold a list of devices")
    return catalog_from_list(data)


def device_to_dict(device: CameraDevice) -> Dict[str, Any]:
    return {
        "deviceId": device.device_id,
        "groupId": device.group_id,
        "facingMode": device.facing_mode.value,
        "label": device.label,
        "profiles": [
            {
                "width": profile.width,
                "height": profile.height,
                "frameRateMin": profile.frame_rate_min,
                "frameRateMax": profile.frame_rate_max,
                "pixelFormat": profile.pixel_format.value,
            }
            for profile in device.profiles
        ],
    }
