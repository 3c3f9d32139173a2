"""
CONTRACT: inline (source: src/camselect/core/config.md)
ROLE: Load YAML config, validate, and expose typed accessors.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - config_path: path to YAML file
  - runtime.enable_validation: enable validation (bool)

PERF / TIMING:
  - load once at startup

FAILURE MODES:
  - missing/invalid key -> raise error -> log invalid_input

LOG EVENTS:
  - module=main.run, event=invalid_input, payload keys=error

TESTS:
  - tests/test_config_and_run.py must cover config validation

CONTRACT DETAILS (inline from src/camselect/core/config.md):
# Config contract

- Config files define the selection defaults used as final tie-breakers.
- Validation must reject non-positive default resolutions.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

import yaml

from camselect.core.logging import LEVELS


def load_config(path: str) -> Dict[str, Any]:
    """Load YAML config and apply defaults."""
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(data).__name__}")
    merged = _merge_dicts(default_config(), data)
    if bool(get_path(merged, "runtime.enable_validation", True)):
        errors = validate_config(merged)
        if errors:
            joined = "\n".join(f"- {e}" for e in errors)
            raise ValueError(f"Config validation failed for {path}:\n{joined}")
    return merged


def get_path(config: Dict[str, Any], dotted_path: str, default: Any = None) -> Any:
    """Get a nested config value by dotted path."""
    node: Any = config
    for key in dotted_path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def default_config() -> Dict[str, Any]:
    return {
        "runtime": {
            "run_id": "",
            "enable_validation": True,
        },
        "selection": {
            "defaults": {
                "width": 640,
                "height": 480,
                "frame_rate": 30.0,
            },
        },
        "logging": {
            "level": "info",
        },
    }


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Return a list of validation errors for the merged config."""
    errors: List[str] = []

    defaults = get_path(config, "selection.defaults", {})
    if not isinstance(defaults, dict):
        errors.append("selection.defaults must be a dict")
        defaults = {}
    for key in ("width", "height"):
        value = defaults.get(key)
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"selection.defaults.{key} must be an integer, got {value!r}")
            continue
        if number <= 0:
            errors.append(f"selection.defaults.{key} must be > 0")
    frame_rate = defaults.get("frame_rate")
    try:
        if float(frame_rate) < 0.0:
            errors.append("selection.defaults.frame_rate must be >= 0")
    except (TypeError, ValueError):
        errors.append(f"selection.defaults.frame_rate must be a number, got {frame_rate!r}")

    level = str(get_path(config, "logging.level", "info") or "").lower()
    if level not in LEVELS:
        errors.append(f"logging.level '{level}' is not one of {sorted(LEVELS)}")

    return errors
