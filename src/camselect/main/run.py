"""
CONTRACT: inline (source: src/camselect/main/run.md)
ROLE: Command line entrypoint for capture settings selection.

INPUTS:
  - Topic: n/a  Type: catalog YAML/JSON, constraints YAML/JSON
OUTPUTS:
  - Topic: stdout  Type: SelectionResult JSON | ranking JSON | catalog JSON | options JSON
  - Topic: log.events  Type: LogEvent (stderr)

CONFIG KEYS:
  - runtime.run_id: tag copied into every log record
  - logging.level: minimum level printed to stderr
  - selection.defaults.width: default width for tie-breaks
  - selection.defaults.height: default height for tie-breaks
  - selection.defaults.frame_rate: default frame rate for tie-breaks

PERF / TIMING:
  - single shot; exits after one selection

FAILURE MODES:
  - unreadable or malformed input -> exit 2 -> log invalid_input
  - no candidate satisfies the basic set -> exit 1 after printing the failure

LOG EVENTS:
  - module=main.run, event=started, payload keys=catalog, constraints, devices
  - module=main.run, event=invalid_input, payload keys=error

TESTS:
  - tests/test_config_and_run.py must cover exit codes
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import yaml

from camselect.constraints.constraint_set import Constraints
from camselect.constraints.options import audio_options_from_constraints, screen_capture_options_from_constraints
from camselect.constraints.parsing import load_constraints
from camselect.core.config import default_config, get_path, load_config
from camselect.core.logging import LogEmitter
from camselect.devices.catalog import device_to_dict, load_catalog
from camselect.selection.selector import rank_candidates, select_settings

_INPUT_ERRORS = (OSError, TypeError, ValueError, yaml.YAMLError)


def _invalid_input(logger: LogEmitter, exc: BaseException) -> None:
    logger.emit("error", "main.run", "invalid_input", {"error": str(exc)})
    raise SystemExit(2)


def _selection_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "default_width": int(get_path(config, "selection.defaults.width", 640)),
        "default_height": int(get_path(config, "selection.defaults.height", 480)),
        "default_frame_rate": float(get_path(config, "selection.defaults.frame_rate", 30.0)),
    }


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Select camera capture settings for media constraints")
    parser.add_argument("--config", default=None, help="Path to YAML config")
    parser.add_argument("--catalog", required=True, help="Path to the device catalog (YAML or JSON)")
    parser.add_argument("--constraints", default=None, help="Path to the constraints document (YAML or JSON)")
    parser.add_argument("--rank", action="store_true", help="Print every candidate best-first")
    parser.add_argument("--list-devices", action="store_true", help="Print the parsed catalog and exit")
    parser.add_argument(
        "--options", action="store_true", help="Print audio and screen capture options read from the constraints"
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else default_config()
    except _INPUT_ERRORS as exc:
        _invalid_input(LogEmitter(stream=sys.stderr), exc)

    logger = LogEmitter(
        min_level=str(get_path(config, "logging.level", "info")).lower(),
        run_id=str(get_path(config, "runtime.run_id", "") or ""),
        stream=sys.stderr,
    )

    try:
        devices = load_catalog(args.catalog)
        constraints: Optional[Constraints] = load_constraints(args.constraints) if args.constraints else Constraints()
    except _INPUT_ERRORS as exc:
        _invalid_input(logger, exc)
    if constraints is None:
        _invalid_input(logger, ValueError("constraints do not request a video track"))

    logger.emit(
        "info",
        "main.run",
        "started",
        {"catalog": args.catalog, "constraints": args.constraints, "devices": len(devices)},
    )

    if args.list_devices:
        print(json.dumps([device_to_dict(device) for device in devices], indent=2, sort_keys=True))
        return

    if args.options:
        try:
            options = {
                "audio": asdict(audio_options_from_constraints(constraints)),
                "screenCapture": asdict(screen_capture_options_from_constraints(constraints)),
            }
        except ValueError as exc:
            _invalid_input(logger, exc)
        print(json.dumps(options, indent=2, sort_keys=True))
        return

    defaults = _selection_defaults(config)
    if args.rank:
        ranked = rank_candidates(devices, constraints, logger=logger, **defaults)
        print(json.dumps([item.to_dict() for item in ranked], indent=2, sort_keys=True, allow_nan=False))
        if not ranked:
            raise SystemExit(1)
        return

    result = select_settings(devices, constraints, logger=logger, **defaults)
    print(json.dumps(result.to_dict(), sort_keys=True, allow_nan=False))
    if not result.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
