"""
CONTRACT: inline (source: src/camselect/selection/selector.md)
ROLE: Choose the best capture settings for a set of constraints.

INPUTS:
  - Topic: n/a  Type: CameraDevice[], Constraints
OUTPUTS:
  - Topic: n/a  Type: SelectionResult

CONFIG KEYS:
  - selection.defaults.width: preferred width when no ideal decides
  - selection.defaults.height: preferred height when no ideal decides
  - selection.defaults.frame_rate: preferred frame rate when no ideal decides

PERF / TIMING:
  - O(devices x profiles x (1 + advanced sets)); no I/O

FAILURE MODES:
  - no candidate satisfies the basic set -> result ok=False -> log selection_failed

LOG EVENTS:
  - module=selection.selector, event=selection_started, payload keys=devices, advanced_sets
  - module=selection.selector, event=device_rejected, payload keys=device_id, constraint
  - module=selection.selector, event=profile_rejected, payload keys=device_id, profile, constraint
  - module=selection.selector, event=advanced_set_unsatisfied, payload keys=device_id, profile, index
  - module=selection.selector, event=candidate_scored, payload keys=device_id, profile, distance
  - module=selection.selector, event=settings_selected, payload keys=settings, distance
  - module=selection.selector, event=selection_failed, payload keys=constraint

TESTS:
  - tests/test_selector.py must cover tie-break priority

CONTRACT DETAILS (inline from src/camselect/selection/selector.md):
# Ranking

Each candidate gets a distance vector, compared lexicographically:
  1) one slot per advanced set (0 satisfied, inf otherwise)
  2) fitness against the basic set
  3) squared distance to the default resolution
  4) relative distance to the default frame rate
  5) position of the device in the catalog
The first candidate with a strictly smaller vector wins, so equal vectors
keep catalog order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from camselect.constraints.constraint_set import Constraints
from camselect.devices.catalog import CameraDevice
from camselect.selection.candidate import (
    CandidateSettings,
    CaptureSettings,
    device_satisfies_constraint_set,
)
from camselect.selection.fitness import numeric_constraint_fitness_distance, square_euclidean_distance


@dataclass(frozen=True)
class SelectionResult:
    ok: bool
    settings: Optional[CaptureSettings] = None
    failed_constraint_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        if self.ok and self.settings is not None:
            payload: Dict[str, Any] = {"ok": True}
            payload.update(self.settings.to_dict())
            return payload
        return {"ok": False, "failedConstraintName": self.failed_constraint_name}


@dataclass(frozen=True)
class RankedCandidate:
    settings: CaptureSettings
    distance: Tuple[float, ...]
    device_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settings": self.settings.to_dict(),
            "distance": json_distance(self.distance),
            "deviceIndex": self.device_index,
        }


def select_settings(
    devices: Sequence[CameraDevice],
    constraints: Constraints,
    default_width: int = 640,
    default_height: int = 480,
    default_frame_rate: float = 30.0,
    logger: Any = None,
) -> SelectionResult:
    scored, failed_name = _score_candidates(
        devices, constraints, default_width, default_height, default_frame_rate, logger
    )
    best = np.full(len(constraints.advanced) + 4, np.inf)
    winner: Optional[CaptureSettings] = None
    for candidate, distance in scored:
        if _lexicographically_less(distance, best):
            best = distance
            winner = candidate.get_setting()

    if winner is None:
        _log(logger, "warning", "selection.selector", "selection_failed", {"constraint": failed_name})
        return SelectionResult(ok=False, failed_constraint_name=failed_name)
    _log(
        logger,
        "info",
        "selection.selector",
        "settings_selected",
        {"settings": winner.to_dict(), "distance": json_distance(best)},
    )
    return SelectionResult(ok=True, settings=winner)


def rank_candidates(
    devices: Sequence[CameraDevice],
    constraints: Constraints,
    default_width: int = 640,
    default_height: int = 480,
    default_frame_rate: float = 30.0,
    logger: Any = None,
) -> List[RankedCandidate]:
    """Every candidate passing the basic set, best first."""
    scored, _ = _score_candidates(
        devices, constraints, default_width, default_height, default_frame_rate, logger
    )
    ranked = [
        RankedCandidate(
            settings=candidate.get_setting(),
            distance=tuple(float(value) for value in distance),
            device_index=int(distance[-1]),
        )
        for candidate, distance in scored
    ]
    # sorted() is stable: equal vectors keep enumeration order.
    ranked.sort(key=lambda item: item.distance)
    return ranked


def _score_candidates(
    devices: Sequence[CameraDevice],
    constraints: Constraints,
    default_width: int,
    default_height: int,
    default_frame_rate: float,
    logger: Any,
) -> Tuple[List[Tuple[CandidateSettings, np.ndarray]], str]:
    basic = constraints.basic
    scored: List[Tuple[CandidateSettings, np.ndarray]] = []
    failed_name = ""
    _log(
        logger,
        "debug",
        "selection.selector",
        "selection_started",
        {"devices": len(devices), "advanced_sets": len(constraints.advanced)},
    )

    for device_index, device in enumerate(devices):
        failed = device_satisfies_constraint_set(device, basic)
        if failed is not None:
            failed_name = failed
            _log(
                logger,
                "debug",
                "selection.selector",
                "device_rejected",
                {"device_id": device.device_id, "constraint": failed},
            )
            continue

        for profile in device.profiles:
            outcome = CandidateSettings.from_device(device, profile).apply_constraint_set(basic)
            if not outcome.satisfied:
                failed_name = outcome.failed_constraint_name or failed_name
                _log(
                    logger,
                    "debug",
                    "selection.selector",
                    "profile_rejected",
                    {
                        "device_id": device.device_id,
                        "profile": str(profile),
                        "constraint": outcome.failed_constraint_name,
                    },
                )
                continue

            candidate = outcome.candidate
            distance: List[float] = []
            for index, advanced in enumerate(constraints.advanced):
                if device_satisfies_constraint_set(device, advanced) is None:
                    advanced_outcome = candidate.apply_constraint_set(advanced)
                    if advanced_outcome.satisfied:
                        candidate = advanced_outcome.candidate
                        distance.append(0.0)
                        continue
                distance.append(np.inf)
                _log(
                    logger,
                    "debug",
                    "selection.selector",
                    "advanced_set_unsatisfied",
                    {"device_id": device.device_id, "profile": str(profile), "index": index},
                )

            distance.append(candidate.fitness(basic))
            distance.append(
                square_euclidean_distance(
                    candidate.target_width, candidate.target_height, default_width, default_height
                )
            )
            distance.append(_frame_rate_distance(candidate, default_frame_rate))
            distance.append(float(device_index))

            vector = np.asarray(distance, dtype=float)
            _log(
                logger,
                "debug",
                "selection.selector",
                "candidate_scored",
                {"device_id": device.device_id, "profile": str(profile), "distance": json_distance(vector)},
            )
            scored.append((candidate, vector))

    return scored, failed_name


def json_distance(distance: Sequence[float]) -> List[Optional[float]]:
    """Distance slots for JSON output; unsatisfied (infinite) slots become None."""
    return [float(value) if math.isfinite(value) else None for value in distance]


def _frame_rate_distance(candidate: CandidateSettings, default_frame_rate: float) -> float:
    low = candidate.current_min_frame_rate()
    high = candidate.current_max_frame_rate()
    if default_frame_rate < low:
        return numeric_constraint_fitness_distance(low, default_frame_rate)
    if default_frame_rate > high:
        return numeric_constraint_fitness_distance(high, default_frame_rate)
    return 0.0


def _lexicographically_less(left: np.ndarray, right: np.ndarray) -> bool:
    differing = np.flatnonzero(left != right)
    if differing.size == 0:
        return False
    first = differing[0]
    return bool(left[first] < right[first])


def _log(logger: Any, level: str, module: str, event: str, payload: Dict[str, Any]) -> None:
    if logger is None:
        return
    try:
        logger.emit(level, module, event, payload)
    except Exception:  # noqa: BLE001
        return
