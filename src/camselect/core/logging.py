"""
CONTRACT: inline (source: src/camselect/core/logging.md)
ROLE: Structured logging to JSON lines.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: log.events  Type: LogEvent

CONFIG KEYS:
  - logging.level: minimum level

PERF / TIMING:
  - synchronous; one line per event

FAILURE MODES:
  - sink raises -> event still printed

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_config_and_run.py must cover level filtering

CONTRACT DETAILS (inline from src/camselect/core/logging.md):
# Logging contract

- Structured LogEvent with module, severity, and context.
- Selection decisions are logged with the candidate that won or the
  constraint that failed.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Callable, Dict, Optional, TextIO

from camselect.core.clock import now_ns


LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}

LogSink = Callable[[Dict[str, Any]], None]


class LogEmitter:
    """Emit structured LogEvents to an optional sink and a text stream."""

    def __init__(
        self,
        sink: Optional[LogSink] = None,
        min_level: str = "info",
        run_id: str = "",
        stream: Optional[TextIO] = None,
    ) -> None:
        self._sink = sink
        self._min_level = LEVELS.get(min_level, 20)
        self._run_id = run_id
        self._stream = stream

    def emit(self, level: str, module: str, event: str, payload: Optional[Dict[str, Any]] = None) -> None:
        record = {
            "t_ns": now_ns(),
            "level": level,
            "run_id": self._run_id,
            "message": event,
            "context": {
                "module": module,
                "event": event,
                "details": payload or {},
            },
        }
        if self._sink is not None:
            try:
                self._sink(record)
            except Exception:  # noqa: BLE001
                pass
        if LEVELS.get(level, 0) >= self._min_level:
            stream = self._stream if self._stream is not None else sys.stdout
            print(json.dumps(record, sort_keys=True, default=str), file=stream)
