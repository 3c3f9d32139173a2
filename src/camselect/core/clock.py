"""
CONTRACT: inline (source: src/camselect/core/clock.md)
ROLE: Shared monotonic timestamps for log records.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - monotonic now_ns() for all modules

FAILURE MODES:
  - n/a

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_config_and_run.py covers t_ns ordering in log records

CONTRACT DETAILS (inline from src/camselect/core/clock.md):
# Clock

- t_ns is monotonic per process.
- Convert wall time to t_ns only for logging.
"""

from __future__ import annotations

import time


def now_ns() -> int:
    """Return a monotonic timestamp in nanoseconds."""
    return time.monotonic_ns()
