"""
CONTRACT: inline (source: src/camselect/__init__.md)
ROLE: Top-level camselect package.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - n/a

FAILURE MODES:
  - n/a

LOG EVENTS:
  - n/a

TESTS:
  - n/a
"""

from .version import __version__

__all__ = ["__version__"]
