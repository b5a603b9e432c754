"""
utils.py – shared, low-level helpers for the response-schema package.

This module consolidates common helpers for:
- The ``UNDEFINED`` sentinel (absent value, distinct from ``None``)
- Value description (kind names, JSON-ish rendering for messages)
- Process identity for log records
"""

from __future__ import annotations

import math
import os
import platform
import re
from typing import Any, Dict

__all__ = ["UNDEFINED"]

# --------------------------------------------------------------------------- #
# Absent-value sentinel                                                       #
# --------------------------------------------------------------------------- #

class _Undefined:
    """Type of :data:`UNDEFINED`; there is only ever one instance."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


# --------------------------------------------------------------------------- #
# Value description                                                           #
# --------------------------------------------------------------------------- #

def _kind(value: Any) -> str:
    """Name of the primitive kind of *value*, used as a hint in messages."""
    if value is UNDEFINED:
        return "undefined"
    return type(value).__name__


def _render(value: Any) -> str:
    """Render a schema literal the way it is shown in messages (``true``, ``null``…)."""
    if value is True:   return "true"
    if value is False:  return "false"
    if value is None:   return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _render_member(value: Any) -> str:
    """Render one enum member; null and undefined members render empty."""
    if value is None or value is UNDEFINED:
        return ""
    return _render(value)


_REGEX_FLAGS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"))


def _regex_literal(pattern: "re.Pattern[str]") -> str:
    """Render *pattern* as a ``/source/flags`` literal."""
    flags = "".join(c for flag, c in _REGEX_FLAGS if pattern.flags & flag)
    return f"/{pattern.pattern}/{flags}"


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


# --------------------------------------------------------------------------- #
# Process helpers                                                             #
# --------------------------------------------------------------------------- #

def _process_info() -> Dict[str, Any]:
    """Identity of the running process, attached to every log entry."""
    return {
        "pid": os.getpid(),
        "version": platform.python_version(),
        "platform": platform.system().lower(),
    }
