"""
matcher.py - leaf-level type-tag matching
=========================================

Public API
----------
matches(value, type_tag) -> bool
    Decide whether *value* satisfies the semantic *type_tag*.  Never raises;
    an unknown tag simply does not match.

TYPE_TAGS
    The tags understood by :func:`matches`.
"""

from __future__ import annotations

import datetime as _dt
import numbers
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict
from urllib.parse import urlsplit

import pandas as pd

from .utils import UNDEFINED

__all__ = ["matches", "TYPE_TAGS"]

# --------------------------------------------------------------------------- #
# Text formats                                                                #
# --------------------------------------------------------------------------- #

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}:\d{2}(?:\.\d{3})?Z?)?", re.ASCII)
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

# schemes that cannot be parsed without an authority component
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def _is_email(value: Any) -> bool:
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None


def _is_uuid(value: Any) -> bool:
    return isinstance(value, str) and _UUID_RE.fullmatch(value) is not None


def _is_iso_date(value: Any) -> bool:
    return isinstance(value, str) and _ISO_DATE_RE.fullmatch(value) is not None


def _is_url(value: Any) -> bool:
    """Return True iff *value* parses as an absolute URL."""
    if not isinstance(value, str):
        return False
    text = value.strip()
    try:
        parts = urlsplit(text)
        parts.port  # raises ValueError on a non-numeric port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    # urlsplit lower-cases the scheme; make sure it really was "scheme:"
    if text[: len(parts.scheme) + 1].lower() != f"{parts.scheme}:":
        return False
    if parts.scheme in _HOST_SCHEMES:
        host = parts.hostname or ""
        if not parts.netloc:
            # "http:example.com" and "http:/example.com" still carry a host
            authority = parts.path.lstrip("/")
            try:
                rest = urlsplit(f"{parts.scheme}://{authority}")
                rest.port
            except ValueError:
                return False
            host = rest.hostname or ""
        return bool(host) and not any(ch.isspace() for ch in host)
    return True


# --------------------------------------------------------------------------- #
# Python kinds                                                                #
# --------------------------------------------------------------------------- #

def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not pd.isna(value)


def _is_date(value: Any) -> bool:
    """Date/time instances, excluding the invalid instant ``pandas.NaT``."""
    return isinstance(value, (_dt.datetime, _dt.date)) and not pd.isna(value)


_MATCHERS: Dict[str, Callable[[Any], bool]] = {
    "string":    lambda v: isinstance(v, str),
    "number":    _is_number,
    "boolean":   lambda v: isinstance(v, bool),
    "object":    lambda v: isinstance(v, Mapping),
    "array":     lambda v: isinstance(v, (list, tuple)),
    "null":      lambda v: v is None,
    "undefined": lambda v: v is UNDEFINED,
    "function":  callable,
    "date":      _is_date,
    "email":     _is_email,
    "url":       _is_url,
    "uuid":      _is_uuid,
    "iso-date":  _is_iso_date,
    "dataframe": lambda v: isinstance(v, pd.DataFrame),
}

TYPE_TAGS = frozenset(_MATCHERS)


def matches(value: Any, type_tag: str) -> bool:
    """Return True iff *value* satisfies *type_tag*; unknown tags never match."""
    check = _MATCHERS.get(type_tag) if isinstance(type_tag, str) else None
    if check is None:
        return False
    return bool(check(value))
