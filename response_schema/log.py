"""Structured JSON logging with metadata redaction.

One JSON object is emitted per line.  Caller metadata travels in an explicit
``fields`` map (``extra={"fields": {...}}``) and every key of that map is run
through :func:`redact` before it is serialised.

Usage::

    from response_schema.log import configure_logging, get_logger

    configure_logging()
    log = get_logger("orders", shop="demo")
    log.info("fetched", fields={"count": 3, "api_token": "abc"})
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, MutableMapping, Optional, TextIO

from . import utils

__all__ = [
    "REDACTED",
    "redact",
    "LogEntry",
    "JsonFormatter",
    "ComponentLogger",
    "get_logger",
    "configure_logging",
]

REDACTED = "***REDACTED***"

_SENSITIVE = (
    "token",
    "password",
    "secret",
    "key",
    "authorization",
    "bearer",
    "auth",
)

_DEFAULT_COMPONENT = "response-schema"
_PACKAGE_LOGGER = "response_schema"


def redact(data: Any) -> Any:
    """Return a copy of *data* with sensitive mapping keys masked, recursively."""
    if isinstance(data, Mapping):
        out: Dict[str, Any] = {}
        for key, value in data.items():
            name = str(key)
            if any(s in name.lower() for s in _SENSITIVE):
                out[name] = REDACTED
            else:
                out[name] = redact(value)
        return out
    if isinstance(data, list):
        return [redact(item) for item in data]
    if isinstance(data, tuple):
        return tuple(redact(item) for item in data)
    return data


# --------------------------------------------------------------------------- #
# Log entry                                                                   #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class LogEntry:
    """A single structured log line."""

    timestamp: str
    level: str
    logger: str
    message: str
    component: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, Any]] = None
    process: Dict[str, Any] = field(default_factory=utils._process_info)

    def to_json(self) -> str:
        payload = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        payload = {k: v for k, v in payload.items() if v is not None}
        return json.dumps(payload, default=repr)


def _describe_error(exc: BaseException, tb: Any) -> Dict[str, Any]:
    info: Dict[str, Any] = {
        "name": type(exc).__name__,
        "message": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, tb)),
    }
    to_dict = getattr(exc, "to_dict", None)
    if callable(to_dict):
        details = to_dict()
        details.pop("message", None)
        info.update(redact(details))
    return info


class JsonFormatter(logging.Formatter):
    """Render :class:`logging.LogRecord` objects as :class:`LogEntry` JSON lines."""

    def build_entry(self, record: logging.LogRecord) -> LogEntry:
        error = None
        if record.exc_info and record.exc_info[1] is not None:
            error = _describe_error(record.exc_info[1], record.exc_info[2])

        return LogEntry(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            component=getattr(record, "component", None),
            fields=redact(getattr(record, "fields", None) or {}),
            error=error,
        )

    def format(self, record: logging.LogRecord) -> str:
        return self.build_entry(record).to_json()


# --------------------------------------------------------------------------- #
# Component loggers                                                           #
# --------------------------------------------------------------------------- #

class ComponentLogger(logging.LoggerAdapter):
    """Logger bound to a component name and default context fields.

    Extra metadata for a single call is passed as ``fields={...}``; it is
    merged over the bound context.
    """

    def __init__(self, logger: logging.Logger, component: str, context: Optional[Mapping[str, Any]] = None):
        super().__init__(logger, {"component": component, "context": dict(context or {})})
        self.component = component

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]):
        fields = {**self.extra["context"], **(kwargs.pop("fields", None) or {})}
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("component", self.component)
        extra["fields"] = {**fields, **(extra.get("fields") or {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def child(self, name: str, **context: Any) -> "ComponentLogger":
        """Derive ``parent:name`` with *context* merged over the parent's."""
        merged = {**self.extra["context"], **context}
        return ComponentLogger(self.logger, f"{self.component}:{name}", merged)


def get_logger(component: str = _DEFAULT_COMPONENT, **context: Any) -> ComponentLogger:
    """Return a :class:`ComponentLogger` under the package logger."""
    return ComponentLogger(logging.getLogger(_PACKAGE_LOGGER), component, context)


# --------------------------------------------------------------------------- #
# Configuration                                                               #
# --------------------------------------------------------------------------- #

_LEVELS = {
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def _resolve_level(level: Optional[str | int]) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("LOG_LEVEL") or ("DEBUG" if os.getenv("DEBUG") == "true" else "INFO")
    return _LEVELS.get(str(level).upper(), logging.INFO)


def configure_logging(level: Optional[str | int] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """Install the JSON formatter on the package logger.

    Safe to call multiple times; the handler installed by a previous call is
    replaced.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(_resolve_level(level))

    for handler in logger.handlers[:]:
        if isinstance(handler.formatter, JsonFormatter):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger
