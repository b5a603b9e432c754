"""
validator.py - recursive, fail-fast schema validation
=====================================================

Public API
----------
TypeValidationError
    Exception raised for any rule violation; carries ``path``, ``value`` and
    ``expected_type`` alongside the message.

validate(value, schema, path="")
    Depth-first validation that enforces type, required, enum, numeric
    bounds, length bounds, pattern, object properties and array items.
    Stops at the first failing rule.

validate_api_response(response, schema)
    Same as :func:`validate` rooted at ``response``; failures are re-raised
    with an ``API response validation failed:`` prefix.

create_validator(schema) -> Callable[[Any], Any]
    Pass-through guard that validates and returns its argument.

Schemas may be given as :class:`~response_schema.node.SchemaNode` trees or as
plain mappings (normalised on each call; use :func:`create_validator` to
normalise once).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Union

from . import matcher
from . import utils
from .node import SchemaNode
from .utils import UNDEFINED

__all__ = [
    "TypeValidationError",
    "validate",
    "validate_api_response",
    "create_validator",
]

log = logging.getLogger(__name__)

SchemaLike = Union[SchemaNode, Mapping[str, Any]]

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class TypeValidationError(ValueError):
    """Raised when a value violates the supplied schema."""

    def __init__(self, message: str, path: str, value: Any, expected_type: str):
        super().__init__(message)
        self.message = message
        self.path = path or "root"
        self.value = value
        self.expected_type = expected_type

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "path": self.path,
            "value": self.value,
            "expected_type": self.expected_type,
        }


# --------------------------------------------------------------------------- #
# Rule helpers                                                                #
# --------------------------------------------------------------------------- #

def _same_value(a: Any, b: Any) -> bool:
    """Strict equality: booleans never equal numbers, NaN equals NaN."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if utils._is_nan(a) and utils._is_nan(b):
        return True
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def _below(value: Any, bound: Any) -> bool:
    """``value < bound``; values that cannot be ordered count as out of range."""
    try:
        return bool(value < bound) or not bool(value >= bound)
    except (TypeError, ValueError):
        return True


def _above(value: Any, bound: Any) -> bool:
    try:
        return bool(value > bound) or not bool(value <= bound)
    except (TypeError, ValueError):
        return True


def _length(value: Any) -> int | None:
    if value is None or value is UNDEFINED:
        return None
    try:
        return len(value)
    except TypeError:
        return None


def _text(value: Any) -> str | None:
    """Text form used for pattern matching, or None when there is none."""
    if isinstance(value, str):
        return value
    if matcher.matches(value, "number"):
        return utils._render(value)
    return None


# --------------------------------------------------------------------------- #
# Core recursive validator                                                    #
# --------------------------------------------------------------------------- #

def validate(value: Any, schema: SchemaLike, path: str = "") -> None:
    """Recursively assert that *value* satisfies *schema*.

    Rules are checked in a fixed order against the value at *path* before any
    descent into ``properties`` / ``items``; the first failing rule raises
    :class:`TypeValidationError` and aborts the whole call.
    """
    _validate_node(value, SchemaNode.coerce(schema), path)


def _validate_node(value: Any, node: SchemaNode, path: str) -> None:  # noqa: C901
    where = path or "root"

    # 1) type ---------------------------------------------------------------
    if node.type and not matcher.matches(value, node.type):
        raise TypeValidationError(
            f"Expected {node.type} at {where}, got {utils._kind(value)}",
            path, value, node.type,
        )

    # 2) required value -----------------------------------------------------
    if node.required and (value is None or value is UNDEFINED):
        raise TypeValidationError(
            f"Required value missing at {where}", path, value, "required"
        )

    # 3) enum ---------------------------------------------------------------
    if node.enum is not None and not any(_same_value(value, c) for c in node.enum):
        allowed = ", ".join(utils._render_member(c) for c in node.enum)
        raise TypeValidationError(
            f"Value at {where} must be one of: {allowed}", path, value, f"enum[{allowed}]"
        )

    # 4) / 5) numeric bounds ------------------------------------------------
    if node.min is not None and _below(value, node.min):
        bound = utils._render(node.min)
        raise TypeValidationError(
            f"Value at {where} must be >= {bound}", path, value, f"min:{bound}"
        )

    if node.max is not None and _above(value, node.max):
        bound = utils._render(node.max)
        raise TypeValidationError(
            f"Value at {where} must be <= {bound}", path, value, f"max:{bound}"
        )

    # 6) / 7) length bounds -------------------------------------------------
    if node.min_length is not None:
        size = _length(value)
        if size is None or size < node.min_length:
            raise TypeValidationError(
                f"Value at {where} must have length >= {node.min_length}",
                path, value, f"minLength:{node.min_length}",
            )

    if node.max_length is not None:
        size = _length(value)
        if size is None or size > node.max_length:
            raise TypeValidationError(
                f"Value at {where} must have length <= {node.max_length}",
                path, value, f"maxLength:{node.max_length}",
            )

    # 8) pattern ------------------------------------------------------------
    if node.pattern is not None:
        text = _text(value)
        if text is None or node.pattern.search(text) is None:
            raise TypeValidationError(
                f"Value at {where} does not match required pattern",
                path, value, f"pattern:{utils._regex_literal(node.pattern)}",
            )

    # 9) object recursion ---------------------------------------------------
    if node.properties is not None and isinstance(value, Mapping):
        for key, child in node.properties.items():
            child_path = f"{path}.{key}" if path else key
            if key in value:
                _validate_node(value[key], child, child_path)
            elif child.required:
                raise TypeValidationError(
                    f"Required property {key} missing at {where}",
                    child_path, UNDEFINED, "required",
                )

    # 10) list recursion ----------------------------------------------------
    if node.items is not None and isinstance(value, (list, tuple)):
        for idx, item in enumerate(value):
            _validate_node(item, node.items, f"{path}[{idx}]")


# --------------------------------------------------------------------------- #
# Convenience wrappers                                                        #
# --------------------------------------------------------------------------- #

def validate_api_response(response: Any, schema: SchemaLike) -> Any:
    """Validate an external API *response*, returning it unchanged on success."""
    try:
        validate(response, schema, "response")
    except TypeValidationError as exc:
        log.warning(
            "API response validation failed",
            extra={"fields": {"path": exc.path, "expected_type": exc.expected_type}},
        )
        raise TypeValidationError(
            f"API response validation failed: {exc.message}",
            exc.path, exc.value, exc.expected_type,
        ) from exc
    return response


def create_validator(schema: SchemaLike) -> Callable[[Any], Any]:
    """Return a guard that validates its argument against *schema* and returns it."""
    node = SchemaNode.coerce(schema)

    def guard(value: Any) -> Any:
        _validate_node(value, node, "")
        return value

    return guard
