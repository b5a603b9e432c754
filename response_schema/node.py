"""
node.py - typed schema nodes
============================

A schema is authored as plain data (a mapping, usually loaded from JSON) and
normalised once into a tree of immutable :class:`SchemaNode` objects.  The
validator then branches explicitly on which rule fields are set instead of
probing the shape of the raw mapping on every call.

Public API
----------
SchemaNode
    Frozen rule set for one position in a value tree.

SchemaDefinitionError
    Raised when a mapping cannot be turned into a node (a rule of the wrong
    kind).  This is an authoring defect, never a validation failure.

Keys that are not rules (``description``, ``title``, ``format`` ...) are kept
verbatim in :attr:`SchemaNode.extras` and never checked.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Optional, Pattern, Tuple

__all__ = ["SchemaNode", "SchemaDefinitionError"]


class SchemaDefinitionError(ValueError):
    """Raised when a schema mapping is malformed."""


# camelCase catalog key -> attribute name
_ALIASES = {
    "minLength": "min_length",
    "maxLength": "max_length",
}

_NO_EXTRAS: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class SchemaNode:
    """Validation rules for one position; every field is optional.

    Equality covers every rule including ``properties``; ``extras`` are
    annotations and take no part in it.
    """

    type: Optional[str] = None
    required: bool = False
    enum: Optional[Tuple[Any, ...]] = None
    min: Any = None
    max: Any = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Pattern[str]] = None
    properties: Optional[Mapping[str, "SchemaNode"]] = field(default=None, hash=False)
    items: Optional["SchemaNode"] = None
    extras: Mapping[str, Any] = field(default_factory=lambda: _NO_EXTRAS, compare=False)

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, path: str = "") -> "SchemaNode":
        """Build a node tree from plain data such as a parsed JSON catalog."""
        where = path or "root"
        if not isinstance(data, Mapping):
            raise SchemaDefinitionError(
                f"schema at {where} must be a mapping, got {type(data).__name__}"
            )

        rules = {f.name for f in fields(cls)} - {"extras"}
        kwargs: dict[str, Any] = {}
        extras: dict[str, Any] = {}
        for raw_key, raw in data.items():
            key = _ALIASES.get(raw_key, raw_key)
            if key in rules:
                kwargs[key] = raw
            else:
                extras[raw_key] = raw
        if extras:
            kwargs["extras"] = MappingProxyType(extras)

        if "type" in kwargs and kwargs["type"] is not None and not isinstance(kwargs["type"], str):
            raise SchemaDefinitionError(f"schema at {where}: 'type' must be a string")

        if "required" in kwargs:
            kwargs["required"] = bool(kwargs["required"])

        enum = kwargs.get("enum")
        if enum is not None:
            if isinstance(enum, (str, bytes)) or not isinstance(enum, Sequence):
                raise SchemaDefinitionError(f"schema at {where}: 'enum' must be a list")
            kwargs["enum"] = tuple(enum)

        for key in ("min_length", "max_length"):
            bound = kwargs.get(key)
            if bound is None:
                continue
            if isinstance(bound, float) and bound.is_integer():
                kwargs[key] = bound = int(bound)
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise SchemaDefinitionError(f"schema at {where}: '{key}' must be an integer")

        pattern = kwargs.get("pattern")
        if isinstance(pattern, str):
            try:
                kwargs["pattern"] = re.compile(pattern)
            except re.error as exc:
                raise SchemaDefinitionError(f"schema at {where}: invalid pattern: {exc}") from exc
        elif pattern is not None and not isinstance(pattern, re.Pattern):
            raise SchemaDefinitionError(f"schema at {where}: 'pattern' must be a regex")

        props = kwargs.get("properties")
        if props is not None:
            if not isinstance(props, Mapping):
                raise SchemaDefinitionError(f"schema at {where}: 'properties' must be a mapping")
            kwargs["properties"] = MappingProxyType({
                name: cls.coerce(child, path=f"{path}.{name}" if path else name)
                for name, child in props.items()
            })

        items = kwargs.get("items")
        if items is not None:
            kwargs["items"] = cls.coerce(items, path=f"{path}[]")

        return cls(**kwargs)

    @classmethod
    def coerce(cls, schema: "SchemaNode | Mapping[str, Any]", *, path: str = "") -> "SchemaNode":
        """Return *schema* itself if it is already a node, else build one."""
        if isinstance(schema, cls):
            return schema
        return cls.from_mapping(schema, path=path)

    # ------------------------------------------------------------------ #
    # Introspection                                                      #
    # ------------------------------------------------------------------ #

    @property
    def is_empty(self) -> bool:
        return replace(self, properties=None) == SchemaNode() and not self.properties

