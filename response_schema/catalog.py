"""
catalog.py - High-level API for named collections of record schemas.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Iterator, List

from . import loader
from . import validator
from .node import SchemaNode

__all__ = ["Catalog"]


class Catalog(Mapping):
    """A loaded set of named :class:`SchemaNode` trees."""

    def __init__(self, title: str, version: str, schemas: Mapping[str, Any]):
        """Initializes the Catalog, normalising every schema once."""
        self.title = title
        self.version = version
        self._schemas = {
            name: SchemaNode.coerce(schema, path=name) for name, schema in schemas.items()
        }

    @classmethod
    def load(cls, path: str | Path) -> "Catalog":
        """Loads a catalog from a JSON file (or packaged resource name)."""
        data = loader.load_schema(path)

        if not isinstance(data, dict) or not all(k in data for k in ("title", "version", "schemas")):
            raise ValueError(
                f"Schema at '{path}' is not a valid catalog. Required keys: 'title', 'version', 'schemas'."
            )
        if not isinstance(data["schemas"], dict):
            raise ValueError(f"Catalog at '{path}': 'schemas' must be an object")

        return cls(title=data["title"], version=data["version"], schemas=data["schemas"])

    # Mapping protocol -----------------------------------------------------

    def __getitem__(self, name: str) -> SchemaNode:
        try:
            return self._schemas[name]
        except KeyError:
            raise KeyError(f"{self.title}: no schema named '{name}'") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def names(self) -> List[str]:
        return list(self._schemas)

    # Validation -----------------------------------------------------------

    def validator(self, name: str) -> Callable[[Any], Any]:
        """Pass-through guard for the schema called *name*."""
        return validator.create_validator(self[name])

    def validate_response(self, name: str, response: Any) -> Any:
        """Validate an API *response* against the schema called *name*."""
        return validator.validate_api_response(response, self[name])
