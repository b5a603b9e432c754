"""
response_schema – runtime schema validation for untrusted data.
"""
from .catalog import Catalog
from .matcher import matches
from .node import SchemaNode, SchemaDefinitionError
from .utils import UNDEFINED
from .validator import (
    TypeValidationError,
    create_validator,
    validate,
    validate_api_response,
)

__all__ = [
    "Catalog",
    "SchemaNode",
    "SchemaDefinitionError",
    "TypeValidationError",
    "UNDEFINED",
    "matches",
    "validate",
    "validate_api_response",
    "create_validator",
]
