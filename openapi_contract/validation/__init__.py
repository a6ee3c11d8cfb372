"""
Response Validation Module

Resolves requests to contract operations, converts OpenAPI schemas to
JSON Schema Draft-07 and validates response bodies against them.
"""

from .types import JSONValue, OpenApiVersion, SchemaNode, ValidationVerdict
from .path_matcher import PathMatcher
from .schema_converter import convert, convert_components
from .schema_engine import SchemaError, validate_instance
from .response_validator import ResponseValidator, attach_ref_targets, is_json_content_type, normalize_content_type

__all__ = [
    'JSONValue',
    'OpenApiVersion',
    'SchemaNode',
    'ValidationVerdict',
    'PathMatcher',
    'convert',
    'convert_components',
    'SchemaError',
    'validate_instance',
    'ResponseValidator',
    'attach_ref_targets',
    'is_json_content_type',
    'normalize_content_type',
]
