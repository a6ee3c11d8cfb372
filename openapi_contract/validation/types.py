"""
Validation types and data structures
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]
SchemaNode = Dict[str, Any]


class OpenApiVersion(Enum):
    """OpenAPI dialects the schema converter understands"""
    V3_0 = "3.0"
    V3_1 = "3.1"

    @classmethod
    def from_spec(cls, document: Mapping[str, Any]) -> "OpenApiVersion":
        """Detect the dialect from the document's ``openapi`` field.

        Anything that is not a 3.1.x version is treated as 3.0.
        """
        # YAML loads an unquoted ``openapi: 3.1`` as a float
        version = str(document.get("openapi", ""))
        if version.startswith("3.1"):
            return cls.V3_1
        return cls.V3_0


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of validating one response against a contract.

    ``matched_path`` is set whenever a path template was resolved, even when a
    later step failed, so coverage can be attributed to the endpoint.
    """
    valid: bool
    errors: Tuple[str, ...] = field(default_factory=tuple)
    matched_path: Optional[str] = None

    @classmethod
    def success(cls, matched_path: Optional[str] = None) -> "ValidationVerdict":
        return cls(valid=True, errors=(), matched_path=matched_path)

    @classmethod
    def failure(cls, errors, matched_path: Optional[str] = None) -> "ValidationVerdict":
        return cls(valid=False, errors=tuple(errors), matched_path=matched_path)

    @property
    def error_message(self) -> str:
        """All errors joined by newlines"""
        return "\n".join(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "matched_path": self.matched_path,
        }
