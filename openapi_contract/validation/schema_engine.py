"""JSON Schema evaluation backed by the jsonschema Draft-07 validator"""

from typing import Any, Iterable, List, Mapping, NamedTuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError
from referencing.exceptions import Unresolvable

from openapi_contract.exceptions import ConfigurationError


class SchemaError(NamedTuple):
    """A single schema violation located by a JSON Pointer into the instance"""
    pointer: str
    message: str

    def format(self) -> str:
        return f"[{self.pointer}] {self.message}"


def json_pointer(parts: Iterable[Any]) -> str:
    """Build an RFC 6901 pointer from a sequence of keys and indexes"""
    escaped = [str(part).replace("~", "~0").replace("/", "~1") for part in parts]
    if not escaped:
        return "/"
    return "/" + "/".join(escaped)


def validate_instance(
    instance: Any,
    schema: Mapping[str, Any],
    max_errors: int = 0,
    stop_at_first_error: bool = False,
) -> List[SchemaError]:
    """
    Evaluate ``instance`` against a Draft-07 ``schema``.

    Args:
        instance: Decoded JSON value to check
        schema: Draft-07 schema
        max_errors: Maximum number of violations to collect, 0 for no limit
        stop_at_first_error: Return as soon as one violation is found

    Returns:
        Violations in the order the validator reports them

    Raises:
        ConfigurationError: If a ``$ref`` in the schema cannot be resolved
    """
    validator = Draft7Validator(schema, format_checker=Draft7Validator.FORMAT_CHECKER)

    errors: List[SchemaError] = []
    error: ValidationError
    try:
        for error in validator.iter_errors(instance):
            errors.append(SchemaError(json_pointer(error.absolute_path), error.message))
            if stop_at_first_error:
                break
            if max_errors > 0 and len(errors) >= max_errors:
                break
    except Unresolvable as e:
        raise ConfigurationError(f"Unresolvable schema reference in OpenAPI spec: {e}") from e

    return errors
