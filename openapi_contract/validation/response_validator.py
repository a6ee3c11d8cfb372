"""
Response validation against OpenAPI contracts

Runs the full check for one observed response:

1. load the contract and detect its dialect
2. resolve the request path to a contract path template
3. find the operation, the status code and the response content
4. negotiate the media type when a Content-Type was observed
5. convert the response schema to Draft-07 and validate the body

Every contract mismatch is returned as a failed ``ValidationVerdict``; only
configuration problems (missing contract, dangling references) are raised.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

import structlog

from openapi_contract.contracts.references import follow_pointer, resolve_ref, unescape_pointer_token
from openapi_contract.contracts.spec_store import SpecStore

from .path_matcher import PathMatcher
from .schema_converter import convert, convert_components
from .schema_engine import validate_instance
from .types import OpenApiVersion, SchemaNode, ValidationVerdict

logger = structlog.get_logger()

DEFAULT_MAX_ERRORS = 20

# Keywords whose values are instance data, not subschemas
LITERAL_KEYWORDS = ("enum", "const", "default", "examples")

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def normalize_content_type(content_type: str) -> str:
    """Drop media type parameters such as charset and lower-case the rest"""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_content_type(content_type: str) -> bool:
    """``application/json`` or any structured ``+json`` media type"""
    normalized = normalize_content_type(content_type)
    return normalized == "application/json" or normalized.endswith("+json")


def _is_empty_body(body: Any) -> bool:
    return body is None or body == "" or body == b""


def _local_refs(node: Any) -> Iterator[str]:
    """Every ``#/...`` reference in a schema tree, skipping literal values"""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/") and len(ref) > 2:
            yield ref
        for key, value in node.items():
            if key not in LITERAL_KEYWORDS:
                yield from _local_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _local_refs(item)


def _contains_pointer(root: Any, tokens: List[str]) -> bool:
    node = root
    for token in tokens:
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            return False
    return True


def attach_ref_targets(
    spec: Dict[str, Any],
    json_schema: SchemaNode,
    refs: Iterable[str],
    version: OpenApiVersion,
) -> None:
    """
    Make in-document references resolvable against the converted root schema.

    The validator resolves ``#/...`` against the root schema. Starting from
    ``refs``, every reachable target that is not already there
    (``#/paths/...``, ``#/components/parameters/...``) is converted and placed
    under the same pointer.

    Raises:
        ConfigurationError: If a reachable reference does not resolve in the contract document
    """
    pending = list(refs)
    seen = set()
    while pending:
        ref = pending.pop()
        if ref in seen:
            continue
        seen.add(ref)

        tokens = [unescape_pointer_token(token) for token in ref[2:].split("/")]
        if _contains_pointer(json_schema, tokens):
            target = follow_pointer(json_schema, ref)
        else:
            target = follow_pointer(spec, ref)
            target = convert(target, version) if isinstance(target, dict) else target

            node = json_schema
            for token in tokens[:-1]:
                node = node[int(token)] if isinstance(node, list) else node.setdefault(token, {})
            node[tokens[-1]] = target

        pending.extend(_local_refs(target))


class ResponseValidator:
    """
    Validate responses against named contracts from a ``SpecStore``.

    When a ``CoverageStore`` is given, every response whose path resolved to a
    contract template is recorded as covered, whether or not it validated.
    """

    def __init__(self, spec_store: SpecStore, max_errors: int = DEFAULT_MAX_ERRORS, coverage=None):
        if max_errors < 0:
            raise ValueError("max_errors must be >= 0 (0 means unlimited)")
        self.spec_store = spec_store
        self.max_errors = max_errors
        self.coverage = coverage

    def validate(
        self,
        spec_name: str,
        method: str,
        request_path: str,
        status_code: int,
        body: Any,
        content_type: Optional[str] = None,
    ) -> ValidationVerdict:
        """Validate one response and return the verdict"""
        verdict = self._validate(spec_name, method, request_path, status_code, body, content_type)

        if verdict.matched_path is not None and self.coverage is not None:
            self.coverage.record(spec_name, method, verdict.matched_path)

        if not verdict.valid:
            logger.debug(
                "Response does not match contract",
                contract=spec_name,
                method=method.upper(),
                path=request_path,
                status_code=status_code,
                matched_path=verdict.matched_path,
                error_count=len(verdict.errors),
            )

        return verdict

    def _validate(
        self,
        spec_name: str,
        method: str,
        request_path: str,
        status_code: int,
        body: Any,
        content_type: Optional[str],
    ) -> ValidationVerdict:
        spec = self.spec_store.load(spec_name)
        version = OpenApiVersion.from_spec(spec)

        paths = spec.get("paths") or {}
        matcher = PathMatcher(list(paths.keys()), self.spec_store.strip_prefixes)
        matched_path = matcher.match(request_path)

        if matched_path is None:
            return ValidationVerdict.failure([
                f"No matching path found in '{spec_name}' spec for: {request_path}"
            ])

        upper_method = method.upper()
        path_item = resolve_ref(spec, paths[matched_path])
        operation = self._find_operation(path_item, method)

        if operation is None:
            return ValidationVerdict.failure(
                [f"Method {upper_method} not defined for path {matched_path} in '{spec_name}' spec."],
                matched_path,
            )

        operation = resolve_ref(spec, operation)
        responses = (operation.get("responses") if isinstance(operation, dict) else None) or {}
        # YAML loads unquoted status codes as integers
        responses = {str(code): response for code, response in responses.items()}
        status_key = str(status_code)

        if status_key not in responses:
            return ValidationVerdict.failure(
                [f"Status code {status_code} not defined for {upper_method} {matched_path} in '{spec_name}' spec."],
                matched_path,
            )

        response_spec = resolve_ref(spec, responses[status_key])

        # No declared content (e.g. 204 No Content): nothing to check in the body
        content = response_spec.get("content") if isinstance(response_spec, dict) else None
        if not content:
            return ValidationVerdict.success(matched_path)

        endpoint = f"{upper_method} {matched_path} (status {status_code})"

        if content_type is not None:
            normalized = normalize_content_type(content_type)
            if not is_json_content_type(normalized):
                declared = [normalize_content_type(key) for key in content]
                if normalized in declared:
                    return ValidationVerdict.success(matched_path)
                return ValidationVerdict.failure(
                    [
                        f"Content-Type not defined for {endpoint} in '{spec_name}' spec: {normalized}. "
                        f"Defined content types: {', '.join(content.keys())}"
                    ],
                    matched_path,
                )

        media_type = self._find_json_media_type(spec, content)
        if media_type is None:
            # Only non-JSON media types are declared; their bodies are not checked
            return ValidationVerdict.success(matched_path)

        schema = media_type.get("schema")
        if schema is None:
            return ValidationVerdict.success(matched_path)

        if _is_empty_body(body):
            return ValidationVerdict.failure(
                [f"Response body is empty but {endpoint} defines a JSON schema in '{spec_name}' spec."],
                matched_path,
            )

        json_schema = self._build_schema(spec, schema, version)
        violations = validate_instance(
            body,
            json_schema,
            max_errors=self.max_errors,
            stop_at_first_error=self.max_errors == 1,
        )

        if not violations:
            return ValidationVerdict.success(matched_path)

        return ValidationVerdict.failure([violation.format() for violation in violations], matched_path)

    @staticmethod
    def _find_operation(path_item: Any, method: str) -> Optional[Any]:
        """Operation declared for ``method``, ignoring the case of the key"""
        wanted = method.lower()
        if not isinstance(path_item, dict) or wanted not in HTTP_METHODS:
            return None
        for key, operation in path_item.items():
            if str(key).lower() == wanted:
                return operation
        return None

    @staticmethod
    def _find_json_media_type(spec: Dict[str, Any], content: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """First JSON-compatible media type object in declaration order"""
        for content_type, media_type in content.items():
            if is_json_content_type(content_type):
                media_type = resolve_ref(spec, media_type)
                return media_type if isinstance(media_type, dict) else {}
        return None

    @staticmethod
    def _build_schema(spec: Dict[str, Any], schema: Any, version: OpenApiVersion) -> Any:
        """Convert the response schema and attach converted components for $ref lookups"""
        if not isinstance(schema, dict):
            # Boolean schemas are valid JSON Schema as they are
            return schema

        json_schema = convert(schema, version)
        refs = list(_local_refs(json_schema))
        components = convert_components(spec, version)
        if components and "components" not in json_schema:
            json_schema["components"] = components
        attach_ref_targets(spec, json_schema, refs, version)
        return json_schema
