"""
OpenAPI to JSON Schema Draft-07 conversion

OpenAPI 3.0 schemas are an extended subset of JSON Schema and OpenAPI 3.1
schemas follow Draft 2020-12. Both are rewritten here into Draft-07 so that a
single validator class can evaluate every contract:

- 3.0 ``nullable`` becomes a ``"null"`` type or alternative
- 3.1 ``prefixItems`` becomes a Draft-07 tuple ``items`` array
- annotation-only and dialect-specific keywords are dropped

The input tree is never modified; a new tree is returned.
"""

from typing import Any, Dict, Iterable, Mapping

from .types import OpenApiVersion, SchemaNode


# Annotation keywords removed for every dialect
OPENAPI_COMMON_KEYS = (
    "discriminator",
    "xml",
    "externalDocs",
    "example",
    "deprecated",
)

# OpenAPI 3.0 keywords unknown to Draft-07
OPENAPI_3_0_KEYS = (
    "nullable",
    "readOnly",
    "writeOnly",
)

# Draft 2020-12 keywords unknown to Draft-07
DRAFT_2020_12_KEYS = (
    "$dynamicRef",
    "$dynamicAnchor",
    "contentSchema",
    "examples",
)

COMBINERS = ("allOf", "oneOf", "anyOf")


def convert(schema: Mapping[str, Any], version: OpenApiVersion = OpenApiVersion.V3_0) -> SchemaNode:
    """Convert an OpenAPI schema object into a Draft-07 compatible schema"""
    if version is OpenApiVersion.V3_0:
        node = _remove_keys(_handle_nullable(schema), OPENAPI_3_0_KEYS)
    elif version is OpenApiVersion.V3_1:
        node = _remove_keys(_handle_prefix_items(schema), DRAFT_2020_12_KEYS)
    else:
        raise ValueError(f"Unsupported OpenAPI version: {version!r}")

    node = _remove_keys(node, OPENAPI_COMMON_KEYS)

    properties = node.get("properties")
    if isinstance(properties, dict):
        node["properties"] = {
            name: convert(prop, version) if isinstance(prop, dict) else prop
            for name, prop in properties.items()
        }

    items = node.get("items")
    if isinstance(items, list):
        node["items"] = _convert_each(items, version)
    elif isinstance(items, dict):
        node["items"] = convert(items, version)

    for combiner in COMBINERS:
        if isinstance(node.get(combiner), list):
            node[combiner] = _convert_each(node[combiner], version)

    for key in ("additionalProperties", "additionalItems"):
        if isinstance(node.get(key), dict):
            node[key] = convert(node[key], version)

    if isinstance(node.get("not"), dict):
        node["not"] = convert(node["not"], version)

    return node


def convert_components(document: Mapping[str, Any], version: OpenApiVersion) -> Dict[str, Any]:
    """Convert the reusable schemas of a contract document.

    The result is shaped like the document's ``components`` section, so local
    references such as ``#/components/schemas/Pet`` still resolve once it is
    attached to a converted root schema.
    """
    components = document.get("components")
    if not isinstance(components, dict):
        return {}

    schemas = components.get("schemas")
    if not isinstance(schemas, dict):
        return {}

    return {
        "schemas": {
            name: convert(schema, version) if isinstance(schema, dict) else schema
            for name, schema in schemas.items()
        }
    }


def _convert_each(members: Iterable[Any], version: OpenApiVersion) -> list:
    return [convert(member, version) if isinstance(member, dict) else member for member in members]


def _handle_nullable(schema: Mapping[str, Any]) -> SchemaNode:
    """Rewrite OpenAPI 3.0 ``nullable: true`` into a JSON Schema null type"""
    node = dict(schema)
    if node.get("nullable") is not True:
        return node

    del node["nullable"]

    if isinstance(node.get("type"), str):
        node["type"] = [node["type"], "null"]
        return node

    for combiner in ("oneOf", "anyOf"):
        if isinstance(node.get(combiner), list):
            node[combiner] = list(node[combiner]) + [{"type": "null"}]
            return node

    if isinstance(node.get("allOf"), list):
        all_of = node.pop("allOf")
        node["oneOf"] = [
            {"allOf": all_of},
            {"type": "null"},
        ]

    return node


def _handle_prefix_items(schema: Mapping[str, Any]) -> SchemaNode:
    """Move Draft 2020-12 ``prefixItems`` to a Draft-07 tuple ``items``"""
    node = dict(schema)
    if isinstance(node.get("prefixItems"), list):
        # 2020-12 "items" constrains the elements after the tuple
        if "items" in node:
            node["additionalItems"] = node.pop("items")
        node["items"] = list(node.pop("prefixItems"))
    return node


def _remove_keys(node: SchemaNode, keys: Iterable[str]) -> SchemaNode:
    for key in keys:
        node.pop(key, None)
    return node
