"""Local ``$ref`` resolution inside a contract document"""

from typing import Any, Mapping

from openapi_contract.exceptions import ConfigurationError


def unescape_pointer_token(token: str) -> str:
    """Decode one RFC 6901 reference token"""
    return token.replace("~1", "/").replace("~0", "~")


def follow_pointer(document: Any, pointer: str) -> Any:
    """Return the node addressed by a ``#/...`` fragment pointer"""
    if pointer in ("#", "#/"):
        return document

    node = document
    for token in pointer[2:].split("/"):
        key = unescape_pointer_token(token)
        if isinstance(node, Mapping) and key in node:
            node = node[key]
        elif isinstance(node, Mapping) and key.isdigit() and int(key) in node:
            # YAML loads unquoted status codes as integers
            node = node[int(key)]
        elif isinstance(node, list) and key.isdigit() and int(key) < len(node):
            node = node[int(key)]
        else:
            raise ConfigurationError(f"Unresolvable reference in OpenAPI spec: {pointer}")

    return node


def resolve_ref(document: Mapping[str, Any], node: Any) -> Any:
    """Follow local references until a concrete node is reached.

    References to other documents are returned unchanged.
    """
    seen = set()
    while isinstance(node, Mapping) and isinstance(node.get("$ref"), str):
        ref = node["$ref"]
        if not ref.startswith("#"):
            return node
        if ref in seen:
            raise ConfigurationError(f"Circular reference in OpenAPI spec: {ref}")
        seen.add(ref)
        node = follow_pointer(document, ref)

    return node
