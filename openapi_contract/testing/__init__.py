"""
Test-runner integration

``assertions`` adapts httpx responses to the validator; ``pytest_plugin`` is
loaded by pytest through the ``pytest11`` entry point.
"""

from .assertions import ContractAsserter, extract_json_body

__all__ = [
    "ContractAsserter",
    "extract_json_body",
]
