"""
OpenAPI contract testing

Checks HTTP responses produced in tests against OpenAPI 3.0 / 3.1 contracts
and reports which contract endpoints the test suite exercised.
"""

from openapi_contract.exceptions import ConfigurationError, ContractAssertionError
from openapi_contract.contracts import SpecStore
from openapi_contract.coverage import CoverageReport, CoverageStore
from openapi_contract.validation import (
    OpenApiVersion,
    PathMatcher,
    ResponseValidator,
    ValidationVerdict,
    convert,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ContractAssertionError",
    "CoverageReport",
    "CoverageStore",
    "OpenApiVersion",
    "PathMatcher",
    "ResponseValidator",
    "SpecStore",
    "ValidationVerdict",
    "convert",
]
