"""
Test configuration and fixtures for the contract testing suite.

Fixture contracts live in ``tests/fixtures/specs``:

- ``petstore-3.0`` (JSON, OpenAPI 3.0.3, inline schemas)
- ``petstore-3.1`` (YAML, OpenAPI 3.1.0, unquoted status codes)
- ``orders-refs`` (YAML, OpenAPI 3.0.3, response and schema references)
"""

from pathlib import Path

import pytest

from openapi_contract.contracts.spec_store import SpecStore
from openapi_contract.coverage.tracker import CoverageStore
from openapi_contract.validation.response_validator import ResponseValidator


SPECS_DIR = Path(__file__).parent / "fixtures" / "specs"


@pytest.fixture(scope="session")
def specs_dir() -> Path:
    """Directory holding the fixture contracts"""
    return SPECS_DIR


@pytest.fixture(scope="function")
def spec_store(specs_dir: Path) -> SpecStore:
    """A store configured for the fixture contracts, without prefixes"""
    store = SpecStore()
    store.configure(str(specs_dir))
    yield store
    store.reset()


@pytest.fixture(scope="function")
def coverage(spec_store: SpecStore) -> CoverageStore:
    """Fresh coverage for each test"""
    store = CoverageStore(spec_store)
    yield store
    store.reset()


@pytest.fixture(scope="function")
def validator(spec_store: SpecStore) -> ResponseValidator:
    """Validator with the default error cap and no coverage recording"""
    return ResponseValidator(spec_store)


@pytest.fixture(scope="function")
def sample_pets_body():
    """A conforming GET /v1/pets body"""
    return {
        "data": [
            {"id": 1, "name": "Fido", "tag": "dog"},
            {"id": 2, "name": "Whiskers", "tag": None},
        ]
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on file paths"""
    for item in items:
        fspath = str(item.fspath)
        if 'integration' in fspath:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
