"""
Endpoint coverage tracking

Records which ``METHOD /template`` operations of each contract were exercised
during a test run and compares them against the operations the contract
declares.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple, Union

import structlog

from openapi_contract.contracts.references import resolve_ref
from openapi_contract.contracts.spec_store import SpecStore

logger = structlog.get_logger()

TRACKED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True)
class CoverageReport:
    """Coverage of one contract"""
    contract: str
    covered: Tuple[str, ...] = field(default_factory=tuple)
    uncovered: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.covered) + len(self.uncovered)

    @property
    def covered_count(self) -> int:
        return len(self.covered)

    @property
    def percentage(self) -> float:
        """Covered share of the declared operations, rounded to one decimal"""
        if self.total == 0:
            return 0
        return round(self.covered_count / self.total * 100, 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "covered": list(self.covered),
            "uncovered": list(self.uncovered),
            "total": self.total,
            "coveredCount": self.covered_count,
        }


def endpoint_key(method: str, template_path: str) -> str:
    return f"{method.upper()} {template_path}"


def declared_endpoints(document: Dict[str, Any]) -> List[str]:
    """Every tracked operation a contract declares, sorted"""
    endpoints = []
    for path, path_item in (document.get("paths") or {}).items():
        path_item = resolve_ref(document, path_item)
        if not isinstance(path_item, dict):
            continue
        for method in path_item:
            if str(method).upper() in TRACKED_METHODS:
                endpoints.append(endpoint_key(str(method), path))

    return sorted(endpoints)


class CoverageStore:
    """Exercised operations per contract for one test run"""

    def __init__(self, spec_store: SpecStore):
        self.spec_store = spec_store
        self._covered: Dict[str, Set[str]] = {}

    def record(self, spec_name: str, method: str, template_path: str) -> None:
        """Mark an operation as exercised; recording twice has no effect"""
        key = endpoint_key(method, template_path)
        recorded = self._covered.setdefault(spec_name, set())
        if key not in recorded:
            recorded.add(key)
            logger.debug("Recorded endpoint coverage", contract=spec_name, endpoint=key)

    def covered(self, spec_name: Optional[str] = None) -> Union[List[str], Dict[str, List[str]]]:
        """Recorded operations of one contract, or of every contract by name"""
        if spec_name is not None:
            return sorted(self._covered.get(spec_name, ()))
        return {name: sorted(keys) for name, keys in self._covered.items() if keys}

    def contracts(self) -> List[str]:
        """Names of contracts with at least one recorded operation"""
        return [name for name, keys in self._covered.items() if keys]

    def compute_coverage(self, spec_name: str) -> CoverageReport:
        """Partition the contract's declared operations into covered and uncovered"""
        document = self.spec_store.load(spec_name)
        recorded = self._covered.get(spec_name, set())

        covered = []
        uncovered = []
        for endpoint in declared_endpoints(document):
            if endpoint in recorded:
                covered.append(endpoint)
            else:
                uncovered.append(endpoint)

        return CoverageReport(contract=spec_name, covered=tuple(covered), uncovered=tuple(uncovered))

    def reset(self) -> None:
        """Clear recorded coverage for all contracts"""
        self._covered.clear()
