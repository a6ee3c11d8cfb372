"""
Contract document store

Loads OpenAPI contracts by name from a configured directory and caches the
parsed documents. A contract named ``petstore`` is read from the first of
``petstore.json``, ``petstore.yaml`` or ``petstore.yml`` that exists.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import structlog
import yaml

from openapi_contract.exceptions import ConfigurationError

logger = structlog.get_logger()

SPEC_EXTENSIONS = (".json", ".yaml", ".yml")


class SpecStore:
    """
    Named, cached access to parsed contract documents.

    Each store owns its configuration and cache, so independent stores can
    coexist in one process.
    """

    def __init__(self, base_path: Optional[str] = None, strip_prefixes: Iterable[str] = ()):
        self._base_path: Optional[str] = None
        self._strip_prefixes: Tuple[str, ...] = ()
        self._cache: Dict[str, Dict[str, Any]] = {}
        if base_path is not None:
            self.configure(base_path, strip_prefixes)

    @classmethod
    def from_settings(cls, settings) -> "SpecStore":
        """Create a store from application settings"""
        return cls(settings.spec_base_path, settings.get_strip_prefixes())

    def configure(self, base_path: str, strip_prefixes: Iterable[str] = ()) -> None:
        """Set the contract directory and the request path prefixes to strip"""
        self._base_path = str(base_path).rstrip("/") or "/"
        self._strip_prefixes = tuple(strip_prefixes)
        logger.debug(
            "Configured OpenAPI spec store",
            base_path=self._base_path,
            strip_prefixes=list(self._strip_prefixes),
        )

    @property
    def configured(self) -> bool:
        return self._base_path is not None

    @property
    def base_path(self) -> str:
        if self._base_path is None:
            raise ConfigurationError(
                "OpenAPI spec base path not configured. "
                "Call SpecStore.configure(), pass --openapi-spec-base-path to pytest "
                "or set OPENAPI_CONTRACT_SPEC_BASE_PATH."
            )
        return self._base_path

    @property
    def strip_prefixes(self) -> Tuple[str, ...]:
        return self._strip_prefixes

    def locate(self, name: str) -> Path:
        """Return the file holding contract ``name``"""
        base = Path(self.base_path)
        for extension in SPEC_EXTENSIONS:
            candidate = base / f"{name}{extension}"
            if candidate.is_file():
                return candidate

        expected = ", ".join(str(base / f"{name}{ext}") for ext in SPEC_EXTENSIONS)
        raise ConfigurationError(f"OpenAPI spec not found: {name} (looked for {expected})")

    def load(self, name: str) -> Dict[str, Any]:
        """Load contract ``name``, reading it from disk on first use"""
        if name in self._cache:
            return self._cache[name]

        path = self.locate(name)
        document = self._parse(path)
        self._cache[name] = document

        logger.info(
            "Loaded OpenAPI contract",
            contract=name,
            path=str(path),
            openapi=document.get("openapi"),
            paths=len(document.get("paths") or {}),
        )
        return document

    def reset(self) -> None:
        """Forget configuration and cached documents"""
        self._base_path = None
        self._strip_prefixes = ()
        self._cache.clear()

    def _parse(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    document = json.load(f)
                else:
                    document = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"Failed to read OpenAPI spec: {path}") from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse OpenAPI spec {path}: {e}") from e

        if not isinstance(document, dict):
            raise ConfigurationError(f"OpenAPI spec {path} does not contain a mapping at the top level")

        return document
