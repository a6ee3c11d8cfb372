"""
Path template matching

Resolves a concrete request path such as ``/v1/pets/42`` to the contract
template that declares it (``/v1/pets/{petId}``). Templates with more literal
segments are tried first, so ``/projects/templates`` wins over
``/projects/{id}`` for the request ``/projects/templates``.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

import structlog

logger = structlog.get_logger()

_PLACEHOLDER = re.compile(r"^\{.+\}$")


@dataclass(frozen=True)
class PathTemplateEntry:
    """A compiled contract path template"""
    template: str
    pattern: Pattern[str]
    literal_segments: int


def compile_template(template: str) -> PathTemplateEntry:
    """Compile a path template into an anchored regex"""
    segments = template.strip("/").split("/")
    literal_count = 0
    regex_segments = []

    for segment in segments:
        if _PLACEHOLDER.match(segment):
            regex_segments.append("[^/]+")
        else:
            regex_segments.append(re.escape(segment))
            literal_count += 1

    pattern = re.compile("/" + "/".join(regex_segments))
    return PathTemplateEntry(template=template, pattern=pattern, literal_segments=literal_count)


class PathMatcher:
    """Match request paths against a fixed set of contract path templates"""

    def __init__(self, templates: Iterable[str], strip_prefixes: Sequence[str] = ()):
        compiled = [compile_template(template) for template in templates]
        # sorted() is stable, so equally specific templates keep declaration order
        self._entries: List[PathTemplateEntry] = sorted(
            compiled, key=lambda entry: entry.literal_segments, reverse=True
        )
        self._strip_prefixes: Tuple[str, ...] = tuple(strip_prefixes)

    @property
    def templates(self) -> List[str]:
        """Templates in the order they are tried"""
        return [entry.template for entry in self._entries]

    def normalize(self, request_path: str) -> str:
        """Strip the first configured prefix and any trailing slashes"""
        path = request_path

        for prefix in self._strip_prefixes:
            if path.startswith(prefix):
                path = path[len(prefix):]
                break

        # Keep the root path intact
        if path != "/" and path.endswith("/"):
            path = path.rstrip("/")

        return path

    def match(self, request_path: str) -> Optional[str]:
        """Return the template matching ``request_path``, or None"""
        path = self.normalize(request_path)

        for entry in self._entries:
            if entry.pattern.fullmatch(path):
                return entry.template

        logger.debug("No path template matched", request_path=request_path, normalized=path)
        return None
