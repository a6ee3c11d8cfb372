"""Contract document loading and reference resolution"""

from .references import follow_pointer, resolve_ref
from .spec_store import SpecStore

__all__ = [
    "SpecStore",
    "follow_pointer",
    "resolve_ref",
]
