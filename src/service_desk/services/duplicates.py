"""
Duplicate detection for imported messages.
"""

from __future__ import annotations

from typing import Protocol

from service_desk.models import RecordKind


class RecordLookup(Protocol):
    """Lookup operation the detector needs from the persistence layer."""

    def exists(self, kind: RecordKind, description: str) -> bool:
        ...


class DuplicateDetector:
    """
    Flags messages whose description is already stored for the same kind.

    Records created earlier in the running batch are not persisted yet, so
    their descriptions are tracked in memory and checked as well. Matching
    is exact: no trimming and no case folding.
    """

    def __init__(self, lookup: RecordLookup):
        self._lookup = lookup
        self._in_flight: set[tuple[RecordKind, str]] = set()

    def is_duplicate(self, kind: RecordKind, description: str) -> bool:
        """Check the running batch first, then the store."""
        if (kind, description) in self._in_flight:
            return True
        return self._lookup.exists(kind, description)

    def remember(self, kind: RecordKind, description: str) -> None:
        """Register a description created in the running batch."""
        self._in_flight.add((kind, description))

    def reset(self) -> None:
        """Forget in-flight descriptions, e.g. after a batch is committed."""
        self._in_flight.clear()
