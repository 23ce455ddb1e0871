"""
Reverse indices: target unique id -> artifacts that reference it.

One table per forward relation. Entries are only ever derived from the
forward references of resolved nodes; nothing else writes here.
"""

from typing import TYPE_CHECKING, Dict, Set

from ..core.relations import ReverseRelation

if TYPE_CHECKING:
    from ..artifacts.base import ArtifactNode


class ReverseIndex:
    """Per-relation mapping of target id to the set of referring nodes."""

    def __init__(self):
        self._tables: Dict[ReverseRelation, Dict[str, Set["ArtifactNode"]]] = {
            relation: {} for relation in ReverseRelation
        }

    def add(self, relation: ReverseRelation, target_id: str, source: "ArtifactNode") -> bool:
        """
        Record that ``source`` references ``target_id`` through ``relation``.

        Returns:
            True if the entry is new
        """
        referrers = self._tables[relation].setdefault(target_id, set())
        if source in referrers:
            return False
        referrers.add(source)
        return True

    def get(self, relation: ReverseRelation, target_id: str) -> Set["ArtifactNode"]:
        """Referrers of ``target_id``; an empty set when there are none."""
        return set(self._tables[relation].get(target_id, ()))

    def count(self, relation: ReverseRelation) -> int:
        return sum(len(referrers) for referrers in self._tables[relation].values())
