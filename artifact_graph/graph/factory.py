"""
Artifact factory: the registry that builds and caches artifact nodes.

Every (kind, unique id) slot moves through::

    Absent -> Pending -> Resolved
    Absent -> Pending -> Failed

Building a node resolves its forward references, which recursively builds
the referenced nodes. A reference to a node that is still Pending (a cycle)
yields an ArtifactRef without recursing. Reverse indices are filled in one
pass once the outermost build returns, from the forward refs of every node
resolved during that build.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Union

from ..artifacts import NODE_TYPES
from ..artifacts.base import ArtifactNode
from ..core.errors import ArtifactGraphError, ArtifactPendingError
from ..core.identity import ArtifactKind, Location, location_identity, make_unique_id, split_unique_id
from ..core.provider import BaseConfigProvider, SnapshotConfigProvider, load_snapshot
from ..core.relations import ArtifactRef, ReverseRelation
from .reverse_index import ReverseIndex

logger = logging.getLogger(__name__)

KindLike = Union[ArtifactKind, str]
RelationLike = Union[ReverseRelation, str]


class SlotState(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass
class _Slot:
    state: SlotState
    node: Optional[ArtifactNode] = None
    error: Optional[ArtifactGraphError] = None


class ArtifactFactory:
    """
    Lazily builds artifact nodes from a configuration provider.

    One factory holds the graph of one configuration snapshot. Failed
    builds are cached (unless ``cache_failures`` is off), so asking again
    for a broken artifact re-raises the first error without going back
    to the provider. Start a new factory to pick up configuration changes.

    Usage:
        factory = ArtifactFactory(provider)
        view = factory.get_or_build("view", "controller.xml", "orderView")
        screen = view.screen_called_by_this_view()
        factory.reverse_edges("viewsForScreen", screen.unique_id)
    """

    def __init__(self, provider: BaseConfigProvider, cache_failures: bool = True):
        self.provider = provider
        self.cache_failures = cache_failures

        self._slots: Dict[ArtifactKind, Dict[str, _Slot]] = {kind: {} for kind in ArtifactKind}
        self._reverse = ReverseIndex()

        # Serializes slot transitions; re-entrant for recursive builds
        self._lock = threading.RLock()
        self._depth = 0
        self._unindexed: List[ArtifactNode] = []

    @classmethod
    def from_settings(cls, settings) -> "ArtifactFactory":
        """Create a factory from GraphSettings (empty snapshot if none configured)."""
        if settings.snapshot_path:
            provider = load_snapshot(settings.snapshot_path)
        else:
            logger.warning("No configuration snapshot configured; graph will be empty")
            provider = SnapshotConfigProvider({})
        return cls(provider, cache_failures=settings.cache_failures)

    # ─────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────

    def get_or_build(self, kind: KindLike, location: Location, name: str) -> ArtifactNode:
        """
        Return the node for ``(kind, location, name)``, building it on first use.

        Raises:
            ArtifactNotFoundError: If the provider does not define the artifact
            DanglingReferenceError: If a reference with a propagating policy fails
            ArtifactPendingError: If the node is currently under construction
        """
        kind = ArtifactKind(kind)
        location = location_identity(location)
        unique_id = make_unique_id(location, name)

        with self._lock:
            slot = self._slots[kind].get(unique_id)
            if slot is not None:
                if slot.state is SlotState.RESOLVED:
                    return slot.node
                if slot.state is SlotState.FAILED:
                    logger.debug("Cached failure for %s [%s]", kind.value, unique_id)
                    raise slot.error
                raise ArtifactPendingError(kind.value, unique_id)
            return self._build(kind, location, name, unique_id)

    def get_by_unique_id(self, kind: KindLike, unique_id: str) -> ArtifactNode:
        """Build or fetch a node from its ``location#name`` id."""
        location, name = split_unique_id(unique_id)
        return self.get_or_build(kind, location, name)

    def resolve_reference(self, kind: ArtifactKind, location: Location, name: str) -> ArtifactRef:
        """
        Resolve a forward reference from a node under construction.

        A Pending target returns its ref immediately so that cycles terminate.
        """
        ref = ArtifactRef(kind, location_identity(location), name)
        with self._lock:
            slot = self._slots[kind].get(ref.unique_id)
            if slot is not None and slot.state is SlotState.PENDING:
                logger.debug("Reference cycle through %s; deferring", ref)
                return ref
            self.get_or_build(kind, ref.location, name)
        return ref

    def build_all(self, kinds: Optional[Iterable[KindLike]] = None) -> int:
        """
        Build every artifact the provider lists.

        Reverse queries are only complete after this, since lazy builds
        only index what has been requested. Failures are logged and skipped.

        Returns:
            Number of resolved nodes in the factory
        """
        selected = [ArtifactKind(k) for k in kinds] if kinds is not None else list(ArtifactKind)
        for kind in selected:
            for location, name in self.provider.list_artifacts(kind):
                try:
                    self.get_or_build(kind, location, name)
                except ArtifactGraphError as e:
                    logger.warning("Skipping %s [%s#%s]: %s", kind.value, location, name, e)
        return len(self.resolved_nodes())

    def _build(self, kind: ArtifactKind, location: str, name: str, unique_id: str) -> ArtifactNode:
        slot = _Slot(SlotState.PENDING)
        self._slots[kind][unique_id] = slot
        self._depth += 1
        try:
            node = NODE_TYPES[kind](location, name, self)
        except ArtifactGraphError as e:
            if self.cache_failures:
                slot.state = SlotState.FAILED
                slot.error = e
            else:
                del self._slots[kind][unique_id]
            raise
        except Exception:
            del self._slots[kind][unique_id]
            raise
        else:
            slot.state = SlotState.RESOLVED
            slot.node = node
            self._unindexed.append(node)
            logger.debug("Built %s [%s]", kind.value, unique_id)
            return node
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._index_new_nodes()

    def _index_new_nodes(self) -> None:
        """Add reverse entries for the forward refs of freshly resolved nodes."""
        new_nodes, self._unindexed = self._unindexed, []
        for node in new_nodes:
            for relation, refs in node.all_forward_refs().items():
                for ref in refs:
                    if self.deref(ref) is None:
                        logger.warning(
                            "Dropping %s reference from [%s] to [%s]: target did not build",
                            relation.value, node.unique_id, ref.unique_id
                        )
                        continue
                    self._reverse.add(relation, ref.unique_id, node)

    # ─────────────────────────────────────────────
    # Lookups
    #
    # Readers take the same lock as builders; results are copies, so
    # callers may iterate them while other threads keep building.
    # ─────────────────────────────────────────────

    def deref(self, ref: ArtifactRef) -> Optional[ArtifactNode]:
        """The resolved node behind ``ref``, or None if it is not (yet) resolved."""
        with self._lock:
            slot = self._slots[ref.kind].get(ref.unique_id)
            if slot is None or slot.state is not SlotState.RESOLVED:
                return None
            return slot.node

    def slot_state(self, kind: KindLike, unique_id: str) -> Optional[SlotState]:
        """Cache state of a slot; None means never requested."""
        kind = ArtifactKind(kind)
        with self._lock:
            slot = self._slots[kind].get(unique_id)
            return slot.state if slot is not None else None

    def reverse_edges(self, relation: RelationLike, target_unique_id: str) -> Set[ArtifactNode]:
        """Nodes referencing ``target_unique_id`` through ``relation`` (never None)."""
        relation = ReverseRelation(relation)
        with self._lock:
            return self._reverse.get(relation, target_unique_id)

    def resolved_nodes(self, kind: Optional[KindLike] = None) -> List[ArtifactNode]:
        kinds = [ArtifactKind(kind)] if kind is not None else list(ArtifactKind)
        with self._lock:
            return [
                slot.node
                for k in kinds
                for slot in self._slots[k].values()
                if slot.state is SlotState.RESOLVED
            ]

    def find_by_name_partial(self, text: str) -> List[ArtifactNode]:
        """Resolved nodes whose name contains ``text`` (case-insensitive), sorted."""
        needle = text.lower()
        return sorted(node for node in self.resolved_nodes() if needle in node.name.lower())

    def statistics(self) -> Dict:
        with self._lock:
            stats = {
                "nodes": {
                    kind.value: len(self.resolved_nodes(kind)) for kind in ArtifactKind
                },
                "failed": sum(
                    1 for slots in self._slots.values()
                    for slot in slots.values() if slot.state is SlotState.FAILED
                ),
                "reverse_entries": {
                    relation.value: self._reverse.count(relation)
                    for relation in ReverseRelation
                    if self._reverse.count(relation)
                },
            }
        stats["total"] = sum(stats["nodes"].values())
        return stats
