"""
Read-only query façade over an artifact factory.

Exposes forward and reverse edges per node for reporting tools, and
exports the resolved graph to a graph store for impact analysis:
- Direct and transitive dependents ("what breaks if this changes")
- Direct and transitive dependencies
- Reference cycles
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from ..artifacts.base import ArtifactNode
from ..core.identity import Location
from ..core.relations import ReverseRelation, relations_into
from .base_graph_store import BaseGraphStore
from .factory import ArtifactFactory, KindLike, RelationLike
from .graph_store_factory import create_graph_store


@dataclass
class ImpactAssessment:
    """
    Assessment of the impact of changing an artifact.

    Attributes:
        target: Graph key (``kind:uniqueId``) of the artifact analyzed
        direct_dependents: Artifacts that reference the target directly
        indirect_dependents: Artifacts that reference it only transitively
        dependencies: Artifacts the target references directly
        transitive_dependencies: Everything the target reaches
        affected_by_kind: All dependents grouped by artifact kind
        relations: Relations the traversal followed (None for all)
    """
    target: str
    direct_dependents: List[str]
    indirect_dependents: List[str]
    dependencies: List[str]
    transitive_dependencies: List[str]
    affected_by_kind: Dict[str, List[str]] = field(default_factory=dict)
    relations: Optional[List[str]] = None

    @property
    def blast_radius(self) -> int:
        """Total count of affected artifacts."""
        return len(self.direct_dependents) + len(self.indirect_dependents)

    @property
    def risk_level(self) -> str:
        if self.blast_radius >= 8:
            return "CRITICAL"
        if self.blast_radius >= 5:
            return "HIGH"
        if self.blast_radius >= 2:
            return "MEDIUM"
        return "LOW"

    def to_dict(self) -> Dict:
        return {
            "target": self.target,
            "blast_radius": self.blast_radius,
            "risk_level": self.risk_level,
            "direct_dependents": self.direct_dependents,
            "indirect_dependents": self.indirect_dependents,
            "dependencies": self.dependencies,
            "transitive_dependencies": self.transitive_dependencies,
            "affected_by_kind": self.affected_by_kind,
            "relations": self.relations,
        }


class ArtifactGraphQuery:
    """
    Query façade for reporting collaborators.

    Adds no graph semantics of its own: forward edges come from the nodes,
    reverse edges from the factory's indices.
    """

    def __init__(self, factory: ArtifactFactory, store_backend: Optional[str] = None):
        self.factory = factory
        self.store_backend = store_backend

    # ─── Node lookup ──────────────────────────────

    def node(self, kind: KindLike, location: Location, name: str) -> ArtifactNode:
        return self.factory.get_or_build(kind, location, name)

    def by_unique_id(self, kind: KindLike, unique_id: str) -> ArtifactNode:
        return self.factory.get_by_unique_id(kind, unique_id)

    def search(self, text: str) -> List[ArtifactNode]:
        return self.factory.find_by_name_partial(text)

    # ─── Edges ────────────────────────────────────

    def forward_edges(self, node: ArtifactNode) -> Dict[ReverseRelation, List[ArtifactNode]]:
        """Resolved targets of each forward relation of ``node``."""
        edges = {}
        for relation, refs in node.all_forward_refs().items():
            targets = [self.factory.deref(ref) for ref in refs]
            edges[relation] = [t for t in targets if t is not None]
        return edges

    def reverse_edges(self, relation: RelationLike, target_unique_id: str) -> Set[ArtifactNode]:
        return self.factory.reverse_edges(relation, target_unique_id)

    def referrers(self, node: ArtifactNode) -> Dict[ReverseRelation, Set[ArtifactNode]]:
        """Reverse edges into ``node`` for every relation targeting its kind."""
        return {
            spec.relation: self.factory.reverse_edges(spec.relation, node.unique_id)
            for spec in relations_into(node.kind)
        }

    def describe(self, node: ArtifactNode) -> Dict:
        """Serializable summary of a node with its inbound references."""
        data = node.to_dict()
        data["referenced_by"] = {
            relation.value: sorted(n.unique_id for n in sources)
            for relation, sources in self.referrers(node).items()
            if sources
        }
        return data

    # ─── Graph export & impact ────────────────────

    def to_graph_store(self) -> BaseGraphStore:
        """Export resolved nodes and forward edges into a fresh graph store."""
        store = create_graph_store(self.store_backend)
        nodes = self.factory.resolved_nodes()
        for node in nodes:
            store.add_node(
                node.graph_key,
                kind=node.kind_tag,
                unique_id=node.unique_id,
                display_name=node.display_name,
            )
        for node in nodes:
            for relation, targets in self.forward_edges(node).items():
                for target in targets:
                    store.add_reference(node.graph_key, target.graph_key, relation.value)
        return store

    def impact(self, node: ArtifactNode, store: Optional[BaseGraphStore] = None,
               relations: Optional[Iterable[RelationLike]] = None) -> ImpactAssessment:
        """
        Calculate the blast radius of changing ``node``.

        Only resolved artifacts are considered; call ``factory.build_all()``
        first for a complete picture. ``relations`` restricts every hop to
        the given relations (e.g. only service and entity usage).
        """
        selected = _relation_values(relations)
        store = store or self.to_graph_store()
        target = node.graph_key

        direct = sorted(store.predecessors(target, selected))
        all_affected = store.ancestors(target, selected)
        all_affected.discard(target)
        indirect = sorted(a for a in all_affected if a not in direct)

        affected_by_kind: Dict[str, List[str]] = {}
        for key in sorted(all_affected):
            kind = store.get_node_data(key).get("kind", "unknown")
            affected_by_kind.setdefault(kind, []).append(key)

        reachable = store.descendants(target, selected)
        reachable.discard(target)

        return ImpactAssessment(
            target=target,
            direct_dependents=direct,
            indirect_dependents=indirect,
            dependencies=sorted(store.successors(target, selected)),
            transitive_dependencies=sorted(reachable),
            affected_by_kind=affected_by_kind,
            relations=selected,
        )

    def find_cycles(self, relations: Optional[Iterable[RelationLike]] = None) -> List[List[str]]:
        """Find reference cycles among resolved artifacts."""
        return self.to_graph_store().find_cycles(_relation_values(relations))

    def get_statistics(self) -> Dict:
        store = self.to_graph_store()
        stats = self.factory.statistics()
        stats["edges"] = store.number_of_edges()
        stats["density"] = store.density()
        return stats


def _relation_values(relations: Optional[Iterable[RelationLike]]) -> Optional[List[str]]:
    """Validate a relation filter; raises ValueError for unknown names."""
    if relations is None:
        return None
    return sorted({ReverseRelation(r).value for r in relations})
