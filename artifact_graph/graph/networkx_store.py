"""
NetworkX implementation of the graph store.

Artifacts live in a DiGraph; each edge keeps a ``relations`` set. Filtered
traversals run over a ``subgraph_view`` that hides edges sharing no
relation with the filter, so nothing is copied per query.
"""

from typing import Any, Dict, List, Set

import networkx as nx

from .base_graph_store import BaseGraphStore, RelationFilter


class NetworkXStore(BaseGraphStore):
    """Graph store backed by NetworkX (in-memory directed graph)."""

    def __init__(self):
        self._graph = nx.DiGraph()

    def _view(self, relations: RelationFilter) -> nx.DiGraph:
        if relations is None:
            return self._graph
        wanted = frozenset(relations)
        graph = self._graph

        def follows(source, target):
            return not wanted.isdisjoint(graph.edges[source, target]["relations"])

        return nx.subgraph_view(graph, filter_edge=follows)

    # ─── Construction ─────────────────────────────

    def add_node(self, node_id: str, **attrs) -> None:
        self._graph.add_node(node_id, **attrs)

    def add_reference(self, source: str, target: str, relation: str) -> None:
        if self._graph.has_edge(source, target):
            self._graph.edges[source, target]["relations"].add(relation)
        else:
            self._graph.add_edge(source, target, relations={relation})

    # ─── Lookup ───────────────────────────────────

    def get_node_data(self, node_id: str) -> Dict[str, Any]:
        if node_id in self._graph:
            return dict(self._graph.nodes[node_id])
        return {}

    def edge_relations(self, source: str, target: str) -> List[str]:
        data = self._graph.get_edge_data(source, target)
        return sorted(data["relations"]) if data is not None else []

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    # ─── Traversal ────────────────────────────────

    def predecessors(self, node_id: str, relations: RelationFilter = None) -> List[str]:
        return list(self._view(relations).predecessors(node_id))

    def successors(self, node_id: str, relations: RelationFilter = None) -> List[str]:
        return list(self._view(relations).successors(node_id))

    def ancestors(self, node_id: str, relations: RelationFilter = None) -> Set[str]:
        return nx.ancestors(self._view(relations), node_id)

    def descendants(self, node_id: str, relations: RelationFilter = None) -> Set[str]:
        return nx.descendants(self._view(relations), node_id)

    # ─── Analysis ─────────────────────────────────

    def find_cycles(self, relations: RelationFilter = None) -> List[List[str]]:
        return list(nx.simple_cycles(self._view(relations)))

    def density(self) -> float:
        if self._graph.number_of_nodes() == 0:
            return 0.0
        return nx.density(self._graph)
