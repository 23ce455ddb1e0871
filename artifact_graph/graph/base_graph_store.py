"""
Abstract base class for graph stores.

The query façade exports resolved artifacts and their forward references
into a graph store to run transitive impact queries. Each edge carries the
set of relations (``servicesForEntity``, ``viewsForScreen``, ...) that link
its two artifacts, and every traversal can be narrowed to a subset of them.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Set

RelationFilter = Optional[Iterable[str]]


class BaseGraphStore(ABC):
    """
    Abstract graph store interface.

    Edges point from the referencing artifact to the referenced one.
    ``relations=None`` on a traversal means "follow every relation".
    """

    # ─────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────

    @abstractmethod
    def add_node(self, node_id: str, **attrs) -> None:
        """Add an artifact node with optional attributes."""
        ...

    @abstractmethod
    def add_reference(self, source: str, target: str, relation: str) -> None:
        """Record that ``source`` references ``target`` through ``relation``."""
        ...

    # ─────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────

    @abstractmethod
    def get_node_data(self, node_id: str) -> Dict[str, Any]:
        """Get all attributes for a node. Returns {} if node not found."""
        ...

    @abstractmethod
    def edge_relations(self, source: str, target: str) -> List[str]:
        """Sorted relations linking ``source`` to ``target``; [] if none."""
        ...

    @abstractmethod
    def number_of_nodes(self) -> int:
        ...

    @abstractmethod
    def number_of_edges(self) -> int:
        ...

    # ─────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────

    @abstractmethod
    def predecessors(self, node_id: str, relations: RelationFilter = None) -> List[str]:
        """Nodes referencing this node directly."""
        ...

    @abstractmethod
    def successors(self, node_id: str, relations: RelationFilter = None) -> List[str]:
        """Nodes this node references directly."""
        ...

    @abstractmethod
    def ancestors(self, node_id: str, relations: RelationFilter = None) -> Set[str]:
        """All nodes that transitively reference this node."""
        ...

    @abstractmethod
    def descendants(self, node_id: str, relations: RelationFilter = None) -> Set[str]:
        """All nodes this node transitively references."""
        ...

    # ─────────────────────────────────────────────
    # Analysis
    # ─────────────────────────────────────────────

    @abstractmethod
    def find_cycles(self, relations: RelationFilter = None) -> List[List[str]]:
        """Find all simple reference cycles."""
        ...

    @abstractmethod
    def density(self) -> float:
        ...
