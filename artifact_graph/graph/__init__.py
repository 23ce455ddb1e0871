"""
Graph module - artifact factory, reverse indices and impact analysis.
"""

from .reverse_index import ReverseIndex

from .factory import (
    SlotState,
    ArtifactFactory,
)

from .base_graph_store import BaseGraphStore
from .graph_store_factory import create_graph_store

from .query import (
    ImpactAssessment,
    ArtifactGraphQuery,
)

__all__ = [
    "ReverseIndex",
    "SlotState",
    "ArtifactFactory",
    "BaseGraphStore",
    "create_graph_store",
    "ImpactAssessment",
    "ArtifactGraphQuery",
]
