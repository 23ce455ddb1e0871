"""
Graph store factory.

Impact queries export the artifact graph into a store picked by name, from
the ``graph_store_backend`` setting (GRAPH_STORE_BACKEND). Only the
in-memory "networkx" backend ships with the package.
"""

import logging
import os
from typing import Callable, Dict, Optional

from .base_graph_store import BaseGraphStore
from .networkx_store import NetworkXStore

logger = logging.getLogger(__name__)

BACKENDS: Dict[str, Callable[[], BaseGraphStore]] = {
    "networkx": NetworkXStore,
}


def create_graph_store(backend: Optional[str] = None) -> BaseGraphStore:
    """
    Create an empty graph store for an export.

    Args:
        backend: Backend name. If None, reads GRAPH_STORE_BACKEND
                 (default: "networkx").

    Raises:
        ValueError: For an unknown backend name
    """
    backend = (backend or os.getenv("GRAPH_STORE_BACKEND", "networkx")).lower()
    try:
        store_class = BACKENDS[backend]
    except KeyError:
        supported = ", ".join(f"'{name}'" for name in sorted(BACKENDS))
        raise ValueError(f"Unknown graph store backend: '{backend}'. Supported: {supported}")
    logger.debug("Exporting artifact graph to %s store", backend)
    return store_class()
