"""
Artifact dependency graph for web-application configuration.

Builds a bidirectional "what references what" graph across controller
requests and views, screens, forms, services and entities, for impact
analysis tooling.
"""

from .core import (
    ArtifactKind,
    ReverseRelation,
    ArtifactRef,
    ArtifactGraphError,
    ArtifactNotFoundError,
    DanglingReferenceError,
    BaseConfigProvider,
    SnapshotConfigProvider,
    load_snapshot,
    make_unique_id,
    split_unique_id,
)
from .artifacts import (
    ArtifactNode,
    EntityArtifact,
    FormArtifact,
    RequestArtifact,
    ScreenArtifact,
    ServiceArtifact,
    ViewArtifact,
)
from .graph import ArtifactFactory, ArtifactGraphQuery, ImpactAssessment
from .config import GraphSettings, configure_logging

__all__ = [
    "ArtifactKind",
    "ReverseRelation",
    "ArtifactRef",
    "ArtifactGraphError",
    "ArtifactNotFoundError",
    "DanglingReferenceError",
    "BaseConfigProvider",
    "SnapshotConfigProvider",
    "load_snapshot",
    "make_unique_id",
    "split_unique_id",
    "ArtifactNode",
    "EntityArtifact",
    "FormArtifact",
    "RequestArtifact",
    "ScreenArtifact",
    "ServiceArtifact",
    "ViewArtifact",
    "ArtifactFactory",
    "ArtifactGraphQuery",
    "ImpactAssessment",
    "GraphSettings",
    "configure_logging",
]
