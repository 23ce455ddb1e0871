"""
Core module for artifact identity, relations and configuration lookup.
"""

from .errors import (
    ArtifactGraphError,
    ArtifactNotFoundError,
    DanglingReferenceError,
    MalformedReferenceError,
    ArtifactPendingError,
)

from .identity import (
    SEPARATOR,
    ArtifactKind,
    location_identity,
    make_unique_id,
    split_unique_id,
    parse_pointer,
)

from .relations import (
    ReverseRelation,
    Resolution,
    DanglingPolicy,
    RelationSpec,
    ArtifactRef,
    RELATIONS,
    relations_from,
    relations_into,
)

from .provider import (
    BaseConfigProvider,
    SnapshotConfigProvider,
    load_snapshot,
)

__all__ = [
    # Errors
    "ArtifactGraphError",
    "ArtifactNotFoundError",
    "DanglingReferenceError",
    "MalformedReferenceError",
    "ArtifactPendingError",
    # Identity
    "SEPARATOR",
    "ArtifactKind",
    "location_identity",
    "make_unique_id",
    "split_unique_id",
    "parse_pointer",
    # Relations
    "ReverseRelation",
    "Resolution",
    "DanglingPolicy",
    "RelationSpec",
    "ArtifactRef",
    "RELATIONS",
    "relations_from",
    "relations_into",
    # Provider
    "BaseConfigProvider",
    "SnapshotConfigProvider",
    "load_snapshot",
]
