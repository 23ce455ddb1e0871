"""
Domain errors raised while building the artifact graph.

Two failure families matter to callers:
- ArtifactNotFoundError: the artifact is not defined in the snapshot at all.
  Always propagated out of ``get_or_build``, including when a request
  responds with a view that was never defined.
- DanglingReferenceError: an artifact that *was* found points at something
  that cannot be resolved. Whether it propagates depends on the relation.
"""

from typing import Optional


class ArtifactGraphError(Exception):
    """Base exception for artifact graph operations."""
    pass


class ArtifactNotFoundError(ArtifactGraphError):
    """Raised when the configuration snapshot has no entry for an artifact."""

    def __init__(self, kind: str, location: str, name: str):
        self.kind = kind
        self.location = location
        self.name = name
        super().__init__(
            f"Could not find {kind} [{name}] at location [{location}]"
        )


class DanglingReferenceError(ArtifactGraphError):
    """Raised when a forward reference cannot be resolved."""

    def __init__(self, source_id: str, relation: str, pointer: str,
                 reason: Optional[str] = None):
        self.source_id = source_id
        self.relation = relation
        self.pointer = pointer
        self.reason = reason
        message = f"Dangling {relation} reference [{pointer}] from [{source_id}]"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MalformedReferenceError(DanglingReferenceError):
    """Raised when a reference pointer cannot be parsed into location and name."""
    pass


class ArtifactPendingError(ArtifactGraphError):
    """Raised when a node is requested while it is still under construction."""

    def __init__(self, kind: str, unique_id: str):
        self.kind = kind
        self.unique_id = unique_id
        super().__init__(f"{kind} [{unique_id}] is still being constructed")
