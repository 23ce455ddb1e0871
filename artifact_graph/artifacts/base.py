"""
Base class for artifact nodes.

A node is built once by the factory from the provider's metadata for
``(location, name)``. Construction resolves every forward reference the
artifact declares into an ArtifactRef; the factory indexes those refs in
the reverse direction once the outermost build finishes. Nodes never
change after construction.
"""

import logging
from types import MappingProxyType
from typing import (TYPE_CHECKING, Any, ClassVar, Dict, List, Mapping, Optional,
                    Set, Tuple)

from ..core.errors import (ArtifactGraphError, ArtifactNotFoundError,
                           DanglingReferenceError, MalformedReferenceError)
from ..core.identity import (SEPARATOR, ArtifactKind, Location, location_identity,
                             make_unique_id, parse_pointer)
from ..core.relations import (ArtifactRef, DanglingPolicy, RelationSpec, Resolution,
                              ReverseRelation, relations_from)

if TYPE_CHECKING:
    from ..graph.factory import ArtifactFactory

logger = logging.getLogger(__name__)


class ArtifactNode:
    """
    One configuration artifact and its resolved forward references.

    Equality and hashing use only the identifying fields (kind, defining
    location, local name), never the metadata.
    """

    kind: ClassVar[ArtifactKind]
    display_type_label: ClassVar[str] = "Artifact"

    def __init__(self, location: Location, name: str, factory: "ArtifactFactory"):
        self._location = location_identity(location)
        self._name = name
        self._factory = factory

        info = factory.provider.get_artifact_info(self.kind, self._location, name)
        if info is None:
            raise ArtifactNotFoundError(self.kind.value, self._location, name)
        self._info: Mapping[str, Any] = MappingProxyType(dict(info))

        self._forward: Dict[ReverseRelation, Tuple[ArtifactRef, ...]] = {}
        for spec in relations_from(self.kind):
            if self._should_resolve(spec):
                self._forward[spec.relation] = self._resolve_relation(spec)

    # ─── Identity ─────────────────────────────────

    @property
    def location(self) -> str:
        """Identity of the file defining this artifact."""
        return self._location

    @property
    def name(self) -> str:
        return self._name

    @property
    def unique_id(self) -> str:
        return make_unique_id(self._location, self._name)

    @property
    def ref(self) -> ArtifactRef:
        return ArtifactRef(self.kind, self._location, self._name)

    @property
    def graph_key(self) -> str:
        """Key used when exporting to a graph store (ids are only unique per kind)."""
        return f"{self.kind.value}:{self.unique_id}"

    @property
    def kind_tag(self) -> str:
        return self.kind.value

    @property
    def display_name(self) -> str:
        return self.unique_id

    @property
    def display_type(self) -> str:
        return self.display_type_label

    @property
    def info(self) -> Mapping[str, Any]:
        """Read-only view of the metadata the provider returned."""
        return self._info

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactNode):
            return NotImplemented
        return (self.kind == other.kind
                and self._location == other._location
                and self._name == other._name)

    def __hash__(self) -> int:
        return hash((self.kind, self._location, self._name))

    def __lt__(self, other: "ArtifactNode") -> bool:
        return (self.display_name, self.kind.value) < (other.display_name, other.kind.value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.unique_id}>"

    # ─── Forward references ───────────────────────

    def forward_refs(self, relation: ReverseRelation) -> Tuple[ArtifactRef, ...]:
        """Refs resolved for one forward relation (empty if none)."""
        return self._forward.get(relation, ())

    def all_forward_refs(self) -> Dict[ReverseRelation, Tuple[ArtifactRef, ...]]:
        return dict(self._forward)

    def _nodes(self, relation: ReverseRelation) -> List["ArtifactNode"]:
        nodes = []
        for ref in self.forward_refs(relation):
            node = self._factory.deref(ref)
            if node is not None:
                nodes.append(node)
        return nodes

    def _node(self, relation: ReverseRelation) -> Optional["ArtifactNode"]:
        nodes = self._nodes(relation)
        return nodes[0] if nodes else None

    def _referrers(self, relation: ReverseRelation) -> Set["ArtifactNode"]:
        return self._factory.reverse_edges(relation, self.unique_id)

    # ─── Resolution ───────────────────────────────

    def _should_resolve(self, spec: RelationSpec) -> bool:
        """Hook for kinds whose references depend on other metadata fields."""
        return True

    def _reference_values(self, spec: RelationSpec) -> List[str]:
        value = self._info.get(spec.field)
        if not value:
            return []
        if isinstance(value, str):
            return [value]
        return [item for item in value if item]

    def _resolve_relation(self, spec: RelationSpec) -> Tuple[ArtifactRef, ...]:
        refs: List[ArtifactRef] = []
        for pointer in self._reference_values(spec):
            try:
                ref = self._resolve_one(spec, pointer)
            except DanglingReferenceError as e:
                if spec.policy is DanglingPolicy.PROPAGATE:
                    raise
                logger.warning("%s", e)
                continue
            if ref not in refs:
                refs.append(ref)
        return tuple(refs)

    def _resolve_one(self, spec: RelationSpec, pointer: str) -> ArtifactRef:
        location, name = self._target_key(spec, pointer)
        try:
            return self._factory.resolve_reference(spec.target, location, name)
        except ArtifactGraphError as e:
            # An undefined target of a propagating relation is reported as such
            if spec.policy is DanglingPolicy.PROPAGATE and isinstance(e, ArtifactNotFoundError):
                raise
            raise DanglingReferenceError(
                self.unique_id, spec.relation.value, pointer, str(e)
            ) from e

    def _target_key(self, spec: RelationSpec, pointer: str) -> Tuple[str, str]:
        if spec.resolution is Resolution.LOCATE and SEPARATOR not in pointer:
            name = pointer.strip()
            location = self._factory.provider.locate(spec.target, name)
            if location is None:
                raise DanglingReferenceError(
                    self.unique_id, spec.relation.value, pointer,
                    f"{spec.target.value} [{name}] is not defined anywhere"
                )
            return location, name

        default_location = self._location if spec.resolution is Resolution.RELATIVE else None
        try:
            return parse_pointer(pointer, default_location)
        except ValueError as e:
            raise MalformedReferenceError(
                self.unique_id, spec.relation.value, pointer, str(e)
            ) from e

    # ─── Serialization ────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind_tag,
            "unique_id": self.unique_id,
            "display_name": self.display_name,
            "display_type": self.display_type,
            "location": self._location,
            "name": self._name,
            "references": {
                relation.value: [ref.unique_id for ref in refs]
                for relation, refs in self._forward.items()
                if refs
            },
        }
