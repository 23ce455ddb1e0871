"""
Catalogue of forward relations between artifact kinds.

Each forward relation (e.g. a view rendering a screen) has exactly one
reverse index, named from the target's point of view ("views for screen").
The table below drives both reference resolution in the artifact nodes and
reverse-index maintenance in the factory.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .identity import ArtifactKind, make_unique_id


class ReverseRelation(Enum):
    """
    Named reverse indices, one per forward relation.

    Values are the public names used by reporting callers.
    """
    # === Controller ===
    VIEWS_FOR_SCREEN = "viewsForScreen"
    REQUESTS_FOR_VIEW = "requestsForView"
    REQUESTS_FOR_REQUEST = "requestsForRequest"
    REQUESTS_FOR_SERVICE = "requestsForService"

    # === Screen widgets ===
    SCREENS_FOR_SCREEN = "screensForScreen"
    SCREENS_FOR_FORM = "screensForForm"
    SCREENS_FOR_SERVICE = "screensForService"
    SCREENS_FOR_ENTITY = "screensForEntity"
    SCREENS_FOR_REQUEST = "screensForRequest"

    # === Form widgets ===
    FORMS_FOR_FORM = "formsForForm"
    FORMS_FOR_SERVICE = "formsForService"
    FORMS_FOR_ENTITY = "formsForEntity"
    FORMS_FOR_REQUEST = "formsForRequest"

    # === Services ===
    SERVICES_FOR_SERVICE = "servicesForService"
    SERVICES_IMPLEMENTING_SERVICE = "servicesImplementingService"
    SERVICES_FOR_ENTITY = "servicesForEntity"

    # === Entities ===
    ENTITIES_FOR_ENTITY = "entitiesForEntity"


class Resolution(Enum):
    """How a reference string in the metadata is turned into a target key."""
    POINTER = "pointer"      # must be location#name
    RELATIVE = "relative"    # bare name means "same file as the source"
    LOCATE = "locate"        # bare name, provider finds the defining file


class DanglingPolicy(Enum):
    """What to do when a forward reference cannot be resolved."""
    TOLERATE = "tolerate"    # log a warning, drop the edge
    PROPAGATE = "propagate"  # fail construction of the referencing node


@dataclass(frozen=True)
class RelationSpec:
    """Declaration of one forward relation."""
    relation: ReverseRelation
    source: ArtifactKind
    target: ArtifactKind
    field: str
    resolution: Resolution
    policy: DanglingPolicy = DanglingPolicy.TOLERATE


@dataclass(frozen=True)
class ArtifactRef:
    """
    Deferred handle to an artifact node.

    Forward edges are stored as refs so that a node can point at a target
    that is still under construction (a reference cycle).
    """
    kind: ArtifactKind
    location: str
    name: str

    @property
    def unique_id(self) -> str:
        return make_unique_id(self.location, self.name)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.unique_id}"


_K = ArtifactKind
_R = ReverseRelation

RELATIONS: Dict[ReverseRelation, RelationSpec] = {
    spec.relation: spec for spec in [
        RelationSpec(_R.VIEWS_FOR_SCREEN, _K.VIEW, _K.SCREEN, "page", Resolution.POINTER),
        RelationSpec(_R.REQUESTS_FOR_VIEW, _K.REQUEST, _K.VIEW, "view-responses",
                     Resolution.RELATIVE, DanglingPolicy.PROPAGATE),
        RelationSpec(_R.REQUESTS_FOR_REQUEST, _K.REQUEST, _K.REQUEST, "request-responses",
                     Resolution.RELATIVE),
        RelationSpec(_R.REQUESTS_FOR_SERVICE, _K.REQUEST, _K.SERVICE, "event-invoke",
                     Resolution.LOCATE),
        RelationSpec(_R.SCREENS_FOR_SCREEN, _K.SCREEN, _K.SCREEN, "screens", Resolution.RELATIVE),
        RelationSpec(_R.SCREENS_FOR_FORM, _K.SCREEN, _K.FORM, "forms", Resolution.POINTER),
        RelationSpec(_R.SCREENS_FOR_SERVICE, _K.SCREEN, _K.SERVICE, "services", Resolution.LOCATE),
        RelationSpec(_R.SCREENS_FOR_ENTITY, _K.SCREEN, _K.ENTITY, "entities", Resolution.LOCATE),
        RelationSpec(_R.SCREENS_FOR_REQUEST, _K.SCREEN, _K.REQUEST, "requests", Resolution.POINTER),
        RelationSpec(_R.FORMS_FOR_FORM, _K.FORM, _K.FORM, "extends", Resolution.RELATIVE),
        RelationSpec(_R.FORMS_FOR_SERVICE, _K.FORM, _K.SERVICE, "services", Resolution.LOCATE),
        RelationSpec(_R.FORMS_FOR_ENTITY, _K.FORM, _K.ENTITY, "entities", Resolution.LOCATE),
        RelationSpec(_R.FORMS_FOR_REQUEST, _K.FORM, _K.REQUEST, "target-request",
                     Resolution.POINTER),
        RelationSpec(_R.SERVICES_FOR_SERVICE, _K.SERVICE, _K.SERVICE, "services", Resolution.LOCATE),
        RelationSpec(_R.SERVICES_IMPLEMENTING_SERVICE, _K.SERVICE, _K.SERVICE, "implements",
                     Resolution.LOCATE),
        RelationSpec(_R.SERVICES_FOR_ENTITY, _K.SERVICE, _K.ENTITY, "entities", Resolution.LOCATE),
        RelationSpec(_R.ENTITIES_FOR_ENTITY, _K.ENTITY, _K.ENTITY, "relations", Resolution.LOCATE),
    ]
}


def relations_from(kind: ArtifactKind) -> List[RelationSpec]:
    """Forward relations declared by artifacts of ``kind``."""
    return [spec for spec in RELATIONS.values() if spec.source == kind]


def relations_into(kind: ArtifactKind) -> List[RelationSpec]:
    """Forward relations whose target is ``kind`` (its reverse indices)."""
    return [spec for spec in RELATIONS.values() if spec.target == kind]
