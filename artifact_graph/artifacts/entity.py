"""Entity definition artifacts."""

from typing import TYPE_CHECKING, List, Set

from ..core.identity import ArtifactKind
from ..core.relations import ReverseRelation
from .base import ArtifactNode

if TYPE_CHECKING:
    from .form import FormArtifact
    from .screen import ScreenArtifact
    from .service import ServiceArtifact


class EntityArtifact(ArtifactNode):
    """An entity defined in an entity model file."""

    kind = ArtifactKind.ENTITY
    display_type_label = "Entity"

    @property
    def display_name(self) -> str:
        return self.name

    def entities_related_to_this_entity(self) -> List["EntityArtifact"]:
        return self._nodes(ReverseRelation.ENTITIES_FOR_ENTITY)

    def entities_referring_to_this_entity(self) -> Set["EntityArtifact"]:
        return self._referrers(ReverseRelation.ENTITIES_FOR_ENTITY)

    def services_using_this_entity(self) -> Set["ServiceArtifact"]:
        return self._referrers(ReverseRelation.SERVICES_FOR_ENTITY)

    def forms_using_this_entity(self) -> Set["FormArtifact"]:
        return self._referrers(ReverseRelation.FORMS_FOR_ENTITY)

    def screens_using_this_entity(self) -> Set["ScreenArtifact"]:
        return self._referrers(ReverseRelation.SCREENS_FOR_ENTITY)
