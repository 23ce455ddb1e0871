"""Form widget artifacts."""

from typing import TYPE_CHECKING, List, Optional, Set

from ..core.identity import ArtifactKind
from ..core.relations import ReverseRelation
from .base import ArtifactNode

if TYPE_CHECKING:
    from .entity import EntityArtifact
    from .request import RequestArtifact
    from .screen import ScreenArtifact
    from .service import ServiceArtifact


class FormArtifact(ArtifactNode):
    """
    A form definition inside a forms file.

    ``extends`` may name a form in the same file or use a full pointer;
    ``target-request`` always uses a full pointer to the controller file.
    """

    kind = ArtifactKind.FORM
    display_type_label = "Form Widget"

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.location})"

    def form_this_form_extends(self) -> Optional["FormArtifact"]:
        return self._node(ReverseRelation.FORMS_FOR_FORM)

    def services_used_in_this_form(self) -> List["ServiceArtifact"]:
        return self._nodes(ReverseRelation.FORMS_FOR_SERVICE)

    def entities_used_in_this_form(self) -> List["EntityArtifact"]:
        return self._nodes(ReverseRelation.FORMS_FOR_ENTITY)

    def request_targeted_by_this_form(self) -> Optional["RequestArtifact"]:
        return self._node(ReverseRelation.FORMS_FOR_REQUEST)

    def forms_extending_this_form(self) -> Set["FormArtifact"]:
        return self._referrers(ReverseRelation.FORMS_FOR_FORM)

    def screens_including_this_form(self) -> Set["ScreenArtifact"]:
        return self._referrers(ReverseRelation.SCREENS_FOR_FORM)
