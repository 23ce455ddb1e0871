"""Service definition artifacts."""

from typing import TYPE_CHECKING, List, Set

from ..core.identity import ArtifactKind
from ..core.relations import ReverseRelation
from .base import ArtifactNode

if TYPE_CHECKING:
    from .entity import EntityArtifact
    from .form import FormArtifact
    from .request import RequestArtifact
    from .screen import ScreenArtifact


class ServiceArtifact(ArtifactNode):
    """
    A service defined in a services file.

    Services are referenced by bare name everywhere; the provider locates
    the file that defines them.
    """

    kind = ArtifactKind.SERVICE
    display_type_label = "Service"

    @property
    def display_name(self) -> str:
        return self.name

    # ─── Forward ──────────────────────────────────

    def entities_used_by_this_service(self) -> List["EntityArtifact"]:
        return self._nodes(ReverseRelation.SERVICES_FOR_ENTITY)

    def services_called_by_this_service(self) -> List["ServiceArtifact"]:
        return self._nodes(ReverseRelation.SERVICES_FOR_SERVICE)

    def interfaces_implemented_by_this_service(self) -> List["ServiceArtifact"]:
        return self._nodes(ReverseRelation.SERVICES_IMPLEMENTING_SERVICE)

    # ─── Reverse ──────────────────────────────────

    def services_calling_this_service(self) -> Set["ServiceArtifact"]:
        return self._referrers(ReverseRelation.SERVICES_FOR_SERVICE)

    def services_implementing_this_service(self) -> Set["ServiceArtifact"]:
        return self._referrers(ReverseRelation.SERVICES_IMPLEMENTING_SERVICE)

    def requests_with_this_service_as_event(self) -> Set["RequestArtifact"]:
        return self._referrers(ReverseRelation.REQUESTS_FOR_SERVICE)

    def forms_referring_to_this_service(self) -> Set["FormArtifact"]:
        return self._referrers(ReverseRelation.FORMS_FOR_SERVICE)

    def screens_referring_to_this_service(self) -> Set["ScreenArtifact"]:
        return self._referrers(ReverseRelation.SCREENS_FOR_SERVICE)
