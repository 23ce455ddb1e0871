"""
Controller request artifacts.

A request may invoke a service as its event and responds with views or
other requests defined in the same controller file.
"""

from typing import TYPE_CHECKING, List, Optional, Set

from ..core.identity import ArtifactKind
from ..core.provider import EVENT_INVOKE, EVENT_TYPE
from ..core.relations import RelationSpec, ReverseRelation
from .base import ArtifactNode

if TYPE_CHECKING:
    from .form import FormArtifact
    from .screen import ScreenArtifact
    from .service import ServiceArtifact
    from .view import ViewArtifact

SERVICE_EVENT_TYPES = ("service", "service-multi")


class RequestArtifact(ArtifactNode):
    """
    A request map entry in a controller file.

    Responding with a view that the controller does not define fails the
    request itself; other unresolved references only log a warning.
    """

    kind = ArtifactKind.REQUEST
    display_type_label = "Controller Request"

    @property
    def request_uri(self) -> str:
        return self.name

    @property
    def event_type(self) -> Optional[str]:
        return self.info.get(EVENT_TYPE)

    @property
    def event_invoke(self) -> Optional[str]:
        return self.info.get(EVENT_INVOKE)

    def _should_resolve(self, spec: RelationSpec) -> bool:
        if spec.relation is ReverseRelation.REQUESTS_FOR_SERVICE:
            return self.event_type in SERVICE_EVENT_TYPES
        return True

    # ─── Forward ──────────────────────────────────

    def service_called_by_this_request_event(self) -> Optional["ServiceArtifact"]:
        return self._node(ReverseRelation.REQUESTS_FOR_SERVICE)

    def views_this_request_responds_with(self) -> List["ViewArtifact"]:
        return self._nodes(ReverseRelation.REQUESTS_FOR_VIEW)

    def requests_this_request_responds_with(self) -> List["RequestArtifact"]:
        return self._nodes(ReverseRelation.REQUESTS_FOR_REQUEST)

    # ─── Reverse ──────────────────────────────────

    def requests_that_respond_with_this_request(self) -> Set["RequestArtifact"]:
        return self._referrers(ReverseRelation.REQUESTS_FOR_REQUEST)

    def forms_targeting_this_request(self) -> Set["FormArtifact"]:
        return self._referrers(ReverseRelation.FORMS_FOR_REQUEST)

    def screens_linking_to_this_request(self) -> Set["ScreenArtifact"]:
        return self._referrers(ReverseRelation.SCREENS_FOR_REQUEST)
