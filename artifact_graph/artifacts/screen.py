"""
Screen widget artifacts.

Screens include other screens and forms, call services, read entities and
link to controller requests.
"""

from typing import TYPE_CHECKING, List, Set

from ..core.identity import ArtifactKind
from ..core.relations import ReverseRelation
from .base import ArtifactNode

if TYPE_CHECKING:
    from .entity import EntityArtifact
    from .form import FormArtifact
    from .request import RequestArtifact
    from .service import ServiceArtifact
    from .view import ViewArtifact


class ScreenArtifact(ArtifactNode):
    """A screen definition inside a screens file."""

    kind = ArtifactKind.SCREEN
    display_type_label = "Screen Widget"

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.location})"

    # ─── Forward ──────────────────────────────────

    def screens_included_in_this_screen(self) -> List["ScreenArtifact"]:
        return self._nodes(ReverseRelation.SCREENS_FOR_SCREEN)

    def forms_included_in_this_screen(self) -> List["FormArtifact"]:
        return self._nodes(ReverseRelation.SCREENS_FOR_FORM)

    def services_used_in_this_screen(self) -> List["ServiceArtifact"]:
        return self._nodes(ReverseRelation.SCREENS_FOR_SERVICE)

    def entities_used_in_this_screen(self) -> List["EntityArtifact"]:
        return self._nodes(ReverseRelation.SCREENS_FOR_ENTITY)

    def requests_linked_from_this_screen(self) -> List["RequestArtifact"]:
        return self._nodes(ReverseRelation.SCREENS_FOR_REQUEST)

    # ─── Reverse ──────────────────────────────────

    def views_referring_to_this_screen(self) -> Set["ViewArtifact"]:
        return self._referrers(ReverseRelation.VIEWS_FOR_SCREEN)

    def screens_including_this_screen(self) -> Set["ScreenArtifact"]:
        return self._referrers(ReverseRelation.SCREENS_FOR_SCREEN)
