"""
Controller view artifacts.

A view is declared in a controller file and, when its type is "screen",
renders the screen named by its ``page`` pointer (``screens.xml#Name``).
"""

from typing import TYPE_CHECKING, Optional, Set

from ..core.identity import ArtifactKind
from ..core.provider import VIEW_PAGE, VIEW_TYPE
from ..core.relations import RelationSpec, ReverseRelation
from .base import ArtifactNode

if TYPE_CHECKING:
    from .request import RequestArtifact
    from .screen import ScreenArtifact

SCREEN_VIEW_TYPE = "screen"


class ViewArtifact(ArtifactNode):
    """
    A view defined in a controller file.

    A page pointer that does not resolve to a screen is dropped with a
    warning; the view itself is still built.
    """

    kind = ArtifactKind.VIEW
    display_type_label = "Controller View"

    @property
    def controller_location(self) -> str:
        return self.location

    @property
    def view_type(self) -> Optional[str]:
        return self.info.get(VIEW_TYPE)

    @property
    def page(self) -> Optional[str]:
        return self.info.get(VIEW_PAGE)

    def _should_resolve(self, spec: RelationSpec) -> bool:
        if spec.relation is ReverseRelation.VIEWS_FOR_SCREEN:
            return self.view_type == SCREEN_VIEW_TYPE
        return True

    def screen_called_by_this_view(self) -> Optional["ScreenArtifact"]:
        return self._node(ReverseRelation.VIEWS_FOR_SCREEN)

    def requests_that_respond_with_this_view(self) -> Set["RequestArtifact"]:
        return self._referrers(ReverseRelation.REQUESTS_FOR_VIEW)
