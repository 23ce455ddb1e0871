"""
Artifact node types, one per configuration artifact kind.
"""

from typing import Dict, Type

from ..core.identity import ArtifactKind
from .base import ArtifactNode
from .entity import EntityArtifact
from .form import FormArtifact
from .request import RequestArtifact
from .screen import ScreenArtifact
from .service import ServiceArtifact
from .view import ViewArtifact

NODE_TYPES: Dict[ArtifactKind, Type[ArtifactNode]] = {
    ArtifactKind.ENTITY: EntityArtifact,
    ArtifactKind.SERVICE: ServiceArtifact,
    ArtifactKind.FORM: FormArtifact,
    ArtifactKind.SCREEN: ScreenArtifact,
    ArtifactKind.REQUEST: RequestArtifact,
    ArtifactKind.VIEW: ViewArtifact,
}

__all__ = [
    "ArtifactNode",
    "EntityArtifact",
    "FormArtifact",
    "RequestArtifact",
    "ScreenArtifact",
    "ServiceArtifact",
    "ViewArtifact",
    "NODE_TYPES",
]
