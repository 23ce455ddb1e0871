"""
Configuration provider interface.

The graph engine never parses configuration files itself. It asks a
provider for the structured metadata of one artifact at a time. Real
providers wrap the controller/screen/form/service/entity parsers; the
snapshot provider here serves pre-parsed data (tests, JSON exports).
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .identity import ArtifactKind, Location, location_identity

logger = logging.getLogger(__name__)

# Controller view fields
VIEW_TYPE = "type"
VIEW_PAGE = "page"

# Controller request fields
EVENT_TYPE = "event-type"
EVENT_INVOKE = "event-invoke"


class BaseConfigProvider(ABC):
    """
    Abstract lookup surface over a configuration snapshot.

    All implementations must answer per-artifact metadata lookups and
    enumerate what they define.
    """

    # ─────────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────────

    @abstractmethod
    def get_artifact_info(self, kind: ArtifactKind, location: str,
                          name: str) -> Optional[Mapping[str, Any]]:
        """
        Get the metadata mapping for one artifact.

        Returns:
            The field mapping, or None if the artifact is not defined.
        """
        ...

    @abstractmethod
    def locate(self, kind: ArtifactKind, name: str) -> Optional[str]:
        """Find the defining file of a globally named artifact (entity, service)."""
        ...

    # ─────────────────────────────────────────────
    # Enumeration
    # ─────────────────────────────────────────────

    @abstractmethod
    def list_artifacts(self, kind: ArtifactKind) -> List[Tuple[str, str]]:
        """Return ``(location, name)`` for every artifact of ``kind``."""
        ...


class SnapshotConfigProvider(BaseConfigProvider):
    """
    Provider backed by an in-memory snapshot.

    Expected shape::

        {
            "view": {"controller.xml": {"orderView": {"type": "screen", "page": "..."}}},
            "entity": {"entitymodel.xml": {"Product": {"relations": ["ProductType"]}}},
        }
    """

    def __init__(self, data: Mapping[str, Mapping[str, Mapping[str, Mapping[str, Any]]]]):
        self._data: Dict[ArtifactKind, Dict[str, Dict[str, Dict[str, Any]]]] = {}
        for kind_name, by_location in data.items():
            kind = ArtifactKind(kind_name)
            self._data[kind] = {
                location_identity(location): {name: dict(info) for name, info in by_name.items()}
                for location, by_name in by_location.items()
            }
        self._name_index: Dict[ArtifactKind, Dict[str, str]] = {}

    def get_artifact_info(self, kind: ArtifactKind, location: Location,
                          name: str) -> Optional[Mapping[str, Any]]:
        by_name = self._data.get(kind, {}).get(location_identity(location))
        if by_name is None or name not in by_name:
            return None
        return dict(by_name[name])

    def locate(self, kind: ArtifactKind, name: str) -> Optional[str]:
        if kind not in self._name_index:
            index: Dict[str, str] = {}
            for location, by_name in self._data.get(kind, {}).items():
                for artifact_name in by_name:
                    if artifact_name in index:
                        logger.warning(
                            "%s [%s] is defined in both [%s] and [%s]; using the first",
                            kind.value, artifact_name, index[artifact_name], location
                        )
                        continue
                    index[artifact_name] = location
            self._name_index[kind] = index
        return self._name_index[kind].get(name)

    def list_artifacts(self, kind: ArtifactKind) -> List[Tuple[str, str]]:
        return [
            (location, name)
            for location, by_name in self._data.get(kind, {}).items()
            for name in by_name
        ]


def load_snapshot(path: Union[str, Path]) -> SnapshotConfigProvider:
    """
    Load a JSON configuration snapshot from disk.

    Args:
        path: Path to a JSON file in the SnapshotConfigProvider shape

    Returns:
        Provider serving the snapshot
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    logger.debug("Loaded configuration snapshot from %s", path)
    return SnapshotConfigProvider(data)
