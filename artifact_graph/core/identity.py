"""
Artifact identity helpers.

Every artifact is identified by the file that defines it plus its local
name, joined as ``location#name``. The id is the only key used by the
factory caches and the reverse indices.

Names containing ``#`` are not escaped, so ``a.xml#b#c`` is ambiguous.
Splitting always uses the last separator.
"""

import os
from enum import Enum
from typing import Optional, Tuple, Union

SEPARATOR = "#"

Location = Union[str, "os.PathLike[str]"]


class ArtifactKind(Enum):
    """Kinds of configuration artifacts tracked in the graph."""
    ENTITY = "entity"
    SERVICE = "service"
    FORM = "form"
    SCREEN = "screen"
    REQUEST = "request"
    VIEW = "view"


def location_identity(location: Location) -> str:
    """Normalise a defining-file reference into its string identity."""
    return os.fspath(location)


def make_unique_id(location: Location, name: str) -> str:
    """Build the unique id for an artifact defined at ``location``."""
    return f"{location_identity(location)}{SEPARATOR}{name}"


def split_unique_id(unique_id: str) -> Tuple[str, str]:
    """
    Split a unique id back into ``(location, name)``.

    Raises:
        ValueError: If the id has no separator or an empty part.
    """
    location, sep, name = unique_id.rpartition(SEPARATOR)
    if not sep or not location or not name:
        raise ValueError(f"Not a valid artifact id: '{unique_id}'")
    return location, name


def parse_pointer(pointer: str, default_location: Optional[str] = None) -> Tuple[str, str]:
    """
    Parse a reference pointer such as ``screens.xml#OrderScreen``.

    A bare name (no separator) is relative to ``default_location`` when one
    is given; otherwise it is malformed.

    Returns:
        Tuple of (location, name)

    Raises:
        ValueError: If the pointer cannot be split into two non-empty parts.
    """
    pointer = pointer.strip()
    if SEPARATOR not in pointer:
        if default_location is None or not pointer:
            raise ValueError(f"Reference '{pointer}' is not of the form location#name")
        return default_location, pointer
    return split_unique_id(pointer)
