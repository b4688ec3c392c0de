"""Parsing of colon-delimited Maven coordinate strings.

Grammar: ``groupId:artifactId[:version][:packaging][:classifier]``.

Segments are positional and kept verbatim; there is no character-set
validation of groupId/artifactId. Anything past the fifth segment is ignored.
"""

from __future__ import annotations

from typing import Final

from .errors import InvalidCoordinateFormat, InvalidParamsError
from .models import MavenCoordinate

_SEPARATOR: Final[str] = ":"
_OPTIONAL_FIELDS: Final[tuple[str, ...]] = ("version", "packaging", "classifier")


def parse_coordinate(raw: str) -> MavenCoordinate:
    """Parse ``raw`` into a :class:`MavenCoordinate`.

    Raises InvalidCoordinateFormat when groupId or artifactId is missing or
    empty. Optional segments that are absent or empty become ``None``.
    """
    if not isinstance(raw, str):
        raise InvalidParamsError("Invalid Maven dependency format")

    parts = raw.split(_SEPARATOR)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise InvalidCoordinateFormat()

    optional = {
        name: (parts[i + 2] or None) if i + 2 < len(parts) else None
        for i, name in enumerate(_OPTIONAL_FIELDS)
    }
    return MavenCoordinate(group_id=parts[0], artifact_id=parts[1], **optional)


__all__ = ["parse_coordinate"]
