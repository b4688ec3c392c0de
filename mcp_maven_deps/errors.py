"""Exception types shared by the parser, the search client and the tools.

``InvalidParamsError`` marks malformed caller input and is surfaced as a
protocol-level error. ``UpstreamError`` marks a failed Maven Central call and
is turned into an error-flagged text result by the tool cores.
"""

from __future__ import annotations


class InvalidParamsError(ValueError):
    """Tool arguments are missing or malformed."""


class InvalidCoordinateFormat(InvalidParamsError):
    """A coordinate string does not carry at least groupId and artifactId."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or 'Invalid Maven coordinate format. Minimum format is "groupId:artifactId"'
        )


class UpstreamError(Exception):
    """The Maven Central search call failed (network, status or body)."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


__all__ = ["InvalidParamsError", "InvalidCoordinateFormat", "UpstreamError"]
