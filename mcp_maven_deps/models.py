"""Pydantic domain and result models.

These models are small and validation-focused; they carry no business logic
beyond simple rendering helpers. Unknown/extra fields are tolerated and
ignored.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class MavenCoordinate(BaseModel):
    """A parsed ``groupId:artifactId[:version][:packaging][:classifier]``.

    Values are stored verbatim. Optional parts are ``None`` when the segment
    was absent or empty.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    group_id: str = Field(..., min_length=1)
    artifact_id: str = Field(..., min_length=1)
    version: Optional[str] = None
    packaging: Optional[str] = None
    classifier: Optional[str] = None

    @property
    def display_name(self) -> str:
        """``g:a`` plus ``:packaging`` when set, as used in tool messages."""
        name = f"{self.group_id}:{self.artifact_id}"
        if self.packaging:
            name += f":{self.packaging}"
        return name

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.version, self.packaging, self.classifier]
        # Trailing absent parts are dropped; inner gaps stay as empty segments
        while parts and parts[-1] is None:
            parts.pop()
        return ":".join(p or "" for p in parts)


class VersionRecord(BaseModel):
    """One ``core=gav`` search hit: a version and when it was published."""

    model_config = ConfigDict(extra="ignore")

    version: str = Field(..., min_length=1)
    # Epoch milliseconds as reported by Maven Central
    published_at: int = 0
    packaging: Optional[str] = None

    @property
    def published_date(self) -> str:
        ts = datetime.fromtimestamp(self.published_at / 1000, tz=timezone.utc)
        return ts.date().isoformat()


ResultStatus = Literal["ok", "not_found", "upstream_error"]


class ToolResult(BaseModel):
    """Outcome of one tool invocation: a text payload and its status.

    Anything other than ``ok`` is reported to the caller as an error-flagged
    text result rather than a protocol error.
    """

    model_config = ConfigDict(frozen=True)

    status: ResultStatus
    text: str

    @property
    def is_error(self) -> bool:
        return self.status != "ok"

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(status="ok", text=text)

    @classmethod
    def not_found(cls, text: str) -> "ToolResult":
        return cls(status="not_found", text=text)

    @classmethod
    def upstream_error(cls, text: str) -> "ToolResult":
        return cls(status="upstream_error", text=text)


__all__ = ["MavenCoordinate", "VersionRecord", "ToolResult", "ResultStatus"]
