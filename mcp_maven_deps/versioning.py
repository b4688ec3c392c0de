"""Pre-release detection, version ordering and candidate selection.

Rules:

- A version is a pre-release when a hyphen directly after a digit is followed
  by one of the qualifiers (case-insensitive):
    alpha, a, beta, b, milestone, m, rc, cr, snapshot
  The match is a plain prefix search, so ``1.0.0-a1`` and ``1.0.0-M6`` count,
  while ``1.0.0.RC1`` (no hyphen) does not.
- Numeric ordering splits on '.' only and coerces each component to an int;
  components that do not parse (including ``0-beta``) count as 0. As a
  consequence ``1.0.0-beta`` and ``1.0.0`` compare equal.
- "Latest" is selected either by publish timestamp (most recent first) or by
  the numeric ordering above; the two policies are never mixed.
"""

from __future__ import annotations

import enum
import re
from functools import cmp_to_key
from typing import Final, Iterable, List, Optional, Sequence

from .errors import InvalidParamsError
from .models import VersionRecord

_PRERELEASE: Final[re.Pattern[str]] = re.compile(
    r"(?ix)"  # ignore-case, verbose
    r"\d-"  # hyphen right after the numeric core
    r"(?:alpha|a|beta|b|milestone|m|rc|cr|snapshot)"
)

MIN_DEPTH: Final[int] = 1
MAX_DEPTH: Final[int] = 100
DEFAULT_DEPTH: Final[int] = 15


def is_prerelease(version: str) -> bool:
    """Return True if ``version`` carries a pre-release qualifier."""
    return _PRERELEASE.search(version) is not None


def is_stable(version: str) -> bool:
    return not is_prerelease(version)


def filter_stable(records: Iterable[VersionRecord]) -> list[VersionRecord]:
    """Keep only records whose version is not a pre-release, in input order."""
    return [r for r in records if is_stable(r.version)]


# -----------------------------
# Numeric ordering
# -----------------------------


def _component(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0


def _components(version: str) -> List[int]:
    return [_component(p) for p in version.split(".")]


def compare_versions(a: str, b: str) -> int:
    """Compare two versions component-wise on their dot segments.

    Returns -1 if a < b, 0 if equal, 1 if a > b. Missing trailing components
    compare as 0, so ``1.0`` equals ``1.0.0``.
    """
    ca = _components(a)
    cb = _components(b)
    for i in range(max(len(ca), len(cb))):
        xa = ca[i] if i < len(ca) else 0
        xb = cb[i] if i < len(cb) else 0
        if xa < xb:
            return -1
        if xa > xb:
            return 1
    return 0


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return a new list of versions sorted lowest to highest.

    The sort is stable: versions comparing equal keep their input order.
    """
    return sorted(versions, key=cmp_to_key(compare_versions))


def select_highest(records: Sequence[VersionRecord]) -> Optional[VersionRecord]:
    """Return the record with the highest numeric version.

    Among records comparing equal the first one in input order wins.
    """
    best: Optional[VersionRecord] = None
    for record in records:
        if best is None or compare_versions(record.version, best.version) > 0:
            best = record
    return best


# -----------------------------
# Publish-time ordering
# -----------------------------


def sort_by_published(records: Iterable[VersionRecord]) -> list[VersionRecord]:
    """Most recently published first; ties keep their input order."""
    return sorted(records, key=lambda r: r.published_at, reverse=True)


def select_most_recent(records: Sequence[VersionRecord]) -> Optional[VersionRecord]:
    ordered = sort_by_published(records)
    return ordered[0] if ordered else None


class SelectionPolicy(str, enum.Enum):
    """How "latest" is chosen among candidates."""

    PUBLISHED = "published"
    HIGHEST = "highest"


def select_latest(
    records: Sequence[VersionRecord], policy: SelectionPolicy = SelectionPolicy.PUBLISHED
) -> Optional[VersionRecord]:
    if policy is SelectionPolicy.HIGHEST:
        return select_highest(records)
    return select_most_recent(records)


# -----------------------------
# Ranked listing
# -----------------------------


def validate_depth(depth: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise InvalidParamsError("depth must be an integer")
    if depth < MIN_DEPTH or depth > MAX_DEPTH:
        raise InvalidParamsError(f"depth must be between {MIN_DEPTH} and {MAX_DEPTH}")
    return depth


def format_listing(records: Iterable[VersionRecord], depth: int = DEFAULT_DEPTH) -> str:
    """Render up to ``depth`` records as ``"<version> (<yyyy-mm-dd>)"`` lines.

    Lines are ordered most recently published first.
    """
    depth = validate_depth(depth)
    ordered = sort_by_published(records)[:depth]
    return "\n".join(f"{r.version} ({r.published_date})" for r in ordered)


__all__ = [
    "is_prerelease",
    "is_stable",
    "filter_stable",
    "compare_versions",
    "sort_versions",
    "select_highest",
    "sort_by_published",
    "select_most_recent",
    "SelectionPolicy",
    "select_latest",
    "validate_depth",
    "format_listing",
    "DEFAULT_DEPTH",
    "MIN_DEPTH",
    "MAX_DEPTH",
]
