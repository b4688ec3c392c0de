"""MCP server and tool definitions.

Design notes:
- Tool cores (``*_core``) are transport-neutral: they take plain arguments
  plus an optional search client and return a ToolResult, or raise
  InvalidParamsError for malformed input.
- The FastMCP wrappers only translate: ok -> text, not_found/upstream_error
  -> ToolError (error-flagged text). Malformed arguments are rejected in the
  CallTool request handler with an INVALID_PARAMS protocol error.
- Each invocation issues exactly one search request. Nothing is cached.
- Logging goes to stderr via the central logging config.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, CallToolRequest, ErrorData, ServerResult

from .central_api import MavenCentralHttpClient, build_search_params, get_client
from .config import Settings
from .coordinates import parse_coordinate
from .errors import InvalidParamsError, UpstreamError
from .models import MavenCoordinate, ToolResult, VersionRecord
from .versioning import (
    SelectionPolicy,
    filter_stable,
    format_listing,
    select_latest,
    select_most_recent,
    validate_depth,
)

_logger = logging.getLogger(__name__)

SERVER_NAME = "maven-deps-server"


def _not_found(coord: MavenCoordinate) -> ToolResult:
    return ToolResult.not_found(f"No Maven dependency found for {coord.display_name}")


def _no_stable(coord: MavenCoordinate) -> ToolResult:
    return ToolResult.not_found(
        f"No stable releases found for {coord.display_name}; "
        "all published versions are pre-releases"
    )


def _upstream_failure(coord: MavenCoordinate, exc: UpstreamError) -> ToolResult:
    _logger.warning(
        "maven central request failed",
        extra={
            "group_id": coord.group_id,
            "artifact_id": coord.artifact_id,
            "status_code": exc.status_code,
        },
    )
    return ToolResult.upstream_error(f"Maven Central API error: {exc.detail}")


def _require_dependency(dependency: object) -> MavenCoordinate:
    if not isinstance(dependency, str):
        raise InvalidParamsError("Invalid Maven dependency format")
    return parse_coordinate(dependency)


async def _search(
    client: MavenCentralHttpClient,
    coord: MavenCoordinate,
    *,
    op: str,
    rows: int,
    version: Optional[str] = None,
    sort_by_timestamp: bool = True,
) -> list[VersionRecord]:
    params = build_search_params(
        coord, rows, version=version, sort_by_timestamp=sort_by_timestamp
    )
    # Only log the operation, not the full URL + params, at info level
    _logger.info(
        "querying maven central",
        extra={
            "op": op,
            "group_id": coord.group_id,
            "artifact_id": coord.artifact_id,
            "rows": rows,
        },
    )
    return await client.search(params)


async def get_latest_version_core(
    *,
    dependency: str,
    client: MavenCentralHttpClient | None = None,
) -> ToolResult:
    """Most recently published version of a coordinate, pre-releases included."""

    coord = _require_dependency(dependency)
    client = client or get_client()

    try:
        records = await _search(client, coord, op="get_maven_latest_version", rows=1)
    except UpstreamError as e:
        return _upstream_failure(coord, e)

    latest = select_most_recent(records)
    if latest is None:
        return _not_found(coord)
    return ToolResult.ok(latest.version)


async def get_latest_release_core(
    *,
    dependency: str,
    exclude_prereleases: bool = True,
    client: MavenCentralHttpClient | None = None,
) -> ToolResult:
    """Latest release of a coordinate under the configured selection policy.

    With ``exclude_prereleases`` set, pre-release versions are dropped first;
    when nothing survives the filter a distinct "no stable releases" result
    is returned instead of falling back to a pre-release.
    """

    coord = _require_dependency(dependency)
    settings = Settings()
    client = client or get_client()

    try:
        records = await _search(
            client, coord, op="get_latest_release", rows=settings.SEARCH_ROWS
        )
    except UpstreamError as e:
        return _upstream_failure(coord, e)

    if not records:
        return _not_found(coord)

    candidates = filter_stable(records) if exclude_prereleases else records
    if not candidates:
        return _no_stable(coord)

    latest = select_latest(candidates, SelectionPolicy(settings.LATEST_SELECTION_POLICY))
    return ToolResult.ok(latest.version)  # type: ignore[union-attr]


def _resolve_version(coord: MavenCoordinate, version: object) -> str:
    """Version to check: the embedded one wins over the separate argument."""
    if version is not None and not isinstance(version, str):
        raise InvalidParamsError("Invalid Maven dependency format")
    effective = coord.version or version
    if not effective:
        raise InvalidParamsError(
            "Version must be provided either in dependency string or version parameter"
        )
    return effective


def _resolve_depth(depth: Optional[int]) -> int:
    return validate_depth(Settings().DEFAULT_LIST_DEPTH if depth is None else depth)


async def check_version_exists_core(
    *,
    dependency: str,
    version: Optional[str] = None,
    client: MavenCentralHttpClient | None = None,
) -> ToolResult:
    """Whether a specific version exists, as the literal text "true"/"false".

    A version embedded in the coordinate wins over the ``version`` argument.
    """

    coord = _require_dependency(dependency)
    effective = _resolve_version(coord, version)

    client = client or get_client()
    try:
        records = await _search(
            client,
            coord,
            op="check_maven_version_exists",
            rows=1,
            version=effective,
            sort_by_timestamp=False,
        )
    except UpstreamError as e:
        return _upstream_failure(coord, e)

    return ToolResult.ok("true" if records else "false")


async def list_versions_core(
    *,
    dependency: str,
    depth: Optional[int] = None,
    exclude_prereleases: bool = True,
    client: MavenCentralHttpClient | None = None,
) -> ToolResult:
    """Up to ``depth`` versions, most recently published first, with dates.

    ``depth`` falls back to the DEFAULT_LIST_DEPTH setting.
    """

    coord = _require_dependency(dependency)
    # Validated before any network traffic
    depth = _resolve_depth(depth)
    settings = Settings()
    client = client or get_client()

    try:
        records = await _search(
            client, coord, op="list_maven_versions", rows=settings.SEARCH_ROWS
        )
    except UpstreamError as e:
        return _upstream_failure(coord, e)

    if not records:
        return _not_found(coord)

    candidates = filter_stable(records) if exclude_prereleases else records
    if not candidates:
        return _no_stable(coord)

    return ToolResult.ok(format_listing(candidates, depth))


# -----------------------------
# MCP transport wrappers
# -----------------------------

_server = FastMCP(SERVER_NAME)


def _respond(result: ToolResult) -> str:
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def _invalid_params(exc: InvalidParamsError) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=str(exc)))


@_server.tool()
async def get_maven_latest_version(dependency: str) -> str:
    """Get the most recently published version of a Maven dependency.

    dependency is a coordinate "groupId:artifactId[:version][:packaging][:classifier]",
    e.g. "org.springframework:spring-core".
    """

    return _respond(await get_latest_version_core(dependency=dependency))


@_server.tool()
async def get_latest_release(
    dependency: str,
    excludePreReleases: bool = True,  # noqa: N803 - tool argument name
) -> str:
    """Get the latest release of a Maven dependency, skipping pre-releases by default."""

    return _respond(
        await get_latest_release_core(dependency=dependency, exclude_prereleases=excludePreReleases)
    )


@_server.tool()
async def check_maven_version_exists(dependency: str, version: Optional[str] = None) -> str:
    """Check if a specific version of a Maven dependency exists.

    The version may be embedded in the coordinate or passed separately; the
    embedded one takes precedence. Returns "true" or "false".
    """

    return _respond(await check_version_exists_core(dependency=dependency, version=version))


@_server.tool()
async def list_maven_versions(
    dependency: str,
    depth: Optional[int] = None,
    excludePreReleases: bool = True,  # noqa: N803 - tool argument name
) -> str:
    """List versions of a Maven dependency, most recently published first.

    Each line reads "<version> (<yyyy-mm-dd>)". depth is between 1 and 100
    (default 15).
    """

    return _respond(
        await list_versions_core(
            dependency=dependency, depth=depth, exclude_prereleases=excludePreReleases
        )
    )


# -----------------------------
# Argument checks ahead of tool dispatch
# -----------------------------
#
# Exceptions raised inside a tool body come back as error-flagged tool
# results. Malformed arguments must instead fail the JSON-RPC request with
# INVALID_PARAMS, so they are checked in the CallTool request handler before
# FastMCP runs the tool.


def _check_dependency(arguments: dict[str, Any]) -> MavenCoordinate:
    return _require_dependency(arguments.get("dependency"))


def _check_version_arguments(arguments: dict[str, Any]) -> None:
    _resolve_version(_check_dependency(arguments), arguments.get("version"))


def _check_list_arguments(arguments: dict[str, Any]) -> None:
    _check_dependency(arguments)
    depth = arguments.get("depth")
    # Non-integer values are left to FastMCP's own argument validation
    if depth is None or (isinstance(depth, int) and not isinstance(depth, bool)):
        _resolve_depth(depth)


_ARGUMENT_CHECKS: dict[str, Callable[[dict[str, Any]], object]] = {
    "get_maven_latest_version": _check_dependency,
    "get_latest_release": _check_dependency,
    "check_maven_version_exists": _check_version_arguments,
    "list_maven_versions": _check_list_arguments,
}


def check_tool_arguments(name: str, arguments: Optional[dict[str, Any]]) -> None:
    """Raise InvalidParamsError when ``arguments`` cannot be served by tool ``name``."""
    check = _ARGUMENT_CHECKS.get(name)
    if check is not None:
        check(arguments or {})


def _install_argument_checks(server: FastMCP) -> None:
    handlers = server._mcp_server.request_handlers
    dispatch = handlers[CallToolRequest]

    async def _call_tool(req: CallToolRequest) -> ServerResult:
        try:
            check_tool_arguments(req.params.name, req.params.arguments)
        except InvalidParamsError as e:
            _logger.info(
                "rejected tool arguments",
                extra={"op": req.params.name, "reason": str(e)},
            )
            raise _invalid_params(e) from e
        return await dispatch(req)

    handlers[CallToolRequest] = _call_tool


_install_argument_checks(_server)


def get_server() -> FastMCP:
    return _server


TransportName = Literal["stdio", "http"]


def run(
    transport: TransportName = "stdio",
    *,
    host: str | None = None,
    port: int | None = None,
) -> None:  # pragma: no cover
    """Serve the tools over the selected transport until the process exits."""
    if transport == "http":
        settings = Settings()
        _logger.info(
            "maven deps MCP server running on http",
            extra={"host": host or settings.HTTP_HOST, "port": port or settings.HTTP_PORT},
        )
        _server.run(
            transport="http",
            host=host or settings.HTTP_HOST,
            port=port or settings.HTTP_PORT,
        )
    else:
        _logger.info("maven deps MCP server running on stdio")
        _server.run()


__all__ = [
    "get_latest_version_core",
    "get_latest_release_core",
    "check_version_exists_core",
    "list_versions_core",
    "check_tool_arguments",
    "get_server",
    "run",
]
