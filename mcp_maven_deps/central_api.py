"""Query construction and HTTP access for the Maven Central search API.

- Query builder: coordinate -> Solr field query and request parameters
- Shared httpx.AsyncClient with connection pooling
- HTTPS-only guard on the base URL
- One attempt per call; failures surface as UpstreamError

Notes:
- Logs use the centralized logger and therefore go to stderr only.
- Nothing is cached here; every search is a fresh request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .config import Settings
from .errors import UpstreamError
from .models import MavenCoordinate, VersionRecord

_MAX_ROWS = 100


def _escape_for_solr_literal(value: str) -> str:
    """Escape backslashes and double quotes for a Solr quoted literal."""
    return value.replace("\\", r"\\").replace('"', r"\"")


def _clause(field: str, value: str) -> str:
    return f'{field}:"{_escape_for_solr_literal(value)}"'


def build_coordinate_query(coord: MavenCoordinate, version: Optional[str] = None) -> str:
    """Build the Solr ``q`` for a coordinate.

    Example:
        g:"org.example" AND a:"lib" AND v:"1.0.0" AND p:"jar"

    The version clause is only added when ``version`` is given (existence
    checks); the packaging clause whenever the coordinate carries one.
    """
    clauses = [_clause("g", coord.group_id), _clause("a", coord.artifact_id)]
    if version:
        clauses.append(_clause("v", version))
    if coord.packaging:
        clauses.append(_clause("p", coord.packaging))
    return " AND ".join(clauses)


def build_search_params(
    coord: MavenCoordinate,
    rows: int,
    *,
    version: Optional[str] = None,
    sort_by_timestamp: bool = False,
) -> dict[str, str | int]:
    """Parameters for a ``core=gav`` search.

    Required keys:
      - q = g:"..." AND a:"..." [AND v:"..."] [AND p:"..."]
      - core = gav
      - rows = <1..100>
      - wt = json
    Optional:
      - sort = timestamp desc
    """
    if isinstance(rows, bool) or not isinstance(rows, int) or not 1 <= rows <= _MAX_ROWS:
        raise ValueError(f"rows must be an integer between 1 and {_MAX_ROWS}")
    params: dict[str, str | int] = {
        "q": build_coordinate_query(coord, version),
        "core": "gav",
        "rows": rows,
        "wt": "json",
    }
    if sort_by_timestamp:
        params["sort"] = "timestamp desc"
    return params


def parse_search_response(data: Any) -> list[VersionRecord]:
    """Extract version records from a Solr ``response.docs`` payload.

    Docs without a usable ``v`` field are skipped. A payload that does not
    have the expected shape raises UpstreamError.
    """
    try:
        docs = data["response"]["docs"]
    except (KeyError, TypeError) as e:
        raise UpstreamError("Malformed response from Maven Central") from e
    if not isinstance(docs, list):
        raise UpstreamError("Malformed response from Maven Central")

    records: list[VersionRecord] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        v = doc.get("v")
        if not isinstance(v, str) or not v.strip():
            continue
        try:
            records.append(
                VersionRecord(
                    version=v,
                    # Undated hits stay in with epoch 0 and list last
                    published_at=doc.get("timestamp") or 0,
                    packaging=doc.get("p"),
                )
            )
        except ValidationError as e:
            raise UpstreamError(f"Malformed search result for version {v}") from e
    return records


def _upstream_message(response: httpx.Response) -> Optional[str]:
    # Solr error bodies look like {"error": {"msg": "...", "code": 400}}
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and isinstance(err.get("msg"), str):
            return err["msg"]
    return None


def _first_line(exc: BaseException) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__


_logger = logging.getLogger(__name__)


class MavenCentralHttpClient:
    """Async HTTP client for the Maven Central search API.

    Parameters are sourced from Settings by default, but can be overridden
    for testability.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: Optional[int] = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        s = Settings()
        self._base_url = base_url or s.MAVEN_CENTRAL_BASE_URL

        if not self._base_url.lower().startswith("https://"):
            raise ValueError("Base URL must be HTTPS")

        self._timeout_seconds = int(timeout_seconds or s.HTTP_TIMEOUT_SECONDS)
        self._client = client or httpx.AsyncClient(timeout=self._timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET the provided URL once and parse the JSON body.

        Any transport error, non-2xx status or undecodable body raises
        UpstreamError carrying the most specific detail available.
        """
        if not url.lower().startswith("https://"):
            raise ValueError("URL must be HTTPS")

        _logger.debug("HTTP GET JSON", extra={"op": "get_json"})

        try:
            resp = await self._client.get(url, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            detail = _upstream_message(e.response) or _first_line(e)
            raise UpstreamError(detail, status_code=status) from e
        except httpx.HTTPError as e:
            raise UpstreamError(_first_line(e)) from e

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError("Malformed response from Maven Central") from e

    async def search(self, params: dict[str, str | int]) -> list[VersionRecord]:
        """Run one search against the configured endpoint."""
        # get_json expects Dict[str, str]; convert any int values to str
        str_params: dict[str, str] = {k: str(v) for k, v in params.items()}
        data = await self.get_json(self._base_url, params=str_params)
        return parse_search_response(data)


# Process-wide client; holds connection pooling only
_singleton: MavenCentralHttpClient | None = None


def get_client() -> MavenCentralHttpClient:
    global _singleton
    if _singleton is None:
        _singleton = MavenCentralHttpClient()
    return _singleton


async def close_client() -> None:
    global _singleton
    if _singleton is not None:
        await _singleton.aclose()
        _singleton = None


__all__ = [
    "MavenCentralHttpClient",
    "get_client",
    "close_client",
    "build_coordinate_query",
    "build_search_params",
    "parse_search_response",
]
