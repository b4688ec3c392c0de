from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import pytest
import respx

from mcp_maven_deps.central_api import MavenCentralHttpClient
from mcp_maven_deps.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Settings are read per call; keep the host environment out of the tests
    for key in (
        "MAVEN_CENTRAL_BASE_URL",
        "HTTP_TIMEOUT_SECONDS",
        "SEARCH_ROWS",
        "DEFAULT_LIST_DEPTH",
        "LATEST_SELECTION_POLICY",
        "LOG_LEVEL",
        "LOG_JSON",
        "TRANSPORT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def respx_router() -> Iterator[respx.Router]:
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def respx_search_mock(respx_router: respx.Router) -> respx.Route:
    """A route on the Maven Central search URL.

    Tests call `.mock(return_value=...)` and inspect `.calls`/`.call_count`.
    """

    return respx_router.get(Settings().MAVEN_CENTRAL_BASE_URL)


@pytest.fixture
async def maven_client() -> AsyncIterator[MavenCentralHttpClient]:
    client = MavenCentralHttpClient()
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def search_payload() -> Callable[..., dict[str, Any]]:
    """Build a Solr core=gav response from (version, timestamp_ms) pairs."""

    def _f(*entries: tuple[str, int], packaging: str = "jar") -> dict[str, Any]:
        docs = [
            {
                "id": f"g:a:{v}",
                "g": "g",
                "a": "a",
                "v": v,
                "p": packaging,
                "timestamp": ts,
            }
            for v, ts in entries
        ]
        return {"response": {"numFound": len(docs), "start": 0, "docs": docs}}

    return _f
