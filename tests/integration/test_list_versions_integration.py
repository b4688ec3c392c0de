import re

import httpx
import pytest

from mcp_maven_deps.central_api import close_client
from mcp_maven_deps.server import check_version_exists_core, list_versions_core


@pytest.fixture(autouse=True)
async def _fresh_client():
    yield
    await close_client()


@pytest.mark.asyncio
async def test_listing_then_existence_check(respx_search_mock, search_payload):
    versions = [(f"4.{i}.0", 1_700_000_000_000 + i * 86_400_000) for i in range(20)]
    route = respx_search_mock.mock(
        return_value=httpx.Response(200, json=search_payload(*versions))
    )

    listing = await list_versions_core(dependency="org.apache.kafka:kafka-clients", depth=3)
    lines = listing.text.splitlines()
    assert len(lines) == 3
    assert all(re.fullmatch(r"4\.\d+\.0 \(\d{4}-\d{2}-\d{2}\)", ln) for ln in lines)
    assert lines[0].startswith("4.19.0 ")

    exists = await check_version_exists_core(
        dependency="org.apache.kafka:kafka-clients", version="4.19.0"
    )
    assert exists.text == "true"
    assert route.call_count == 2
    assert 'v:"4.19.0"' in route.calls.last.request.url.params["q"]
