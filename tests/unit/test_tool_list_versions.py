from datetime import datetime, timezone

import httpx
import pytest

from mcp_maven_deps.errors import InvalidParamsError
from mcp_maven_deps.server import list_versions_core


def _ms(day: str) -> int:
    dt = datetime.strptime(day, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


@pytest.mark.asyncio
async def test_depth_limits_output(respx_search_mock, maven_client, search_payload) -> None:
    entries = [(f"3.{i}.0", _ms(f"2024-02-{i + 1:02d}")) for i in range(10)]
    route = respx_search_mock.mock(return_value=httpx.Response(200, json=search_payload(*entries)))

    result = await list_versions_core(dependency="org.example:lib", depth=5, client=maven_client)

    assert result.is_error is False
    assert result.text.split("\n") == [
        "3.9.0 (2024-02-10)",
        "3.8.0 (2024-02-09)",
        "3.7.0 (2024-02-08)",
        "3.6.0 (2024-02-07)",
        "3.5.0 (2024-02-06)",
    ]
    params = route.calls.last.request.url.params
    assert params["rows"] == "100"
    assert params["sort"] == "timestamp desc"


@pytest.mark.asyncio
async def test_default_excludes_prereleases(
    respx_search_mock, maven_client, search_payload
) -> None:
    respx_search_mock.mock(
        return_value=httpx.Response(
            200,
            json=search_payload(
                ("2.0.0-RC1", _ms("2024-05-01")),
                ("1.2.0", _ms("2024-04-01")),
                ("1.2.0-SNAPSHOT", _ms("2024-03-01")),
                ("1.1.0", _ms("2024-02-01")),
            ),
        )
    )
    result = await list_versions_core(dependency="org.example:lib", client=maven_client)
    assert result.text == "1.2.0 (2024-04-01)\n1.1.0 (2024-02-01)"


@pytest.mark.asyncio
async def test_include_prereleases(respx_search_mock, maven_client, search_payload) -> None:
    respx_search_mock.mock(
        return_value=httpx.Response(
            200,
            json=search_payload(("2.0.0-RC1", _ms("2024-05-01")), ("1.2.0", _ms("2024-04-01"))),
        )
    )
    result = await list_versions_core(
        dependency="org.example:lib", exclude_prereleases=False, client=maven_client
    )
    assert result.text == "2.0.0-RC1 (2024-05-01)\n1.2.0 (2024-04-01)"


@pytest.mark.asyncio
async def test_upstream_order_is_not_trusted(
    respx_search_mock, maven_client, search_payload
) -> None:
    respx_search_mock.mock(
        return_value=httpx.Response(
            200,
            json=search_payload(("1.0", _ms("2020-01-01")), ("1.1", _ms("2021-01-01"))),
        )
    )
    result = await list_versions_core(dependency="g:a", client=maven_client)
    assert result.text == "1.1 (2021-01-01)\n1.0 (2020-01-01)"


@pytest.mark.asyncio
async def test_all_prereleases_reports_no_stable(
    respx_search_mock, maven_client, search_payload
) -> None:
    respx_search_mock.mock(
        return_value=httpx.Response(200, json=search_payload(("0.1.0-alpha", 1), ("0.1.0-b1", 2)))
    )
    result = await list_versions_core(dependency="org.example:early", client=maven_client)
    assert result.status == "not_found"
    assert result.text.startswith("No stable releases found for org.example:early")


@pytest.mark.asyncio
async def test_empty_is_not_found(respx_search_mock, maven_client, search_payload) -> None:
    respx_search_mock.mock(return_value=httpx.Response(200, json=search_payload()))
    result = await list_versions_core(dependency="org.example:none", client=maven_client)
    assert result.status == "not_found"
    assert result.text == "No Maven dependency found for org.example:none"


@pytest.mark.asyncio
@pytest.mark.parametrize("depth", [0, 101, -3])
async def test_depth_out_of_range_rejected_without_request(
    respx_search_mock, maven_client, depth: int
) -> None:
    with pytest.raises(InvalidParamsError):
        await list_versions_core(dependency="org.example:lib", depth=depth, client=maven_client)
    assert respx_search_mock.call_count == 0


@pytest.mark.asyncio
async def test_malformed_body_is_upstream_error(respx_search_mock, maven_client) -> None:
    respx_search_mock.mock(return_value=httpx.Response(200, json={"unexpected": True}))
    result = await list_versions_core(dependency="org.example:lib", client=maven_client)
    assert result.status == "upstream_error"
    assert result.text == "Maven Central API error: Malformed response from Maven Central"


@pytest.mark.asyncio
async def test_default_depth_comes_from_settings(
    monkeypatch: pytest.MonkeyPatch, respx_search_mock, maven_client, search_payload
) -> None:
    monkeypatch.setenv("DEFAULT_LIST_DEPTH", "3")
    entries = [(f"2.{i}", _ms(f"2022-07-{i + 1:02d}")) for i in range(6)]
    respx_search_mock.mock(return_value=httpx.Response(200, json=search_payload(*entries)))

    result = await list_versions_core(dependency="org.example:lib", client=maven_client)

    assert result.text.splitlines() == [
        "2.5 (2022-07-06)",
        "2.4 (2022-07-05)",
        "2.3 (2022-07-04)",
    ]


@pytest.mark.asyncio
async def test_built_in_default_depth_is_fifteen(
    respx_search_mock, maven_client, search_payload
) -> None:
    entries = [(f"0.{i}", i + 1) for i in range(20)]
    respx_search_mock.mock(return_value=httpx.Response(200, json=search_payload(*entries)))
    result = await list_versions_core(dependency="g:a", client=maven_client)
    assert len(result.text.splitlines()) == 15
