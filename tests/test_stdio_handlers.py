import mcp.types as types
import pytest
from mcp.server.lowlevel.helper_types import ReadResourceContents

from solana_rpc_mcp import resources, stdio
from solana_rpc_mcp.config import ServerConfig
from solana_rpc_mcp.mcp import build_registry


class StubClient:
    async def get_minimum_balance_for_rent_exemption(self, data_size):
        return 890_880


@pytest.mark.asyncio
async def test_list_tools_maps_registry():
    tools = await stdio.list_tools()
    assert all(isinstance(tool, types.Tool) for tool in tools)
    by_name = {tool.name: tool for tool in tools}
    assert by_name["getTransaction"].inputSchema["required"] == ["signature"]


@pytest.mark.asyncio
async def test_call_tool_returns_text_content(monkeypatch):
    monkeypatch.setattr("solana_rpc_mcp.mcp.TOOL_REGISTRY", build_registry(ServerConfig(), client=StubClient()))
    content = await stdio.call_tool("getMinimumBalanceForRentExemption", {"dataSize": 0})
    assert content == [types.TextContent(type="text", text="0.00089088 SOL (890880 lamports)")]


@pytest.mark.asyncio
async def test_call_tool_validation_error_is_text():
    content = await stdio.call_tool("getMinimumBalanceForRentExemption", {"dataSize": "zero"})
    assert content[0].text == "Error: Invalid argument type for dataSize: expected number"


@pytest.mark.asyncio
async def test_read_resource_returns_body(monkeypatch):
    async def fake_fetch(url):
        return "clusters doc"

    monkeypatch.setattr(resources, "fetch_text", fake_fetch)
    listed = await stdio.list_resources()
    assert {str(resource.uri) for resource in listed} == set(resources.RESOURCES)
    contents = await stdio.read_resource("solana://docs/references/clusters")
    assert contents == [ReadResourceContents(content="clusters doc", mime_type="text/markdown")]


@pytest.mark.asyncio
async def test_read_resource_request_advertises_markdown(monkeypatch):
    async def fake_fetch(url):
        return "# Clusters"

    monkeypatch.setattr(resources, "fetch_text", fake_fetch)
    handler = stdio.app.request_handlers[types.ReadResourceRequest]
    request = types.ReadResourceRequest(
        method="resources/read",
        params=types.ReadResourceRequestParams(uri="solana://docs/references/clusters"),
    )
    result = await handler(request)
    item = result.root.contents[0]
    assert item.mimeType == "text/markdown"
    assert item.text == "# Clusters"


@pytest.mark.asyncio
async def test_get_prompt_builds_result():
    prompts = await stdio.list_prompts()
    assert any(prompt.name == "what-happened-in-transaction" for prompt in prompts)

    result = await stdio.get_prompt("what-happened-in-transaction", {"signature": "abc"})
    assert isinstance(result, types.GetPromptResult)
    assert result.messages[0].role == "user"
    assert "signature abc" in result.messages[0].content.text
