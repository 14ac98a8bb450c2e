"""MCP stdio transport wiring the registry, resources, and prompts to the MCP SDK."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from solana_rpc_mcp import mcp as tool_mcp
from solana_rpc_mcp import prompts, resources

logger = logging.getLogger(__name__)

SERVER_NAME = "Solana RPC Tools"
SERVER_VERSION = "1.0.0"

app = Server(SERVER_NAME, version=SERVER_VERSION)


def _to_text_content(response: Dict[str, Any]) -> List[types.TextContent]:
    return [types.TextContent(type="text", text=item["text"]) for item in response["content"]]


@app.list_tools()
async def list_tools() -> List[types.Tool]:
    return [
        types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
        for tool in tool_mcp.list_tools()
    ]


# SDK-side schema validation is off so argument errors keep the "Error: " envelope.
@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Any) -> List[types.TextContent]:
    return _to_text_content(await tool_mcp.call_tool(name, arguments))


@app.list_resources()
async def list_resources() -> List[types.Resource]:
    return [
        types.Resource(
            uri=resource["uri"],
            name=resource["name"],
            description=resource["description"],
            mimeType=resource["mimeType"],
        )
        for resource in resources.list_resources()
    ]


@app.read_resource()
async def read_resource(uri: Any) -> List[ReadResourceContents]:
    uri = str(uri)
    resource = resources.RESOURCES.get(uri)
    mime_type = resource.mime_type if resource is not None else "text/plain"
    result = await resources.read_resource(uri)
    return [ReadResourceContents(content=item["text"], mime_type=mime_type) for item in result["contents"]]


@app.list_prompts()
async def list_prompts() -> List[types.Prompt]:
    return [
        types.Prompt(
            name=prompt["name"],
            description=prompt["description"],
            arguments=[
                types.PromptArgument(name=arg["name"], required=arg["required"]) for arg in prompt["arguments"]
            ],
        )
        for prompt in prompts.list_prompts()
    ]


@app.get_prompt()
async def get_prompt(name: str, arguments: Dict[str, str] | None) -> types.GetPromptResult:
    rendered = prompts.get_prompt(name, arguments)
    return types.GetPromptResult(
        description=rendered["description"],
        messages=[
            types.PromptMessage(
                role=message["role"],
                content=types.TextContent(type="text", text=message["content"]["text"]),
            )
            for message in rendered["messages"]
        ],
    )


async def run_stdio() -> None:
    """Serve MCP requests over stdin/stdout until the client disconnects."""
    logger.info("Starting %s %s on stdio", SERVER_NAME, SERVER_VERSION)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        await tool_mcp.close_clients()
