"""Minimal sanity checks for the Solana MCP tools against a live cluster."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from solana_rpc_mcp import mcp  # noqa: E402
from solana_rpc_mcp.resources import read_resource  # noqa: E402

# System program address; override via env.
SAMPLE_ADDRESS = os.getenv("SOLANA_SAMPLE_ADDRESS", "11111111111111111111111111111111")
# Optional transaction signature to look up.
SAMPLE_SIGNATURE = os.getenv("SOLANA_SAMPLE_SIGNATURE")
# Opt-in to fetching the documentation resources.
RUN_DOCS_FETCH = os.getenv("RUN_DOCS_SANITY", "false").lower() in {"1", "true", "yes"}


def _text(response):
    return response["content"][0]["text"]


async def main() -> None:
    print("Tools:", [tool["name"] for tool in mcp.list_tools()])
    print("Balance:", _text(await mcp.call_tool("getBalance", {"publicKey": SAMPLE_ADDRESS})))
    print(
        "Rent exemption (0 bytes):",
        _text(await mcp.call_tool("getMinimumBalanceForRentExemption", {"dataSize": 0})),
    )
    print("Account info:", _text(await mcp.call_tool("getAccountInfo", {"publicKey": SAMPLE_ADDRESS}))[:200])

    if SAMPLE_SIGNATURE:
        print("Transaction:", _text(await mcp.call_tool("getTransaction", {"signature": SAMPLE_SIGNATURE}))[:200])

    if RUN_DOCS_FETCH:
        result = await read_resource("solana://docs/references/clusters")
        print("Clusters doc:", result["contents"][0]["text"][:200])

    await mcp.close_clients()


if __name__ == "__main__":
    asyncio.run(main())
