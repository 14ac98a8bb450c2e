"""Command-line entry point: stdio by default, HTTP gateway with ``--http``."""

from __future__ import annotations

import argparse
import asyncio
from typing import List, Optional

from solana_rpc_mcp.config import default_config
from solana_rpc_mcp.logging_config import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solana-rpc-mcp", description="Solana RPC tools for MCP clients.")
    parser.add_argument("--http", action="store_true", help="Serve the JSON-RPC gateway over HTTP instead of stdio.")
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address (with --http).")
    parser.add_argument("--port", type=int, default=8000, help="HTTP port (with --http).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    configure_logging(default_config)

    if args.http:
        import uvicorn

        uvicorn.run("solana_rpc_mcp.server:app", host=args.host, port=args.port, log_config=None)
        return

    from solana_rpc_mcp.stdio import run_stdio

    asyncio.run(run_stdio())


if __name__ == "__main__":
    main()
