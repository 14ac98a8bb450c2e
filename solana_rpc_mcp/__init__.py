"""
Solana RPC MCP server package.

This package exposes Solana account, balance, rent, transaction and transfer
tools, two documentation resources, and five prompts to MCP clients. See
DESIGN.md for full details.
"""

__all__ = ["config"]
