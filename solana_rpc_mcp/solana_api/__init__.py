"""JSON-RPC client wrappers for the Solana cluster."""

from .client import (
    RpcUnreachableError,
    SolanaRpcClient,
    SolanaRpcError,
    default_client,
)

__all__ = [
    "SolanaRpcClient",
    "SolanaRpcError",
    "RpcUnreachableError",
    "default_client",
]
