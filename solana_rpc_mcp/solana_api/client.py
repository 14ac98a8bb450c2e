"""
Thin JSON-RPC client for the Solana read methods used by the tools.

All methods map RPC and transport failures to internal exceptions that the
tool layer turns into user-facing error text.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from solana_rpc_mcp.config import ServerConfig, default_config

logger = logging.getLogger(__name__)


class SolanaRpcError(Exception):
    """Base exception for Solana RPC errors."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class RpcUnreachableError(SolanaRpcError):
    """Raised when the RPC endpoint cannot be reached."""


class SolanaRpcClient:
    """Async client for the limited Solana JSON-RPC surface."""

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # No timeout: calls wait for the endpoint to answer or fail.
            self._client = httpx.AsyncClient(timeout=None)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _map_error(self, error: Any, status_code: int) -> SolanaRpcError:
        code: Optional[int] = None
        message: Optional[str] = None
        if isinstance(error, dict):
            raw_code = error.get("code")
            if isinstance(raw_code, int):
                code = raw_code
            raw_message = error.get("message")
            if isinstance(raw_message, str) and raw_message:
                message = raw_message
        elif isinstance(error, str) and error:
            message = error
        if message is None:
            message = f"Solana RPC error (HTTP {status_code})."
        return SolanaRpcError(message, code=code, status_code=status_code)

    async def _request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        client = await self._get_client()
        body: Dict[str, Any] = {"jsonrpc": "2.0", "id": 1, "method": method}
        if params is not None:
            body["params"] = params
        try:
            response = await client.post(self.config.rpc_url, json=body)
        except httpx.RequestError as exc:
            logger.warning("Solana RPC unreachable for method %s", method)
            raise RpcUnreachableError(f"RPC endpoint unreachable: {exc}") from exc
        return self._process_response(response)

    def _process_response(self, response: httpx.Response) -> Any:
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("error") is not None:
            raise self._map_error(data["error"], response.status_code)

        if response.status_code >= 400:
            raise RpcUnreachableError(
                f"RPC endpoint returned HTTP {response.status_code}.",
                status_code=response.status_code,
            )

        if not isinstance(data, dict) or "result" not in data:
            raise SolanaRpcError("Unexpected response from RPC endpoint.", status_code=response.status_code)

        return data["result"]

    @staticmethod
    def _context_value(result: Any) -> Any:
        """Unwrap ``{"context": ..., "value": ...}`` responses."""
        if isinstance(result, dict) and "value" in result:
            return result["value"]
        raise SolanaRpcError("Unexpected response from RPC endpoint.")

    async def get_account_info(self, public_key: str) -> Optional[Dict[str, Any]]:
        """Fetch account info; ``None`` when the account does not exist."""
        result = await self._request(
            "getAccountInfo",
            [public_key, {"encoding": "base64", "commitment": self.config.commitment}],
        )
        return self._context_value(result)

    async def get_balance(self, public_key: str) -> int:
        """Fetch the lamport balance for an address."""
        result = await self._request("getBalance", [public_key, {"commitment": self.config.commitment}])
        value = self._context_value(result)
        if not isinstance(value, int):
            raise SolanaRpcError("Unexpected response from RPC endpoint.")
        return value

    async def get_minimum_balance_for_rent_exemption(self, data_size: int) -> int:
        """Fetch the rent-exempt minimum (lamports) for an account of ``data_size`` bytes."""
        result = await self._request(
            "getMinimumBalanceForRentExemption",
            [data_size, {"commitment": self.config.commitment}],
        )
        if not isinstance(result, int):
            raise SolanaRpcError("Unexpected response from RPC endpoint.")
        return result

    async def get_transaction(self, signature: str) -> Optional[Dict[str, Any]]:
        """Fetch a parsed transaction; ``None`` when it is not found."""
        return await self._request(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": self.config.commitment,
                },
            ],
        )

    async def get_latest_blockhash(self) -> str:
        """Fetch the latest blockhash used to build outgoing transactions."""
        result = await self._request("getLatestBlockhash", [{"commitment": self.config.commitment}])
        value = self._context_value(result)
        blockhash = value.get("blockhash") if isinstance(value, dict) else None
        if not isinstance(blockhash, str):
            raise SolanaRpcError("Unexpected response from RPC endpoint.")
        return blockhash


default_client = SolanaRpcClient()
