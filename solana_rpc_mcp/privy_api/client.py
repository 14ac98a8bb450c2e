"""
HTTP client for the Privy server-wallet API.

The wallet key never leaves Privy; this client only submits unsigned
transactions for sign-and-send and returns the broadcast hash.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from solana_rpc_mcp.config import (
    DEVNET_CLUSTER,
    MAINNET_CLUSTER,
    TESTNET_CLUSTER,
    ServerConfig,
    default_config,
)

logger = logging.getLogger(__name__)

# CAIP-2 chain identifiers (genesis hash prefixes) per cluster.
SOLANA_CAIP2 = {
    MAINNET_CLUSTER: "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp",
    DEVNET_CLUSTER: "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1",
    TESTNET_CLUSTER: "solana:4uhcVJyU9pJkvQyS88uRDiswHXSCkY3z",
}


class ConfigurationError(Exception):
    """Raised when signing credentials or wallet identifiers are missing."""


class PrivyApiError(Exception):
    """Raised when the signing service rejects a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PrivyUnreachableError(PrivyApiError):
    """Raised when the signing service cannot be reached."""


class PrivyWalletClient:
    """Async client for sign-and-send against a single custodial wallet."""

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
            self._client = httpx.AsyncClient(base_url=self.config.privy_api_url, timeout=None)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _require_config(self) -> None:
        missing = self.config.missing_signing_fields()
        if missing:
            raise ConfigurationError(f"Missing configuration: {', '.join(missing)}")

    def _build_headers(self) -> Dict[str, str]:
        return {"privy-app-id": self.config.privy_app_id or ""}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            for key in ("error", "message"):
                value = data.get(key)
                if isinstance(value, str) and value:
                    return value
        return f"Signing service returned HTTP {response.status_code}."

    async def sign_and_send_transaction(self, transaction_base64: str) -> str:
        """
        Sign and broadcast a serialized transaction with the configured wallet.

        Returns:
            The transaction hash (signature) reported by the signing service.
        """
        self._require_config()
        client = await self._get_client()
        body: Dict[str, Any] = {
            "method": "signAndSendTransaction",
            "caip2": SOLANA_CAIP2.get(self.config.cluster, SOLANA_CAIP2[MAINNET_CLUSTER]),
            "params": {"transaction": transaction_base64, "encoding": "base64"},
        }
        try:
            response = await client.post(
                f"/v1/wallets/{self.config.wallet_id}/rpc",
                json=body,
                headers=self._build_headers(),
                auth=(self.config.privy_app_id or "", self.config.privy_app_secret or ""),
            )
        except httpx.RequestError as exc:
            logger.warning("Signing service unreachable")
            raise PrivyUnreachableError(f"Signing service unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise PrivyApiError(self._error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise PrivyApiError("Unexpected response from signing service.") from exc
        payload = data.get("data") if isinstance(data, dict) else None
        tx_hash = payload.get("hash") if isinstance(payload, dict) else None
        if not isinstance(tx_hash, str) or not tx_hash:
            raise PrivyApiError("Unexpected response from signing service.")
        return tx_hash


default_signer = PrivyWalletClient()
