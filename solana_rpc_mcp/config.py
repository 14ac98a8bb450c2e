"""
Configuration helpers for the Solana RPC MCP server.

This module centralizes RPC endpoint selection, cluster naming, signing
service credentials, and logging options. No secrets are stored in the
repository; credentials are read from the environment (or a local ``.env``
file) once at startup and carried in an immutable ``ServerConfig``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Cluster defaults
MAINNET_CLUSTER = "mainnet-beta"
DEVNET_CLUSTER = "devnet"
TESTNET_CLUSTER = "testnet"
CLUSTER_URLS = {
    MAINNET_CLUSTER: "https://api.mainnet-beta.solana.com",
    DEVNET_CLUSTER: "https://api.devnet.solana.com",
    TESTNET_CLUSTER: "https://api.testnet.solana.com",
}
DEFAULT_COMMITMENT = "confirmed"
DEFAULT_PRIVY_API_URL = "https://api.privy.io"
EXPLORER_TX_URL = "https://explorer.solana.com/tx/"

# Environment variable names
RPC_URL_ENV_VAR = "SOLANA_RPC_URL"
CLUSTER_ENV_VAR = "SOLANA_CLUSTER"
COMMITMENT_ENV_VAR = "SOLANA_COMMITMENT"
PRIVY_APP_ID_ENV_VAR = "PRIVY_APP_ID"
PRIVY_APP_SECRET_ENV_VAR = "PRIVY_APP_SECRET"
PRIVY_WALLET_ID_ENV_VAR = "PRIVY_WALLET_ID"
PRIVY_WALLET_ADDRESS_ENV_VAR = "PRIVY_WALLET_ADDRESS"
PRIVY_API_URL_ENV_VAR = "PRIVY_API_URL"
EXTENDED_ENV_VAR = "SOLANA_MCP_EXTENDED"
LOG_LEVEL_ENV_VAR = "SOLANA_MCP_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "SOLANA_MCP_LOG_FORMAT"

LAMPORTS_PER_SOL = 1_000_000_000


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _load_cluster() -> str:
    raw = (_env(CLUSTER_ENV_VAR) or MAINNET_CLUSTER).lower()
    if raw == "mainnet":
        return MAINNET_CLUSTER
    if raw not in CLUSTER_URLS:
        # RPC URL, CAIP-2 chain id and explorer link must name the same cluster.
        logger.warning("Unknown %s=%r; using %s", CLUSTER_ENV_VAR, raw, MAINNET_CLUSTER)
        return MAINNET_CLUSTER
    return raw


def _load_rpc_url(cluster: str) -> str:
    explicit = _env(RPC_URL_ENV_VAR)
    if explicit:
        return explicit
    return CLUSTER_URLS.get(cluster, CLUSTER_URLS[MAINNET_CLUSTER])


def _load_flag(name: str) -> Optional[bool]:
    raw = _env(name)
    if raw is None:
        return None
    return raw.lower() in {"1", "true", "yes", "y", "on"}


@dataclass(slots=True, frozen=True)
class ServerConfig:
    """Runtime configuration for Solana RPC access and transfer signing."""

    rpc_url: str = CLUSTER_URLS[MAINNET_CLUSTER]
    cluster: str = MAINNET_CLUSTER
    commitment: str = DEFAULT_COMMITMENT
    privy_app_id: Optional[str] = None
    privy_app_secret: Optional[str] = None
    wallet_id: Optional[str] = None
    wallet_address: Optional[str] = None
    privy_api_url: str = DEFAULT_PRIVY_API_URL
    extended: bool = False
    log_level: str = "INFO"
    log_format: str = "json"

    def missing_signing_fields(self) -> List[str]:
        """Return the environment variable names needed by transferSOL that are unset."""
        required = (
            (PRIVY_APP_ID_ENV_VAR, self.privy_app_id),
            (PRIVY_APP_SECRET_ENV_VAR, self.privy_app_secret),
            (PRIVY_WALLET_ID_ENV_VAR, self.wallet_id),
            (PRIVY_WALLET_ADDRESS_ENV_VAR, self.wallet_address),
        )
        return [name for name, value in required if not value]

    def explorer_url(self, tx_hash: str) -> str:
        """Build an explorer link for a transaction on the configured cluster."""
        if self.cluster == MAINNET_CLUSTER:
            return f"{EXPLORER_TX_URL}{tx_hash}"
        return f"{EXPLORER_TX_URL}{tx_hash}?cluster={self.cluster}"


def load_config() -> ServerConfig:
    """
    Build a ``ServerConfig`` from the current environment.

    The extended tool set (``transferSOL``) is enabled when
    ``SOLANA_MCP_EXTENDED`` is truthy, or when it is unset and all signing
    values are present.
    """
    cluster = _load_cluster()
    config = ServerConfig(
        rpc_url=_load_rpc_url(cluster),
        cluster=cluster,
        commitment=_env(COMMITMENT_ENV_VAR) or DEFAULT_COMMITMENT,
        privy_app_id=_env(PRIVY_APP_ID_ENV_VAR),
        privy_app_secret=_env(PRIVY_APP_SECRET_ENV_VAR),
        wallet_id=_env(PRIVY_WALLET_ID_ENV_VAR),
        wallet_address=_env(PRIVY_WALLET_ADDRESS_ENV_VAR),
        privy_api_url=_env(PRIVY_API_URL_ENV_VAR) or DEFAULT_PRIVY_API_URL,
        log_level=_env(LOG_LEVEL_ENV_VAR) or "INFO",
        log_format=(_env(LOG_FORMAT_ENV_VAR) or "json").lower(),  # json or plain
    )
    extended = _load_flag(EXTENDED_ENV_VAR)
    if extended is None:
        extended = not config.missing_signing_fields()
    return replace(config, extended=extended)


default_config = load_config()
