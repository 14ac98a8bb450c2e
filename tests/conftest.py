import os
import sys

import pytest
from solders.keypair import Keypair

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from solana_rpc_mcp.config import ServerConfig  # noqa: E402



@pytest.fixture
def address() -> str:
    return str(Keypair().pubkey())


@pytest.fixture
def signature() -> str:
    return str(Keypair().sign_message(b"solana-rpc-mcp"))


@pytest.fixture
def signing_config() -> ServerConfig:
    return ServerConfig(
        cluster="devnet",
        rpc_url="https://api.devnet.solana.com",
        privy_app_id="app-id",
        privy_app_secret="app-secret",
        wallet_id="wallet-id",
        wallet_address=str(Keypair().pubkey()),
        extended=True,
    )
