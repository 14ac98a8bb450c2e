"""Account-related tools."""

from __future__ import annotations

import json
import logging
from typing import Any

from solana_rpc_mcp.outcome import Failure, Outcome, Success
from solana_rpc_mcp.solana_api import SolanaRpcError, default_client
from solana_rpc_mcp.tools.validators import (
    InvalidPublicKeyError,
    format_sol,
    parse_data_size,
    parse_public_key,
)

logger = logging.getLogger(__name__)


async def get_account_info(public_key: str, *, client=default_client) -> Outcome:
    """
    Look up account info by public key.

    Args:
        public_key: 32-byte base58 encoded address.
        client: Solana RPC client (override for testing).

    Returns:
        Success with the account structure as indented JSON text (``null`` for
        an unknown account), or Failure.
    """
    try:
        pubkey = parse_public_key(public_key)
        account_info = await client.get_account_info(str(pubkey))
    except InvalidPublicKeyError as exc:
        return Failure(str(exc))
    except SolanaRpcError as exc:
        return Failure(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error fetching account info")
        return Failure(str(exc) or "Unexpected error while retrieving account info.")
    return Success(_dump(account_info))


async def get_balance(public_key: str, *, client=default_client) -> Outcome:
    """Look up the SOL balance of an address."""
    try:
        pubkey = parse_public_key(public_key)
        lamports = await client.get_balance(str(pubkey))
    except InvalidPublicKeyError as exc:
        return Failure(str(exc))
    except SolanaRpcError as exc:
        return Failure(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error fetching balance")
        return Failure(str(exc) or "Unexpected error while retrieving balance.")
    return Success(format_sol(lamports))


async def get_minimum_balance_for_rent_exemption(data_size: Any, *, client=default_client) -> Outcome:
    """Look up the minimum balance required for rent exemption of ``data_size`` bytes."""
    size = parse_data_size(data_size)
    if size is None:
        return Failure(f"Invalid data size: {data_size!r}. Must be a non-negative integer.")
    try:
        lamports = await client.get_minimum_balance_for_rent_exemption(size)
    except SolanaRpcError as exc:
        return Failure(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error fetching rent exemption minimum")
        return Failure(str(exc) or "Unexpected error while retrieving rent exemption minimum.")
    return Success(format_sol(lamports))


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2)
