"""SOL transfer tool backed by the custodial signing service."""

from __future__ import annotations

import base64
import logging
from typing import Any

from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from solana_rpc_mcp.config import ServerConfig, default_config
from solana_rpc_mcp.outcome import Failure, Outcome, Success
from solana_rpc_mcp.privy_api import ConfigurationError, PrivyApiError, default_signer
from solana_rpc_mcp.solana_api import SolanaRpcError, default_client
from solana_rpc_mcp.tools.validators import (
    InvalidPublicKeyError,
    parse_public_key,
    sol_to_lamports,
)

logger = logging.getLogger(__name__)


def build_transfer_transaction(sender: Pubkey, recipient: Pubkey, lamports: int, blockhash: str) -> str:
    """Build an unsigned system transfer and return it base64-encoded."""
    instruction = transfer(TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports))
    message = Message.new_with_blockhash([instruction], sender, Hash.from_string(blockhash))
    transaction = Transaction.new_unsigned(message)
    return base64.b64encode(bytes(transaction)).decode("ascii")


async def transfer_sol(
    recipient: str,
    amount: Any,
    *,
    client=default_client,
    signer=default_signer,
    config: ServerConfig = default_config,
) -> Outcome:
    """
    Transfer ``amount`` SOL from the configured wallet to ``recipient``.

    Args:
        recipient: 32-byte base58 encoded destination address.
        amount: Positive amount in SOL.
        client: Solana RPC client used for the recent blockhash.
        signer: Signing service client that signs and broadcasts.
        config: Server configuration carrying the wallet identity.

    Returns:
        Success with the broadcast hash and an explorer link, or Failure.
    """
    missing = config.missing_signing_fields()
    if missing:
        return Failure(f"Missing configuration: {', '.join(missing)}")

    try:
        to_pubkey = parse_public_key(recipient)
    except InvalidPublicKeyError as exc:
        return Failure(str(exc))

    lamports = sol_to_lamports(amount)
    if lamports is None:
        return Failure(f"Invalid amount: {amount!r}. Must be a positive number of SOL.")

    try:
        from_pubkey = parse_public_key(config.wallet_address)
    except InvalidPublicKeyError:
        return Failure("Configured wallet address is not a valid public key.")

    try:
        blockhash = await client.get_latest_blockhash()
        encoded = build_transfer_transaction(from_pubkey, to_pubkey, lamports, blockhash)
        tx_hash = await signer.sign_and_send_transaction(encoded)
    except ConfigurationError as exc:
        return Failure(str(exc))
    except PrivyApiError as exc:
        return Failure(str(exc))
    except SolanaRpcError as exc:
        return Failure(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error during SOL transfer")
        return Failure(str(exc) or "Unexpected error while sending transfer.")

    logger.info("transfer broadcast lamports=%s hash=%s", lamports, tx_hash)
    return Success(
        f"Transaction sent successfully! Hash: {tx_hash}\nExplorer link: {config.explorer_url(tx_hash)}"
    )
