"""Transaction lookup tools."""

from __future__ import annotations

import json
import logging

from solana_rpc_mcp.outcome import Failure, Outcome, Success
from solana_rpc_mcp.solana_api import SolanaRpcError, default_client
from solana_rpc_mcp.tools.validators import InvalidSignatureError, parse_signature

logger = logging.getLogger(__name__)


async def get_transaction(signature: str, *, client=default_client) -> Outcome:
    """
    Look up a transaction by signature.

    The parsed transaction (meta, fee, log messages, instructions) is returned
    as indented JSON. A transaction the cluster does not know is a valid empty
    result and renders as ``null``.
    """
    try:
        parsed = parse_signature(signature)
        transaction = await client.get_transaction(str(parsed))
    except InvalidSignatureError as exc:
        return Failure(str(exc))
    except SolanaRpcError as exc:
        return Failure(str(exc))
    except Exception as exc:
        logger.exception("Unexpected error fetching transaction")
        return Failure(str(exc) or "Unexpected error while retrieving transaction.")
    return Success(json.dumps(transaction, indent=2))
