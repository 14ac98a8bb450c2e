"""Shared parsing helpers for Solana MCP tools."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from solders.pubkey import Pubkey
from solders.signature import Signature

from solana_rpc_mcp.config import LAMPORTS_PER_SOL

BASE58_REGEX = re.compile(r"^[1-9A-HJ-NP-Za-km-z]+$")


class InvalidPublicKeyError(ValueError):
    """Raised when a string is not a valid 32-byte base58 address."""


class InvalidSignatureError(ValueError):
    """Raised when a string is not a valid 64-byte base58 signature."""


def parse_public_key(value: Optional[str]) -> Pubkey:
    """Parse a base58 address, raising ``InvalidPublicKeyError`` when malformed."""
    if not value or not isinstance(value, str) or not BASE58_REGEX.fullmatch(value.strip()):
        raise InvalidPublicKeyError(f"Invalid public key input: {value!r}")
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as exc:
        raise InvalidPublicKeyError(f"Invalid public key input: {value!r}") from exc


def parse_signature(value: Optional[str]) -> Signature:
    """Parse a base58 transaction signature, raising ``InvalidSignatureError`` when malformed."""
    if not value or not isinstance(value, str) or not BASE58_REGEX.fullmatch(value.strip()):
        raise InvalidSignatureError(f"Invalid transaction signature: {value!r}")
    try:
        return Signature.from_string(value.strip())
    except ValueError as exc:
        raise InvalidSignatureError(f"Invalid transaction signature: {value!r}") from exc


def parse_data_size(value: Any) -> Optional[int]:
    """Return ``value`` as a non-negative int, or None when it is not a whole byte count."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    else:
        return None
    if parsed < 0:
        return None
    return parsed


def sol_to_lamports(amount: Any) -> Optional[int]:
    """Convert a positive SOL amount to whole lamports; None when invalid or rounding to zero."""
    if isinstance(amount, bool):
        return None
    try:
        parsed = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not parsed.is_finite() or parsed <= 0:
        return None
    lamports = int((parsed * LAMPORTS_PER_SOL).to_integral_value())
    if lamports <= 0:
        return None
    return lamports


def format_sol(lamports: int) -> str:
    """Render ``lamports`` as ``"<sol> SOL (<lamports> lamports)"``."""
    sol = Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)
    sol_text = format(sol.normalize(), "f") if sol else "0"
    return f"{sol_text} SOL ({lamports} lamports)"
