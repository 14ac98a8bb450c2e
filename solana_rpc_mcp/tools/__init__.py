"""LLM-facing tool implementations."""

from .account import get_account_info, get_balance, get_minimum_balance_for_rent_exemption
from .transactions import get_transaction
from .transfer import transfer_sol
from . import validators

__all__ = [
    "get_account_info",
    "get_balance",
    "get_minimum_balance_for_rent_exemption",
    "get_transaction",
    "transfer_sol",
    "validators",
]
