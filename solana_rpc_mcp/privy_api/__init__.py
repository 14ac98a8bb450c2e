"""Client for the custodial signing service used by transferSOL."""

from .client import (
    ConfigurationError,
    PrivyApiError,
    PrivyUnreachableError,
    PrivyWalletClient,
    default_signer,
)

__all__ = [
    "PrivyWalletClient",
    "PrivyApiError",
    "PrivyUnreachableError",
    "ConfigurationError",
    "default_signer",
]
