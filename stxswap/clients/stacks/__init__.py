"""Stacks collaborators: signing service and node broadcast."""

from stxswap.clients.stacks.node import (
    BroadcastResult,
    StacksNodeClient,
    StacksNodeError,
    TransactionRejectedError,
)
from stxswap.clients.stacks.signer import (
    AuthenticationError,
    ContractCallOptions,
    RemoteSigner,
    SignedTransaction,
    SignerError,
    SignerUnavailableError,
    SigningRejectedError,
)

__all__ = [
    "AuthenticationError",
    "BroadcastResult",
    "ContractCallOptions",
    "RemoteSigner",
    "SignedTransaction",
    "SignerError",
    "SignerUnavailableError",
    "SigningRejectedError",
    "StacksNodeClient",
    "StacksNodeError",
    "TransactionRejectedError",
]
