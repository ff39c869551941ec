"""Chain and wallet collaborators."""

from .base import ChainClient, Signer
from .confirmation import wait_for_transaction
from .movement import MovementClient
from .signer import Ed25519Signer, derive_address

__all__ = [
    "ChainClient",
    "Signer",
    "MovementClient",
    "Ed25519Signer",
    "derive_address",
    "wait_for_transaction",
]
