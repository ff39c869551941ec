"""Capability interfaces for the chain and wallet collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..domain import TransactionParameters


class Signer(ABC):
    """A wallet able to sign arbitrary bytes."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Account address, 0x-prefixed hex."""
        ...

    @property
    @abstractmethod
    def public_key(self) -> str:
        """Public key, 0x-prefixed hex."""
        ...

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Return the raw signature over ``message``."""
        ...


class ChainClient(ABC):
    """Read and write access to the chain the bonding curve lives on."""

    @abstractmethod
    async def get_account_resource(
        self, address: str, resource_type: str
    ) -> dict[str, Any]:
        """Return the ``data`` of a resource stored under ``address``."""
        ...

    @abstractmethod
    async def submit_transaction(
        self, signer: Signer, parameters: TransactionParameters
    ) -> str:
        """Build, sign and submit an entry function call. Returns the hash."""
        ...

    @abstractmethod
    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any]:
        """Return the transaction, pending or committed."""
        ...
