"""Ed25519 account signer."""

from __future__ import annotations

import hashlib

from nacl.signing import SigningKey

from ..exceptions import ValidationError
from .base import Signer

# Authentication key scheme byte for single ed25519 keys
ED25519_SCHEME = b"\x00"


def _strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def derive_address(public_key: bytes) -> str:
    """Derive the account address of a single-key ed25519 account."""
    return "0x" + hashlib.sha3_256(public_key + ED25519_SCHEME).hexdigest()


class Ed25519Signer(Signer):
    """Signer backed by a local ed25519 private key.

    The account address defaults to the one derived from the key. Pass
    ``address`` for accounts whose authentication key was rotated.
    """

    def __init__(self, signing_key: SigningKey, address: str | None = None):
        self._signing_key = signing_key
        self._public_key = bytes(signing_key.verify_key)
        self._address = address or derive_address(self._public_key)

    @classmethod
    def from_private_key_hex(
        cls, private_key: str, address: str | None = None
    ) -> "Ed25519Signer":
        """Load a signer from a 32-byte hex seed (0x prefix optional).

        Raises:
            ValidationError: If the key is not 32 bytes of hex
        """
        try:
            seed = bytes.fromhex(_strip_hex_prefix(private_key.strip()))
        except ValueError as e:
            raise ValidationError("Private key must be hex encoded") from e
        if len(seed) != 32:
            raise ValidationError(
                f"Private key must be 32 bytes, got {len(seed)} bytes"
            )
        return cls(SigningKey(seed), address=address)

    @classmethod
    def generate(cls) -> "Ed25519Signer":
        return cls(SigningKey.generate())

    @property
    def address(self) -> str:
        return self._address

    @property
    def public_key(self) -> str:
        return "0x" + self._public_key.hex()

    def sign(self, message: bytes) -> bytes:
        return self._signing_key.sign(message).signature
