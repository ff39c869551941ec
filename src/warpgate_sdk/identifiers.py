"""Token identifier parsing."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ValidationError

DELIMITER = "::"

INVALID_IDENTIFIER_MESSAGE = (
    "Invalid token identifier format. Expected 'address::module::struct'"
)


@dataclass(frozen=True)
class TokenIdentifier:
    """Fully qualified Move type of a token: ``address::module::struct``."""

    address: str
    module_name: str
    struct_name: str

    @property
    def ticker(self) -> str:
        """Display ticker. The module name is used; it is not verified on chain."""
        return self.module_name

    def __str__(self) -> str:
        return DELIMITER.join((self.address, self.module_name, self.struct_name))


def parse_token_identifier(identifier: str) -> TokenIdentifier:
    """Split a token identifier into its three segments.

    Args:
        identifier: Identifier in ``address::module::struct`` format

    Returns:
        Parsed TokenIdentifier

    Raises:
        ValidationError: If the identifier does not have exactly three
            non-empty segments
    """
    if not isinstance(identifier, str):
        raise ValidationError(INVALID_IDENTIFIER_MESSAGE)

    parts = identifier.split(DELIMITER)
    if len(parts) != 3 or not all(parts):
        raise ValidationError(INVALID_IDENTIFIER_MESSAGE)

    address, module_name, struct_name = parts
    return TokenIdentifier(
        address=address, module_name=module_name, struct_name=struct_name
    )


def build_token_identifier(address: str, ticker: str) -> str:
    """Build the identifier used by tokens created through the launchpad.

    Launchpad tokens use the upper-cased ticker as both module and struct
    name: ``address::TICKER::TICKER``.
    """
    symbol = ticker.upper()
    return DELIMITER.join((address, symbol, symbol))
