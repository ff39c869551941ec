"""Python SDK for the Warpgate bonding-curve token market."""

from .chain import ChainClient, Ed25519Signer, MovementClient, Signer
from .domain import (
    AuthSession,
    ExecutionResult,
    PoolState,
    TokenInfo,
    TradePreview,
    TransactionParameters,
    TransactionRecord,
)
from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthRequiredError,
    ChainClientError,
    PoolStateError,
    PricingError,
    TradeExecutionError,
    TransactionTimeoutError,
    ValidationError,
    WarpgateError,
)
from .identifiers import TokenIdentifier, build_token_identifier, parse_token_identifier
from .sdk import TokenSDK
from .settings import SDKSettings

__all__ = [
    "TokenSDK",
    "SDKSettings",
    "ChainClient",
    "Signer",
    "MovementClient",
    "Ed25519Signer",
    "AuthSession",
    "ExecutionResult",
    "PoolState",
    "TokenInfo",
    "TradePreview",
    "TransactionParameters",
    "TransactionRecord",
    "TokenIdentifier",
    "parse_token_identifier",
    "build_token_identifier",
    "WarpgateError",
    "ValidationError",
    "AuthRequiredError",
    "AuthenticationError",
    "PoolStateError",
    "PricingError",
    "ApiError",
    "ChainClientError",
    "TransactionTimeoutError",
    "TradeExecutionError",
]
