"""Warpgate backend API boundary."""

from .client import RECORD_PATHS, WarpgateAPIClient, to_api_error
from .models import (
    LoginRequest,
    LoginResponse,
    SessionToken,
    TokenData,
    TokenListing,
    WalletChallenge,
)

__all__ = [
    "WarpgateAPIClient",
    "RECORD_PATHS",
    "to_api_error",
    "LoginRequest",
    "LoginResponse",
    "SessionToken",
    "TokenData",
    "TokenListing",
    "WalletChallenge",
]
