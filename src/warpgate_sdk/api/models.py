"""Wire models for the Warpgate backend API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )


class WalletChallenge(_ApiModel):
    """Challenge returned by ``/auth/wallet-login``."""

    message: str
    nonce: str

    @property
    def full_message(self) -> str:
        """The exact text the wallet signs."""
        return f"message: {self.message}\nnonce: {self.nonce}"


class LoginRequest(_ApiModel):
    wallet_addr: str = Field(alias="walletAddr")
    public_key: str = Field(alias="publicKey")
    signature: str
    full_message: str = Field(alias="fullMessage")


class SessionToken(_ApiModel):
    token: str
    expires_at: datetime | None = Field(default=None, alias="expiresAt")

    @field_validator("expires_at", mode="before")
    @classmethod
    def parse_expiry(cls, v: Any) -> Any:
        """Keep the token when the backend sends an expiry that is not ISO-8601."""
        if v is None or isinstance(v, (datetime, int, float)):
            return v
        if isinstance(v, str):
            try:
                return datetime.fromisoformat(v)
            except ValueError:
                pass
        logger.warning("Ignoring unparseable token expiry %r", v)
        return None


class LoginResponse(_ApiModel):
    token: SessionToken


class TokenData(_ApiModel):
    """``tokenData`` block of ``/token/get-token``."""

    name: str | None = None
    ticker_symbol: str = Field(alias="tickerSymbol")
    creator: str = ""
    mint_addr: str = Field(alias="mintAddr")
    desc: str | None = None
    image: str | None = None
    creator_name: str | None = Field(default=None, alias="creatorName")


class TokenListing(_ApiModel):
    """One entry of ``/token/get-token-list``."""

    id: str
    name: str = ""
    ticker_symbol: str = Field(default="", alias="tickerSymbol")
    mint_addr: str = Field(default="", alias="mintAddr")
    desc: str = ""
    creator: str = ""
    creator_name: str = Field(default="", alias="creatorName")
    image: str = ""
    status: str = ""
    cdate: str = ""
