"""Wallet sign-in against the Warpgate backend."""

from __future__ import annotations

import logging

from .api.client import WarpgateAPIClient
from .api.models import LoginRequest, WalletChallenge
from .chain.base import Signer
from .domain import AuthSession
from .exceptions import AuthenticationError, AuthRequiredError

logger = logging.getLogger(__name__)


class Authenticator:
    """Runs the challenge/sign/login flow and owns the resulting session.

    One Authenticator (and one session) per SDK instance. Nothing is
    persisted and tokens are never refreshed; a new login overwrites the
    session.
    """

    def __init__(self, api: WarpgateAPIClient, session: AuthSession | None = None):
        self._api = api
        self.session = session or AuthSession()

    async def wallet_login(self, wallet_address: str) -> WalletChallenge:
        """Request the challenge ``wallet_address`` must sign."""
        logger.debug("Requesting login challenge for %s", wallet_address)
        return await self._api.wallet_login(wallet_address)

    async def login(self, request: LoginRequest) -> str:
        """Complete login with a signed challenge and store the token.

        Returns:
            The session token
        """
        session_token = await self._api.login(request)
        self.session.token = session_token.token
        self.session.expires_at = session_token.expires_at
        logger.info(
            "Logged in as %s (expires %s)",
            request.wallet_addr,
            session_token.expires_at or "unknown",
        )
        return session_token.token

    async def authenticate(self, signer: Signer) -> str:
        """Sign in with ``signer`` in one step.

        Raises:
            AuthenticationError: If any step of the flow fails
        """
        try:
            challenge = await self.wallet_login(signer.address)
            full_message = challenge.full_message
            signature = signer.sign(full_message.encode("utf-8"))
            request = LoginRequest(
                wallet_addr=signer.address,
                public_key=signer.public_key,
                signature=signature.hex(),
                full_message=full_message,
            )
            return await self.login(request)
        except Exception as e:
            logger.error("Authentication failed for %s: %s", signer.address, e)
            raise AuthenticationError(
                f"Authentication failed: {e}", getattr(e, "status_code", None)
            ) from e

    def set_auth_token(self, token: str) -> None:
        self.session.token = token
        self.session.expires_at = None

    def get_auth_token(self) -> str | None:
        return self.session.token

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def require_token(self) -> str:
        """Return the session token or raise without touching the network."""
        if not self.session.token:
            raise AuthRequiredError()
        return self.session.token
