"""HTTP client for the Warpgate backend API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal
from urllib.parse import quote

import backoff
import pydantic
import requests

from ..constants import DEFAULT_API_BASE_URL, MAX_HTTP_TRIES, RETRYABLE_STATUS_CODES
from ..domain import TransactionRecord
from ..exceptions import AUTH_REQUIRED_MESSAGE, ApiError
from .models import LoginRequest, LoginResponse, SessionToken, WalletChallenge

logger = logging.getLogger(__name__)

TradeSide = Literal["buy", "sell"]

RECORD_PATHS: dict[str, str] = {
    "buy": "/transaction/buy-token",
    "sell": "/transaction/sell-token",
}


def _is_permanent_failure(e: Exception) -> bool:
    return (
        isinstance(e, requests.exceptions.HTTPError)
        and e.response is not None
        and e.response.status_code not in RETRYABLE_STATUS_CODES
    )


def to_api_error(e: requests.exceptions.RequestException) -> ApiError:
    """Map a requests failure to ApiError, keeping the status code."""
    response = e.response
    status = response.status_code if response is not None else None
    if status == 401:
        return ApiError(f"API error: {AUTH_REQUIRED_MESSAGE}", 401)
    return ApiError(f"API error: {e} ({status or 'unknown'})", status)


class WarpgateAPIClient:
    """Client for the Warpgate backend REST API using the requests library.

    Blocking calls run in a worker thread so every public method is awaitable.
    GET requests are retried on connection errors and 429/5xx responses;
    POST requests are sent once.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        request_timeout: float = 15.0,
        session: requests.Session | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Backend root URL
            request_timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self._request_timeout = request_timeout
        self.session = session or requests.Session()

    @backoff.on_exception(
        backoff.expo,
        requests.exceptions.RequestException,
        max_tries=MAX_HTTP_TRIES,
        giveup=_is_permanent_failure,
        jitter=backoff.full_jitter,
    )
    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)
        response = self.session.get(url, timeout=self._request_timeout)
        response.raise_for_status()
        return response.json()

    def _post(
        self, path: str, payload: dict[str, Any], headers: dict[str, str] | None = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("POST %s", url)
        response = self.session.post(
            url, json=payload, headers=headers or {}, timeout=self._request_timeout
        )
        try:
            response.raise_for_status()
        except requests.HTTPError:
            logger.error(
                "API error: %s %s - %s", response.status_code, url, response.text
            )
            raise
        if not response.content:
            return None
        return response.json()

    async def _call(self, func, *args) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except requests.exceptions.RequestException as e:
            raise to_api_error(e) from e
        except ValueError as e:
            raise ApiError(f"API error: invalid JSON response ({e})") from e

    async def wallet_login(self, wallet_address: str) -> WalletChallenge:
        """Request a login challenge for ``wallet_address``.

        Raises:
            ApiError: If the request fails or the response is malformed
        """
        body = await self._call(
            self._post, "/auth/wallet-login", {"walletAddr": wallet_address}
        )
        try:
            return WalletChallenge.model_validate(body)
        except pydantic.ValidationError as e:
            raise ApiError(f"API error: malformed wallet-login response ({e})") from e

    async def login(self, request: LoginRequest) -> SessionToken:
        """Exchange a signed challenge for a session token.

        Raises:
            ApiError: If the request fails or the response is malformed
        """
        body = await self._call(
            self._post, "/auth/login", request.model_dump(by_alias=True)
        )
        try:
            return LoginResponse.model_validate(body).token
        except pydantic.ValidationError as e:
            raise ApiError(f"API error: malformed login response ({e})") from e

    async def get_token(self, token_identifier: str) -> dict[str, Any]:
        """Fetch raw token metadata (``{ret, tokenData}``)."""
        return await self._call(
            self._get, f"/token/get-token/{quote(token_identifier, safe=':')}"
        )

    async def get_token_list(self, page: int, per_page: int) -> dict[str, Any]:
        """Fetch one page of token listings (``{ret, paginatedResult}``)."""
        return await self._call(
            self._get, f"/token/get-token-list?page={page}&perPage={per_page}"
        )

    async def record_transaction(
        self,
        side: TradeSide,
        record: TransactionRecord,
        auth_token: str | None = None,
    ) -> Any:
        """POST a trade record. The bearer header is sent when a token is given.

        Returns:
            The stored record as returned by the backend

        Raises:
            ApiError: If the request fails; 401 carries an explicit
                authentication message
        """
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else {}
        return await self._call(
            self._post, RECORD_PATHS[side], record.to_payload(), headers
        )
