"""TokenSDK: the public entry point."""

from __future__ import annotations

import logging
import warnings
from typing import Any

from .api.client import WarpgateAPIClient
from .api.models import LoginRequest, TokenListing, WalletChallenge
from .auth import Authenticator
from .catalog import get_token_info, get_token_listings
from .chain.base import ChainClient, Signer
from .chain.confirmation import wait_for_transaction
from .chain.movement import MovementClient
from .constants import (
    DEFAULT_CONFIRMATION_INTERVAL_MS,
    DEFAULT_CONFIRMATION_TIMEOUT_MS,
    DEFAULT_SLIPPAGE,
)
from .domain import (
    AuthSession,
    ExecutionResult,
    PoolState,
    TokenInfo,
    TradePreview,
    TransactionParameters,
    TransactionRecord,
)
from .identifiers import build_token_identifier, parse_token_identifier
from .orchestrator import TradeExecutor
from .parameters import build_buy_parameters, build_sell_parameters
from .pool import fetch_pool_state
from .pricing import quote_buy, quote_sell
from .recording import TransactionRecorder
from .settings import SDKSettings

logger = logging.getLogger(__name__)


def _deprecated(old: str, new: str) -> None:
    warnings.warn(
        f"{old} is deprecated, use {new} with a token identifier instead",
        DeprecationWarning,
        stacklevel=3,
    )


class TokenSDK:
    """Client for the Warpgate bonding-curve market.

    Previews and parameter building read pool state fresh on every call;
    previews are advisory and parameters are authoritative. Each instance
    owns one auth session; use one instance per wallet.

    Example:
        sdk = TokenSDK()
        preview = await sdk.preview_buy("0x1::MOON::MOON", 1.0)
    """

    def __init__(
        self,
        settings: SDKSettings | None = None,
        *,
        chain: ChainClient | None = None,
        api: WarpgateAPIClient | None = None,
        auth_token: str | None = None,
        skip_transaction_recording: bool | None = None,
    ):
        """Initialize the SDK.

        Args:
            settings: SDK settings; loaded from env/config file when omitted
            chain: Chain client; a MovementClient for ``settings.fullnode_url``
                when omitted
            api: Backend client; built from ``settings.api_base_url`` when
                omitted
            auth_token: Pre-issued session token, overrides settings
            skip_transaction_recording: Overrides settings
        """
        self.settings = settings or SDKSettings()
        self.chain = chain or MovementClient(
            self.settings.fullnode_url,
            request_timeout=self.settings.request_timeout,
            max_gas_amount=self.settings.max_gas_amount,
            expiration_secs=self.settings.transaction_expiration_secs,
        )
        self.api = api or WarpgateAPIClient(
            self.settings.api_base_url, request_timeout=self.settings.request_timeout
        )

        token = auth_token if auth_token is not None else self.settings.auth_token_value
        self.auth = Authenticator(self.api, AuthSession(token=token or None))

        skip = (
            skip_transaction_recording
            if skip_transaction_recording is not None
            else self.settings.skip_transaction_recording
        )
        self.recorder = TransactionRecorder(
            self.api,
            self.chain,
            auth_token=self.auth.get_auth_token,
            skip_recording=skip,
            confirmation_timeout_ms=self.settings.confirmation_timeout_ms,
            confirmation_interval_ms=self.settings.confirmation_interval_ms,
        )
        self.executor = TradeExecutor(
            self.chain,
            self.auth,
            self.recorder,
            buy_parameters=lambda token_id, amount, slippage: self.get_buy_parameters(
                token_id, amount, slippage
            ),
            sell_parameters=lambda token_id, amount, slippage: self.get_sell_parameters(
                token_id, amount, slippage
            ),
        )

    @property
    def contract_address(self) -> str:
        return self.settings.bonding_curve_address

    @property
    def skip_transaction_recording(self) -> bool:
        return self.recorder.skip_recording

    # --- authentication ---

    @property
    def session(self) -> AuthSession:
        return self.auth.session

    async def wallet_login(self, wallet_address: str) -> WalletChallenge:
        """Initiate wallet login; returns the challenge message and nonce."""
        return await self.auth.wallet_login(wallet_address)

    async def login(self, login_data: LoginRequest | dict[str, Any]) -> str:
        """Complete login with a signed challenge; returns the session token."""
        if isinstance(login_data, dict):
            login_data = LoginRequest.model_validate(login_data)
        return await self.auth.login(login_data)

    async def authenticate(self, signer: Signer) -> str:
        """Run the whole wallet sign-in flow with ``signer``."""
        return await self.auth.authenticate(signer)

    def set_auth_token(self, token: str) -> None:
        self.auth.set_auth_token(token)

    def get_auth_token(self) -> str | None:
        return self.auth.get_auth_token()

    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated()

    # --- pool state and pricing ---

    async def fetch_pool_state(self, token_identifier: str) -> PoolState:
        return await fetch_pool_state(
            self.chain, token_identifier, self.contract_address
        )

    async def preview_buy(
        self, token_identifier: str, apt_amount: float, slippage: float = 0
    ) -> TradePreview:
        """Preview spending ``apt_amount`` APT on a token."""
        token = parse_token_identifier(token_identifier)
        pool = await self.fetch_pool_state(token_identifier)
        return quote_buy(pool, apt_amount, token.ticker, slippage)

    async def preview_sell(
        self, token_identifier: str, token_amount: float, slippage: float = 0
    ) -> TradePreview:
        """Preview selling ``token_amount`` tokens for APT."""
        token = parse_token_identifier(token_identifier)
        pool = await self.fetch_pool_state(token_identifier)
        return quote_sell(pool, token_amount, token.ticker, slippage)

    async def get_buy_parameters(
        self, token_identifier: str, amount: float, slippage: float
    ) -> TransactionParameters:
        pool = await self.fetch_pool_state(token_identifier)
        return build_buy_parameters(
            pool, token_identifier, amount, slippage, self.contract_address
        )

    async def get_sell_parameters(
        self, token_identifier: str, token_amount: float, slippage: float
    ) -> TransactionParameters:
        pool = await self.fetch_pool_state(token_identifier)
        return build_sell_parameters(
            pool, token_identifier, token_amount, slippage, self.contract_address
        )

    # --- recording and execution ---

    async def record_buy_transaction(
        self, txn_hash: str, token_identifier: str
    ) -> TransactionRecord:
        return await self.recorder.record("buy", txn_hash, token_identifier)

    async def record_sell_transaction(
        self, txn_hash: str, token_identifier: str
    ) -> TransactionRecord:
        return await self.recorder.record("sell", txn_hash, token_identifier)

    async def execute_buy_transaction(
        self,
        signer: Signer,
        token_identifier: str,
        apt_amount: float,
        slippage: float = DEFAULT_SLIPPAGE,
    ) -> ExecutionResult:
        """Buy a token with ``apt_amount`` APT and record the trade.

        Requires a session (see :meth:`authenticate`).
        """
        return await self.executor.execute(
            "buy", signer, token_identifier, apt_amount, slippage
        )

    async def execute_sell_transaction(
        self,
        signer: Signer,
        token_identifier: str,
        token_amount: float,
        slippage: float = DEFAULT_SLIPPAGE,
    ) -> ExecutionResult:
        """Sell ``token_amount`` tokens for APT and record the trade.

        Requires a session (see :meth:`authenticate`).
        """
        return await self.executor.execute(
            "sell", signer, token_identifier, token_amount, slippage
        )

    async def wait_for_transaction(
        self,
        tx_hash: str,
        timeout_ms: int = DEFAULT_CONFIRMATION_TIMEOUT_MS,
        check_interval_ms: int = DEFAULT_CONFIRMATION_INTERVAL_MS,
    ) -> dict[str, Any]:
        return await wait_for_transaction(
            self.chain, tx_hash, timeout_ms, check_interval_ms
        )

    # --- catalog ---

    async def get_token_info(self, token_identifier: str) -> TokenInfo:
        return await get_token_info(self.api, token_identifier)

    async def get_token_listings(
        self, limit: int = 50, offset: int = 0
    ) -> list[TokenListing]:
        return await get_token_listings(self.api, limit, offset)

    # --- deprecated address/ticker variants ---

    async def fetch_pool_state_by_address_and_ticker(
        self, address: str, ticker: str
    ) -> PoolState:
        _deprecated("fetch_pool_state_by_address_and_ticker", "fetch_pool_state")
        return await self.fetch_pool_state(build_token_identifier(address, ticker))

    async def preview_buy_by_address_and_ticker(
        self, creator_address: str, ticker: str, apt_amount: float, slippage: float = 0
    ) -> TradePreview:
        _deprecated("preview_buy_by_address_and_ticker", "preview_buy")
        return await self.preview_buy(
            build_token_identifier(creator_address, ticker), apt_amount, slippage
        )

    async def preview_sell_by_address_and_ticker(
        self,
        creator_address: str,
        ticker: str,
        token_amount: float,
        slippage: float = 0,
    ) -> TradePreview:
        _deprecated("preview_sell_by_address_and_ticker", "preview_sell")
        return await self.preview_sell(
            build_token_identifier(creator_address, ticker), token_amount, slippage
        )

    async def record_buy_transaction_by_address_and_ticker(
        self, txn_hash: str, creator_address: str, ticker: str
    ) -> TransactionRecord:
        _deprecated(
            "record_buy_transaction_by_address_and_ticker", "record_buy_transaction"
        )
        return await self.record_buy_transaction(
            txn_hash, build_token_identifier(creator_address, ticker)
        )

    async def record_sell_transaction_by_address_and_ticker(
        self, txn_hash: str, creator_address: str, ticker: str
    ) -> TransactionRecord:
        _deprecated(
            "record_sell_transaction_by_address_and_ticker", "record_sell_transaction"
        )
        return await self.record_sell_transaction(
            txn_hash, build_token_identifier(creator_address, ticker)
        )
