"""Trade execution: parameters, submission and best-effort recording."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from .api.client import TradeSide
from .auth import Authenticator
from .chain.base import ChainClient, Signer
from .domain import ExecutionResult, TransactionParameters
from .exceptions import TradeExecutionError
from .recording import TransactionRecorder

logger = logging.getLogger(__name__)

ParameterBuilder = Callable[[str, float, float], Awaitable[TransactionParameters]]


class TradeExecutor:
    """Sequences a trade: CheckAuth -> BuildParameters -> Submit -> RecordOutcome.

    A trade that reached the chain is never reported as failed because of
    recording; the recording failure is returned in the result instead.
    """

    def __init__(
        self,
        chain: ChainClient,
        authenticator: Authenticator,
        recorder: TransactionRecorder,
        *,
        buy_parameters: ParameterBuilder,
        sell_parameters: ParameterBuilder,
    ):
        self._chain = chain
        self._auth = authenticator
        self._recorder = recorder
        self._builders: dict[str, ParameterBuilder] = {
            "buy": buy_parameters,
            "sell": sell_parameters,
        }

    async def execute(
        self,
        side: TradeSide,
        signer: Signer,
        token_identifier: str,
        amount: float,
        slippage: float,
    ) -> ExecutionResult:
        """Execute one trade.

        Args:
            side: "buy" (amount in APT) or "sell" (amount in tokens)
            signer: Wallet paying for and signing the trade
            token_identifier: Identifier of the traded token
            amount: Trade size, human units
            slippage: Tolerated shortfall in percent

        Returns:
            ExecutionResult with the hash and, when recording succeeded, the
            record

        Raises:
            AuthRequiredError: If no session token is set (no I/O happens)
            ValidationError, PoolStateError, PricingError: From parameter
                building
            TradeExecutionError: If submission fails
        """
        self._auth.require_token()

        parameters = await self._builders[side](token_identifier, amount, slippage)

        try:
            tx_hash = await self._chain.submit_transaction(signer, parameters)
        except Exception as e:
            logger.error("Failed to submit %s transaction: %s", side, e)
            raise TradeExecutionError(
                f"Failed to execute {side} transaction: {e}",
                getattr(e, "status_code", None),
            ) from e

        try:
            record = await self._recorder.record(side, tx_hash, token_identifier)
        except Exception as e:
            logger.warning("Failed to record %s transaction %s: %s", side, tx_hash, e)
            return ExecutionResult(tx_hash=tx_hash, recording_error=e)

        return ExecutionResult(tx_hash=tx_hash, record=record)
