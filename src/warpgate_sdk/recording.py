"""Trade recording against the backend indexer."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .api.client import TradeSide, WarpgateAPIClient
from .chain.base import ChainClient
from .chain.confirmation import wait_for_transaction
from .constants import (
    DEFAULT_CONFIRMATION_INTERVAL_MS,
    DEFAULT_CONFIRMATION_TIMEOUT_MS,
    SWAP_EVENT_NAME,
)
from .domain import TransactionRecord
from .units import format_amount, from_chain_units

logger = logging.getLogger(__name__)


def find_swap_event(transaction: dict[str, Any]) -> dict[str, Any] | None:
    """Return the first swap event of a committed transaction, if any.

    Events match on the struct segment of their type
    (``<addr>::<module>::SwappedEvent``); generic parameters are ignored.
    """
    for event in transaction.get("events") or []:
        parts = str(event.get("type", "")).split("::")
        if len(parts) > 2 and parts[2].split("<", 1)[0] == SWAP_EVENT_NAME:
            return event
    return None


def swap_amounts(side: TradeSide, event: dict[str, Any]) -> tuple[str, str]:
    """Derive ``(x_amt, y_amt)`` from a swap event.

    On buys the token amount comes out of the curve (``y_out``) and APT goes
    in (``x_in``); sells are the reverse.
    """
    data = event.get("data") or {}
    x_in = from_chain_units(data["x_in"])
    y_out = from_chain_units(data["y_out"])
    if side == "buy":
        return format_amount(y_out), format_amount(x_in)
    return format_amount(x_in), format_amount(y_out)


class TransactionRecorder:
    """Builds trade records from confirmed transactions and posts them."""

    def __init__(
        self,
        api: WarpgateAPIClient,
        chain: ChainClient,
        *,
        auth_token: Callable[[], str | None] = lambda: None,
        skip_recording: bool = False,
        confirmation_timeout_ms: int = DEFAULT_CONFIRMATION_TIMEOUT_MS,
        confirmation_interval_ms: int = DEFAULT_CONFIRMATION_INTERVAL_MS,
    ):
        self._api = api
        self._chain = chain
        self._auth_token = auth_token
        self.skip_recording = skip_recording
        self.confirmation_timeout_ms = confirmation_timeout_ms
        self.confirmation_interval_ms = confirmation_interval_ms

    async def build_record(
        self, side: TradeSide, tx_hash: str, token_identifier: str
    ) -> TransactionRecord:
        """Wait for confirmation and fill the record from the swap event.

        Falls back to a zero-amount record when confirmation or event lookup
        fails.
        """
        record = TransactionRecord(txn_hash=tx_hash, token_mint_addr=token_identifier)

        try:
            logger.debug("Waiting for %s to be confirmed...", tx_hash)
            committed = await wait_for_transaction(
                self._chain,
                tx_hash,
                timeout_ms=self.confirmation_timeout_ms,
                check_interval_ms=self.confirmation_interval_ms,
            )
            events = committed.get("events") or []
            logger.debug("Found %d events in %s", len(events), tx_hash)

            swap_event = find_swap_event(committed)
            if swap_event is None:
                logger.warning(
                    "Swap event not found in %s, recording zero amounts", tx_hash
                )
                return record

            x_amt, y_amt = swap_amounts(side, swap_event)
            record = TransactionRecord(
                txn_hash=committed.get("hash", tx_hash),
                token_mint_addr=token_identifier,
                x_amt=x_amt,
                y_amt=y_amt,
                timestamp=str(int(committed["timestamp"]) // 1_000),
            )
        except Exception as e:
            logger.warning(
                "Could not read transaction details for %s, using basic record: %s",
                tx_hash,
                e,
            )

        return record

    async def record(
        self, side: TradeSide, tx_hash: str, token_identifier: str
    ) -> TransactionRecord:
        """Record a trade with the backend.

        Returns a synthetic zero-amount record without any network call when
        recording is disabled.

        Raises:
            ApiError: If the backend rejects the record
        """
        logger.info(
            "Recording %s transaction %s for %s", side, tx_hash, token_identifier
        )

        if self.skip_recording:
            logger.info("Transaction recording is disabled, skipping API call")
            return TransactionRecord(txn_hash=tx_hash, token_mint_addr=token_identifier)

        record = await self.build_record(side, tx_hash, token_identifier)
        logger.debug("Created transaction record: %s", record)

        stored = await self._api.record_transaction(side, record, self._auth_token())
        if isinstance(stored, dict) and "txnHash" in stored:
            # fields missing from the reply keep the values that were posted
            reply = {key: value for key, value in stored.items() if value is not None}
            return TransactionRecord.from_payload({**record.to_payload(), **reply})
        return record
