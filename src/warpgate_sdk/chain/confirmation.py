"""Transaction confirmation polling."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from ..constants import (
    CONFIRMED_TRANSACTION_TYPE,
    DEFAULT_CONFIRMATION_INTERVAL_MS,
    DEFAULT_CONFIRMATION_TIMEOUT_MS,
)
from ..exceptions import TransactionTimeoutError
from .base import ChainClient

logger = logging.getLogger(__name__)


async def wait_for_transaction(
    chain: ChainClient,
    tx_hash: str,
    timeout_ms: int = DEFAULT_CONFIRMATION_TIMEOUT_MS,
    check_interval_ms: int = DEFAULT_CONFIRMATION_INTERVAL_MS,
) -> dict[str, Any]:
    """Poll the chain until a transaction is committed.

    Args:
        chain: Chain client used for lookups
        tx_hash: Hash of the submitted transaction
        timeout_ms: Total polling budget in milliseconds
        check_interval_ms: Sleep between lookups in milliseconds

    Returns:
        The committed transaction

    Raises:
        TransactionTimeoutError: If the transaction is not committed in time

    Notes:
        - Lookup errors (e.g. 404 while the node has not seen the hash yet)
          are ignored and polling continues.
        - A committed transaction is returned even if it aborted on chain;
          check ``success`` on the result.
    """
    deadline = time.monotonic() + timeout_ms / 1000
    attempts = 0

    while time.monotonic() < deadline:
        attempts += 1
        try:
            txn = await chain.get_transaction_by_hash(tx_hash)
            if txn and txn.get("type") == CONFIRMED_TRANSACTION_TYPE:
                if txn.get("success") is False:
                    logger.warning(
                        "Transaction %s committed but failed: %s",
                        tx_hash,
                        txn.get("vm_status"),
                    )
                logger.debug("Transaction %s confirmed after %d polls", tx_hash, attempts)
                return txn
        except Exception as e:
            logger.debug("Poll %d for %s failed: %s", attempts, tx_hash, e)

        await asyncio.sleep(check_interval_ms / 1000)

    raise TransactionTimeoutError(tx_hash, timeout_ms)
