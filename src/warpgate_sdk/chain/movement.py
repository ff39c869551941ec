"""Movement fullnode client (Aptos-compatible REST API)."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any
from urllib.parse import quote

import backoff
import requests

from ..constants import DEFAULT_FULLNODE_URL, MAX_HTTP_TRIES, RETRYABLE_STATUS_CODES
from ..domain import TransactionParameters
from ..exceptions import ChainClientError
from .base import ChainClient, Signer

logger = logging.getLogger(__name__)

DEFAULT_GAS_UNIT_PRICE = 100


def _is_permanent_failure(e: Exception) -> bool:
    return (
        isinstance(e, requests.exceptions.HTTPError)
        and e.response is not None
        and e.response.status_code not in RETRYABLE_STATUS_CODES
    )


def _describe(e: requests.exceptions.RequestException) -> tuple[str, int | None]:
    response = e.response
    if response is None:
        return str(e), None
    try:
        body = response.json()
        detail = body.get("message", response.text) if isinstance(body, dict) else body
    except ValueError:
        detail = response.text
    return f"{detail} ({response.status_code})", response.status_code


class MovementClient(ChainClient):
    """ChainClient for a Movement (or any Aptos REST compatible) fullnode.

    Reads are retried with exponential backoff on connection errors and
    429/5xx responses. Submissions are never retried.
    """

    def __init__(
        self,
        fullnode_url: str = DEFAULT_FULLNODE_URL,
        *,
        request_timeout: float = 15.0,
        max_gas_amount: int = 200_000,
        expiration_secs: int = 60,
        session: requests.Session | None = None,
    ):
        self.fullnode_url = fullnode_url.rstrip("/")
        self._request_timeout = request_timeout
        self._max_gas_amount = max_gas_amount
        self._expiration_secs = expiration_secs
        self._session = session or requests.Session()

    @backoff.on_exception(
        backoff.expo,
        requests.exceptions.RequestException,
        max_tries=MAX_HTTP_TRIES,
        giveup=_is_permanent_failure,
        jitter=backoff.full_jitter,
    )
    def _get(self, path: str) -> Any:
        url = f"{self.fullnode_url}{path}"
        logger.debug("GET %s", url)
        response = self._session.get(url, timeout=self._request_timeout)
        response.raise_for_status()
        return response.json()

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        url = f"{self.fullnode_url}{path}"
        logger.debug("POST %s", url)
        response = self._session.post(url, json=payload, timeout=self._request_timeout)
        response.raise_for_status()
        return response.json()

    async def _call(self, func, *args) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except requests.exceptions.RequestException as e:
            message, status = _describe(e)
            raise ChainClientError(f"Fullnode request failed: {message}", status) from e
        except ValueError as e:
            raise ChainClientError(f"Invalid JSON from fullnode: {e}") from e

    async def get_account_resource(
        self, address: str, resource_type: str
    ) -> dict[str, Any]:
        path = f"/accounts/{address}/resource/{quote(resource_type, safe='')}"
        resource = await self._call(self._get, path)
        if not isinstance(resource, dict) or not isinstance(resource.get("data"), dict):
            raise ChainClientError(f"Unexpected resource payload for {resource_type}")
        return resource["data"]

    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any]:
        txn = await self._call(self._get, f"/transactions/by_hash/{tx_hash}")
        if not isinstance(txn, dict):
            raise ChainClientError(f"Unexpected transaction payload for {tx_hash}")
        return txn

    async def get_sequence_number(self, address: str) -> int:
        account = await self._call(self._get, f"/accounts/{address}")
        return int(account["sequence_number"])

    async def estimate_gas_price(self) -> int:
        try:
            estimate = await self._call(self._get, "/estimate_gas_price")
            return int(estimate["gas_estimate"])
        except (ChainClientError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Gas estimation failed, using %d: %s", DEFAULT_GAS_UNIT_PRICE, e
            )
            return DEFAULT_GAS_UNIT_PRICE

    async def build_transaction(
        self, sender: str, parameters: TransactionParameters
    ) -> dict[str, Any]:
        """Assemble an unsigned JSON transaction for ``sender``."""
        sequence_number = await self.get_sequence_number(sender)
        gas_unit_price = await self.estimate_gas_price()
        return {
            "sender": sender,
            "sequence_number": str(sequence_number),
            "max_gas_amount": str(self._max_gas_amount),
            "gas_unit_price": str(gas_unit_price),
            "expiration_timestamp_secs": str(int(time.time()) + self._expiration_secs),
            "payload": parameters.to_payload(),
        }

    async def submit_transaction(
        self, signer: Signer, parameters: TransactionParameters
    ) -> str:
        """Build, sign and submit an entry function call.

        The fullnode encodes the BCS signing message
        (``/transactions/encode_submission``); the signer only ever sees
        those bytes.
        """
        raw_txn = await self.build_transaction(signer.address, parameters)

        signing_message = await self._call(
            self._post, "/transactions/encode_submission", raw_txn
        )
        if not isinstance(signing_message, str):
            raise ChainClientError("Unexpected encode_submission response")
        signature = signer.sign(bytes.fromhex(signing_message.removeprefix("0x")))

        signed_txn = {
            **raw_txn,
            "signature": {
                "type": "ed25519_signature",
                "public_key": signer.public_key,
                "signature": "0x" + signature.hex(),
            },
        }
        pending = await self._call(self._post, "/transactions", signed_txn)
        if not isinstance(pending, dict) or "hash" not in pending:
            raise ChainClientError(f"Unexpected submission response: {pending}")

        logger.info(
            "Submitted %s from %s: %s",
            parameters.function_id,
            signer.address,
            pending["hash"],
        )
        return pending["hash"]
