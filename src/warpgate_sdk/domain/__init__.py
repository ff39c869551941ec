"""Domain models for the bonding-curve market."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class PoolState:
    """Curve reserves in u64 chain units (8 decimals)."""

    reserve_x: int
    reserve_y: int


@dataclass(frozen=True)
class TradePreview:
    """Advisory quote for a trade. Slippage is informational only."""

    input_amount: float
    output_amount: float
    input_token: str
    output_token: str
    slippage: float
    price_impact: float

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class TransactionParameters:
    """Entry function call ready to hand to a chain client."""

    function_id: str
    type_arguments: list[str]
    function_arguments: list[int]

    def to_payload(self) -> dict[str, Any]:
        """Render as a Movement ``entry_function_payload``.

        u64 arguments are sent as decimal strings, as the REST API expects.
        """
        return {
            "type": "entry_function_payload",
            "function": self.function_id,
            "type_arguments": list(self.type_arguments),
            "arguments": [str(arg) for arg in self.function_arguments],
        }


def _now_ms() -> str:
    return str(int(time.time() * 1000))


@dataclass
class TransactionRecord:
    """Audit record of a trade as stored by the backend."""

    txn_hash: str
    token_mint_addr: str
    x_amt: str = "0"
    y_amt: str = "0"
    timestamp: str = field(default_factory=_now_ms)

    def to_payload(self) -> dict[str, str]:
        return {
            "txnHash": self.txn_hash,
            "tokenMintAddr": self.token_mint_addr,
            "xAmt": self.x_amt,
            "yAmt": self.y_amt,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "TransactionRecord":
        return cls(
            txn_hash=str(data["txnHash"]),
            token_mint_addr=str(data["tokenMintAddr"]),
            x_amt=str(data.get("xAmt", "0")),
            y_amt=str(data.get("yAmt", "0")),
            timestamp=str(data.get("timestamp", _now_ms())),
        )


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of an executed trade.

    ``tx_hash`` is guaranteed once the trade is submitted. ``record`` is only
    present when recording succeeded; otherwise ``recording_error`` holds the
    reason.
    """

    tx_hash: str
    record: TransactionRecord | None = None
    recording_error: Exception | None = None

    @property
    def recorded(self) -> bool:
        return self.record is not None


@dataclass
class AuthSession:
    """Backend session for one SDK instance."""

    token: str | None = None
    expires_at: datetime | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def clear(self) -> None:
        self.token = None
        self.expires_at = None


@dataclass(frozen=True)
class TokenInfo:
    """Token metadata, from the backend or derived from the identifier."""

    name: str
    symbol: str
    decimals: int
    supply: str
    creator: str
    token_identifier: str
    description: str = ""
    image: str = ""
    creator_name: str = ""
