"""Network, contract and market constants."""

from typing import TypedDict


class NetworkEndpoints(TypedDict):
    fullnode: str
    indexer: str


MOVEMENT_MAINNET: NetworkEndpoints = {
    "fullnode": "https://mainnet.movementnetwork.xyz/v1",
    "indexer": "https://indexer.mainnet.movementnetwork.xyz/v1/graphql",
}

DEFAULT_API_BASE_URL = "https://api.warpgate.fun"
DEFAULT_FULLNODE_URL = MOVEMENT_MAINNET["fullnode"]

# Bonding curve contract on Movement mainnet
BONDING_CURVE_ADDRESS = (
    "0xfaef8b1d93ea1c296242e97b3b261ae03fe44d7580a2d261cb906eacffd56a52"
)

POOL_STATE_RESOURCE = "{contract}::interface::PoolState<{token}>"
BUY_FUNCTION = "{contract}::bonding::buy"
SELL_FUNCTION = "{contract}::bonding::sell"

# Event emitted by the bonding module on every swap; matched on the struct
# segment of the event type ("<addr>::<module>::SwappedEvent").
SWAP_EVENT_NAME = "SwappedEvent"
CONFIRMED_TRANSACTION_TYPE = "user_transaction"

# On-chain amounts are u64 with 8 decimals
CHAIN_DECIMALS = 8
SCALE = 10**CHAIN_DECIMALS

# Protocol fee in basis points (1%)
FEE_BPS = 100
BPS_DENOMINATOR = 10_000

QUOTE_SYMBOL = "APT"

DEFAULT_SLIPPAGE = 5.0
DEFAULT_CONFIRMATION_TIMEOUT_MS = 30_000
DEFAULT_CONFIRMATION_INTERVAL_MS = 1_000

# Retry configuration for idempotent HTTP reads
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
MAX_HTTP_TRIES = 5
