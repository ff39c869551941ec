"""Bonding curve pool state reads."""

from __future__ import annotations

import logging

from .chain.base import ChainClient
from .constants import BONDING_CURVE_ADDRESS, POOL_STATE_RESOURCE
from .domain import PoolState
from .exceptions import PoolStateError
from .identifiers import parse_token_identifier

logger = logging.getLogger(__name__)


def pool_state_resource_type(
    token_identifier: str, contract_address: str = BONDING_CURVE_ADDRESS
) -> str:
    return POOL_STATE_RESOURCE.format(contract=contract_address, token=token_identifier)


async def fetch_pool_state(
    chain: ChainClient,
    token_identifier: str,
    contract_address: str = BONDING_CURVE_ADDRESS,
) -> PoolState:
    """Fetch the current reserves of a token's bonding curve pool.

    The pool resource lives under the token's own account address.

    Args:
        chain: Chain client used for the resource read
        token_identifier: Identifier in ``address::module::struct`` format
        contract_address: Bonding curve contract address

    Returns:
        PoolState with integer reserves in chain units

    Raises:
        ValidationError: If the identifier is malformed
        PoolStateError: If the resource is missing or cannot be read
    """
    token = parse_token_identifier(token_identifier)
    resource_type = pool_state_resource_type(token_identifier, contract_address)

    try:
        data = await chain.get_account_resource(token.address, resource_type)
        pool = PoolState(
            reserve_x=int(data["reserve_x"]),
            reserve_y=int(data["reserve_y"]),
        )
    except Exception as e:
        raise PoolStateError(f"Failed to fetch pool state: {e}") from e

    if pool.reserve_x < 0 or pool.reserve_y < 0:
        raise PoolStateError(
            f"Failed to fetch pool state: negative reserves {pool.reserve_x}/{pool.reserve_y}"
        )

    logger.debug(
        "Pool %s reserves x=%d y=%d", token_identifier, pool.reserve_x, pool.reserve_y
    )
    return pool
