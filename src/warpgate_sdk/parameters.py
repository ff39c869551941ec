"""Entry function payloads for bonding curve trades."""

from __future__ import annotations

import logging

from .constants import BONDING_CURVE_ADDRESS, BUY_FUNCTION, SELL_FUNCTION
from .domain import PoolState, TransactionParameters
from .identifiers import parse_token_identifier
from .pricing import (
    buy_output,
    sell_output_before_fee,
    validate_amount,
    validate_slippage,
)
from .units import to_chain_units

logger = logging.getLogger(__name__)


def min_output(output: float, slippage: float) -> float:
    """Lower bound on ``output`` tolerating ``slippage`` percent."""
    return output * ((100 - slippage) / 100)


def build_buy_parameters(
    pool: PoolState,
    token_identifier: str,
    amount: float,
    slippage: float,
    contract_address: str = BONDING_CURVE_ADDRESS,
) -> TransactionParameters:
    """Build ``bonding::buy(amount, min_token_out)``.

    The expected output uses the same fee-adjusted curve as the buy preview,
    so a preview and the parameters built from the same reserves agree.

    Args:
        pool: Reserves to price against
        token_identifier: Identifier of the token to buy
        amount: APT to spend, human units
        slippage: Tolerated shortfall in percent (0-100)
        contract_address: Bonding curve contract address

    Returns:
        Parameters with ``[floor(amount * 1e8), floor(min_token_out * 1e8)]``
    """
    parse_token_identifier(token_identifier)
    validate_amount(amount)
    validate_slippage(slippage)

    expected = buy_output(pool, amount)
    min_token_out = min_output(expected, slippage)

    return TransactionParameters(
        function_id=BUY_FUNCTION.format(contract=contract_address),
        type_arguments=[token_identifier],
        function_arguments=[to_chain_units(amount), to_chain_units(min_token_out)],
    )


def build_sell_parameters(
    pool: PoolState,
    token_identifier: str,
    token_amount: float,
    slippage: float,
    contract_address: str = BONDING_CURVE_ADDRESS,
) -> TransactionParameters:
    """Build ``bonding::sell(token_amount, 0)``.

    A slippage bound is computed from the curve but the minimum APT out sent
    on chain is always ``0``: sells carry no on-chain slippage protection.
    """
    parse_token_identifier(token_identifier)
    validate_amount(token_amount, "token_amount")
    validate_slippage(slippage)

    scaled_amount = to_chain_units(token_amount)
    expected = sell_output_before_fee(pool, token_amount)
    min_apt_out = min_output(expected, slippage)
    logger.debug(
        "Sell %s of %s: expected %.8f APT, slippage bound %.8f (not enforced)",
        token_amount,
        token_identifier,
        expected,
        min_apt_out,
    )

    return TransactionParameters(
        function_id=SELL_FUNCTION.format(contract=contract_address),
        type_arguments=[token_identifier],
        function_arguments=[scaled_amount, 0],
    )
