"""Constant-product bonding curve math.

Reserves are u64 chain units (8 decimals); trade amounts are human units.
``reserve_x`` holds the launched token, ``reserve_y`` holds APT.

The 1% protocol fee is taken from the input on buys and from the output on
sells. Price impact is measured against the nominal (pre-fee) amount.
"""

from __future__ import annotations

import math

from .constants import BPS_DENOMINATOR, FEE_BPS, QUOTE_SYMBOL, SCALE
from .domain import PoolState, TradePreview
from .exceptions import PricingError, ValidationError


def validate_amount(amount: float, name: str = "amount") -> None:
    if not isinstance(amount, (int, float)) or isinstance(amount, bool):
        raise ValidationError(f"{name} must be a number, got {amount!r}")
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(f"{name} must be a finite non-negative number")


def validate_slippage(slippage: float) -> None:
    if not isinstance(slippage, (int, float)) or isinstance(slippage, bool):
        raise ValidationError(f"slippage must be a number, got {slippage!r}")
    if not 0 <= slippage <= 100:
        raise ValidationError(f"slippage must be between 0 and 100, got {slippage}")


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise PricingError(f"Degenerate pool: {what} is {value}")
    return value


def apply_fee(amount: float) -> float:
    return amount * (BPS_DENOMINATOR - FEE_BPS) / BPS_DENOMINATOR


def buy_output(pool: PoolState, amount: float) -> float:
    """Tokens received for spending ``amount`` APT, after the input fee."""
    adjusted = apply_fee(amount)
    try:
        output = (adjusted * pool.reserve_x / SCALE) / (pool.reserve_y / SCALE + adjusted)
    except ZeroDivisionError as e:
        raise PricingError("Degenerate pool: empty APT reserve") from e
    return _finite(output, "buy output")


def sell_output_before_fee(pool: PoolState, token_amount: float) -> float:
    """APT released by the curve for ``token_amount`` tokens, before the fee."""
    try:
        raw = (token_amount * pool.reserve_y / SCALE) / (
            pool.reserve_x / SCALE + token_amount
        )
    except ZeroDivisionError as e:
        raise PricingError("Degenerate pool: empty token reserve") from e
    return _finite(raw, "sell output")


def sell_output(pool: PoolState, token_amount: float) -> float:
    """APT received for selling ``token_amount`` tokens, after the output fee."""
    return sell_output_before_fee(pool, token_amount) * 0.99


def price_impact(amount: float, reserve: int) -> float:
    """Trade size as a percentage of a reserve, rounded to 2 decimals."""
    try:
        impact = (amount / (reserve / SCALE)) * 100
    except ZeroDivisionError as e:
        raise PricingError("Degenerate pool: empty reserve") from e
    return round(_finite(impact, "price impact"), 2)


def quote_buy(
    pool: PoolState, amount: float, token_symbol: str, slippage: float = 0
) -> TradePreview:
    """Preview spending ``amount`` APT on ``token_symbol``.

    Raises:
        ValidationError: If amount or slippage is out of range
        PricingError: If the pool is degenerate
    """
    validate_amount(amount)
    validate_slippage(slippage)
    return TradePreview(
        input_amount=amount,
        output_amount=buy_output(pool, amount),
        input_token=QUOTE_SYMBOL,
        output_token=token_symbol,
        slippage=slippage,
        price_impact=price_impact(amount, pool.reserve_y),
    )


def quote_sell(
    pool: PoolState, token_amount: float, token_symbol: str, slippage: float = 0
) -> TradePreview:
    """Preview selling ``token_amount`` of ``token_symbol`` for APT."""
    validate_amount(token_amount, "token_amount")
    validate_slippage(slippage)
    return TradePreview(
        input_amount=token_amount,
        output_amount=sell_output(pool, token_amount),
        input_token=token_symbol,
        output_token=QUOTE_SYMBOL,
        slippage=slippage,
        price_impact=price_impact(token_amount, pool.reserve_x),
    )
