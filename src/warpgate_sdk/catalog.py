"""Token metadata and listings.

Reads here favour availability: metadata falls back to values derived from
the identifier and listings fall back to an empty list.
"""

from __future__ import annotations

import logging

import pydantic

from .api.client import WarpgateAPIClient
from .api.models import TokenData, TokenListing
from .constants import CHAIN_DECIMALS
from .domain import TokenInfo
from .exceptions import ApiError
from .identifiers import parse_token_identifier

logger = logging.getLogger(__name__)

API_SUCCESS = "0"


def _default_token_info(token_identifier: str) -> TokenInfo:
    token = parse_token_identifier(token_identifier)
    return TokenInfo(
        name=token.ticker,
        symbol=token.ticker,
        decimals=CHAIN_DECIMALS,
        supply="0",
        creator=token.address,
        token_identifier=token_identifier,
    )


async def get_token_info(api: WarpgateAPIClient, token_identifier: str) -> TokenInfo:
    """Fetch token metadata, falling back to identifier-derived defaults.

    Raises:
        ValidationError: If the API is unusable and the identifier is
            malformed
    """
    try:
        body = await api.get_token(token_identifier)
        if (
            isinstance(body, dict)
            and str(body.get("ret")) == API_SUCCESS
            and body.get("tokenData")
        ):
            data = TokenData.model_validate(body["tokenData"])
            return TokenInfo(
                name=data.name or data.ticker_symbol,
                symbol=data.ticker_symbol,
                decimals=CHAIN_DECIMALS,
                supply="0",
                creator=data.creator,
                token_identifier=data.mint_addr,
                description=data.desc or "",
                image=data.image or "",
                creator_name=data.creator_name or "",
            )
        logger.warning("Unexpected token metadata for %s: %s", token_identifier, body)
    except (ApiError, pydantic.ValidationError) as e:
        logger.warning("Token metadata lookup failed for %s: %s", token_identifier, e)

    logger.info("Using default token info for %s", token_identifier)
    return _default_token_info(token_identifier)


async def get_token_listings(
    api: WarpgateAPIClient, limit: int = 50, offset: int = 0
) -> list[TokenListing]:
    """Fetch a page of token listings; ``[]`` on any failure.

    ``offset`` is rounded down to the page containing it.
    """
    if limit <= 0 or offset < 0:
        logger.warning("Invalid listing window limit=%s offset=%s", limit, offset)
        return []

    page = offset // limit + 1
    try:
        body = await api.get_token_list(page, limit)
        results = (body.get("paginatedResult") or {}).get("results")
        if str(body.get("ret")) != API_SUCCESS or not isinstance(results, list):
            logger.warning("Unexpected token list response: %s", body)
            return []
        return [TokenListing.model_validate(item) for item in results]
    except (ApiError, AttributeError, pydantic.ValidationError) as e:
        logger.error("Error fetching token listings: %s", e)
        return []
