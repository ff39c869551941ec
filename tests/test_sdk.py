from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from warpgate_sdk.api.models import SessionToken, WalletChallenge
from warpgate_sdk.constants import BONDING_CURVE_ADDRESS
from warpgate_sdk.exceptions import ValidationError
from warpgate_sdk.sdk import TokenSDK
from warpgate_sdk.settings import SDKSettings

TOKEN = "0xcafe::MOON::MOON"


@pytest.fixture
def sdk(settings, chain, api):
    return TokenSDK(settings, chain=chain, api=api)


@pytest.mark.asyncio
async def test_preview_buy_reads_fresh_pool(sdk, chain):
    first = await sdk.preview_buy(TOKEN, 1, slippage=5)
    chain.get_account_resource = AsyncMock(
        return_value={"reserve_x": "1000000000000", "reserve_y": "100000000000"}
    )
    second = await sdk.preview_buy(TOKEN, 1, slippage=5)

    assert first.output_amount == pytest.approx(19.7608, abs=1e-4)
    assert first.output_token == "MOON"
    assert second.output_amount < first.output_amount


@pytest.mark.asyncio
async def test_preview_sell(sdk):
    preview = await sdk.preview_sell(TOKEN, 100)

    assert preview.input_token == "MOON"
    assert preview.output_token == "APT"
    assert preview.price_impact == 1.0


@pytest.mark.asyncio
async def test_preview_rejects_bad_identifier_without_io(sdk, chain):
    with pytest.raises(ValidationError):
        await sdk.preview_buy("0xcafe::MOON", 1)

    chain.get_account_resource.assert_not_called()


@pytest.mark.asyncio
async def test_custom_contract_address(chain, api):
    sdk = TokenSDK(SDKSettings(bonding_curve_address="0xbeef"), chain=chain, api=api)

    params = await sdk.get_buy_parameters(TOKEN, 1, 5)

    assert params.function_id == "0xbeef::bonding::buy"
    chain.get_account_resource.assert_awaited_once_with(
        "0xcafe", f"0xbeef::interface::PoolState<{TOKEN}>"
    )


@pytest.mark.asyncio
async def test_login_accepts_camel_case_dict(sdk, api):
    api.login = AsyncMock(return_value=SessionToken(token="jwt"))

    token = await sdk.login(
        {
            "walletAddr": "0x1",
            "publicKey": "0x2",
            "signature": "00",
            "fullMessage": "message: m\nnonce: 1",
        }
    )

    assert token == "jwt"
    assert sdk.is_authenticated()
    assert api.login.await_args.args[0].wallet_addr == "0x1"


@pytest.mark.asyncio
async def test_wallet_login_returns_challenge(sdk, api):
    api.wallet_login = AsyncMock(return_value=WalletChallenge(message="hi", nonce="1"))

    challenge = await sdk.wallet_login("0x1")

    assert challenge.full_message == "message: hi\nnonce: 1"


def test_auth_token_from_settings(chain, api, monkeypatch):
    monkeypatch.setenv("WARPGATE_AUTH_TOKEN", "env-jwt")

    sdk = TokenSDK(SDKSettings(), chain=chain, api=api)

    assert sdk.get_auth_token() == "env-jwt"


def test_constructor_overrides_settings(settings, chain, api):
    sdk = TokenSDK(
        settings, chain=chain, api=api, auth_token="jwt", skip_transaction_recording=True
    )

    assert sdk.is_authenticated()
    assert sdk.skip_transaction_recording is True
    assert sdk.contract_address == BONDING_CURVE_ADDRESS


def test_sessions_are_per_instance(settings, chain, api):
    first = TokenSDK(settings, chain=chain, api=api)
    second = TokenSDK(settings, chain=chain, api=api)

    first.set_auth_token("jwt")

    assert first.is_authenticated()
    assert not second.is_authenticated()


@pytest.mark.asyncio
async def test_deprecated_pool_state_variant(sdk, chain):
    with pytest.warns(DeprecationWarning, match="fetch_pool_state"):
        pool = await sdk.fetch_pool_state_by_address_and_ticker("0xcafe", "moon")

    assert pool.reserve_y == 50_000_000_000
    chain.get_account_resource.assert_awaited_once_with(
        "0xcafe", f"{BONDING_CURVE_ADDRESS}::interface::PoolState<{TOKEN}>"
    )


@pytest.mark.asyncio
async def test_deprecated_preview_variants(sdk):
    with pytest.warns(DeprecationWarning):
        buy = await sdk.preview_buy_by_address_and_ticker("0xcafe", "MOON", 1)
    with pytest.warns(DeprecationWarning):
        sell = await sdk.preview_sell_by_address_and_ticker("0xcafe", "MOON", 100)

    assert buy.output_token == "MOON"
    assert sell.input_token == "MOON"


@pytest.mark.asyncio
async def test_deprecated_record_variant(settings, chain, api):
    sdk = TokenSDK(settings, chain=chain, api=api, skip_transaction_recording=True)

    with pytest.warns(DeprecationWarning):
        record = await sdk.record_sell_transaction_by_address_and_ticker(
            "0xabc", "0xcafe", "MOON"
        )

    assert record.token_mint_addr == TOKEN
