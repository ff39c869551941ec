from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from warpgate_sdk.api.client import WarpgateAPIClient, to_api_error
from warpgate_sdk.api.models import LoginRequest
from warpgate_sdk.domain import TransactionRecord
from warpgate_sdk.exceptions import ApiError

BASE = "https://api.test"


def _response(status: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = b"" if body is None else json.dumps(body).encode()
    response.encoding = "utf-8"
    response.url = BASE
    return response


@pytest.fixture(autouse=True)
def no_backoff_sleep(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda _: None)


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return WarpgateAPIClient(BASE + "/", session=session)


def test_to_api_error_maps_401_to_auth_message():
    error = to_api_error(requests.HTTPError("401 Client Error", response=_response(401)))

    assert error.status_code == 401
    assert error.is_unauthorized
    assert str(error) == "API error: Authentication required. Please login first."


def test_to_api_error_without_response():
    error = to_api_error(requests.ConnectionError("connection refused"))

    assert error.status_code is None
    assert "unknown" in str(error)


@pytest.mark.asyncio
async def test_wallet_login_posts_address(client, session):
    session.post.return_value = _response(200, {"message": "Sign in", "nonce": 42})

    challenge = await client.wallet_login("0xwallet")

    assert challenge.nonce == "42"
    assert challenge.full_message == "message: Sign in\nnonce: 42"
    url = session.post.call_args.args[0]
    assert url == f"{BASE}/auth/wallet-login"
    assert session.post.call_args.kwargs["json"] == {"walletAddr": "0xwallet"}


@pytest.mark.asyncio
async def test_login_sends_camel_case_and_parses_token(client, session):
    session.post.return_value = _response(
        200, {"token": {"token": "jwt", "expiresAt": "2026-01-01T00:00:00Z"}}
    )
    request = LoginRequest(
        wallet_addr="0xwallet",
        public_key="0xpub",
        signature="abcd",
        full_message="message: hi\nnonce: 1",
    )

    token = await client.login(request)

    assert token.token == "jwt"
    assert token.expires_at is not None and token.expires_at.year == 2026
    assert session.post.call_args.kwargs["json"] == {
        "walletAddr": "0xwallet",
        "publicKey": "0xpub",
        "signature": "abcd",
        "fullMessage": "message: hi\nnonce: 1",
    }


@pytest.mark.asyncio
async def test_login_rejects_malformed_body(client, session):
    session.post.return_value = _response(200, {"unexpected": True})
    request = LoginRequest(
        wallet_addr="0x1", public_key="0x2", signature="00", full_message="m"
    )

    with pytest.raises(ApiError, match="malformed login response"):
        await client.login(request)


@pytest.mark.asyncio
async def test_record_transaction_sends_bearer_header(client, session):
    stored = {"txnHash": "0xabc", "tokenMintAddr": "0xcafe::M::M"}
    session.post.return_value = _response(200, stored)
    record = TransactionRecord(
        txn_hash="0xabc", token_mint_addr="0xcafe::M::M", timestamp="1"
    )

    result = await client.record_transaction("sell", record, "jwt")

    assert result == stored
    assert session.post.call_args.args[0] == f"{BASE}/transaction/sell-token"
    assert session.post.call_args.kwargs["headers"] == {"Authorization": "Bearer jwt"}
    assert session.post.call_args.kwargs["json"] == {
        "txnHash": "0xabc",
        "tokenMintAddr": "0xcafe::M::M",
        "xAmt": "0",
        "yAmt": "0",
        "timestamp": "1",
    }


@pytest.mark.asyncio
async def test_record_transaction_without_token_omits_header(client, session):
    session.post.return_value = _response(201)
    record = TransactionRecord(txn_hash="0xabc", token_mint_addr="0xcafe::M::M")

    assert await client.record_transaction("buy", record) is None
    assert session.post.call_args.args[0] == f"{BASE}/transaction/buy-token"
    assert session.post.call_args.kwargs["headers"] == {}


@pytest.mark.asyncio
async def test_record_transaction_401_is_explicit(client, session):
    session.post.return_value = _response(401, {"message": "jwt expired"})
    record = TransactionRecord(txn_hash="0xabc", token_mint_addr="0xcafe::M::M")

    with pytest.raises(ApiError, match="Authentication required") as exc_info:
        await client.record_transaction("buy", record, "stale")

    assert exc_info.value.status_code == 401
    assert session.post.call_count == 1


@pytest.mark.asyncio
async def test_get_token_retries_server_errors(client, session):
    session.get.side_effect = [_response(502), _response(200, {"ret": "0"})]

    body = await client.get_token("0xcafe::MOON::MOON")

    assert body == {"ret": "0"}
    assert session.get.call_count == 2
    assert session.get.call_args.args[0] == f"{BASE}/token/get-token/0xcafe::MOON::MOON"


@pytest.mark.asyncio
async def test_get_token_list_builds_query(client, session):
    session.get.return_value = _response(200, {"ret": "0"})

    await client.get_token_list(3, 20)

    assert session.get.call_args.args[0] == f"{BASE}/token/get-token-list?page=3&perPage=20"


@pytest.mark.asyncio
async def test_client_errors_are_not_retried(client, session):
    session.get.return_value = _response(404)

    with pytest.raises(ApiError) as exc_info:
        await client.get_token("0xcafe::MOON::MOON")

    assert exc_info.value.status_code == 404
    assert session.get.call_count == 1


@pytest.mark.asyncio
async def test_login_tolerates_non_iso_expiry(client, session):
    session.post.return_value = _response(200, {"token": {"token": "jwt", "expiresAt": "7d"}})
    request = LoginRequest(
        wallet_addr="0x1", public_key="0x2", signature="00", full_message="m"
    )

    token = await client.login(request)

    assert token.token == "jwt"
    assert token.expires_at is None
