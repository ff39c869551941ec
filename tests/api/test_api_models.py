from __future__ import annotations

from warpgate_sdk.api.models import LoginResponse, TokenData, TokenListing, WalletChallenge


def test_full_message_format():
    challenge = WalletChallenge(message="Welcome to Warpgate", nonce="abc123")
    assert challenge.full_message == "message: Welcome to Warpgate\nnonce: abc123"


def test_login_response_without_expiry():
    response = LoginResponse.model_validate({"token": {"token": "jwt"}})
    assert response.token.token == "jwt"
    assert response.token.expires_at is None


def test_token_data_ignores_unknown_fields():
    data = TokenData.model_validate(
        {
            "tickerSymbol": "MOON",
            "mintAddr": "0xcafe::MOON::MOON",
            "creator": "0xcafe",
            "marketCap": 123,
        }
    )
    assert data.ticker_symbol == "MOON"
    assert data.name is None


def test_token_listing_coerces_numeric_id():
    listing = TokenListing.model_validate({"id": 7, "tickerSymbol": "MOON"})
    assert listing.id == "7"
    assert listing.status == ""


def test_unparseable_expiry_keeps_token():
    response = LoginResponse.model_validate({"token": {"token": "jwt", "expiresAt": "7d"}})

    assert response.token.token == "jwt"
    assert response.token.expires_at is None


def test_iso_expiry_with_z_suffix():
    response = LoginResponse.model_validate(
        {"token": {"token": "jwt", "expiresAt": "2026-01-01T00:00:00Z"}}
    )

    assert response.token.expires_at.year == 2026
    assert response.token.expires_at.utcoffset().total_seconds() == 0
