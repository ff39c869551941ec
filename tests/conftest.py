from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from warpgate_sdk.api.client import WarpgateAPIClient
from warpgate_sdk.chain.base import ChainClient
from warpgate_sdk.domain import PoolState
from warpgate_sdk.settings import SDKSettings

TOKEN = "0xcafe::MOON::MOON"

# 10_000 tokens / 500 APT in human units
RESERVES = {"reserve_x": "1000000000000", "reserve_y": "50000000000"}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep local config files and WARPGATE_* variables out of tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in (
        "WARPGATE_CONFIG",
        "WARPGATE_AUTH_TOKEN",
        "WARPGATE_SKIP_TRANSACTION_RECORDING",
        "WARPGATE_API_BASE_URL",
        "WARPGATE_FULLNODE_URL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def pool() -> PoolState:
    return PoolState(reserve_x=1_000_000_000_000, reserve_y=50_000_000_000)


@pytest.fixture
def chain() -> MagicMock:
    mock = MagicMock(spec=ChainClient)
    mock.get_account_resource = AsyncMock(return_value=dict(RESERVES))
    mock.submit_transaction = AsyncMock(return_value="0xsubmitted")
    mock.get_transaction_by_hash = AsyncMock(
        return_value={"type": "pending_transaction", "hash": "0xsubmitted"}
    )
    return mock


@pytest.fixture
def api() -> MagicMock:
    mock = MagicMock(spec=WarpgateAPIClient)
    mock.wallet_login = AsyncMock()
    mock.login = AsyncMock()
    mock.get_token = AsyncMock()
    mock.get_token_list = AsyncMock()
    mock.record_transaction = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def settings() -> SDKSettings:
    return SDKSettings(confirmation_timeout_ms=200, confirmation_interval_ms=5)
