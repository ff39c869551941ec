from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from warpgate_sdk.constants import DEFAULT_API_BASE_URL
from warpgate_sdk.settings import SDKSettings


def test_defaults():
    settings = SDKSettings()

    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.auth_token is None
    assert settings.skip_transaction_recording is False
    assert settings.confirmation_timeout_ms == 30_000
    assert settings.confirmation_interval_ms == 1_000


def test_loads_local_toml_with_table(tmp_path: Path):
    """Should pick up ./warpgate.toml and read the [warpgate] table."""
    (tmp_path / "warpgate.toml").write_text(
        '[warpgate]\napi_base_url = "https://staging.test/"\n'
        "skip_transaction_recording = true\n"
    )

    settings = SDKSettings()

    assert settings.api_base_url == "https://staging.test"
    assert settings.skip_transaction_recording is True


def test_explicit_config_path(tmp_path: Path, monkeypatch):
    config_path = tmp_path / "custom.toml"
    config_path.write_text("confirmation_timeout_ms = 5000\n")
    monkeypatch.setenv("WARPGATE_CONFIG", str(config_path))

    assert SDKSettings().confirmation_timeout_ms == 5000


def test_user_config_directory(tmp_path: Path):
    user_config = tmp_path / ".config" / "warpgate" / "config.toml"
    user_config.parent.mkdir(parents=True)
    user_config.write_text('fullnode_url = "https://node.test/v1"\n')

    assert SDKSettings().fullnode_url == "https://node.test/v1"


def test_env_overrides_toml(tmp_path: Path, monkeypatch):
    (tmp_path / "warpgate.toml").write_text('api_base_url = "https://from-toml.test"\n')
    monkeypatch.setenv("WARPGATE_API_BASE_URL", "https://from-env.test")

    assert SDKSettings().api_base_url == "https://from-env.test"


def test_constructor_overrides_env(monkeypatch):
    monkeypatch.setenv("WARPGATE_API_BASE_URL", "https://from-env.test")

    settings = SDKSettings(api_base_url="https://from-init.test")

    assert settings.api_base_url == "https://from-init.test"


def test_rejects_auth_token_in_toml(tmp_path: Path):
    (tmp_path / "warpgate.toml").write_text('[warpgate]\nauth_token = "jwt"\n')

    with pytest.raises(ValueError, match="auth_token"):
        SDKSettings()


def test_auth_token_from_env_is_redacted(monkeypatch):
    monkeypatch.setenv("WARPGATE_AUTH_TOKEN", "super-secret")

    settings = SDKSettings()

    assert settings.auth_token_value == "super-secret"
    assert settings.as_safe_dict()["auth_token"] == "***redacted***"
    assert "super-secret" not in repr(settings)


def test_empty_auth_token_is_unset(monkeypatch):
    monkeypatch.setenv("WARPGATE_AUTH_TOKEN", "")

    assert SDKSettings().auth_token_value is None


def test_interval_must_fit_in_timeout():
    with pytest.raises(PydanticValidationError, match="confirmation_interval_ms"):
        SDKSettings(confirmation_timeout_ms=100, confirmation_interval_ms=500)


def test_timeout_must_be_positive():
    with pytest.raises(PydanticValidationError):
        SDKSettings(confirmation_timeout_ms=0)
