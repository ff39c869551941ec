"""SDK settings with precedence: constructor kwargs > ENV > CONFIG FILE."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomllib

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    BONDING_CURVE_ADDRESS,
    DEFAULT_API_BASE_URL,
    DEFAULT_CONFIRMATION_INTERVAL_MS,
    DEFAULT_CONFIRMATION_TIMEOUT_MS,
    DEFAULT_FULLNODE_URL,
)

load_dotenv()

SECRET_FIELDS = frozenset({"auth_token"})


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest-precedence source reading a TOML file.

    The file may hold settings at top level or under a ``[warpgate]`` table.
    Lookup order: ``WARPGATE_CONFIG``, ``./warpgate.toml``,
    ``~/.config/warpgate/config.toml``.
    """

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def _resolve_path(self) -> Path | None:
        if self._path:
            return self._path if self._path.exists() else None
        local_config = Path("warpgate.toml")
        user_config = Path.home() / ".config" / "warpgate" / "config.toml"
        if local_config.exists():
            return local_config
        if user_config.exists():
            return user_config
        return None

    def __call__(self) -> dict[str, Any]:
        path = self._resolve_path()
        if path is None:
            return {}

        with path.open("rb") as f:
            data = tomllib.load(f)
        body = data.get("warpgate", data)
        if not isinstance(body, dict):
            return {}

        for key in SECRET_FIELDS:
            if key in body:
                raise ValueError(
                    f"Security violation: '{key}' found in TOML config file. "
                    f"Secrets must only be provided via environment variables or constructor arguments."
                )

        return body


class SDKSettings(BaseSettings):
    """Single source of truth for SDK configuration. Values may come from:
    - constructor kwargs
    - ENV / .env (prefixed with WARPGATE_)
    - Config file (TOML), lowest precedence
    """

    # --- endpoints ---
    api_base_url: str = DEFAULT_API_BASE_URL
    fullnode_url: str = DEFAULT_FULLNODE_URL
    bonding_curve_address: str = BONDING_CURVE_ADDRESS

    # --- auth / recording ---
    auth_token: SecretStr | None = None
    skip_transaction_recording: bool = False

    # --- network behaviour ---
    request_timeout: float = Field(default=15.0, gt=0)
    confirmation_timeout_ms: int = Field(default=DEFAULT_CONFIRMATION_TIMEOUT_MS, gt=0)
    confirmation_interval_ms: int = Field(
        default=DEFAULT_CONFIRMATION_INTERVAL_MS, gt=0
    )

    # --- transaction submission ---
    max_gas_amount: int = Field(default=200_000, gt=0)
    transaction_expiration_secs: int = Field(default=60, gt=0)

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="WARPGATE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("auth_token", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr; treat empty strings as unset."""
        if v is None or isinstance(v, SecretStr):
            return v
        if v == "":
            return None
        return SecretStr(v)

    @field_validator("api_base_url", "fullnode_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_polling_window(self) -> "SDKSettings":
        """Validate that the poll interval fits inside the timeout."""
        if self.confirmation_interval_ms > self.confirmation_timeout_ms:
            raise ValueError(
                f"confirmation_interval_ms ({self.confirmation_interval_ms}) "
                f"must not exceed confirmation_timeout_ms ({self.confirmation_timeout_ms})"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        env_cfg = os.environ.get("WARPGATE_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSource(settings_cls, cfg_path),
            file_secret_settings,
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump()
        if self.auth_token:
            data["auth_token"] = "***redacted***"
        return data

    @property
    def auth_token_value(self) -> str | None:
        if self.auth_token is None:
            return None
        return self.auth_token.get_secret_value()
