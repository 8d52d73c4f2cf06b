from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import TomlConfigSettingsSource

from .config import ConfigError, resolve_config_path
from .telegram.client import DEFAULT_API_BASE


class TgsendSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="TGSEND__",
        env_nested_delimiter="__",
    )

    bot_token: SecretStr | None = None
    chat_id: int | None = None
    api_base_url: str = DEFAULT_API_BASE
    timeout_s: float | None = None

    @field_validator("bot_token", mode="before")
    @classmethod
    def _validate_bot_token(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("bot_token must be a string")
        return value

    @field_validator("chat_id", mode="before")
    @classmethod
    def _validate_chat_id(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("chat_id must be an integer")
        return value

    @field_validator("api_base_url", mode="before")
    @classmethod
    def _validate_api_base_url(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("api_base_url must be a non-empty string")
        cleaned = value.strip()
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("api_base_url must be an http(s) url")
        return cleaned.rstrip("/")

    @field_validator("timeout_s", mode="before")
    @classmethod
    def _validate_timeout(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("timeout_s must be a number")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

def load_settings(path: str | Path | None = None) -> tuple[TgsendSettings, Path]:
    """Load settings from the TOML file at ``path`` plus ``TGSEND__*`` env vars.

    The file may be absent when the environment supplies the bot token.
    """
    cfg_path = resolve_config_path(path)
    if cfg_path.exists() and not cfg_path.is_file():
        raise ConfigError(f"Config path {cfg_path} exists but is not a file.") from None
    settings = _load_settings_from_path(cfg_path)
    if settings.bot_token is None and not cfg_path.exists():
        raise ConfigError(
            f"Missing config file {cfg_path}; create it or set TGSEND__BOT_TOKEN."
        ) from None
    return settings, cfg_path


def require_bot(settings: TgsendSettings, config_path: Path) -> str:
    token = settings.bot_token
    if token is None or not token.get_secret_value().strip():
        raise ConfigError(f"Missing bot token in {config_path}.")
    return token.get_secret_value().strip()


def _load_settings_from_path(cfg_path: Path) -> TgsendSettings:
    cfg = dict(TgsendSettings.model_config)
    cfg["toml_file"] = cfg_path
    Bound = type(
        "TgsendSettingsBound",
        (TgsendSettings,),
        {"model_config": SettingsConfigDict(**cfg)},
    )
    try:
        return Bound()
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {cfg_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Malformed TOML in {cfg_path}: {exc}") from None
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {cfg_path}: {exc}") from exc
