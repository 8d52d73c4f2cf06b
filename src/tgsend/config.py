from __future__ import annotations

from pathlib import Path

HOME_CONFIG_PATH = Path.home() / ".tgsend" / "tgsend.toml"


class ConfigError(RuntimeError):
    pass


def resolve_config_path(path: str | Path | None) -> Path:
    return Path(path).expanduser() if path else HOME_CONFIG_PATH
