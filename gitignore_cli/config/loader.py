"""Configuration loading helpers for gitignore-cli."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .models import GlobalConfig

CONFIG_ENV_VAR = "GITIGNORE_CLI_HOME"
CONFIG_FILENAMES = ("config.yaml", "config.yml", "config.json")


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the configuration directory."""

    config_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.config_dir is not None:
            root = Path(self.config_dir)
        else:
            env_root = os.environ.get(CONFIG_ENV_VAR)
            root = Path(env_root) if env_root else Path.home() / ".config" / "gitignore-cli"
        self.config_dir = root.expanduser().resolve()

    def config_path(self) -> Path | None:
        """Return the first existing config file, if any."""

        for filename in CONFIG_FILENAMES:
            candidate = self.config_dir / filename
            if candidate.is_file():
                return candidate
        return None


class ConfigRepository:
    """Load and validate the global configuration."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()
        self._cache: GlobalConfig | None = None

    def load(self, path: Path | None = None, **overrides: Any) -> GlobalConfig:
        """Load configuration from ``path`` (or the located file) and apply overrides.

        Overrides whose value is ``None`` are ignored so unset CLI flags keep the
        file value.
        """

        base = self._load_file(path) if path is not None else self._load_default()
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return base
        try:
            return GlobalConfig.model_validate({**base.model_dump(), **updates})
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration override: {exc}") from exc

    def _load_default(self) -> GlobalConfig:
        if self._cache is not None:
            return self._cache
        path = self.locator.config_path()
        config = self._load_file(path) if path is not None else GlobalConfig()
        self._cache = config
        return config

    @staticmethod
    def _load_file(path: Path) -> GlobalConfig:
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        try:
            payload = _read_file(path)
            return GlobalConfig.model_validate(payload)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            # pydantic.ValidationError is a ValueError subclass
            raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc


__all__ = ["CONFIG_ENV_VAR", "CONFIG_FILENAMES", "ConfigLocator", "ConfigRepository"]
