"""Configuration management for cfhelper.

Settings live in a YAML file (``~/.cfhelper/config.yaml`` unless the
``CFHELPER_CONFIG`` variable points elsewhere) and may be overridden per
process through ``CFHELPER__SECTION__KEY`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import DEFAULT_TAGS, CFHelperConfig
from .resolver import (
    ENV_PREFIX,
    assign_nested,
    env_overrides,
    flatten_for_env,
    resolve_with_precedence,
    split_key,
)

CONFIG_PATH_ENV = "CFHELPER_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.cfhelper/config.yaml")
_HEADER_LINES = (
    "# cfhelper configuration file",
    "# Edit by hand or with `cfhelper config set <section.key> --value <value>`.",
)
_STAMP_PREFIX = "# Last updated: "


@dataclass(frozen=True)
class ConfigChange:
    """Result of ``ConfigManager.set_value``.

    Attributes:
        key: Dotted key that was assigned.
        before: File contents before the change, without the timestamp line.
        after: File contents after the change, without the timestamp line.
    """

    key: str
    before: str
    after: str

    @property
    def changed(self) -> bool:
        return self.before != self.after


class ConfigManager:
    """Read, validate, and update the configuration file."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._env = env if env is not None else os.environ
        if config_path is None:
            override = self._env.get(CONFIG_PATH_ENV)
            config_path = Path(override) if override else DEFAULT_CONFIG_PATH
        self._config_path = config_path.expanduser()

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        ensure_file: bool = True,
        env_overrides: Mapping[str, str] | None = None,
    ) -> CFHelperConfig:
        """Return the effective configuration.

        Args:
            cli_overrides: Dotted-key overrides supplied by the caller.
            include_env: Whether ``CFHELPER__`` environment variables apply.
            ensure_file: Create a default file first when none exists.
            env_overrides: Explicit environment mapping used instead of the
                manager's environment.

        Raises:
            ConfigError: If the file cannot be parsed or values are invalid.
        """
        if ensure_file:
            self.ensure_exists()
        environ = env_overrides if env_overrides is not None else self._env
        return resolve_with_precedence(
            defaults=CFHelperConfig(),
            file_overrides=self.load_file_overrides(),
            env_overrides=_env_layer(environ) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the raw mapping stored in the configuration file.

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        text = self.read_text()
        try:
            data = yaml.safe_load(text) if text else None
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse {self._config_path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self._config_path} must contain a mapping at the top level.")
        return data

    def save(self, config: CFHelperConfig | Mapping[str, Any]) -> None:
        """Write ``config`` to disk with a fresh timestamp."""
        data = config.model_dump(mode="python") if isinstance(config, CFHelperConfig) else dict(config)
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(_render(data), encoding="utf-8")

    def ensure_exists(self) -> Path:
        """Write the default configuration unless a file is already present."""
        if not self._config_path.exists():
            self.save(CFHelperConfig())
        return self._config_path

    def read_text(self) -> str:
        """Return the configuration file contents, or an empty string."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def set_value(self, key: str, raw_value: str) -> ConfigChange:
        """Parse ``raw_value`` as YAML, store it at ``key``, and save.

        The whole file is validated before anything is written, so an invalid
        value leaves the file untouched.

        Raises:
            ConfigError: If the key, the value, or the resulting file is invalid.
        """
        path = split_key(key)
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Unable to parse value for {key}: {exc}") from exc

        self.ensure_exists()
        before = _strip_stamp(self.read_text())
        data = self.load_file_overrides()
        assign_nested(data, path, value)
        resolve_with_precedence(defaults=CFHelperConfig(), file_overrides=data)

        self.save(data)
        return ConfigChange(key=".".join(path), before=before, after=_strip_stamp(self.read_text()))


def _env_layer(environ: Mapping[str, str]) -> dict[str, Any] | None:
    return env_overrides(environ) or None


def _render(data: Mapping[str, Any]) -> str:
    stamp = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    body = yaml.safe_dump(dict(data), sort_keys=False)
    return "\n".join((*_HEADER_LINES, f"{_STAMP_PREFIX}{stamp}", body))


def _strip_stamp(text: str) -> str:
    return "\n".join(line for line in text.splitlines() if not line.startswith(_STAMP_PREFIX))


__all__ = [
    "ConfigManager",
    "ConfigChange",
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TAGS",
    "ENV_PREFIX",
    "CFHelperConfig",
    "ConfigError",
    "assign_nested",
    "resolve_with_precedence",
    "flatten_for_env",
]
