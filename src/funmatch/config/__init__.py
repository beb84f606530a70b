"""Configuration management for funmatch."""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import FunmatchConfig
from .resolver import assign_dotted, resolve_with_precedence

DEFAULT_HOME = Path("~/.funmatch")
DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.yaml"
ENV_PREFIX = "FUNMATCH__"
_CONFIG_HEADER = textwrap.dedent(
    """\
    # funmatch configuration file
    # Generated automatically; manage via `funmatch config edit` or `funmatch config set`.
    # cleanup_patterns are applied top to bottom; keep their order intentional.
    """
)


class ConfigManager:
    """Load and persist configuration data and locate the files kept beside it."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    @property
    def home(self) -> Path:
        """Return the directory holding config, registry, history, and caches."""
        return self._config_path.parent

    @property
    def studios_path(self) -> Path:
        return self.home / "studios.json"

    @property
    def history_path(self) -> Path:
        return self.home / "history.log"

    @property
    def library_dir(self) -> Path:
        return self.home / "library"

    @property
    def log_path(self) -> Path:
        return self.home / "funmatch.log"

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        ensure_file: bool = True,
    ) -> FunmatchConfig:
        """Load configuration from disk, layering environment and CLI overrides.

        Args:
            cli_overrides: Dotted-key overrides supplied on the command line.
            include_env: Whether ``FUNMATCH__`` environment variables apply.
            ensure_file: Create a default configuration file when missing.

        Returns:
            FunmatchConfig: Validated configuration.

        Raises:
            ConfigError: If the file cannot be parsed or values are invalid.
        """
        if ensure_file:
            self.ensure_exists()

        return resolve_with_precedence(
            defaults=FunmatchConfig(),
            file_overrides=self._read_file(),
            env_overrides=self._extract_env(self._env) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return raw overrides stored on disk."""
        return self._read_file()

    def save(self, config: FunmatchConfig | Mapping[str, Any]) -> None:
        """Persist configuration data to disk."""
        if isinstance(config, FunmatchConfig):
            data = config.model_dump(mode="python")
        else:
            data = dict(config)
        self._write_file(data)

    def ensure_exists(self) -> Path:
        """Create a configuration file with defaults if one does not exist."""
        if not self._config_path.exists():
            self._write_file(FunmatchConfig().model_dump(mode="python"))
        return self._config_path

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def _read_file(self) -> dict[str, Any]:
        if not self._config_path.exists():
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def _write_file(self, data: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        self._config_path.write_text(
            f"{_CONFIG_HEADER}# Last updated: {stamp}\n{serialized}", encoding="utf-8"
        )

    def _extract_env(self, env: Mapping[str, str]) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for key, raw_value in env.items():
            if not key.startswith(ENV_PREFIX):
                continue
            path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
            if not path:
                continue
            try:
                parsed_value: Any = yaml.safe_load(raw_value)
            except yaml.YAMLError:
                parsed_value = raw_value

            node = overrides
            for segment in path[:-1]:
                node = node.setdefault(segment, {})
                if not isinstance(node, dict):
                    break
            else:
                node[path[-1]] = parsed_value
        return overrides


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_HOME",
    "FunmatchConfig",
    "assign_dotted",
    "resolve_with_precedence",
    "ConfigError",
]
