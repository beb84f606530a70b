"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import FunmatchConfig


def resolve_with_precedence(
    *,
    defaults: FunmatchConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> FunmatchConfig:
    """Merge defaults, file, environment, and CLI overrides; later sources win.

    Keys in any override mapping may be dotted (``"session.default_action"``) or nested.
    Lists are replaced wholesale, never concatenated, so an override of
    ``matching.cleanup_patterns`` defines the complete ordered rule list.

    Raises:
        ConfigError: If an override is malformed or the merged result fails validation.
    """
    merged = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        if not isinstance(source, MappingABC):
            raise ConfigError(f"{name.capitalize()} overrides must be a mapping.")
        expanded: dict[str, Any] = {}
        for key, value in source.items():
            if not isinstance(key, str):
                raise ConfigError(f"{name.capitalize()} override keys must be strings.")
            assign_dotted(expanded, key.split("."), value)
        merged = _deep_merge(merged, expanded)

    try:
        return FunmatchConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def assign_dotted(target: dict[str, Any], path: Sequence[str], value: Any) -> None:
    """Assign ``value`` at the nested location described by ``path``.

    Raises:
        ConfigError: If a non-mapping value is encountered along the path.
    """
    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping."
            )
        node = existing
    leaf = path[-1]
    if isinstance(value, MappingABC) and isinstance(node.get(leaf), MappingABC):
        node[leaf] = _deep_merge(node[leaf], value)
    else:
        node[leaf] = deepcopy(value)


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        if isinstance(value, MappingABC) and isinstance(merged.get(key), MappingABC):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["resolve_with_precedence", "assign_dotted"]
