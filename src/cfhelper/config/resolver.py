"""Merge configuration sources into a validated settings model."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Iterable, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import CFHelperConfig

ENV_PREFIX = "CFHELPER__"


def resolve_with_precedence(
    *,
    defaults: CFHelperConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> CFHelperConfig:
    """Layer file, environment, and CLI overrides on top of ``defaults``.

    Later sources win: defaults < file < environment < CLI. Keys may be nested
    mappings or dotted paths such as ``"catalog.ttl_hours"``.

    Raises:
        ConfigError: If an override is malformed or the result fails validation.
    """
    layers = {"file": file_overrides, "environment": env_overrides, "cli": cli_overrides}
    merged = defaults.model_dump(mode="python")
    for source_name, layer in layers.items():
        if layer is not None:
            merged = _deep_merge(merged, expand_dotted(layer, source_name=source_name))

    try:
        return CFHelperConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``CFHELPER__SECTION__KEY`` variables into a nested mapping.

    Values are parsed as YAML scalars so ``true`` and ``25`` keep their types;
    anything YAML cannot parse is kept as the raw string.
    """
    overrides: dict[str, Any] = {}
    for name in sorted(environ):
        if not name.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in name[len(ENV_PREFIX) :].split("__")]
        if not all(path):
            continue
        raw = environ[name]
        try:
            value: Any = yaml.safe_load(raw)
        except yaml.YAMLError:
            value = raw
        assign_nested(overrides, path, value)
    return overrides


def flatten_for_env(config: CFHelperConfig) -> Dict[str, str]:
    """Render ``config`` as the environment assignments that would reproduce it."""
    flat: Dict[str, str] = {}
    for path, value in _leaves([], config.model_dump(mode="python")):
        if isinstance(value, list):
            rendered = yaml.safe_dump(value, default_flow_style=True).strip()
        else:
            rendered = "null" if value is None else str(value)
        flat[ENV_PREFIX + "__".join(part.upper() for part in path)] = rendered
    return flat


def split_key(key: str) -> list[str]:
    """Split a dotted key such as ``user.handle`` into its segments.

    Raises:
        ConfigError: If ``key`` has an empty segment.
    """
    segments = [segment.strip() for segment in key.split(".")]
    if not all(segments):
        raise ConfigError(f"Invalid configuration key {key!r}; use a dotted path like 'user.handle'.")
    return segments


def assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set ``value`` at the nested ``path`` inside ``target``, creating mappings.

    Raises:
        ConfigError: If an intermediate segment already holds a non-mapping value.
    """
    node = target
    for depth, segment in enumerate(path[:-1]):
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            prefix = ".".join(path[: depth + 1])
            raise ConfigError(f"Cannot set {'.'.join(path)}: {prefix} is not a section.")
        node = child
    node[path[-1]] = value


def expand_dotted(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Turn dotted keys into nested mappings, recursing into mapping values.

    Raises:
        ConfigError: If ``source`` is not a mapping or a key is not a string.
    """
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = expand_dotted(value, source_name=source_name)
        path = key.split(".")
        existing = _lookup(result, path)
        if isinstance(existing, dict) and isinstance(value, dict):
            value = _deep_merge(existing, value)
        assign_nested(result, path, value)
    return result


def _lookup(data: Mapping[str, Any], path: list[str]) -> Any:
    node: Any = data
    for segment in path:
        if not isinstance(node, MappingABC) or segment not in node:
            return None
        node = node[segment]
    return node


def _leaves(prefix: list[str], value: Any) -> Iterable[tuple[list[str], Any]]:
    if isinstance(value, dict):
        for key, child in value.items():
            yield from _leaves(prefix + [str(key)], child)
    else:
        yield prefix, value


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = [
    "ENV_PREFIX",
    "resolve_with_precedence",
    "env_overrides",
    "flatten_for_env",
    "split_key",
    "assign_nested",
    "expand_dotted",
]
