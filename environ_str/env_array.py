"""Env arrays and mappings.

An OCI image config stores its default environment as ``config.Env``, a
JSON list of ``NAME=VALUE`` strings. Unlike an ``environ`` block each list
item is exactly one entry, so values may contain spaces.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import EnvVar


def parse_env_array(items: Iterable[str]) -> list[EnvVar]:
    """Parse a list of ``NAME=VALUE`` strings.

    Raises:
        ParseEnvVarError: On the first malformed item.
    """
    return [EnvVar.parse(item) for item in items]


def format_env_array(env_vars: Iterable[EnvVar]) -> list[str]:
    return [str(env_var) for env_var in env_vars]


def to_env_dict(env_vars: Iterable[EnvVar]) -> dict[str, str]:
    """Collapse EnvVars into a mapping; later entries win on duplicate names."""
    env: dict[str, str] = {}
    for env_var in env_vars:
        env[env_var.name] = env_var.value
    return env


def from_env_dict(mapping: Mapping[str, str]) -> list[EnvVar]:
    """Build EnvVars from a mapping, preserving its iteration order."""
    return [EnvVar(name=name, value=value) for name, value in mapping.items()]


def merge_env(
    base: Iterable[EnvVar], overrides: Iterable[EnvVar] | None = None
) -> list[EnvVar]:
    """Layer *overrides* on top of *base*.

    Overridden names keep their position from *base*; names only present in
    *overrides* are appended in order. Duplicates collapse to the last value.
    """
    merged = to_env_dict(base)
    if overrides:
        merged.update(to_env_dict(overrides))
    return from_env_dict(merged)
