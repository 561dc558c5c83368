"""Configuration loading: YAML file plus environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .schemas.config import AppConfig, load_config

ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "TEAMBUILDER_SEARCH_ENDPOINT": ("search", "endpoint", str),
    "TEAMBUILDER_GENOME_ENDPOINT": ("genome", "endpoint", str),
    "TEAMBUILDER_MAX_WORKERS": ("enrichment", "max_workers", int),
}


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file into a mapping."""
    with Path(path).open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError("Config file must be a YAML object")
    return loaded


def apply_env_overrides(
    raw: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    merged = {
        section: dict(values) if isinstance(values, dict) else values
        for section, values in raw.items()
    }
    for name, (section, key, cast) in ENV_OVERRIDES.items():
        value = env.get(name)
        if not value:
            continue
        target = merged.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = cast(value)
    return merged


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Resolve the effective configuration for a run."""
    raw = read_config_file(path) if path else {}
    return load_config(apply_env_overrides(raw, environ))


__all__ = ["read_config_file", "apply_env_overrides", "load_settings"]
