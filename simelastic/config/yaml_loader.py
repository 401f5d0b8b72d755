"""YAML Defaults Loader

Reads the packaged defaults.yaml and, if SIMELASTIC_DEFAULTS_PATH names a
file, layers that file on top of it. An override file only has to contain the
keys it changes. Nothing else in simelastic.config is imported here, so every
config module can use it.

Usage:
    from simelastic.config.yaml_loader import get_default
    dim = get_default('driver.dimension')
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_DEFAULTS_PATH = "SIMELASTIC_DEFAULTS_PATH"
PACKAGED_DEFAULTS = Path(__file__).parent / "defaults.yaml"

_defaults: dict[str, Any] | None = None


def _read(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load() -> dict[str, Any]:
    """Packaged defaults with the environment override applied.

    Raises:
        FileNotFoundError: If the packaged defaults.yaml is missing.
    """
    if not PACKAGED_DEFAULTS.exists():
        raise FileNotFoundError(f"Packaged defaults not found: {PACKAGED_DEFAULTS}")
    data = _read(PACKAGED_DEFAULTS)

    env_path = os.getenv(ENV_DEFAULTS_PATH)
    if env_path:
        override = Path(env_path)
        if override.exists():
            logger.debug(f"Applying defaults override {override}")
            data = _merge(data, _read(override))
        else:
            logger.warning(f"{ENV_DEFAULTS_PATH} points to a missing file: {override}")
    return data


def get_defaults() -> dict[str, Any]:
    """Return a copy of the full defaults dictionary."""
    global _defaults
    if _defaults is None:
        _defaults = _load()
    return _merge({}, _defaults)


def get_default(key_path: str, default: Any = None) -> Any:
    """Look up a value by dotted key path, e.g. 'two_dimensional.plane_strain'.

    Example:
        >>> get_default('driver.context')
        'elasticity'
        >>> get_default('nonexistent.key', 'fallback')
        'fallback'
    """
    node: Any = get_defaults()
    for key in key_path.split("."):
        if not isinstance(node, dict) or key not in node or node[key] is None:
            return default
        node = node[key]
    return node


def reload_defaults() -> None:
    """Drop the cached defaults so the next lookup re-reads them from disk."""
    global _defaults
    _defaults = None
