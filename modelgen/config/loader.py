# modelgen/config/loader.py
"""
Layered loading of build settings.

Merge order:
    1. Package defaults (modelgen/config/defaults.yaml) - always loaded
    2. Workspace config (.modelgen/config.yaml, or an explicit path)
    3. Environment overrides (MODELGEN_*)

Usage:
    from modelgen.config.loader import load_build_settings

    settings = load_build_settings()
    builder = ContractBuilder(settings=settings)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from modelgen.config.schema import BuildSettings
from modelgen.core.config import ConfigValidationError, load_yaml
from modelgen.core.paths import ModelgenPaths
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"

SECTION = "build"

ENV_OVERRIDES: Dict[str, str] = {
    "MODELGEN_DEV_MACHINE": "dev_machine",
    "MODELGEN_RUNTIME_MODE": "runtime_mode",
    "MODELGEN_SKIP_CLEANUP": "skip_cleanup",
    "MODELGEN_LOAD_FROM_CACHE": "load_from_cache",
    "MODELGEN_BASE_DIR": "base_dir",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`.
    Nested dicts are merged recursively; lists are replaced entirely.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


# =============================================================================
# Layers
# =============================================================================


def _section(data: Dict[str, Any]) -> Dict[str, Any]:
    # Config files nest settings under "build"; a flat mapping is accepted too.
    if SECTION in data and isinstance(data[SECTION], dict):
        return data[SECTION]
    return data


def load_defaults() -> Dict[str, Any]:
    return _section(load_yaml(DEFAULTS_PATH))


def load_workspace_config(path: Optional[Union[str, Path]] = None) -> Optional[Dict[str, Any]]:
    """
    Workspace settings, or None when the default file does not exist.

    An explicit ``path`` must exist.
    """
    if path is None:
        path = ModelgenPaths.config()
        if not path.exists():
            logger.debug(f"{CONFIG} No workspace config at {path}")
            return None
    data = _section(load_yaml(path))
    logger.debug(f"{CONFIG} Loaded workspace config from {path}")
    return data


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigValidationError(f"{name} must be a boolean, got {raw!r}")


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for env_name, key in ENV_OVERRIDES.items():
        if env_name not in environ:
            continue
        raw = environ[env_name]
        overrides[key] = raw if key == "base_dir" else _parse_flag(env_name, raw)
        logger.debug(f"{CONFIG} {key} overridden by {env_name}")
    return overrides


# =============================================================================
# Loading
# =============================================================================


def load_build_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> BuildSettings:
    """
    Complete build settings: defaults, workspace config, environment, keywords.

    Raises:
        ConfigNotFoundError: If an explicit ``path`` doesn't exist
        ConfigParseError: If a config file is invalid YAML
        ConfigValidationError: If the merged settings don't validate
    """
    merged = load_defaults()

    workspace = load_workspace_config(path)
    if workspace is not None:
        merged = deep_merge(merged, workspace)

    merged = deep_merge(merged, env_overrides(environ))
    merged = deep_merge(merged, overrides)

    try:
        return BuildSettings(**merged)
    except ValidationError as e:
        source = Path(path) if path is not None else None
        raise ConfigValidationError(f"Invalid build settings: {e}", path=source) from e


__all__ = [
    "deep_merge",
    "env_overrides",
    "load_build_settings",
    "load_defaults",
    "load_workspace_config",
    "ENV_OVERRIDES",
]
