# modelgen/core/__init__.py
"""Paths and configuration loading shared by the whole package."""

from modelgen.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    load_yaml,
)
from modelgen.core.paths import ModelgenPaths

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ModelgenPaths",
    "load_yaml",
]
