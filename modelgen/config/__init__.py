# modelgen/config/__init__.py
"""
Build settings.

Usage:
    from modelgen.config import BuildSettings, load_build_settings

    settings = load_build_settings()               # defaults + .modelgen/config.yaml + env
    settings = BuildSettings(runtime_mode=False)   # explicit, e.g. in tests
"""

from modelgen.config.loader import deep_merge, load_build_settings
from modelgen.config.schema import BuildSettings

__all__ = ["BuildSettings", "deep_merge", "load_build_settings"]
