# modelgen/core/paths/config.py
"""Configuration file paths."""

from __future__ import annotations

from pathlib import Path

from .workspace import workspace


def config() -> Path:
    """
    Workspace config file path.

    Location: {workspace}/config.yaml
    """
    return workspace() / "config.yaml"
