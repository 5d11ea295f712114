# modelgen/core/paths/artifacts.py
"""Generated artifact paths."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .workspace import workspace


def artifacts_base(base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Root of all generated artifacts.

    Location: {base_dir} when configured, else {workspace}/artifacts/
    """
    if base_dir is not None:
        return Path(base_dir)
    return workspace() / "artifacts"


def artifacts_dir(version: str, base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Per-version artifact directory, created on demand.

    Location: {artifacts_base}/{version}/
    """
    path = artifacts_base(base_dir) / version
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_output_path(
    name: str, version: str, base_dir: Optional[Union[str, Path]] = None
) -> Path:
    """Artifact file for a generated module: {artifacts_dir}/{name}.py"""
    filename = name if name.endswith(".py") else f"{name}.py"
    return artifacts_dir(version, base_dir) / filename
