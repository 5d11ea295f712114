# modelgen/core/paths/__init__.py
"""
Central path management for modelgen.

Usage:
    from modelgen.core.paths import ModelgenPaths

    config_path = ModelgenPaths.config()
    output = ModelgenPaths.default_output_path("App", "0.3.0")

    # Override workspace for testing
    ModelgenPaths.set_workspace("/tmp/test_modelgen")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from . import artifacts as _artifacts
from . import config as _config
from .workspace import WorkspaceManager


class ModelgenPaths:
    """
    Central path management for modelgen.

    Facade class that delegates to the path modules.
    All methods are classmethods for static access.
    """

    # Workspace management - delegate to WorkspaceManager
    @classmethod
    def set_workspace(cls, path: Optional[str | Path]) -> None:
        """Override the workspace root."""
        WorkspaceManager.set_workspace(path)

    @classmethod
    def reset(cls) -> None:
        """Reset to default workspace (CWD)."""
        WorkspaceManager.reset()

    @classmethod
    def workspace(cls) -> Path:
        """The .modelgen workspace directory."""
        return WorkspaceManager.workspace()

    # Configuration
    @classmethod
    def config(cls) -> Path:
        """Workspace config file: {workspace}/config.yaml"""
        return _config.config()

    # Artifacts
    @classmethod
    def artifacts_base(cls, base_dir: Optional[Union[str, Path]] = None) -> Path:
        """Root of generated artifacts: {base_dir} or {workspace}/artifacts/"""
        return _artifacts.artifacts_base(base_dir)

    @classmethod
    def artifacts_dir(cls, version: str, base_dir: Optional[Union[str, Path]] = None) -> Path:
        """Per-version artifact directory, created on demand."""
        return _artifacts.artifacts_dir(version, base_dir)

    @classmethod
    def default_output_path(
        cls, name: str, version: str, base_dir: Optional[Union[str, Path]] = None
    ) -> Path:
        """Artifact file for a generated module."""
        return _artifacts.default_output_path(name, version, base_dir)


__all__ = ["ModelgenPaths"]
