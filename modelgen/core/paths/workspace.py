# modelgen/core/paths/workspace.py
"""
Workspace path management - foundation for all other paths.

The workspace is the .modelgen directory in the current working directory,
or an override set for testing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class WorkspaceManager:
    """Internal workspace state manager."""

    _workspace_override: Optional[Path] = None

    @classmethod
    def set_workspace(cls, path: Optional[str | Path]) -> None:
        """
        Override the workspace root.

        Pass None to reset to default (CWD).
        """
        cls._workspace_override = None if path is None else Path(path)

    @classmethod
    def reset(cls) -> None:
        cls._workspace_override = None

    @classmethod
    def workspace(cls) -> Path:
        """
        The .modelgen workspace directory.

        Default: {CWD}/.modelgen/
        """
        if cls._workspace_override is not None:
            return cls._workspace_override
        return Path.cwd() / ".modelgen"


def workspace() -> Path:
    """The .modelgen workspace directory."""
    return WorkspaceManager.workspace()
