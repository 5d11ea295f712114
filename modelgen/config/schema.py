# modelgen/config/schema.py
"""
Pydantic schema for build settings.

Settings are decided once by the hosting application (config file,
environment or code) and passed to the builder; nothing inspects the
running process to choose a mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildSettings(BaseModel):
    """Mode flags for ContractBuilder."""

    model_config = ConfigDict(extra="forbid")

    load_from_cache: bool = Field(
        default=False,
        description="Reuse a version-matched artifact even outside runtime mode",
    )
    runtime_mode: bool = Field(
        default=True,
        description="Persist artifacts to disk; False keeps them in memory only",
    )
    skip_cleanup: bool = Field(default=False, description="Never delete stale artifacts")
    force_rebuild: bool = Field(default=False, description="Ignore every cache")
    debugger_attached: bool = False
    external_editor: bool = False
    dev_machine: bool = False
    base_dir: Optional[Path] = Field(default=None, description="Artifact root directory")
    name_prefix: str = Field(default="IModel", min_length=1)

    @field_validator("name_prefix")
    @classmethod
    def validate_name_prefix(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"name_prefix must be a valid identifier, got {v!r}")
        return v

    @property
    def cleanup_enabled(self) -> bool:
        """Stale artifacts may be deleted before a build."""
        return (self.debugger_attached or self.external_editor) and not self.skip_cleanup


__all__ = ["BuildSettings"]
