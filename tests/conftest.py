# tests/conftest.py
"""
Root conftest.

Test Tiers:
===========
- tier1: Pure logic - reflection, filtering, translation, synthesis (no I/O)
         Run: pytest -m tier1
- tier2: Filesystem artifacts, compilation, settings files and the CLI
         Run: pytest -m "tier1 or tier2"

Every test runs against an isolated .modelgen workspace and without
MODELGEN_* environment overrides.
"""

from __future__ import annotations

import pytest

from modelgen.config.loader import ENV_OVERRIDES
from modelgen.core.paths import ModelgenPaths


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Point the workspace at a temp dir and drop MODELGEN_* variables."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    workspace = tmp_path / ".modelgen"
    ModelgenPaths.set_workspace(workspace)
    yield workspace
    ModelgenPaths.reset()
