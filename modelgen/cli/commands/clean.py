# modelgen/cli/commands/clean.py
"""
Clean command.

Usage:
    modelgen clean          # Artifacts of the running version
    modelgen clean --all    # Artifacts of every version
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

import typer

from modelgen.cli.ui import ui
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import CLI

logger = get_logger(__name__)


def command(all_versions: bool = False, config: Optional[Path] = None) -> None:
    """Remove generated artifacts."""
    from modelgen import __version__
    from modelgen.config import load_build_settings
    from modelgen.core.config import ConfigError
    from modelgen.core.paths import ModelgenPaths

    try:
        settings = load_build_settings(config)
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    base = ModelgenPaths.artifacts_base(settings.base_dir)
    target = base if all_versions else base / __version__

    if not target.exists():
        ui.info(f"Nothing to clean at {target}")
        return

    try:
        shutil.rmtree(target)
    except OSError as e:
        ui.error(f"Could not remove {target}: {e}")
        raise typer.Exit(1)

    logger.debug(f"{CLI} Removed {target}")
    ui.success(f"Removed {target}")
