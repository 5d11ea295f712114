# modelgen/cli/commands/inspect.py
"""
Inspect command.

Usage:
    modelgen inspect .modelgen/artifacts/0.3.0/Model.py
"""

from __future__ import annotations

from pathlib import Path

import typer

from modelgen.cli.ui import ui
from modelgen.logging.logger import get_logger

logger = get_logger(__name__)


def command(path: Path) -> None:
    """Show the version stamp and contracts of an artifact."""
    from modelgen import __version__
    from modelgen.build import PythonSourceBackend, module_name_for, read_version_stamp
    from modelgen.contracts import contract_class_name, is_contract
    from modelgen.exceptions import CompileFailure
    from modelgen.markers import ModelAbstractClass, class_markers

    if not path.is_file():
        ui.error(f"No artifact at {path}")
        raise typer.Exit(1)

    ui.header("modelgen inspect", str(path))

    stamp = read_version_stamp(path)
    ui.status("Version stamp", stamp is not None, stamp or "missing")
    ui.status("Matches generator", stamp == __version__, __version__)

    try:
        module = PythonSourceBackend().load(path, module_name_for(path))
    except CompileFailure as e:
        ui.error("Artifact failed to load")
        for diagnostic in e.diagnostics:
            ui.print(f"    {diagnostic}", "dim")
        raise typer.Exit(1)

    rows = []
    for name, obj in sorted(vars(module).items()):
        if not (isinstance(obj, type) and is_contract(obj) and obj.__module__ == module.__name__):
            continue
        abstract = "yes" if class_markers(obj, ModelAbstractClass) else ""
        rows.append((name, contract_class_name(obj) or "", abstract))

    ui.section("Contracts")
    ui.table("", ["Contract", "Backing type", "Abstract"], rows)
