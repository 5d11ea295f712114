# modelgen/cli/cli.py
"""
modelgen CLI - Main application.

Commands:
    modelgen build      Generate and compile contracts for component classes
    modelgen inspect    Show the version stamp and contracts of an artifact
    modelgen clean      Remove generated artifacts

NOTE: Commands use lazy loading - heavy imports only happen when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="modelgen",
    help="modelgen - generated model contracts for component classes.",
    no_args_is_help=True,
    add_completion=False,
)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("build")
def build(
    targets: List[str] = typer.Argument(..., help="Component classes as module:Class."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output artifact path."),
    base: Optional[str] = typer.Option(None, "--base", help="Base contract as module:Class."),
    root_base: Optional[str] = typer.Option(None, "--root-base", help="Base of top-level contracts as module:Class."),
    abstract: bool = typer.Option(False, "--abstract", help="Mark top-level contracts abstract."),
    design_time: bool = typer.Option(False, "--design-time", help="Compile in memory only."),
    force: bool = typer.Option(False, "--force", "-f", help="Ignore cached artifacts."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file."),
    show_source: bool = typer.Option(False, "--source", "-s", help="Print the generated source."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Generate and compile contracts for component classes."""
    from modelgen.cli.commands import build as mod

    mod.command(
        targets=targets,
        output=output,
        base=base,
        root_base=root_base,
        abstract=abstract,
        design_time=design_time,
        force=force,
        config=config,
        show_source=show_source,
        verbose=verbose,
    )


@app.command("inspect")
def inspect(
    path: Path = typer.Argument(..., help="Artifact to inspect."),
) -> None:
    """Show the version stamp and contracts of an artifact."""
    from modelgen.cli.commands import inspect as mod

    mod.command(path=path)


@app.command("clean")
def clean(
    all_versions: bool = typer.Option(False, "--all", "-a", help="Remove artifacts of every version."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file."),
) -> None:
    """Remove generated artifacts."""
    from modelgen.cli.commands import clean as mod

    mod.command(all_versions=all_versions, config=config)


if __name__ == "__main__":
    app()
