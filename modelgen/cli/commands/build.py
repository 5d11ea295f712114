# modelgen/cli/commands/build.py
"""
Build command.

Usage:
    modelgen build app.models:Person app.models:AddressInfo
    modelgen build app.models:Person -o out/App.py --design-time
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from modelgen.cli.ui import ui
from modelgen.logging.logger import configure_logging, get_logger
from modelgen.logging.tags import CLI

logger = get_logger(__name__)

DEFAULT_MODULE_NAME = "Model"


# =============================================================================
# Target Resolution
# =============================================================================


def load_target(spec: str) -> type:
    """Import ``module:Class`` (nested classes as ``module:Outer.Inner``)."""
    module_name, sep, qualname = spec.partition(":")
    if not sep or not module_name or not qualname:
        raise typer.BadParameter(f"Expected module:Class, got {spec!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import {module_name!r}: {e}") from e

    for part in qualname.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise typer.BadParameter(f"{module_name!r} has no attribute {qualname!r}")

    if not isinstance(obj, type):
        raise typer.BadParameter(f"{spec!r} is not a class")
    return obj


# =============================================================================
# Main Command
# =============================================================================


def command(
    targets: List[str],
    output: Optional[Path] = None,
    base: Optional[str] = None,
    root_base: Optional[str] = None,
    abstract: bool = False,
    design_time: bool = False,
    force: bool = False,
    config: Optional[Path] = None,
    show_source: bool = False,
    verbose: bool = False,
) -> None:
    """Generate and compile contracts for the given component classes."""
    from modelgen.build import BuildCache, ComponentDescriptor, ContractBuilder
    from modelgen.config import load_build_settings
    from modelgen.contracts import contract_class_name, is_contract
    from modelgen.core.config import ConfigError
    from modelgen.exceptions import CompileFailure, ModelgenError

    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    overrides: Dict[str, Any] = {}
    if design_time:
        overrides["runtime_mode"] = False
    if force:
        overrides["force_rebuild"] = True

    try:
        settings = load_build_settings(config, **overrides)
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    descriptor_options: Dict[str, Any] = {"is_abstract": abstract}
    if base:
        descriptor_options["base_contract"] = load_target(base)
    if root_base:
        descriptor_options["root_base_contract"] = load_target(root_base)
    descriptors = [ComponentDescriptor(load_target(t), **descriptor_options) for t in targets]

    builder = ContractBuilder(BuildCache(), settings)
    path = output or builder.default_output_path(DEFAULT_MODULE_NAME)

    mode = "design-time" if design_time else "runtime"
    ui.header("modelgen build", f"{len(descriptors)} component(s) -> {path} ({mode})")
    logger.debug(f"{CLI} Building {targets} into {path}")

    try:
        result = builder.build(descriptors, path)
    except CompileFailure as e:
        ui.error(f"Compilation failed for {e.output_path}")
        for diagnostic in e.diagnostics:
            ui.print(f"    {diagnostic}", "dim")
        if show_source:
            ui.code(e.source)
        raise typer.Exit(1)
    except ModelgenError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    ui.section("Contracts")
    rows = []
    for name, obj in sorted(vars(result.module).items()):
        if isinstance(obj, type) and is_contract(obj) and obj.__module__ == result.module.__name__:
            rows.append((name, contract_class_name(obj) or ""))
    ui.table("", ["Contract", "Backing type"], rows)

    if show_source and result.artifact is not None:
        ui.section("Source")
        ui.code(result.artifact.source)

    ui.success(f"{result.state.display_name}: {path}")
