# modelgen/cli/commands/__init__.py
"""CLI command implementations, imported lazily by modelgen.cli.cli."""
