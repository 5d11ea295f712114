# modelgen/cli/__init__.py
from modelgen.cli.cli import app

__all__ = ["app"]
