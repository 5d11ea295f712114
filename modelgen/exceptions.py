# modelgen/exceptions.py
"""
All exceptions raised by modelgen.

Hierarchy:
    ModelgenError
    ├── BuildError - Build pipeline failures
    │   ├── ContractNameConflict - Two classes map to one generated name
    │   └── CompileFailure - Generated source did not compile or load
    ├── ExtensionResolutionFailure - No generated contract matches an extension
    └── TranslationError - Marker translation failures
        ├── UnsupportedLiteral - Literal value with no formatting rule
        └── TranslationRuleError - Invalid rule registration
            └── DuplicateRuleError - Two rules for the same marker kind

Configuration errors live in modelgen.core.config (ConfigError family).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional


class ModelgenError(Exception):
    """Base error for all modelgen failures."""

    pass


# =============================================================================
# Build Errors
# =============================================================================


class BuildError(ModelgenError):
    """A build request could not be completed."""

    pass


class ContractNameConflict(BuildError):
    """Two backing classes map to the same generated contract name."""

    def __init__(self, name: str, first: type, second: type):
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Generated name {name} is used by both "
            f"{first.__module__}.{first.__qualname__} and {second.__module__}.{second.__qualname__}"
        )


class CompileFailure(BuildError):
    """
    Compilation of generated source produced diagnostics.

    Carries everything needed to diagnose the failure: the aggregated
    diagnostic lines, the full generated source and the output path.
    """

    def __init__(
        self,
        diagnostics: Iterable[str],
        source: str,
        output_path: Optional[Path] = None,
    ):
        self.diagnostics: List[str] = list(diagnostics)
        self.source = source
        self.output_path = output_path
        message = f"Module={output_path}\n" + "\n".join(self.diagnostics)
        super().__init__(message)


# =============================================================================
# Extension Errors
# =============================================================================


class ExtensionResolutionFailure(ModelgenError):
    """No generated contract in a module matches the requested extension."""

    def __init__(self, type_name: str, reason: str = "Cannot locate the generated contract for"):
        self.type_name = type_name
        super().__init__(f"{reason} {type_name}")


# =============================================================================
# Translation Errors
# =============================================================================


class TranslationError(ModelgenError):
    """Marker translation failed."""

    pass


class UnsupportedLiteral(TranslationError):
    """A marker literal has a runtime shape no formatting rule covers."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Unsupported literal value {value!r} of type {type(value).__name__}"
        )


class TranslationRuleError(TranslationError):
    """Invalid translation rule registration."""

    pass


class DuplicateRuleError(TranslationRuleError):
    """Raised when two rules are registered for the same marker kind."""

    pass


__all__ = [
    "ModelgenError",
    "BuildError",
    "CompileFailure",
    "ContractNameConflict",
    "ExtensionResolutionFailure",
    "TranslationError",
    "UnsupportedLiteral",
    "TranslationRuleError",
    "DuplicateRuleError",
]
