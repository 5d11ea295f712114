# modelgen/build/types.py
"""
Types and enums for the contract builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import ModuleType
from typing import Callable, List, Optional, Set

from modelgen.contracts import ModelNodeEnabled
from modelgen.reflection import PropertyDescriptor


class BuildState(Enum):
    """Terminal state of one build request."""

    REUSED = "reused"  # Loaded from disk or taken from the in-process cache
    COMPILED = "compiled"  # Synthesized and compiled in this call
    FAILED = "failed"  # Compilation reported diagnostics

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass
class ComponentDescriptor:
    """One input to a build: a component class and how to derive its contract."""

    component_type: type
    base_contract: type = ModelNodeEnabled
    root_base_contract: Optional[type] = None  # Top-level contracts only
    is_abstract: bool = False
    reference_types: List[type] = field(default_factory=list)
    property_filter: Optional[Callable[[PropertyDescriptor], bool]] = None  # None accepts all


@dataclass
class BuildArtifact:
    """Source text and metadata of one generated module."""

    source: str
    references: Set[str]
    output_path: Path
    version: str
    module_name: str = ""

    @property
    def stem(self) -> str:
        return self.output_path.stem


@dataclass
class BuildResult:
    """Result of ContractBuilder.build."""

    state: BuildState
    module: Optional[ModuleType] = None
    artifact: Optional[BuildArtifact] = None
    output_path: Optional[Path] = None

    @property
    def reused(self) -> bool:
        return self.state is BuildState.REUSED

    @property
    def compiled(self) -> bool:
        return self.state is BuildState.COMPILED

    def as_reused(self) -> "BuildResult":
        """Same module, seen by a caller that did not compile it."""
        return replace(self, state=BuildState.REUSED)

    @classmethod
    def from_cache(cls, module: ModuleType, output_path: Path) -> "BuildResult":
        return cls(state=BuildState.REUSED, module=module, output_path=output_path)


__all__ = ["BuildState", "ComponentDescriptor", "BuildArtifact", "BuildResult"]
