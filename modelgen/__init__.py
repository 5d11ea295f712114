"""
modelgen - generated model contracts for component classes

modelgen reflects the annotated shape of component classes, derives a set
of structural "model contracts" from it, emits them as Python source,
compiles that source into a module and caches the artifact across runs.

Quick Start:
    >>> from modelgen import BuildCache, ComponentDescriptor, ContractBuilder
    >>> builder = ContractBuilder(BuildCache())
    >>> result = builder.build([ComponentDescriptor(Person)], "App.py")
    >>> result.module.IModelAppPerson

Public API:
    Building:
        - ContractBuilder: cache-gated build of one output module
        - BuildCache: caller-owned process cache
        - ComponentDescriptor: one input class and its options
        - BuildSettings / load_build_settings: mode flags

    Metadata:
        - markers: Category, DefaultValue, Serializable, ...
        - ModelNode / ModelNodeEnabled: base contracts
        - PropertyFilter: stock property eligibility rule

    Extensions:
        - ContractExtender / ExtensionRegistry / resolve_contract_type

Architecture:
    modelgen/
    ├── reflection.py      # Candidate properties of a class
    ├── filtering.py       # Property filter and descriptor helpers
    ├── translate/         # Marker -> annotation text rules
    ├── synth/             # Contract IR and reference collection
    ├── build/             # Backend, cache and builder
    ├── extensions.py      # Extension registry
    ├── config/            # BuildSettings and layered loading
    └── cli/               # modelgen command line
"""

__version__ = "0.3.0"

# =============================================================================
# BUILDING
# =============================================================================

from modelgen.build import (
    BuildArtifact,
    BuildCache,
    BuildResult,
    BuildState,
    ComponentDescriptor,
    ContractBuilder,
    PythonSourceBackend,
)
from modelgen.config import BuildSettings, load_build_settings

# =============================================================================
# METADATA
# =============================================================================

from modelgen.contracts import ModelNode, ModelNodeEnabled, is_contract
from modelgen.filtering import PropertyFilter, filter_property
from modelgen.reflection import PropertyDescriptor, candidate_properties

# =============================================================================
# EXTENSIONS
# =============================================================================

from modelgen.extensions import ContractExtender, ExtensionRegistry, resolve_contract_type

# =============================================================================
# ERRORS
# =============================================================================

from modelgen.exceptions import (
    BuildError,
    CompileFailure,
    ExtensionResolutionFailure,
    ModelgenError,
    UnsupportedLiteral,
)

__all__ = [
    "__version__",
    # Building
    "BuildArtifact",
    "BuildCache",
    "BuildResult",
    "BuildState",
    "BuildSettings",
    "ComponentDescriptor",
    "ContractBuilder",
    "PythonSourceBackend",
    "load_build_settings",
    # Metadata
    "ModelNode",
    "ModelNodeEnabled",
    "PropertyDescriptor",
    "PropertyFilter",
    "candidate_properties",
    "filter_property",
    "is_contract",
    # Extensions
    "ContractExtender",
    "ExtensionRegistry",
    "resolve_contract_type",
    # Errors
    "BuildError",
    "CompileFailure",
    "ExtensionResolutionFailure",
    "ModelgenError",
    "UnsupportedLiteral",
]
