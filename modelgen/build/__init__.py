# modelgen/build/__init__.py
"""
Build cache, compiler backend and the contract builder.

Usage:
    from modelgen.build import BuildCache, ComponentDescriptor, ContractBuilder

    builder = ContractBuilder(BuildCache())
    result = builder.build([ComponentDescriptor(Person)], "App.py")
"""

from modelgen.build.backend import PythonSourceBackend, read_version_stamp, version_match
from modelgen.build.builder import ContractBuilder, module_name_for, output_stem
from modelgen.build.cache import BuildCache
from modelgen.build.types import BuildArtifact, BuildResult, BuildState, ComponentDescriptor

__all__ = [
    "BuildArtifact",
    "BuildCache",
    "BuildResult",
    "BuildState",
    "ComponentDescriptor",
    "ContractBuilder",
    "PythonSourceBackend",
    "module_name_for",
    "output_stem",
    "read_version_stamp",
    "version_match",
]
