# modelgen/synth/ir.py
"""
Intermediate representation of generated contracts.

The synthesizer builds this IR from reflected metadata only; a backend
renders it to source and compiles it. Type references and annotation
texts are already resolved strings, the IR carries no live types besides
the backing class used as identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class MemberIR:
    """One generated member."""

    name: str
    type_ref: str
    writable: bool
    nested: bool = False
    annotations: List[str] = field(default_factory=list)


@dataclass
class ContractIR:
    """One generated contract, identified by its backing class."""

    backing_type: type
    name: str
    base_ref: str
    header: List[str] = field(default_factory=list)
    members: List[MemberIR] = field(default_factory=list)
    is_abstract: bool = False
    nested: bool = False

    def member(self, name: str) -> Optional[MemberIR]:
        for member in self.members:
            if member.name == name:
                return member
        return None

    @property
    def member_names(self) -> List[str]:
        return [m.name for m in self.members]


@dataclass
class BuildIR:
    """Everything a backend needs to render one module."""

    stem: str
    version: str
    contracts: List[ContractIR] = field(default_factory=list)
    import_lines: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    annotated_ref: str = "Annotated"

    def by_backing_type(self) -> Dict[type, ContractIR]:
        return {c.backing_type: c for c in self.contracts}

    def contract(self, name: str) -> Optional[ContractIR]:
        for contract in self.contracts:
            if contract.name == name:
                return contract
        return None


__all__ = ["MemberIR", "ContractIR", "BuildIR"]
