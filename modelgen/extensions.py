# modelgen/extensions.py
"""
Contract extensions.

Independently loaded modules add generated contracts as extensions of
previously generated ones. Targets and extensions may be named by their
backing component (a class or a plain name); such names are resolved to
the generated contract whose identity marker records them.

Usage:
    from modelgen.extensions import ContractExtender, ExtensionRegistry

    registry = ExtensionRegistry()
    extender = ContractExtender(registry)
    extender.extend(GridView, GridOptions, result.module)

    registry.get(resolved_target)  # -> [IModelAppGridOptions]
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from types import ModuleType
from typing import Dict, Iterator, List, Tuple, Union

from modelgen.contracts import is_contract
from modelgen.exceptions import ExtensionResolutionFailure
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import EXTEND
from modelgen.markers import ClassName, class_markers

logger = get_logger(__name__)

TypeLike = Union[type, str]


# =============================================================================
# Resolution
# =============================================================================


def _simple_name(tp: TypeLike) -> str:
    name = tp if isinstance(tp, str) else tp.__name__
    return name.rsplit(".", 1)[-1]


def _module_contracts(module: ModuleType) -> Iterator[Tuple[type, str]]:
    """(contract, recorded backing type name) for every marked class of ``module``."""
    for _, obj in inspect.getmembers(module, inspect.isclass):
        for marker in class_markers(obj, ClassName):
            yield obj, marker.type_name  # type: ignore[attr-defined]


def resolve_contract_type(tp: TypeLike, module: ModuleType) -> type:
    """
    The generated contract standing for ``tp``.

    Contracts resolve to themselves. Anything else is matched by simple
    name against the identity markers of ``module``'s classes.

    Raises:
        ExtensionResolutionFailure: No contract matches, or more than one does
    """
    if is_contract(tp):
        return tp  # type: ignore[return-value]

    name = _simple_name(tp)
    matches = []
    for contract, type_name in _module_contracts(module):
        if type_name.rsplit(".", 1)[-1] == name and contract not in matches:
            matches.append(contract)

    if not matches:
        raise ExtensionResolutionFailure(name)
    if len(matches) > 1:
        found = ", ".join(sorted(c.__name__ for c in matches))
        raise ExtensionResolutionFailure(name, reason=f"Ambiguous contracts ({found}) for")
    return matches[0]


# =============================================================================
# Registry
# =============================================================================


@dataclass
class ExtensionRegistry:
    """
    Target contract -> extension contracts.

    Additive only: extensions keep registration order, duplicates included,
    and nothing is ever removed.
    """

    name: str = "extensions"
    _extensions: Dict[type, List[type]] = field(default_factory=dict, repr=False)

    def add(self, target: type, extension: type) -> None:
        self._extensions.setdefault(target, []).append(extension)
        logger.debug(f"{EXTEND} {extension.__name__} extends {target.__name__}")

    def get(self, target: type) -> List[type]:
        return list(self._extensions.get(target, []))

    def targets(self) -> List[type]:
        return list(self._extensions)

    def items(self) -> List[Tuple[type, List[type]]]:
        return [(target, list(exts)) for target, exts in self._extensions.items()]

    def __contains__(self, target: object) -> bool:
        return target in self._extensions

    def __len__(self) -> int:
        return len(self._extensions)


class ContractExtender:
    """Registers extensions, resolving non-contract arguments through a module."""

    def __init__(self, registry: ExtensionRegistry):
        self.registry = registry

    def extend(self, target: TypeLike, extension: TypeLike, module: ModuleType) -> Tuple[type, type]:
        """
        Register ``extension`` for ``target``.

        Returns:
            The resolved (target, extension) contracts

        Raises:
            ExtensionResolutionFailure: Either argument has no generated contract
        """
        resolved_extension = resolve_contract_type(extension, module)
        resolved_target = resolve_contract_type(target, module)
        self.registry.add(resolved_target, resolved_extension)
        return resolved_target, resolved_extension


__all__ = [
    "ContractExtender",
    "ExtensionRegistry",
    "resolve_contract_type",
]
