# modelgen/contracts.py
"""
Base contracts.

Every generated contract derives (directly or through a caller supplied
base) from ``ModelNode``. Contracts are structural descriptions: they carry
annotated members and read-only properties, never behaviour.
"""

from __future__ import annotations

from typing import Annotated, Optional

from modelgen.markers import Category, ClassName, DefaultValue, class_markers


class ModelNode:
    """Root of every model contract."""


class ModelNodeEnabled(ModelNode):
    """Default base contract: a node that can be switched off."""

    NodeEnabled: Annotated[bool, Category("Behavior"), DefaultValue(True)]


def is_contract(tp: object) -> bool:
    """True when ``tp`` is a contract class."""
    return isinstance(tp, type) and issubclass(tp, ModelNode)


def contract_class_name(cls: type) -> Optional[str]:
    """Backing type name recorded by a contract's identity marker, if any."""
    for marker in class_markers(cls, ClassName):
        return marker.type_name  # type: ignore[attr-defined]
    return None


def full_type_name(cls: type) -> str:
    """Fully qualified name recorded by identity markers."""
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = [
    "ModelNode",
    "ModelNodeEnabled",
    "is_contract",
    "contract_class_name",
    "full_type_name",
]
