# modelgen/synth/references.py
"""
Reference collector.

Records every type the synthesizer touches and renders type expressions as
source text. Classes are bound unqualified through ``from module import
Name`` where the simple name is free; on a collision (another class of the
same name, or a generated contract name) the class is referenced through a
module alias instead.

Usage:
    collector = ReferenceCollector()
    collector.ref(Optional[Decimal])   # -> "Optional[Decimal]"
    collector.import_lines()           # -> ["from decimal import Decimal", ...]
    collector.references               # -> {"decimal", "typing", ...}
"""

from __future__ import annotations

import builtins
import enum
import re
import sys
import types
import typing
from typing import Any, Dict, List, Optional, Set, Tuple

from modelgen.contracts import ModelNode
from modelgen.logging.logger import get_logger
from modelgen.logging.tags import SYNTH

logger = get_logger(__name__)

NoneType = type(None)

# Modules whose names never need an import statement.
_IMPLICIT_MODULES = {"builtins"}


def _module_alias(module: str) -> str:
    return "_" + re.sub(r"\W", "_", module)


class ReferenceCollector:
    """
    Collects module references and import bindings for one generated module.

    Args:
        host_type: Type that is always referenced by generated source
    """

    def __init__(self, host_type: type = ModelNode):
        self.host_type = host_type
        # simple name -> (module, attribute) bound by "from module import attribute"
        self._bound: Dict[str, Tuple[str, str]] = {}
        self._bound_objects: Dict[str, Any] = {}
        self._aliased: Set[str] = set()
        self._reserved: Set[str] = set()
        self._modules: Set[str] = set()
        self._types: List[type] = []
        self.ref(host_type)

    # =========================================================================
    # Bindings
    # =========================================================================

    def reserve(self, name: str) -> None:
        """Keep ``name`` free for a generated contract."""
        if name in self._bound:
            logger.warning(f"{SYNTH} Generated name {name} shadows an imported type")
        self._reserved.add(name)

    def is_reserved(self, name: str) -> bool:
        return name in self._reserved

    def _bind(self, module: str, attribute: str, obj: Any) -> Optional[str]:
        """Bind ``attribute`` unqualified; returns the bound name or None on collision."""
        existing = self._bound_objects.get(attribute)
        if existing is obj:
            return attribute
        if existing is not None or attribute in self._reserved:
            return None
        self._bound[attribute] = (module, attribute)
        self._bound_objects[attribute] = obj
        self._modules.add(module)
        return attribute

    def _qualified(self, module: str, qualname: str) -> str:
        self._aliased.add(module)
        self._modules.add(module)
        return f"{_module_alias(module)}.{qualname}"

    def typing_name(self, name: str) -> str:
        """Reference a ``typing`` helper such as Annotated or Optional."""
        obj = getattr(typing, name)
        return self._bind("typing", name, obj) or self._qualified("typing", name)

    # =========================================================================
    # Rendering
    # =========================================================================

    def _ref_class(self, tp: type) -> str:
        module = tp.__module__
        qualname = tp.__qualname__
        if module in _IMPLICIT_MODULES and getattr(builtins, qualname, None) is tp:
            return qualname

        if tp not in self._types:
            self._types.append(tp)

        top = qualname.split(".", 1)[0]
        if "<locals>" in qualname:
            # Not importable; left for the compile step to report.
            top = qualname = tp.__name__
        owner = tp if top == qualname else getattr(sys.modules.get(module), top, tp)

        bound = self._bind(module, top, owner)
        if bound is not None:
            return qualname
        return self._qualified(module, qualname)

    def _ref_literal_value(self, value: Any) -> str:
        if isinstance(value, enum.Enum):
            return f"{self.ref(type(value))}.{value.name}"
        return repr(value)

    def _ref_arg(self, arg: Any) -> str:
        if arg is Ellipsis:
            return "..."
        if isinstance(arg, (list, tuple)):
            return "[" + ", ".join(self._ref_arg(a) for a in arg) + "]"
        return self.ref(arg)

    def ref(self, tp: Any) -> str:
        """Render ``tp`` as a source type expression, recording what it needs."""
        if tp is None or tp is NoneType:
            return "None"
        if tp is typing.Any:
            return self.typing_name("Any")
        if isinstance(tp, str):
            return tp
        if isinstance(tp, typing.ForwardRef):
            return tp.__forward_arg__

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is typing.Annotated:
            return self.ref(args[0])

        if origin is typing.Union or origin is types.UnionType:
            members = [a for a in args if a is not NoneType]
            if len(members) == 1 and len(members) != len(args):
                return f"{self.typing_name('Optional')}[{self.ref(members[0])}]"
            return f"{self.typing_name('Union')}[{', '.join(self.ref(a) for a in args)}]"

        if origin is typing.Literal:
            values = ", ".join(self._ref_literal_value(a) for a in args)
            return f"{self.typing_name('Literal')}[{values}]"

        if origin is not None:
            if isinstance(tp, types.GenericAlias):
                head = self.ref(origin)
            else:
                head = self.ref(origin) if origin.__module__ != "typing" else self.typing_name(origin.__name__)
            if not args:
                return head
            rendered = ", ".join(self._ref_arg(a) for a in args)
            return f"{head}[{rendered}]"

        if isinstance(tp, type):
            return self._ref_class(tp)

        raise TypeError(f"Cannot render a reference to {tp!r}")

    # =========================================================================
    # Results
    # =========================================================================

    @property
    def references(self) -> Set[str]:
        """Module names the generated source imports from."""
        return set(self._modules)

    @property
    def types(self) -> List[type]:
        """Every class referenced so far, in first-touch order."""
        return list(self._types)

    def import_lines(self) -> List[str]:
        by_module: Dict[str, List[str]] = {}
        for name, (module, attribute) in self._bound.items():
            by_module.setdefault(module, []).append(attribute)

        lines = []
        for module in sorted(by_module):
            names = ", ".join(sorted(by_module[module]))
            lines.append(f"from {module} import {names}")
        for module in sorted(self._aliased):
            lines.append(f"import {module} as {_module_alias(module)}")
        return lines


__all__ = ["ReferenceCollector"]
