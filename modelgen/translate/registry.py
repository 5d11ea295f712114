# modelgen/translate/registry.py
"""
Translation rule registry.

Maps marker kinds to translation functions. Rules are consulted in
registration order and the first matching rule wins; a marker no rule
matches is dropped. New marker kinds are supported by registering a rule,
not by growing a conditional chain.

Usage:
    from modelgen.translate.registry import TranslationRule, default_registry

    registry = default_registry().copy()
    registry.register(TranslationRule(MyMarker, emit_my_marker))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Type

from modelgen.exceptions import DuplicateRuleError, TranslationRuleError
from modelgen.logging.logger import get_logger
from modelgen.markers import Marker
from modelgen.reflection import PropertyDescriptor

logger = get_logger(__name__)

TypeRef = Callable[[Any], str]
EmitFn = Callable[[Any, PropertyDescriptor, TypeRef], Optional[str]]
GuardFn = Callable[[Any, PropertyDescriptor], bool]


@dataclass(frozen=True)
class TranslationRule:
    """
    One marker kind and how to turn it into annotation text.

    Args:
        kind: Marker class the rule handles
        emit: ``(marker, info, ref) -> text | None``; None suppresses the marker
        exact: Match ``kind`` exactly instead of any subclass
        guard: Extra applicability check; a failing guard lets later rules match
    """

    kind: Type[Marker]
    emit: EmitFn
    exact: bool = False
    guard: Optional[GuardFn] = None

    def matches(self, marker: Marker, info: PropertyDescriptor) -> bool:
        if self.exact:
            if type(marker) is not self.kind:
                return False
        elif not isinstance(marker, self.kind):
            return False
        return self.guard is None or self.guard(marker, info)


@dataclass
class TranslationRegistry:
    """Ordered collection of translation rules."""

    name: str = "attribute"
    _rules: List[TranslationRule] = field(default_factory=list, repr=False)

    def register(self, rule: TranslationRule, before: Optional[Type[Marker]] = None) -> None:
        """
        Register a rule, at the end or ahead of the rule for ``before``.

        Raises:
            DuplicateRuleError: If a rule for the same kind and match mode exists
            TranslationRuleError: If ``before`` has no registered rule
        """
        if not isinstance(rule.kind, type) or not issubclass(rule.kind, Marker):
            raise TranslationRuleError(f"{self.name} rule kind must be a Marker class, got {rule.kind!r}")

        for existing in self._rules:
            if existing.kind is rule.kind and existing.exact == rule.exact:
                raise DuplicateRuleError(f"Duplicate {self.name} rule for {rule.kind.__name__!r}")

        if before is None:
            self._rules.append(rule)
        else:
            for i, existing in enumerate(self._rules):
                if existing.kind is before:
                    self._rules.insert(i, rule)
                    break
            else:
                raise TranslationRuleError(
                    f"Cannot insert before {before.__name__!r}: no {self.name} rule registered"
                )
        logger.debug(f"Registered {self.name} rule: {rule.kind.__name__!r}")

    def find(self, marker: Marker, info: PropertyDescriptor) -> Optional[TranslationRule]:
        for rule in self._rules:
            if rule.matches(marker, info):
                return rule
        return None

    def kinds(self) -> List[Type[Marker]]:
        return [rule.kind for rule in self._rules]

    def copy(self) -> "TranslationRegistry":
        return TranslationRegistry(name=self.name, _rules=list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["TranslationRule", "TranslationRegistry", "TypeRef", "EmitFn", "GuardFn"]
