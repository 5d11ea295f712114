# modelgen/translate/translator.py
"""
Attribute translator.

Turns the markers of one property descriptor into the annotation texts of
the generated member, using a TranslationRegistry.
"""

from __future__ import annotations

from typing import List, Optional

from modelgen.markers import Localizable, Marker
from modelgen.reflection import PropertyDescriptor
from modelgen.translate.registry import TranslationRegistry, TypeRef
from modelgen.translate.rules import default_registry


class AttributeTranslator:
    """
    Translates markers through an ordered rule registry.

    Args:
        ref: Renders (and records) type references used in emitted text
        registry: Rules to consult; defaults to the stock registry
    """

    def __init__(self, ref: TypeRef, registry: Optional[TranslationRegistry] = None):
        self.ref = ref
        self.registry = registry or default_registry()

    def translate(self, marker: Optional[Marker], info: PropertyDescriptor) -> Optional[str]:
        """Annotation text for ``marker``, or None when no rule emits one."""
        if marker is None:
            return None
        rule = self.registry.find(marker, info)
        if rule is None:
            return None
        return rule.emit(marker, info, self.ref) or None

    def translate_all(self, info: PropertyDescriptor) -> List[str]:
        """Annotation texts for every marker of ``info``, in marker order."""
        markers = info.get_attributes()
        if info.property_type is str and not info.has_attribute(Localizable):
            markers.append(Localizable(True))

        texts = []
        for marker in markers:
            text = self.translate(marker, info)
            if text:
                texts.append(text)
        return texts


__all__ = ["AttributeTranslator"]
