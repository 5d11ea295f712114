# modelgen/translate/__init__.py
"""
Marker translation.

Usage:
    from modelgen.translate import AttributeTranslator

    translator = AttributeTranslator(collector.ref)
    texts = translator.translate_all(info)
"""

from modelgen.translate.literals import format_literal, quote
from modelgen.translate.registry import TranslationRegistry, TranslationRule
from modelgen.translate.rules import build_default_registry, default_registry
from modelgen.translate.translator import AttributeTranslator

__all__ = [
    "AttributeTranslator",
    "TranslationRegistry",
    "TranslationRule",
    "build_default_registry",
    "default_registry",
    "format_literal",
    "quote",
]
