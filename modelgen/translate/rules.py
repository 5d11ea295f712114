# modelgen/translate/rules.py
"""
Stock translation rules.

Each rule turns one marker kind into the annotation text placed on a
generated member. Order matters: the first matching rule wins.

    1. Localizable on str properties     7. Description / LocalizedDescription
    2. Category                          8. DefaultValue
    3. Required                          9. ModelValueCalculatorWrapper
    4. Editor                           10. ModelReadOnly
    5. RefreshProperties                11. ReadOnly
    6. TypeConverter
"""

from __future__ import annotations

import importlib
from functools import lru_cache
from typing import Optional

from modelgen.markers import (
    Category,
    DefaultValue,
    Description,
    Editor,
    Localizable,
    LocalizedDescription,
    ModelReadOnly,
    ModelValueCalculator,
    ModelValueCalculatorWrapper,
    ReadOnly,
    RefreshProperties,
    Required,
    TypeConverter,
)
from modelgen.reflection import PropertyDescriptor, is_enum_type, unwrap_optional
from modelgen.translate.literals import format_literal, quote
from modelgen.translate.registry import TranslationRegistry, TranslationRule, TypeRef

# =============================================================================
# Emitters
# =============================================================================


def _is_text_property(marker: object, info: PropertyDescriptor) -> bool:
    return info.property_type is str


def emit_localizable(marker: Localizable, info: PropertyDescriptor, ref: TypeRef) -> str:
    return f"{ref(Localizable)}({format_literal(marker.is_localizable, ref)})"


def emit_category(marker: Category, info: PropertyDescriptor, ref: TypeRef) -> str:
    return f"{ref(Category)}({quote(marker.category)})"


def emit_required(marker: Required, info: PropertyDescriptor, ref: TypeRef) -> str:
    return f"{ref(type(marker))}()"


def emit_editor(marker: Editor, info: PropertyDescriptor, ref: TypeRef) -> str:
    return (
        f"{ref(Editor)}({quote(marker.editor_type_name)}, "
        f"{quote(marker.editor_base_type_name)})"
    )


def emit_refresh_properties(marker: RefreshProperties, info: PropertyDescriptor, ref: TypeRef) -> str:
    mode = marker.refresh
    return f"{ref(RefreshProperties)}({ref(type(mode))}.{mode.name})"


def _is_design_name(name: str) -> bool:
    return ".design." in name.lower() or name.lower().endswith(".design")


def _is_public_name(name: str) -> bool:
    return not any(part.startswith("_") for part in name.split("."))


@lru_cache(maxsize=256)
def _locate(dotted: str) -> Optional[type]:
    """Import ``module.Name`` (longest importable module prefix wins)."""
    parts = dotted.split(".")
    for i in range(len(parts) - 1, 0, -1):
        try:
            obj = importlib.import_module(".".join(parts[:i]))
        except ImportError:
            continue
        for attr in parts[i:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                return None
        return obj if isinstance(obj, type) else None
    return None


def resolve_converter(marker: TypeConverter) -> Optional[type]:
    """The converter class when it is resolvable, public and not design-time."""
    name = marker.converter_type_name
    if _is_design_name(name):
        return None
    converter = marker.converter if isinstance(marker.converter, type) else _locate(name)
    if converter is None:
        return None
    full_name = f"{converter.__module__}.{converter.__qualname__}"
    if not _is_public_name(full_name) or "<locals>" in full_name or _is_design_name(full_name):
        return None
    return converter


def emit_type_converter(marker: TypeConverter, info: PropertyDescriptor, ref: TypeRef) -> Optional[str]:
    converter = resolve_converter(marker)
    if converter is None:
        return None
    return f"{ref(TypeConverter)}({ref(converter)})"


def emit_description(marker: Description, info: PropertyDescriptor, ref: TypeRef) -> str:
    return f"{ref(Description)}({quote(marker.description)})"


def emit_default_value(marker: DefaultValue, info: PropertyDescriptor, ref: TypeRef) -> str:
    value_type = marker.value_type
    if value_type is None and isinstance(marker.value, int) and not isinstance(marker.value, bool):
        declared = unwrap_optional(info.property_type)
        if is_enum_type(declared):
            value_type = declared
    return f"{ref(DefaultValue)}({format_literal(marker.value, ref, value_type)})"


def emit_value_calculator(marker: ModelValueCalculatorWrapper, info: PropertyDescriptor, ref: TypeRef) -> str:
    if marker.calculator_type is not None:
        return f"{ref(ModelValueCalculator)}({ref(marker.calculator_type)})"
    return f"{ref(ModelValueCalculator)}(link_value={format_literal(marker.link_value, ref)})"


def emit_model_read_only(marker: ModelReadOnly, info: PropertyDescriptor, ref: TypeRef) -> str:
    return f"{ref(ModelReadOnly)}({ref(marker.calculator_type)})"


def emit_read_only(marker: ReadOnly, info: PropertyDescriptor, ref: TypeRef) -> str:
    return f"{ref(ReadOnly)}({format_literal(marker.is_read_only, ref)})"


# =============================================================================
# Default Registry
# =============================================================================


def build_default_registry() -> TranslationRegistry:
    registry = TranslationRegistry(name="attribute")
    registry.register(TranslationRule(Localizable, emit_localizable, guard=_is_text_property))
    registry.register(TranslationRule(Category, emit_category, exact=True))
    registry.register(TranslationRule(Required, emit_required))
    registry.register(TranslationRule(Editor, emit_editor))
    registry.register(TranslationRule(RefreshProperties, emit_refresh_properties))
    registry.register(TranslationRule(TypeConverter, emit_type_converter))
    registry.register(TranslationRule(LocalizedDescription, emit_description, exact=True))
    registry.register(TranslationRule(Description, emit_description))
    registry.register(TranslationRule(DefaultValue, emit_default_value, exact=True))
    registry.register(TranslationRule(ModelValueCalculatorWrapper, emit_value_calculator, exact=True))
    registry.register(TranslationRule(ModelReadOnly, emit_model_read_only, exact=True))
    registry.register(TranslationRule(ReadOnly, emit_read_only, exact=True))
    return registry


_DEFAULT_REGISTRY: Optional[TranslationRegistry] = None


def default_registry() -> TranslationRegistry:
    """Shared stock registry. Copy it before registering extra rules."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = build_default_registry()
    return _DEFAULT_REGISTRY


__all__ = [
    "build_default_registry",
    "default_registry",
    "resolve_converter",
]
