# modelgen/filtering.py
"""
Property filtering and descriptor helpers.

A property filter decides, per descriptor, whether a member is emitted at
all. The stock filter checks browsability, required markers, reserved names
and a type-eligibility rule that depends on where the property is declared:

- declared on the component's base view type (or a subclass of it): the
  property type must derive from a known option base type OR behave like a
  value;
- declared anywhere else: the declaring type must derive from a known option
  base type AND the property type must behave like a value.

Filters are plain callables ``(PropertyDescriptor) -> bool`` and commonly
reshape the descriptor (category, defaults, calculators) before answering.

Usage:
    from modelgen.filtering import PropertyFilter

    descriptor = ComponentDescriptor(GridView, property_filter=PropertyFilter(GridView))
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Type

from modelgen.markers import (
    Browsable,
    Category,
    DefaultValue,
    Marker,
    ModelValueCalculatorWrapper,
    ReadOnly,
    Serializable,
)
from modelgen.options import AppearanceOptions, BaseOptions, FormatOptions, TextOptions
from modelgen.reflection import PropertyDescriptor, behave_like_value_type, strip_annotated, unwrap_optional

BASE_TYPES: List[type] = [BaseOptions, AppearanceOptions, FormatOptions, TextOptions]

EXCLUDED_RESERVED_NAMES: Set[str] = {"IsReadOnly"}

DEFAULT_REQUIRED_MARKERS: Sequence[Type[Marker]] = (Serializable,)


# =============================================================================
# Predicates
# =============================================================================


def _subclass_of_any(tp: Any, bases: Iterable[type]) -> bool:
    tp = unwrap_optional(strip_annotated(tp)[0])
    if not isinstance(tp, type):
        return False
    return any(issubclass(tp, base) for base in bases)


def is_browsable(info: PropertyDescriptor) -> bool:
    return all(marker.browsable for marker in info.get_attributes(Browsable))  # type: ignore[attr-defined]


def filter_attributes(info: PropertyDescriptor, kinds: Iterable[Type[Marker]]) -> bool:
    """True when ``info`` carries at least one marker of the given kinds."""
    return any(info.has_attribute(kind) for kind in kinds)


def _filter_core(
    info: PropertyDescriptor,
    component_base_type: type,
    base_types: Sequence[type],
) -> bool:
    value_like = behave_like_value_type(info.property_type)
    is_base_view_property = issubclass(info.declaring_type, component_base_type)
    if is_base_view_property:
        return _subclass_of_any(info.property_type, base_types) or value_like
    return _subclass_of_any(info.declaring_type, base_types) and value_like


def filter_property(
    info: PropertyDescriptor,
    component_base_type: type,
    base_types: Optional[Iterable[type]] = None,
    required: Optional[Sequence[Type[Marker]]] = None,
) -> bool:
    """
    Stock eligibility rule.

    Args:
        info: Descriptor under test
        component_base_type: The component's base view type
        base_types: Extra option base types, united with BASE_TYPES
        required: Marker kinds of which at least one must be present.
            Defaults to (Serializable,); pass () to disable the check.
    """
    if required is None:
        required = DEFAULT_REQUIRED_MARKERS
    known = list(BASE_TYPES)
    for tp in base_types or ():
        if tp not in known:
            known.append(tp)

    if not is_browsable(info):
        return False
    if required and not filter_attributes(info, required):
        return False
    if info.name in EXCLUDED_RESERVED_NAMES:
        return False
    return _filter_core(info, component_base_type, known)


class PropertyFilter:
    """Callable wrapper around filter_property for ComponentDescriptor."""

    def __init__(
        self,
        component_base_type: type,
        base_types: Optional[Iterable[type]] = None,
        required: Optional[Sequence[Type[Marker]]] = None,
    ):
        self.component_base_type = component_base_type
        self.base_types = list(base_types or ())
        self.required = required

    def __call__(self, info: PropertyDescriptor) -> bool:
        return filter_property(info, self.component_base_type, self.base_types, self.required)


# =============================================================================
# Descriptor Helpers
# =============================================================================


def set_browsable(info: PropertyDescriptor, names: Dict[str, bool]) -> None:
    if info.name in names:
        info.remove_attributes(Browsable)
        info.add_attribute(Browsable(names[info.name]))


def set_category(info: PropertyDescriptor, names: Dict[str, str]) -> None:
    if info.name in names:
        info.remove_attributes(Category)
        info.add_attribute(Category(names[info.name]))


def set_default_values(info: PropertyDescriptor, names: Dict[str, Any]) -> None:
    if info.name in names:
        info.remove_attributes(DefaultValue)
        info.add_attribute(DefaultValue(names[info.name]))


def create_value_calculator(info: PropertyDescriptor, calculator: object) -> None:
    """Make ``info`` a calculated, read-only member driven by ``calculator``."""
    info.remove_attributes(DefaultValue)
    info.add_attribute(ReadOnly(True))
    info.add_attribute(ModelValueCalculatorWrapper(calculator_type=type(calculator)))


def hide_value_calculator(info: PropertyDescriptor) -> None:
    info.add_attribute(Browsable(False))


__all__ = [
    "BASE_TYPES",
    "EXCLUDED_RESERVED_NAMES",
    "DEFAULT_REQUIRED_MARKERS",
    "PropertyFilter",
    "filter_property",
    "filter_attributes",
    "is_browsable",
    "set_browsable",
    "set_category",
    "set_default_values",
    "create_value_calculator",
    "hide_value_calculator",
]
