# modelgen/reflection.py
"""
Metadata reflection.

Turns a component class into the ordered list of property descriptors the
synthesizer works on. Two kinds of members are reflected:

- public annotated attributes (dataclass fields, plain class annotations)
- public ``property`` objects with an annotated getter

The inheritance chain is flattened most-derived first and members are
deduplicated by name (first occurrence wins). Markers travel in
``typing.Annotated`` metadata and become the descriptor's attributes.

Usage:
    from modelgen.reflection import candidate_properties

    for info in candidate_properties(GridOptions):
        print(info.name, info.property_type, info.get_attributes())
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import inspect
import types
import typing
import uuid
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, Union

from modelgen.markers import DefaultValue, Marker, Obsolete

NoneType = type(None)

PRIMITIVE_TYPES: Tuple[type, ...] = (bool, int, float, complex)

STRUCT_TYPES: Tuple[type, ...] = (
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    Decimal,
    uuid.UUID,
)


# =============================================================================
# Type Helpers
# =============================================================================


def strip_annotated(tp: Any) -> Tuple[Any, List[Any]]:
    """Split ``Annotated[T, *meta]`` into ``(T, meta)``."""
    if typing.get_origin(tp) is typing.Annotated:
        base, *meta = typing.get_args(tp)
        inner, more = strip_annotated(base)
        return inner, more + meta
    return tp, []


def _is_union(tp: Any) -> bool:
    origin = typing.get_origin(tp)
    return origin is Union or origin is types.UnionType


def is_optional(tp: Any) -> bool:
    """True for ``Optional[T]`` / ``T | None``."""
    return _is_union(tp) and NoneType in typing.get_args(tp)


def unwrap_optional(tp: Any) -> Any:
    """``Optional[T]`` → ``T``; anything else is returned unchanged."""
    if is_optional(tp):
        args = [a for a in typing.get_args(tp) if a is not NoneType]
        if len(args) == 1:
            return args[0]
        return Union[tuple(args)]
    return tp


def make_nullable(tp: Any) -> Any:
    """Wrap ``tp`` as ``Optional[tp]`` unless it already has that shape."""
    if is_optional(tp):
        return tp
    return Optional[tp]


def is_enum_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Enum)


def _is_frozen_dataclass(tp: type) -> bool:
    if not dataclasses.is_dataclass(tp):
        return False
    return bool(tp.__dataclass_params__.frozen)  # type: ignore[attr-defined]


def is_struct(tp: Any) -> bool:
    """
    True for struct-like value types.

    Struct-like means value semantics without being a primitive or an enum:
    the standard value types (dates, times, Decimal, UUID) and frozen
    dataclasses.
    """
    tp = unwrap_optional(strip_annotated(tp)[0])
    if not isinstance(tp, type) or is_enum_type(tp) or issubclass(tp, PRIMITIVE_TYPES):
        return False
    return issubclass(tp, STRUCT_TYPES) or _is_frozen_dataclass(tp)


def behave_like_value_type(tp: Any) -> bool:
    """True when values of ``tp`` are copied, not referenced as model nodes."""
    tp = unwrap_optional(strip_annotated(tp)[0])
    if typing.get_origin(tp) is typing.Literal:
        return True
    if _is_union(tp):
        return all(behave_like_value_type(a) for a in typing.get_args(tp))
    if tp is str:
        return True
    if isinstance(tp, type) and (issubclass(tp, PRIMITIVE_TYPES) or is_enum_type(tp)):
        return True
    return is_struct(tp)


def is_enumerable(tp: Any) -> bool:
    """True for iterable types other than ``str`` (lists, dicts, sets ...)."""
    tp = unwrap_optional(strip_annotated(tp)[0])
    origin = typing.get_origin(tp) or tp
    if not isinstance(origin, type) or is_enum_type(origin):
        return False
    if issubclass(origin, str):
        return False
    return issubclass(origin, collections.abc.Iterable)


def is_valid_enum(tp: Any, value: Any) -> bool:
    """For enum types, check that ``value`` names a defined member."""
    tp = unwrap_optional(strip_annotated(tp)[0])
    if not is_enum_type(tp):
        return True
    if isinstance(value, tp):
        return True
    try:
        tp(value)
    except ValueError:
        return False
    return True


# =============================================================================
# Property Descriptor
# =============================================================================


class PropertyDescriptor:
    """
    Mutable view over a reflected property.

    Callers may rename, retype or re-mark a descriptor before emission; the
    reflected class is never touched.
    """

    def __init__(
        self,
        name: str,
        property_type: Any,
        declaring_type: type,
        can_read: bool,
        can_write: bool,
        attributes: Optional[List[Marker]] = None,
        reflected_type: Optional[type] = None,
    ):
        self._name = name
        self._property_type = property_type
        self.declaring_type = declaring_type
        self.can_read = can_read
        self.can_write = can_write
        self.reflected_type = reflected_type or declaring_type
        # Default values are supplied by callers, never by the reflected source.
        self._attributes: List[Marker] = [
            a for a in (attributes or []) if not isinstance(a, DefaultValue)
        ]

    @property
    def name(self) -> str:
        return self._name

    @property
    def property_type(self) -> Any:
        return self._property_type

    def set_name(self, name: str) -> None:
        self._name = name

    def set_property_type(self, tp: Any) -> None:
        self._property_type = tp

    def get_attributes(self, kind: Optional[Type[Marker]] = None) -> List[Marker]:
        if kind is None:
            return list(self._attributes)
        return [a for a in self._attributes if isinstance(a, kind)]

    def has_attribute(self, kind: Type[Marker]) -> bool:
        return any(isinstance(a, kind) for a in self._attributes)

    def add_attribute(self, attribute: Marker) -> None:
        self._attributes.append(attribute)

    def remove_attribute(self, attribute: Marker) -> None:
        for i, existing in enumerate(self._attributes):
            if existing is attribute:
                del self._attributes[i]
                return

    def remove_attributes(self, kind: Type[Marker]) -> None:
        self._attributes = [a for a in self._attributes if not isinstance(a, kind)]

    def remove_invalid_type_converters(self, prefix: str) -> None:
        """Drop type converters whose dotted name starts with ``prefix``."""
        from modelgen.markers import TypeConverter

        self._attributes = [
            a
            for a in self._attributes
            if not (isinstance(a, TypeConverter) and a.converter_type_name.startswith(prefix))
        ]

    def __repr__(self) -> str:
        return (
            f"PropertyDescriptor(name={self._name!r}, type={self._property_type!r}, "
            f"declaring_type={self.declaring_type.__name__}, "
            f"can_read={self.can_read}, can_write={self.can_write})"
        )


# =============================================================================
# Reflection
# =============================================================================


def _own_property_objects(klass: type) -> Iterator[Tuple[str, property]]:
    for name, value in klass.__dict__.items():
        if isinstance(value, property):
            yield name, value


def _resolve_hints(obj: Any) -> Dict[str, Any]:
    return typing.get_type_hints(obj, include_extras=True)


def reflect_properties(cls: type) -> List[PropertyDescriptor]:
    """
    All public properties of ``cls``, inheritance flattened.

    Most-derived declarations come first; duplicate names keep the first
    occurrence.
    """
    hints = _resolve_hints(cls)
    seen = set()
    result: List[PropertyDescriptor] = []

    for klass in cls.__mro__:
        if klass is object:
            continue

        frozen = _is_frozen_dataclass(klass)
        for name in inspect.get_annotations(klass):
            if name.startswith("_") or name in seen or name not in hints:
                continue
            declared = hints[name]
            base, meta = strip_annotated(declared)
            origin = typing.get_origin(base)
            if origin is typing.ClassVar:
                continue
            writable = not frozen
            if origin is typing.Final or base is typing.Final:
                writable = False
                args = typing.get_args(base)
                base = args[0] if args else Any
                base, more = strip_annotated(base)
                meta = meta + more
            seen.add(name)
            result.append(
                PropertyDescriptor(
                    name,
                    base,
                    klass,
                    can_read=True,
                    can_write=writable,
                    attributes=[m for m in meta if isinstance(m, Marker)],
                    reflected_type=cls,
                )
            )

        for name, prop in _own_property_objects(klass):
            if name.startswith("_") or name in seen or prop.fget is None:
                continue
            returns = _resolve_hints(prop.fget).get("return")
            if returns is None:
                continue
            base, meta = strip_annotated(returns)
            seen.add(name)
            result.append(
                PropertyDescriptor(
                    name,
                    base,
                    klass,
                    can_read=True,
                    can_write=prop.fset is not None,
                    attributes=[m for m in meta if isinstance(m, Marker)],
                    reflected_type=cls,
                )
            )

    return result


def is_valid_property(info: PropertyDescriptor) -> bool:
    """
    Reflector-level validity.

    Obsolete members and non-string iterables are never emitted; value
    members must be readable and writable, nested members may be read-only.
    """
    if info.has_attribute(Obsolete):
        return False
    if is_enumerable(info.property_type):
        return False
    if not behave_like_value_type(info.property_type):
        return True
    return info.can_read and info.can_write


def candidate_properties(cls: Optional[type]) -> List[PropertyDescriptor]:
    """Ordered, deduplicated property descriptors eligible for emission."""
    if cls is None:
        return []
    return [info for info in reflect_properties(cls) if is_valid_property(info)]


__all__ = [
    "PropertyDescriptor",
    "candidate_properties",
    "reflect_properties",
    "is_valid_property",
    "strip_annotated",
    "is_optional",
    "unwrap_optional",
    "make_nullable",
    "is_enum_type",
    "is_struct",
    "behave_like_value_type",
    "is_enumerable",
    "is_valid_enum",
    "PRIMITIVE_TYPES",
    "STRUCT_TYPES",
]
