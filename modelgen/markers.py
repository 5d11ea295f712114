# modelgen/markers.py
"""
Declarative markers.

Markers are the annotations modelgen reads from component classes and
writes onto generated contracts. Property markers travel in
``typing.Annotated`` metadata:

    class GridOptions(BaseOptions):
        ShowFooter: Annotated[bool, Serializable(), Category("Layout")]

Class markers decorate classes:

    @ClassName("app.models.Person")
    @ModelAbstractClass()
    class IModelAppPerson(ModelNodeEnabled): ...

Every marker is an immutable value object, so the same instance may be
shared between reflected descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar, Union

T = TypeVar("T", bound=type)

MARKERS_ATTR = "__model_markers__"


class Marker:
    """Base class of every modelgen marker."""

    __slots__ = ()


class ClassMarker(Marker):
    """A marker that is applied to a class as a decorator."""

    __slots__ = ()

    def __call__(self, cls: T) -> T:
        # Markers are kept per class, they are not inherited from bases.
        own = cls.__dict__.get(MARKERS_ATTR)
        if own is None:
            own = []
            setattr(cls, MARKERS_ATTR, own)
        own.append(self)
        return cls


def class_markers(cls: type, kind: Optional[Type[Marker]] = None) -> List[Marker]:
    """Markers applied directly to ``cls``, optionally filtered by kind."""
    own = list(cls.__dict__.get(MARKERS_ATTR, ()))
    if kind is None:
        return own
    return [m for m in own if isinstance(m, kind)]


# =============================================================================
# Property Markers
# =============================================================================


@dataclass(frozen=True)
class Browsable(Marker):
    """Controls whether a property is visible to the model."""

    browsable: bool = True


@dataclass(frozen=True)
class Obsolete(Marker):
    """The property is obsolete and never reflected."""

    message: str = ""


@dataclass(frozen=True)
class Serializable(Marker):
    """Marks a property as persisted model state."""


@dataclass(frozen=True)
class Localizable(Marker):
    is_localizable: bool = True


@dataclass(frozen=True)
class Category(Marker):
    category: str


@dataclass(frozen=True)
class Required(Marker):
    pass


@dataclass(frozen=True)
class Editor(Marker):
    """Names the editor used for a property and the editor base type."""

    editor_type_name: str
    editor_base_type_name: str


class RefreshMode(Enum):
    NONE = 0
    ALL = 1
    REPAINT = 2


@dataclass(frozen=True)
class RefreshProperties(Marker):
    refresh: RefreshMode = RefreshMode.NONE


@dataclass(frozen=True)
class TypeConverter(Marker):
    """
    Converter used for a property value.

    ``converter`` is either a class or a dotted ``module.Name`` string.
    """

    converter: Union[type, str]

    @property
    def converter_type_name(self) -> str:
        if isinstance(self.converter, str):
            return self.converter
        return f"{self.converter.__module__}.{self.converter.__qualname__}"


@dataclass(frozen=True)
class Description(Marker):
    description: str


@dataclass(frozen=True)
class LocalizedDescription(Marker):
    """Framework description variant, always emitted as ``Description``."""

    description: str


@dataclass(frozen=True)
class DefaultValue(Marker):
    """
    Default value of a property.

    ``value_type`` pins the literal's type when ``value`` is stored in a raw
    form, e.g. an ``int`` standing for an enum member.
    """

    value: Any
    value_type: Optional[Any] = None


@dataclass(frozen=True)
class NullValue(Marker):
    """Emit the declared property type unchanged (no optional wrapping)."""


@dataclass(frozen=True)
class ModelValueCalculator(Marker):
    """Value calculator of a generated member: a calculator type or a link path."""

    calculator_type: Optional[type] = None
    link_value: Optional[str] = None
    node_name: Optional[str] = None
    node_type: Optional[type] = None
    property_name: Optional[str] = None


@dataclass(frozen=True)
class ModelValueCalculatorWrapper(Marker):
    """
    Source-side wrapper around a value calculator.

    Translated into a ``ModelValueCalculator`` on the generated member.
    """

    calculator_type: Optional[type] = None
    link_value: Optional[str] = None
    node_name: Optional[str] = None
    node_type_name: Optional[str] = None
    property_name: Optional[str] = None

    @classmethod
    def wrap(
        cls,
        calculator: ModelValueCalculator,
        calculator_type: Optional[type] = None,
    ) -> "ModelValueCalculatorWrapper":
        return cls(
            calculator_type=calculator_type,
            link_value=calculator.link_value,
            node_name=calculator.node_name,
            node_type_name=calculator.node_type.__name__ if calculator.node_type else None,
            property_name=calculator.property_name,
        )


@dataclass(frozen=True)
class ModelReadOnly(Marker):
    """Read-only state of a member decided by a calculator type."""

    calculator_type: type


@dataclass(frozen=True)
class ReadOnly(Marker):
    is_read_only: bool = True


# =============================================================================
# Class Markers
# =============================================================================


@dataclass(frozen=True)
class ClassName(ClassMarker):
    """Identity marker: fully qualified name of a contract's backing class."""

    type_name: str

    @property
    def simple_name(self) -> str:
        return self.type_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ModelAbstractClass(ClassMarker):
    """The contract describes an abstract model node."""


@dataclass(frozen=True)
class ModelDisplayName(ClassMarker):
    name: str


__all__ = [
    "Marker",
    "ClassMarker",
    "class_markers",
    "Browsable",
    "Obsolete",
    "Serializable",
    "Localizable",
    "Category",
    "Required",
    "Editor",
    "RefreshMode",
    "RefreshProperties",
    "TypeConverter",
    "Description",
    "LocalizedDescription",
    "DefaultValue",
    "NullValue",
    "ModelValueCalculator",
    "ModelValueCalculatorWrapper",
    "ModelReadOnly",
    "ReadOnly",
    "ClassName",
    "ModelAbstractClass",
    "ModelDisplayName",
]
