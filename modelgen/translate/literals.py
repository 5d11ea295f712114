# modelgen/translate/literals.py
"""
Literal formatting for marker arguments.

Values are rendered as Python source literals. Type references go through
the caller's ``ref`` function so that emitted names stay importable.
"""

from __future__ import annotations

import json
import math
import numbers
from enum import Enum
from typing import Any, Optional

from modelgen.exceptions import UnsupportedLiteral
from modelgen.reflection import is_enum_type, strip_annotated, unwrap_optional
from modelgen.translate.registry import TypeRef


def quote(text: str) -> str:
    """Double-quoted, escaped string literal."""
    return json.dumps(text, ensure_ascii=False)


def format_literal(value: Any, ref: TypeRef, value_type: Optional[Any] = None) -> str:
    """
    Render ``value`` as a source literal.

    Args:
        value: The value to render
        ref: Renders a type reference and records it for import
        value_type: Declared type of the value; lets raw ints resolve to enum members

    Raises:
        UnsupportedLiteral: For values no rule covers (a non-null char, a raw
            value naming no member of the enum type)
    """
    if value is None:
        return "None"

    tp = value_type if value_type is not None else type(value)
    tp = unwrap_optional(strip_annotated(tp)[0])

    if isinstance(value, str):
        return quote(value)

    if isinstance(value, bool):
        return "True" if value else "False"

    if is_enum_type(tp) or isinstance(value, Enum):
        enum_type = tp if is_enum_type(tp) else type(value)
        if not isinstance(value, enum_type):
            try:
                value = enum_type(value)
            except ValueError as e:
                raise UnsupportedLiteral(value) from e
        return f"{ref(enum_type)}.{value.name}"

    if isinstance(value, type):
        return ref(value)

    if isinstance(value, (bytes, bytearray)) and len(value) == 1:
        if value[0] == 0:
            return '""'
        raise UnsupportedLiteral(value)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return f"float({quote(repr(value))})"
        return repr(value)

    if isinstance(value, numbers.Number):
        return f"{ref(type(value))}({quote(str(value))})"

    raise UnsupportedLiteral(value)


__all__ = ["format_literal", "quote"]
