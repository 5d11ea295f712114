# modelgen/options.py
"""
Framework base types for component option groups.

Component classes expose their settings through option objects (layout
options, appearance, formatting). A property whose type derives from one of
these bases is exposed as a nested model node even though it is not a value.
"""

from __future__ import annotations


class BaseOptions:
    """Root of all option groups of a component."""


class AppearanceOptions(BaseOptions):
    """Visual appearance settings (colors, fonts, alignment)."""


class FormatOptions(BaseOptions):
    """Display and edit format settings."""


class TextOptions(BaseOptions):
    """Text rendering settings (wrapping, trimming, alignment)."""


__all__ = ["BaseOptions", "AppearanceOptions", "FormatOptions", "TextOptions"]
