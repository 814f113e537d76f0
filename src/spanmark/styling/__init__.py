"""Styles and style resolution for spanmark runs."""

from spanmark.styling.defaults import DARK_THEME, LIGHT_THEME, Brightness, Theme
from spanmark.styling.resolver import (
    DefaultStyleResolver,
    FunctionStyleResolver,
    StyleOptions,
    StyleResolver,
)
from spanmark.styling.style import (
    Color,
    Decoration,
    FontStyle,
    FontWeight,
    TextStyle,
    merge_text_styles,
)

__all__ = [
    "DARK_THEME",
    "LIGHT_THEME",
    "Brightness",
    "Color",
    "Decoration",
    "DefaultStyleResolver",
    "FontStyle",
    "FontWeight",
    "FunctionStyleResolver",
    "StyleOptions",
    "StyleResolver",
    "TextStyle",
    "Theme",
    "merge_text_styles",
]
