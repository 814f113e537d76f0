"""Default style policy.

Relative defaults derive a marker's style from the style it is applied to
(bold only changes weight). Theme-based defaults (code, highlight, links) read
colours from a Theme so a dark host gets legible results.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from spanmark.styling.style import (
    Color,
    Decoration,
    FontStyle,
    FontWeight,
    TextStyle,
    add_decoration,
)

DEFAULT_FONT_SIZE = 14.0
DEFAULT_STRIKETHROUGH_THICKNESS = 1.5
DEFAULT_UNDERLINE_THICKNESS = 1.0

SCRIPT_FONT_SIZE_FACTOR = 0.6
# Baseline shift as a fraction of font size; negative moves up
SUPERSCRIPT_BASELINE_FACTOR = -0.4
SUBSCRIPT_BASELINE_FACTOR = 0.4
# Vertical padding of a script run, as a multiple of its baseline shift
SCRIPT_PADDING_FACTOR = 2.0

HIGHLIGHT_ALPHA_LIGHT = 0.5
HIGHLIGHT_ALPHA_DARK = 0.4

CODE_FONT_FAMILY = "monospace"
CODE_FONT_FAMILY_FALLBACK: tuple[str, ...] = ("RobotoMono", "Menlo", "Courier New", "monospace")

LINK_CURSOR = "click"

YELLOW = Color(0xFF, 0xEB, 0x3B)
YELLOW_700 = Color(0xFB, 0xC0, 0x2D)


class Brightness(Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True, slots=True)
class Theme:
    """Host colours the theme-based defaults draw from."""

    brightness: Brightness
    primary: Color
    code_background: Color
    code_foreground: Color
    on_surface: Color


LIGHT_THEME = Theme(
    brightness=Brightness.LIGHT,
    primary=Color(0x67, 0x50, 0xA4),
    code_background=Color(0xF3, 0xED, 0xF7),
    code_foreground=Color(0x49, 0x45, 0x4F),
    on_surface=Color(0x1D, 0x1B, 0x20),
)

DARK_THEME = Theme(
    brightness=Brightness.DARK,
    primary=Color(0xD0, 0xBC, 0xFF),
    code_background=Color(0x21, 0x1F, 0x26),
    code_foreground=Color(0xCA, 0xC4, 0xD0),
    on_surface=Color(0xE6, 0xE0, 0xE9),
)


def bold_style(base: TextStyle) -> TextStyle:
    return base.copy_with(font_weight=FontWeight.BOLD)


def italic_style(base: TextStyle) -> TextStyle:
    return base.copy_with(font_style=FontStyle.ITALIC)


def bold_italic_style(base: TextStyle) -> TextStyle:
    return base.copy_with(font_weight=FontWeight.BOLD, font_style=FontStyle.ITALIC)


def strikethrough_style(
    base: TextStyle, thickness: float = DEFAULT_STRIKETHROUGH_THICKNESS
) -> TextStyle:
    """Add a line-through, keeping any existing decoration."""
    return add_decoration(base, Decoration.LINE_THROUGH).copy_with(
        decoration_color=base.decoration_color or base.color,
        decoration_thickness=thickness,
    )


def underline_style(base: TextStyle) -> TextStyle:
    """Add an underline, keeping any existing decoration."""
    return add_decoration(base, Decoration.UNDERLINE).copy_with(
        decoration_color=base.decoration_color or base.color,
        decoration_thickness=base.decoration_thickness or DEFAULT_UNDERLINE_THICKNESS,
    )


def script_style(base: TextStyle, factor: float = SCRIPT_FONT_SIZE_FACTOR) -> TextStyle:
    """Shrink the font for superscript or subscript."""
    return base.copy_with(font_size=(base.font_size or DEFAULT_FONT_SIZE) * factor)


def code_style(base: TextStyle, theme: Theme) -> TextStyle:
    return base.copy_with(
        font_family=CODE_FONT_FAMILY,
        font_family_fallback=CODE_FONT_FAMILY_FALLBACK,
        background_color=theme.code_background,
        color=theme.code_foreground,
        letter_spacing=base.letter_spacing or 0.0,
    )


def highlight_style(base: TextStyle, theme: Theme) -> TextStyle:
    if theme.brightness is Brightness.LIGHT:
        background = YELLOW.with_alpha(HIGHLIGHT_ALPHA_LIGHT)
    else:
        background = YELLOW_700.with_alpha(HIGHLIGHT_ALPHA_DARK)
    return base.copy_with(
        background_color=background,
        color=base.color or theme.on_surface,
    )


def link_style(base: TextStyle, theme: Theme) -> TextStyle:
    return base.merge(
        TextStyle(
            color=theme.primary,
            decoration=Decoration.UNDERLINE,
            decoration_color=theme.primary,
        )
    )


__all__ = [
    "CODE_FONT_FAMILY",
    "CODE_FONT_FAMILY_FALLBACK",
    "DARK_THEME",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_STRIKETHROUGH_THICKNESS",
    "DEFAULT_UNDERLINE_THICKNESS",
    "HIGHLIGHT_ALPHA_DARK",
    "HIGHLIGHT_ALPHA_LIGHT",
    "LIGHT_THEME",
    "LINK_CURSOR",
    "SCRIPT_FONT_SIZE_FACTOR",
    "SCRIPT_PADDING_FACTOR",
    "SUBSCRIPT_BASELINE_FACTOR",
    "SUPERSCRIPT_BASELINE_FACTOR",
    "Brightness",
    "Theme",
    "bold_italic_style",
    "bold_style",
    "code_style",
    "highlight_style",
    "italic_style",
    "link_style",
    "script_style",
    "strikethrough_style",
    "underline_style",
]
