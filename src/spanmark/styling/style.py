"""Platform-neutral text style record.

TextStyle mirrors the attributes a layout engine needs for inline runs. Every
field is optional; ``None`` means "inherit", which is what makes ``merge``
layer one style over another without clobbering unrelated attributes.

Thread Safety:
    All types here are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum, Flag, auto
from typing import Any, NamedTuple


class Color(NamedTuple):
    """An sRGB colour with 8-bit channels and a 0.0-1.0 alpha."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` or ``#rrggbbaa``."""
        digits = value.lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"expected #rrggbb or #rrggbbaa, got {value!r}")
        red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return cls(red, green, blue, alpha)

    def with_alpha(self, alpha: float) -> Color:
        return self._replace(alpha=min(1.0, max(0.0, alpha)))


class FontWeight(Enum):
    NORMAL = 400
    BOLD = 700


class FontStyle(Enum):
    NORMAL = "normal"
    ITALIC = "italic"


class Decoration(Flag):
    """Text decoration lines; combine with ``|``."""

    NONE = 0
    UNDERLINE = auto()
    OVERLINE = auto()
    LINE_THROUGH = auto()

    def contains(self, other: Decoration) -> bool:
        return (self & other) == other


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Immutable text style.

    Attributes:
        color: Foreground colour
        background_color: Fill behind the glyphs
        font_size: Size in logical pixels
        font_weight: Normal or bold
        font_style: Normal or italic
        font_family: Primary family name
        font_family_fallback: Families tried when the primary lacks a glyph
        letter_spacing: Extra space between glyphs (may be negative)
        decoration: Decoration lines
        decoration_color: Colour of decoration lines
        decoration_thickness: Thickness multiplier of decoration lines

    """

    color: Color | None = None
    background_color: Color | None = None
    font_size: float | None = None
    font_weight: FontWeight | None = None
    font_style: FontStyle | None = None
    font_family: str | None = None
    font_family_fallback: tuple[str, ...] | None = None
    letter_spacing: float | None = None
    decoration: Decoration | None = None
    decoration_color: Color | None = None
    decoration_thickness: float | None = None

    def copy_with(self, **changes: Any) -> TextStyle:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def merge(self, other: TextStyle | None) -> TextStyle:
        """Return this style overlaid with every non-None field of other."""
        if other is None:
            return self
        changes = {
            f.name: value
            for f in fields(other)
            if (value := getattr(other, f.name)) is not None
        }
        return replace(self, **changes) if changes else self


def merge_text_styles(base: TextStyle, overlay: TextStyle) -> TextStyle:
    """Merge overlay onto base, combining decorations instead of replacing them.

    A plain ``merge`` would let an overlay's underline erase the base's
    line-through. Here an overlay decoration is added to the base's unless the
    overlay explicitly sets ``Decoration.NONE``, which clears all lines.

    """
    merged = base.merge(overlay)
    base_decoration = base.decoration
    overlay_decoration = overlay.decoration

    if overlay_decoration is None or overlay_decoration == Decoration.NONE:
        return merged
    if base_decoration is None or base_decoration == Decoration.NONE:
        return merged
    return merged.copy_with(decoration=base_decoration | overlay_decoration)


def add_decoration(style: TextStyle, decoration: Decoration) -> TextStyle:
    """Return style with decoration added to any it already has."""
    current = style.decoration
    if current is None or current == Decoration.NONE:
        return style.copy_with(decoration=decoration)
    if current.contains(decoration):
        return style
    return style.copy_with(decoration=current | decoration)


__all__ = [
    "Color",
    "Decoration",
    "FontStyle",
    "FontWeight",
    "TextStyle",
    "add_decoration",
    "merge_text_styles",
]
