"""Style resolution for markers and links.

The span builders never decide what "bold" looks like. They hand each marker
type and the current style to a StyleResolver and use whatever comes back.

DefaultStyleResolver implements the usual policy: explicit StyleOptions layers
(nearest first) win, then theme-based and relative defaults fill in.

Example:
    >>> resolver = DefaultStyleResolver(
    ...     layers=[StyleOptions(bold_style=TextStyle(color=Color(255, 0, 0)))]
    ... )
    >>> resolver.resolve_style(MarkerType.BOLD, TextStyle(font_size=16)).color
    Color(red=255, green=0, blue=0, alpha=1.0)

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from spanmark.errors import StyleResolutionError
from spanmark.styling import defaults
from spanmark.styling.defaults import LIGHT_THEME, Theme
from spanmark.styling.style import TextStyle, merge_text_styles
from spanmark.tokens import MarkerType


@runtime_checkable
class StyleResolver(Protocol):
    """Contract between the span builders and the host's style policy.

    Thread Safety:
        Implementations must be safe to call from several builds at once;
        returning new styles from immutable inputs is enough.

    """

    def resolve_style(self, marker_type: MarkerType, style: TextStyle) -> TextStyle:
        """Return the style for text inside a marker of marker_type."""
        ...

    def resolve_link_style(self, style: TextStyle) -> TextStyle:
        """Return the style for link text, given the style around the link."""
        ...

    def script_baseline_offset(self, marker_type: MarkerType, style: TextStyle) -> float:
        """Vertical shift for script text in style; negative moves up."""
        ...


@dataclass(frozen=True, slots=True)
class StyleOptions:
    """One layer of style overrides.

    Any field left as None defers to the next layer, then to the defaults.
    Marker styles are merged onto the current style with decoration
    combining, so an overlay underline keeps an existing line-through.

    """

    bold_style: TextStyle | None = None
    italic_style: TextStyle | None = None
    bold_italic_style: TextStyle | None = None
    strikethrough_style: TextStyle | None = None
    code_style: TextStyle | None = None
    underline_style: TextStyle | None = None
    highlight_style: TextStyle | None = None
    superscript_style: TextStyle | None = None
    subscript_style: TextStyle | None = None
    link_style: TextStyle | None = None
    link_hover_style: TextStyle | None = None
    strikethrough_thickness: float | None = None
    script_font_size_factor: float | None = None
    superscript_baseline_factor: float | None = None
    subscript_baseline_factor: float | None = None


_OPTION_FIELDS: dict[MarkerType, str] = {
    MarkerType.BOLD: "bold_style",
    MarkerType.ITALIC: "italic_style",
    MarkerType.BOLD_ITALIC: "bold_italic_style",
    MarkerType.STRIKETHROUGH: "strikethrough_style",
    MarkerType.CODE: "code_style",
    MarkerType.UNDERLINE: "underline_style",
    MarkerType.HIGHLIGHT: "highlight_style",
    MarkerType.SUPERSCRIPT: "superscript_style",
    MarkerType.SUBSCRIPT: "subscript_style",
}


class DefaultStyleResolver:
    """Layered options over theme-aware defaults.

    Args:
        layers: Option layers, nearest (most specific) first
        theme: Colours for code, highlight and link defaults

    """

    __slots__ = ("_layers", "_theme")

    def __init__(self, layers: Sequence[StyleOptions] = (), theme: Theme = LIGHT_THEME) -> None:
        self._layers = tuple(layers)
        self._theme = theme

    @property
    def theme(self) -> Theme:
        return self._theme

    def _option(self, name: str) -> Any:
        for layer in self._layers:
            value = getattr(layer, name)
            if value is not None:
                return value
        return None

    def resolve_style(self, marker_type: MarkerType, style: TextStyle) -> TextStyle:
        base = style
        if marker_type.is_script:
            factor = self._option("script_font_size_factor")
            base = defaults.script_style(
                style, defaults.SCRIPT_FONT_SIZE_FACTOR if factor is None else factor
            )

        overlay: TextStyle | None = self._option(_OPTION_FIELDS[marker_type])
        if overlay is not None:
            return merge_text_styles(base, overlay)

        match marker_type:
            case MarkerType.BOLD:
                return defaults.bold_style(style)
            case MarkerType.ITALIC:
                return defaults.italic_style(style)
            case MarkerType.BOLD_ITALIC:
                return defaults.bold_italic_style(style)
            case MarkerType.STRIKETHROUGH:
                thickness = self._option("strikethrough_thickness")
                return defaults.strikethrough_style(
                    style,
                    defaults.DEFAULT_STRIKETHROUGH_THICKNESS if thickness is None else thickness,
                )
            case MarkerType.CODE:
                return defaults.code_style(style, self._theme)
            case MarkerType.UNDERLINE:
                return defaults.underline_style(style)
            case MarkerType.HIGHLIGHT:
                return defaults.highlight_style(style, self._theme)
            case MarkerType.SUPERSCRIPT | MarkerType.SUBSCRIPT:
                return base

    def resolve_link_style(self, style: TextStyle) -> TextStyle:
        overlay: TextStyle | None = self._option("link_style")
        if overlay is not None:
            return merge_text_styles(style, overlay)
        return defaults.link_style(style, self._theme)

    def resolve_link_hover_style(self, style: TextStyle) -> TextStyle:
        """Link style while hovered; the normal link style unless overridden."""
        link = self.resolve_link_style(style)
        overlay: TextStyle | None = self._option("link_hover_style")
        return link if overlay is None else merge_text_styles(link, overlay)

    def script_baseline_offset(self, marker_type: MarkerType, style: TextStyle) -> float:
        if marker_type is MarkerType.SUPERSCRIPT:
            factor = self._option("superscript_baseline_factor")
            default = defaults.SUPERSCRIPT_BASELINE_FACTOR
        else:
            factor = self._option("subscript_baseline_factor")
            default = defaults.SUBSCRIPT_BASELINE_FACTOR
        font_size = style.font_size or defaults.DEFAULT_FONT_SIZE
        return font_size * (default if factor is None else factor)


type StyleFunction = Callable[[MarkerType, TextStyle], TextStyle | None]


class FunctionStyleResolver:
    """Adapts a bare ``(marker_type, style) -> style`` callable.

    Link and script handling fall back to DefaultStyleResolver.

    Raises:
        StyleResolutionError: If the callable returns None.

    """

    __slots__ = ("_fallback", "_function")

    def __init__(self, function: StyleFunction, theme: Theme = LIGHT_THEME) -> None:
        self._function = function
        self._fallback = DefaultStyleResolver(theme=theme)

    def resolve_style(self, marker_type: MarkerType, style: TextStyle) -> TextStyle:
        result = self._function(marker_type, style)
        if result is None:
            raise StyleResolutionError(marker_type)
        return result

    def resolve_link_style(self, style: TextStyle) -> TextStyle:
        return self._fallback.resolve_link_style(style)

    def script_baseline_offset(self, marker_type: MarkerType, style: TextStyle) -> float:
        return self._fallback.script_baseline_offset(marker_type, style)


__all__ = [
    "DefaultStyleResolver",
    "FunctionStyleResolver",
    "StyleFunction",
    "StyleOptions",
    "StyleResolver",
]
