"""
spanmark: inline markup to styled text runs.

Turns strings with lightweight inline markers (**bold**, _italic_, ~~strike~~,
`code`, ++underline++, ==highlight==, ^super^, ~sub~, [links](url) and
{placeholders}) into ordered runs of styled text for a layout engine. Zero
runtime dependencies.

Two builders share one parse pipeline:

- render_spans / RichSpanBuilder: read-only display; markers are removed,
  links and placeholders and scripts become atomic runs.
- edit_spans / EditSpanBuilder: live editing; every input character is
  kept, markers are dimmed or faded relative to the cursor.

Quick Start:
    >>> from spanmark import extract_text, render_spans
    >>> runs = render_spans("Hello **World**")
    >>> extract_text(runs)
    'Hello World'

    >>> from spanmark import edit_spans
    >>> "".join(run.text for run in edit_spans("Hello **World**", cursor_position=0))
    'Hello **World**'
"""

from collections.abc import Mapping

from spanmark.builders.edit import EditSpanBuilder
from spanmark.builders.rich import LinkCallback, RichSpanBuilder, normalize_url
from spanmark.cache import LRUParseCache, NullParseCache, ParseCache, ParseResult
from spanmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from spanmark.errors import ConfigError, SpanmarkError, StyleResolutionError
from spanmark.parser import Parser
from spanmark.parsing.charsets import has_formatting
from spanmark.parsing.format_stack import FormatStack, FormatStackEntry
from spanmark.parsing.nesting import resolve_pairs, validate_pairs
from spanmark.parsing.pairing import identify_pairs
from spanmark.parsing.tokenizer import Tokenizer, tokenize
from spanmark.runs import (
    InlineRun,
    LinkInteraction,
    LinkRun,
    PlaceholderRun,
    ScriptRun,
    TextRun,
    is_atomic,
)
from spanmark.styling import (
    DARK_THEME,
    LIGHT_THEME,
    Color,
    Decoration,
    DefaultStyleResolver,
    FontStyle,
    FontWeight,
    FunctionStyleResolver,
    StyleOptions,
    StyleResolver,
    TextStyle,
    Theme,
    merge_text_styles,
)
from spanmark.text import extract_text, visible_length
from spanmark.tokens import (
    FormatMarkerToken,
    LinkEndToken,
    LinkSeparatorToken,
    LinkStartToken,
    MarkerType,
    PlaceholderToken,
    TextToken,
    Token,
)

__version__ = "0.1.0"

# Shared by the module-level helpers; one cache serves both builders
_default_parser = Parser()
_default_rich = RichSpanBuilder(_default_parser)
_default_edit = EditSpanBuilder(_default_parser)
_default_resolver = DefaultStyleResolver()
_default_style = TextStyle()


def render_spans(
    text: str,
    base_style: TextStyle | None = None,
    resolver: StyleResolver | None = None,
    *,
    link_callback: LinkCallback | None = None,
    placeholders: Mapping[str, object] | None = None,
) -> list[InlineRun]:
    """Build display runs for text with the default builder.

    Args:
        text: Markup source
        base_style: Style outside any marker (default: empty TextStyle)
        resolver: Style policy (default: DefaultStyleResolver, light theme)
        link_callback: ``(url, display_text) -> interaction`` for links
        placeholders: Elements to substitute for ``{key}``

    Example:
        >>> runs = render_spans("H~2~O")
        >>> [type(run).__name__ for run in runs]
        ['TextRun', 'ScriptRun', 'TextRun']
    """
    return _default_rich.build(
        text,
        _default_style if base_style is None else base_style,
        _default_resolver if resolver is None else resolver,
        link_callback=link_callback,
        placeholders=placeholders,
    )


def edit_spans(
    text: str,
    base_style: TextStyle | None = None,
    resolver: StyleResolver | None = None,
    *,
    cursor_position: int | None = None,
    marker_opacity: float = 1.0,
    composing: tuple[int, int] | None = None,
) -> list[TextRun]:
    """Build length-preserving edit runs for text with the default builder.

    The concatenated run text always equals text.
    """
    return _default_edit.build_segments(
        text,
        _default_style if base_style is None else base_style,
        _default_resolver if resolver is None else resolver,
        composing=composing,
        cursor_position=cursor_position,
        marker_opacity=marker_opacity,
    )


def clear_cache() -> None:
    """Clear the parse cache behind render_spans and edit_spans."""
    _default_parser.clear_cache()


__all__ = [
    "DARK_THEME",
    "LIGHT_THEME",
    "Color",
    "ConfigError",
    "Decoration",
    "DefaultStyleResolver",
    "EditSpanBuilder",
    "FontStyle",
    "FontWeight",
    "FormatMarkerToken",
    "FormatStack",
    "FormatStackEntry",
    "FunctionStyleResolver",
    "InlineRun",
    "LRUParseCache",
    "LinkCallback",
    "LinkEndToken",
    "LinkInteraction",
    "LinkRun",
    "LinkSeparatorToken",
    "LinkStartToken",
    "MarkerType",
    "NullParseCache",
    "ParseCache",
    "ParseConfig",
    "ParseResult",
    "Parser",
    "PlaceholderRun",
    "PlaceholderToken",
    "RichSpanBuilder",
    "ScriptRun",
    "SpanmarkError",
    "StyleOptions",
    "StyleResolutionError",
    "StyleResolver",
    "TextRun",
    "TextStyle",
    "TextToken",
    "Theme",
    "Token",
    "Tokenizer",
    "__version__",
    "clear_cache",
    "edit_spans",
    "extract_text",
    "get_parse_config",
    "has_formatting",
    "identify_pairs",
    "is_atomic",
    "merge_text_styles",
    "normalize_url",
    "parse_config_context",
    "render_spans",
    "reset_parse_config",
    "resolve_pairs",
    "set_parse_config",
    "tokenize",
    "validate_pairs",
    "visible_length",
]
