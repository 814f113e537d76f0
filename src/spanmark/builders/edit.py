"""Edit-preserving span builder.

Builds runs for a text field the user is typing into. Unlike the rich
builder nothing is removed: markers, link syntax, escapes and placeholders
all stay in the output, so the concatenated run text equals the input and
every caret offset in the field maps to the same offset in the source.

Markers get a dimmed style. With a cursor position, markers of pairs that
do not enclose the cursor switch to an inactive style which, depending on
``marker_opacity``, is the same dim style, a fainter one, or effectively
invisible (transparent, near-zero width) while still occupying their
characters.

Example:
    >>> runs = EditSpanBuilder().build("hi **bold**", TextStyle(), resolver)
    >>> [run.text for run in runs]
    ['hi ', '**', 'bold', '**']

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import assert_never

from spanmark.parser import Parser
from spanmark.parsing.charsets import ESCAPABLE_CHARS, ESCAPE_CHAR
from spanmark.parsing.format_stack import FormatStack, FormatStackEntry
from spanmark.profiling import get_parse_accumulator
from spanmark.runs import TextRun
from spanmark.styling.resolver import StyleResolver
from spanmark.styling.style import Color, Decoration, TextStyle, add_decoration
from spanmark.tokens import (
    FormatMarkerToken,
    LinkEndToken,
    LinkSeparatorToken,
    LinkStartToken,
    PlaceholderToken,
    TextToken,
    Token,
    is_link_at,
)

MARKER_OPACITY = 0.4
HIDDEN_FONT_SIZE = 0.01
HIDDEN_LETTER_SPACING_FACTOR = 2

_BLACK = Color(0, 0, 0)
_TRANSPARENT = Color(0, 0, 0, 0.0)


def marker_style(base_style: TextStyle) -> TextStyle:
    """Dimmed style for visible markers."""
    color = base_style.color or _BLACK
    return base_style.copy_with(color=color.with_alpha(MARKER_OPACITY))


def inactive_marker_style(base_style: TextStyle, opacity: float) -> TextStyle:
    """Style for markers away from the cursor.

    opacity 1.0 matches marker_style; 0.0 hides the marker while keeping its
    characters in the text.
    """
    if opacity <= 0.0:
        return base_style.copy_with(
            color=_TRANSPARENT,
            font_size=HIDDEN_FONT_SIZE,
            letter_spacing=-HIDDEN_FONT_SIZE * HIDDEN_LETTER_SPACING_FACTOR,
        )
    color = base_style.color or _BLACK
    return base_style.copy_with(color=color.with_alpha(opacity * MARKER_OPACITY))


class EditSpanBuilder:
    """Builds length-preserving runs for editable text.

    Args:
        parser: Parser (and cache) to use (default: a new Parser)

    Thread Safety:
        Holds no per-call state; safe to share when the parser is.

    """

    __slots__ = ("_parser",)

    def __init__(self, parser: Parser | None = None) -> None:
        self._parser = parser if parser is not None else Parser()

    @property
    def parser(self) -> Parser:
        return self._parser

    def build(
        self,
        text: str,
        base_style: TextStyle,
        resolver: StyleResolver,
        *,
        cursor_position: int | None = None,
        marker_opacity: float = 1.0,
    ) -> list[TextRun]:
        """Build runs whose text concatenates back to text.

        Args:
            text: Field content
            base_style: Style of text outside any marker
            resolver: Style policy for markers and links
            cursor_position: Caret offset; None shows every marker dimmed
            marker_opacity: Visibility of markers away from the cursor,
                1.0 (dimmed) down to 0.0 (hidden); clamped to that range

        """
        if not text:
            return []
        result = self._parser.parse(text)
        runs = self._walk(
            text,
            result.tokens,
            result.pairs,
            base_style,
            resolver,
            cursor_position,
            min(1.0, max(0.0, marker_opacity)),
        )
        acc = get_parse_accumulator()
        if acc is not None:
            acc.record_runs(len(runs))
        return runs

    def build_segments(
        self,
        text: str,
        base_style: TextStyle,
        resolver: StyleResolver,
        *,
        composing: tuple[int, int] | None,
        cursor_position: int | None = None,
        marker_opacity: float = 1.0,
        composing_decoration: Decoration = Decoration.UNDERLINE,
    ) -> list[TextRun]:
        """Build runs around an IME composing range.

        The text is split into before, composing and after segments, each
        parsed on its own so in-progress input cannot pair with markers
        outside it. The composing segment's base style gains
        composing_decoration. An empty or out-of-range composing range
        builds the whole text as one segment.

        """
        if composing is None or not (0 <= composing[0] < composing[1] <= len(text)):
            return self.build(
                text,
                base_style,
                resolver,
                cursor_position=cursor_position,
                marker_opacity=marker_opacity,
            )

        start, end = composing
        composing_style = add_decoration(base_style, composing_decoration)
        runs: list[TextRun] = []
        for seg_start, seg_end, style in (
            (0, start, base_style),
            (start, end, composing_style),
            (end, len(text), base_style),
        ):
            runs.extend(
                self.build(
                    text[seg_start:seg_end],
                    style,
                    resolver,
                    cursor_position=(
                        None if cursor_position is None else cursor_position - seg_start
                    ),
                    marker_opacity=marker_opacity,
                )
            )
        return runs

    def _walk(
        self,
        text: str,
        tokens: Sequence[Token],
        pairs: Mapping[int, int],
        base_style: TextStyle,
        resolver: StyleResolver,
        cursor: int | None,
        opacity: float,
    ) -> list[TextRun]:
        runs: list[TextRun] = []
        buffer: list[str] = []
        stack = FormatStack(base_style, resolver)
        active_style = marker_style(base_style)
        inactive_style = (
            active_style if cursor is None else inactive_marker_style(base_style, opacity)
        )

        def flush() -> None:
            if buffer:
                runs.append(TextRun("".join(buffer), stack.style))
                buffer.clear()

        def emit(value: str, style: TextStyle) -> None:
            flush()
            runs.append(TextRun(value, style))

        def style_for_span(start: int, end: int) -> TextStyle:
            if cursor is None or start <= cursor <= end:
                return active_style
            return inactive_style

        index = 0
        count = len(tokens)
        while index < count:
            token = tokens[index]
            match token:
                case TextToken():
                    source = text[token.position : token.end]
                    if len(token.value) == token.length:
                        buffer.append(source)
                    else:
                        self._emit_escaped(source, buffer, emit, active_style)
                case FormatMarkerToken(value=value):
                    partner = pairs.get(index)
                    if partner is None:
                        buffer.append(value)
                    elif partner > index:
                        emit(value, style_for_span(token.position, tokens[partner].end))
                        stack.push(FormatStackEntry(index, partner, token.marker_type))
                    else:
                        flush()
                        style = style_for_span(tokens[partner].position, token.end)
                        stack.remove(partner)
                        runs.append(TextRun(value, style))
                case PlaceholderToken():
                    buffer.append(token.source)
                case LinkStartToken():
                    if is_link_at(tokens, index):
                        link_text = tokens[index + 1]
                        link_url = tokens[index + 3]
                        link_end = tokens[index + 4]
                        style = style_for_span(token.position, link_end.end)
                        link_style = resolver.resolve_link_style(stack.style)
                        emit("[", style)
                        if link_text.length:
                            runs.append(
                                TextRun(text[link_text.position : link_text.end], link_style)
                            )
                        runs.append(TextRun("](", style))
                        if link_url.length:
                            runs.append(TextRun(text[link_url.position : link_url.end], style))
                        runs.append(TextRun(")", style))
                        index += 5
                        continue
                    buffer.append("[")
                case LinkSeparatorToken():
                    buffer.append("](")
                case LinkEndToken():
                    buffer.append(")")
                case _:
                    assert_never(token)
            index += 1

        flush()
        return runs

    @staticmethod
    def _emit_escaped(
        source: str,
        buffer: list[str],
        emit: Callable[[str, TextStyle], None],
        escape_style: TextStyle,
    ) -> None:
        """Append source, splitting each escaping backslash into its own run."""
        pos = 0
        run_start = 0
        length = len(source)
        while pos < length:
            if (
                source[pos] == ESCAPE_CHAR
                and pos + 1 < length
                and source[pos + 1] in ESCAPABLE_CHARS
            ):
                if run_start < pos:
                    buffer.append(source[run_start:pos])
                emit(ESCAPE_CHAR, escape_style)
                buffer.append(source[pos + 1])
                pos += 2
                run_start = pos
            else:
                pos += 1
        if run_start < length:
            buffer.append(source[run_start:])


__all__ = [
    "HIDDEN_FONT_SIZE",
    "HIDDEN_LETTER_SPACING_FACTOR",
    "MARKER_OPACITY",
    "EditSpanBuilder",
    "inactive_marker_style",
    "marker_style",
]
