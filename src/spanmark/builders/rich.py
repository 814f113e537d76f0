"""Rich span builder for read-only display.

Markers are consumed: the output contains only the content they format.
Links, placeholders and script text become atomic runs so a layout engine
can place them as units.

Algorithm:
    Walk the tokens once with a text buffer and a FormatStack. Text
    accumulates in the buffer and is flushed as a run in the current stack
    style whenever the style is about to change (a valid marker) or an
    atomic run is emitted. Unpaired markers, unknown placeholders and
    incomplete link tokens are appended to the buffer as literal text, so
    they merge with surrounding text instead of splitting runs.

Example:
    >>> builder = RichSpanBuilder()
    >>> builder.build("say **hi**", TextStyle(), DefaultStyleResolver())
    [TextRun(text='say ', ...), TextRun(text='hi', style=TextStyle(font_weight=<FontWeight.BOLD: 700>, ...))]

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import assert_never

from spanmark.parser import Parser
from spanmark.parsing.charsets import (
    ESCAPABLE_CHARS,
    ESCAPE_CHAR,
    URL_SCHEME_HINT_CHARS,
    has_marker_chars,
)
from spanmark.parsing.format_stack import FormatStack, FormatStackEntry
from spanmark.parsing.nesting import resolve_pairs
from spanmark.parsing.tokenizer import tokenize
from spanmark.profiling import get_parse_accumulator
from spanmark.runs import InlineRun, LinkRun, PlaceholderRun, ScriptRun, TextRun
from spanmark.styling.resolver import StyleResolver
from spanmark.styling.style import TextStyle
from spanmark.tokens import (
    FormatMarkerToken,
    LinkEndToken,
    LinkSeparatorToken,
    LinkStartToken,
    MarkerType,
    PlaceholderToken,
    TextToken,
    Token,
    is_link_at,
)

type LinkCallback = Callable[[str, str], object]


def unescape(text: str) -> str:
    """Remove backslashes that escape a markup character."""
    if ESCAPE_CHAR not in text:
        return text
    out: list[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == ESCAPE_CHAR and pos + 1 < length and text[pos + 1] in ESCAPABLE_CHARS:
            out.append(text[pos + 1])
            pos += 2
        else:
            out.append(char)
            pos += 1
    return "".join(out)


def normalize_url(url: str) -> str:
    """Trim url and add ``http://`` to bare domains.

    A url with a scheme, an absolute path or a fragment is left alone; one
    that looks like a host name (contains a dot, or is localhost) gets the
    prefix.

    """
    url = url.strip()
    if URL_SCHEME_HINT_CHARS.isdisjoint(url) and ("." in url or "localhost" in url):
        return "http://" + url
    return url


class RichSpanBuilder:
    """Builds display runs from markup.

    Args:
        parser: Parser used by ``build``; its nesting limit also applies to
            formatted link text (default: a new Parser with its own cache)

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
        link_callback: LinkCallback | None = None,
        placeholders: Mapping[str, object] | None = None,
    ) -> list[InlineRun]:
        """Parse text (through the parser's cache) and build its runs."""
        result = self._parser.parse(text)
        return self.build_from_tokens(
            result.tokens,
            result.pairs,
            base_style,
            resolver,
            link_callback=link_callback,
            placeholders=placeholders,
        )

    def build_from_tokens(
        self,
        tokens: Sequence[Token],
        pairs: Mapping[int, int],
        base_style: TextStyle,
        resolver: StyleResolver,
        *,
        link_callback: LinkCallback | None = None,
        placeholders: Mapping[str, object] | None = None,
    ) -> list[InlineRun]:
        """Build runs from already-resolved tokens and valid pairs.

        Args:
            tokens: Tokenizer output
            pairs: Validated, symmetric pair map for tokens
            base_style: Style of text outside any marker
            resolver: Style policy for markers and links
            link_callback: ``(url, display_text) -> interaction``; without
                one, links render as plain text in link style
            placeholders: Elements to substitute for ``{key}``

        Returns:
            Runs in display order. Concatenated, their text is the input
            with valid markers removed, escapes resolved, and links and
            known placeholders replaced by their atomic runs.

        """
        runs = self._walk(
            tokens, pairs, base_style, resolver, link_callback, placeholders, nested=False
        )
        acc = get_parse_accumulator()
        if acc is not None:
            acc.record_runs(len(runs))
        return runs

    def _walk(
        self,
        tokens: Sequence[Token],
        pairs: Mapping[int, int],
        base_style: TextStyle,
        resolver: StyleResolver,
        link_callback: LinkCallback | None,
        placeholders: Mapping[str, object] | None,
        *,
        nested: bool,
    ) -> list[InlineRun]:
        # nested: building link display text, where links and placeholders
        # stay literal and scripts only shrink
        runs: list[InlineRun] = []
        buffer: list[str] = []
        stack = FormatStack(base_style, resolver)

        def flush() -> None:
            if not buffer:
                return
            text = "".join(buffer)
            buffer.clear()
            if not text:
                return
            style = stack.style
            script = None if nested else stack.innermost_script()
            if script is None:
                runs.append(TextRun(text, style))
            else:
                runs.append(
                    ScriptRun(
                        text,
                        style,
                        resolver.script_baseline_offset(script, style),
                        superscript=script is MarkerType.SUPERSCRIPT,
                    )
                )

        index = 0
        count = len(tokens)
        while index < count:
            token = tokens[index]
            match token:
                case TextToken(value=value):
                    buffer.append(value)
                case FormatMarkerToken(marker_type=marker_type, value=value):
                    partner = pairs.get(index)
                    if partner is None:
                        buffer.append(value)
                    elif partner > index:
                        flush()
                        stack.push(FormatStackEntry(index, partner, marker_type))
                    else:
                        flush()
                        stack.remove(partner)
                case PlaceholderToken(key=key):
                    if not nested and placeholders is not None and key in placeholders:
                        flush()
                        runs.append(PlaceholderRun(key, placeholders[key], stack.style))
                    else:
                        buffer.append(token.source)
                case LinkStartToken():
                    if is_link_at(tokens, index):
                        link_text = tokens[index + 1]
                        link_url = tokens[index + 3]
                        assert isinstance(link_text, TextToken)
                        assert isinstance(link_url, TextToken)
                        if nested:
                            buffer.append(
                                f"[{unescape(link_text.value)}]({unescape(link_url.value)})"
                            )
                        else:
                            flush()
                            runs.extend(
                                self._link_runs(
                                    link_text.value,
                                    link_url.value,
                                    stack.style,
                                    resolver,
                                    link_callback,
                                )
                            )
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

    def _link_runs(
        self,
        raw_text: str,
        raw_url: str,
        style: TextStyle,
        resolver: StyleResolver,
        link_callback: LinkCallback | None,
    ) -> list[InlineRun]:
        url = normalize_url(unescape(raw_url))
        link_style = resolver.resolve_link_style(style)

        if has_marker_chars(raw_text):
            # Uncached and unprofiled; only the enclosing text is a parse
            tokens = tokenize(raw_text)
            pairs = resolve_pairs(tokens, self._parser.config.max_nesting_depth)
            children = tuple(
                run
                for run in self._walk(tokens, pairs, link_style, resolver, None, None, nested=True)
                if isinstance(run, TextRun)
            )
        elif raw_text:
            children = (TextRun(unescape(raw_text), link_style),)
        else:
            children = ()

        if link_callback is None:
            return list(children)

        display_text = "".join(run.text for run in children)
        hover = getattr(resolver, "resolve_link_hover_style", None)
        return [
            LinkRun(
                url=url,
                text=display_text,
                style=link_style,
                children=children,
                interaction=link_callback(url, display_text),
                hover_style=hover(style) if hover is not None else None,
            )
        ]


__all__ = ["LinkCallback", "RichSpanBuilder", "normalize_url", "unescape"]
