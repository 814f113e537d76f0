"""Single-pass tokenizer for inline markup.

Breaks text into format markers, link structure, placeholders and plain text.
It only identifies tokens; whether a marker actually opens or closes a format
is decided later by the pairing resolver and nesting validator.

Recognized syntax:
    ``***`` / ``___``  bold-italic      ``~~``  strikethrough
    ``**`` / ``__``    bold             ``~``   subscript
    ``*`` / ``_``      italic           ``^``   superscript
    ``++``             underline        `````   code
    ``==``             highlight        ``[text](url)``  link
    ``{key}``          placeholder      ``\\x``  escape

The tokenizer is total: every input produces a token list, and the tokens'
``position``/``length`` fields cover the input exactly once, in order.

Thread Safety:
    Tokenizer holds no per-call state. Each call builds its own _Scan.

"""

from __future__ import annotations

from spanmark.parsing.charsets import (
    DOUBLED_ONLY_CHARS,
    ESCAPABLE_CHARS,
    ESCAPE_CHAR,
    has_formatting,
    is_placeholder_key,
)
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

# Run length -> type for characters that form greedy runs of up to three
_EMPHASIS_RUNS: dict[int, MarkerType] = {
    3: MarkerType.BOLD_ITALIC,
    2: MarkerType.BOLD,
    1: MarkerType.ITALIC,
}


class _Scan:
    """Mutable state for one tokenize() call.

    Plain text is accumulated lazily: ``text_start`` is where the pending text
    token begins in the source, ``run_start`` is the first raw character not
    yet copied into ``parts``. Escapes copy the raw run, then the escaped
    character, so the pending token's value skips the backslash while its
    source span still includes it.
    """

    __slots__ = ("parts", "pos", "run_start", "text", "text_start", "tokens")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.text_start = 0
        self.run_start = 0
        self.parts: list[str] = []
        self.tokens: list[Token] = []

    def flush_text(self, end: int) -> None:
        if self.run_start < end:
            self.parts.append(self.text[self.run_start : end])
        if end > self.text_start:
            self.tokens.append(
                TextToken("".join(self.parts), self.text_start, end - self.text_start)
            )
        self.parts.clear()
        self.text_start = self.run_start = end

    def emit(self, token: Token, length: int) -> None:
        """Flush pending text, append a structural token, advance past it."""
        self.flush_text(self.pos)
        self.tokens.append(token)
        self.pos += length
        self.text_start = self.run_start = self.pos

    def emit_marker(self, marker_type: MarkerType, length: int) -> None:
        value = self.text[self.pos : self.pos + length]
        self.emit(FormatMarkerToken(marker_type, value, self.pos, length), length)

    def escape(self) -> None:
        """Consume a backslash and keep the following character as text."""
        if self.run_start < self.pos:
            self.parts.append(self.text[self.run_start : self.pos])
        self.parts.append(self.text[self.pos + 1])
        self.pos += 2
        self.run_start = self.pos


class Tokenizer:
    """Turns a string into a list of tokens.

    Subclass and override ``tokenize`` to observe or replace tokenization; a
    Parser accepts any object with a compatible ``tokenize`` method.

    Example:
        >>> Tokenizer().tokenize("a **b**")
        [TextToken(value='a ', position=0, length=2), FormatMarkerToken(...), ...]

    """

    __slots__ = ()

    def tokenize(self, text: str) -> list[Token]:
        if not text:
            return []
        if not has_formatting(text):
            return [TextToken(text, 0, len(text))]

        scan = _Scan(text)
        length = len(text)

        while scan.pos < length:
            pos = scan.pos
            char = text[pos]

            if char == ESCAPE_CHAR:
                if pos + 1 < length and text[pos + 1] in ESCAPABLE_CHARS:
                    scan.escape()
                else:
                    scan.pos += 1
            elif char == "*" or char == "_":
                run = _run_length(text, pos, char, 3)
                scan.emit_marker(_EMPHASIS_RUNS[run], run)
            elif char == "~":
                if _run_length(text, pos, char, 2) == 2:
                    scan.emit_marker(MarkerType.STRIKETHROUGH, 2)
                else:
                    scan.emit_marker(MarkerType.SUBSCRIPT, 1)
            elif char == "^":
                scan.emit_marker(MarkerType.SUPERSCRIPT, 1)
            elif char == "`":
                scan.emit_marker(MarkerType.CODE, 1)
            elif char in DOUBLED_ONLY_CHARS:
                if _run_length(text, pos, char, 2) == 2:
                    marker_type = MarkerType.UNDERLINE if char == "+" else MarkerType.HIGHLIGHT
                    scan.emit_marker(marker_type, 2)
                else:
                    scan.pos += 1
            elif char == "[":
                if not _scan_link(scan):
                    scan.pos += 1
            elif char == "{":
                if not _scan_placeholder(scan):
                    scan.pos += 1
            else:
                scan.pos += 1

        scan.flush_text(length)
        return scan.tokens


def _run_length(text: str, pos: int, char: str, limit: int) -> int:
    """Count consecutive ``char`` starting at pos, up to limit."""
    end = pos
    stop = min(len(text), pos + limit)
    while end < stop and text[end] == char:
        end += 1
    return end - pos


def _find_closing(text: str, start: int, open_char: str, close_char: str) -> int:
    """Index of the close_char balancing an already-open bracket, or -1.

    Nested open/close pairs are counted and escaped characters skipped.
    """
    depth = 0
    pos = start
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == ESCAPE_CHAR and pos + 1 < length:
            pos += 2
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            if depth == 0:
                return pos
            depth -= 1
        pos += 1
    return -1


def _scan_link(scan: _Scan) -> bool:
    """Emit the five link tokens if a complete ``[text](url)`` starts here."""
    text = scan.text
    start = scan.pos
    text_end = _find_closing(text, start + 1, "[", "]")
    if text_end == -1 or text_end + 1 >= len(text) or text[text_end + 1] != "(":
        return False
    url_start = text_end + 2
    url_end = _find_closing(text, url_start, "(", ")")
    if url_end == -1:
        return False

    scan.emit(LinkStartToken(start), 1)
    scan.tokens.append(TextToken(text[start + 1 : text_end], start + 1, text_end - start - 1))
    scan.tokens.append(LinkSeparatorToken(text_end))
    scan.tokens.append(TextToken(text[url_start:url_end], url_start, url_end - url_start))
    scan.tokens.append(LinkEndToken(url_end))
    scan.pos = scan.text_start = scan.run_start = url_end + 1
    return True


def _scan_placeholder(scan: _Scan) -> bool:
    """Emit a placeholder token if a valid ``{key}`` starts here."""
    text = scan.text
    start = scan.pos
    end = text.find("}", start + 1)
    if end == -1 or not is_placeholder_key(text[start + 1 : end]):
        return False
    scan.emit(PlaceholderToken(text[start + 1 : end], start, end + 1 - start), end + 1 - start)
    return True


_DEFAULT_TOKENIZER = Tokenizer()


def tokenize(text: str) -> list[Token]:
    """Tokenize text with the shared default Tokenizer."""
    return _DEFAULT_TOKENIZER.tokenize(text)


__all__ = ["Tokenizer", "tokenize"]
