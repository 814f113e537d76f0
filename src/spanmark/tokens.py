"""Token model produced by the tokenizer.

Tokens are frozen, slotted dataclasses forming a closed union. Each variant is
its own class so two tokens of different kinds never compare equal, and a
``match`` over ``Token`` that ends in ``assert_never`` fails type checking
when a new variant is added.

Every token records where it came from: ``position`` is the start offset in
the original string and ``length`` the number of source characters it spans.
The edit-preserving builder depends on those two fields to reproduce the
input character for character.

Thread Safety:
    All tokens are immutable and safe to share across threads (and caches).

Usage:
    from spanmark.tokens import FormatMarkerToken, MarkerType, TextToken

    match token:
        case FormatMarkerToken(marker_type=MarkerType.BOLD):
            ...
        case TextToken(value=value):
            ...

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MarkerType(Enum):
    """Kinds of inline format marker, valued by their canonical spelling."""

    BOLD = "**"
    ITALIC = "*"
    BOLD_ITALIC = "***"
    STRIKETHROUGH = "~~"
    CODE = "`"
    UNDERLINE = "++"
    HIGHLIGHT = "=="
    SUPERSCRIPT = "^"
    SUBSCRIPT = "~"

    @property
    def is_script(self) -> bool:
        """True for superscript and subscript, which shift the baseline."""
        return self is MarkerType.SUPERSCRIPT or self is MarkerType.SUBSCRIPT


@dataclass(frozen=True, slots=True)
class TextToken:
    """Plain text.

    ``value`` is the display text. When the source span contained escapes the
    backslashes are consumed, so ``len(value)`` can be less than ``length``.
    Link text and URL tokens may be empty.
    """

    value: str
    position: int
    length: int

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass(frozen=True, slots=True)
class FormatMarkerToken:
    """A format marker such as ``**`` or ``~``."""

    marker_type: MarkerType
    value: str
    position: int
    length: int

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass(frozen=True, slots=True)
class LinkStartToken:
    """Opening ``[`` of a complete link."""

    position: int
    length: int = 1

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass(frozen=True, slots=True)
class LinkSeparatorToken:
    """The ``](`` between link text and URL."""

    position: int
    length: int = 2

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass(frozen=True, slots=True)
class LinkEndToken:
    """Closing ``)`` of a complete link."""

    position: int
    length: int = 1

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass(frozen=True, slots=True)
class PlaceholderToken:
    """A ``{key}`` placeholder; ``key`` excludes the braces."""

    key: str
    position: int
    length: int

    @property
    def end(self) -> int:
        return self.position + self.length

    @property
    def source(self) -> str:
        """The literal placeholder as written."""
        return "{" + self.key + "}"


# PEP 695 type alias for the closed token union
type Token = (
    TextToken
    | FormatMarkerToken
    | LinkStartToken
    | LinkSeparatorToken
    | LinkEndToken
    | PlaceholderToken
)

TOKEN_TYPES: tuple[type, ...] = (
    TextToken,
    FormatMarkerToken,
    LinkStartToken,
    LinkSeparatorToken,
    LinkEndToken,
    PlaceholderToken,
)


def is_link_at(tokens: list[Token] | tuple[Token, ...], index: int) -> bool:
    """Return True if tokens[index:index + 5] form a complete link.

    The tokenizer only emits a LinkStartToken for a complete structure, but
    consumers re-check the five-token shape rather than trust it.

    """
    if index + 4 >= len(tokens):
        return False
    return (
        isinstance(tokens[index], LinkStartToken)
        and isinstance(tokens[index + 1], TextToken)
        and isinstance(tokens[index + 2], LinkSeparatorToken)
        and isinstance(tokens[index + 3], TextToken)
        and isinstance(tokens[index + 4], LinkEndToken)
    )


__all__ = [
    "TOKEN_TYPES",
    "FormatMarkerToken",
    "LinkEndToken",
    "LinkSeparatorToken",
    "LinkStartToken",
    "MarkerType",
    "PlaceholderToken",
    "TextToken",
    "Token",
    "is_link_at",
]
