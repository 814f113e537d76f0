"""Stack of formats open at the current point of a build pass.

Entries are removed by the opener's token index rather than popped: the
nesting validator guarantees closers arrive in LIFO order for valid pairs,
but identity removal keeps the stack correct even for a caller that feeds
its own pair map.

The resolved style is memoized and invalidated on every push or removal, so
runs of text between markers resolve their style once.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from spanmark.styling.resolver import StyleResolver
from spanmark.styling.style import TextStyle
from spanmark.tokens import MarkerType


@dataclass(frozen=True, slots=True)
class FormatStackEntry:
    """An open format: token indices of its markers and its type."""

    open_index: int
    close_index: int
    marker_type: MarkerType


class FormatStack:
    """Open formats for one build pass, outermost first.

    Not thread-safe; a builder creates one per call.
    """

    __slots__ = ("_base_style", "_cached_style", "_entries", "_resolver")

    def __init__(self, base_style: TextStyle, resolver: StyleResolver) -> None:
        self._base_style = base_style
        self._resolver = resolver
        self._entries: list[FormatStackEntry] = []
        self._cached_style: TextStyle | None = base_style

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FormatStackEntry]:
        return iter(self._entries)

    def push(self, entry: FormatStackEntry) -> None:
        self._entries.append(entry)
        self._cached_style = None

    def remove(self, open_index: int) -> FormatStackEntry | None:
        """Remove the entry opened at open_index; None if it is not open."""
        for position in range(len(self._entries) - 1, -1, -1):
            if self._entries[position].open_index == open_index:
                self._cached_style = None
                return self._entries.pop(position)
        return None

    @property
    def style(self) -> TextStyle:
        """Base style with every open format applied, innermost last."""
        if self._cached_style is None:
            style = self._base_style
            for entry in self._entries:
                style = self._resolver.resolve_style(entry.marker_type, style)
            self._cached_style = style
        return self._cached_style

    def innermost_script(self) -> MarkerType | None:
        """Type of the innermost open superscript or subscript, if any."""
        for entry in reversed(self._entries):
            if entry.marker_type.is_script:
                return entry.marker_type
        return None


__all__ = ["FormatStack", "FormatStackEntry"]
