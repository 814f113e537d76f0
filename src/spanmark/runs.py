"""Output runs produced by the span builders.

A run is one piece of laid-out inline content. TextRun is ordinary styled
text that a layout engine may break across lines; every other run is atomic
and must be placed as a single unit.

Thread Safety:
    Runs are frozen. ``element`` and ``interaction`` are caller-supplied
    objects stored by reference.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from spanmark.styling.defaults import LINK_CURSOR, SCRIPT_PADDING_FACTOR
from spanmark.styling.style import TextStyle


@dataclass(frozen=True, slots=True)
class TextRun:
    """Plain styled text."""

    text: str
    style: TextStyle


@dataclass(frozen=True, slots=True)
class LinkInteraction:
    """Interactive behaviour attached to a link by a link callback.

    Attributes:
        on_tap: Called when the link is activated
        on_hover: Called with True on enter and False on exit
        cursor: Pointer cursor name while hovering

    """

    on_tap: Callable[[], None] | None = None
    on_hover: Callable[[bool], None] | None = None
    cursor: str = LINK_CURSOR


@dataclass(frozen=True, slots=True)
class LinkRun:
    """An atomic interactive link.

    Attributes:
        url: Normalized target
        text: Display text with escapes removed
        style: Link style the display text was resolved against
        hover_style: Style while hovered, when the resolver offers one
        children: Display text runs, carrying nested formatting
        interaction: Whatever the link callback returned for this link

    """

    url: str
    text: str
    style: TextStyle
    children: tuple[TextRun, ...]
    interaction: object
    hover_style: TextStyle | None = None


@dataclass(frozen=True, slots=True)
class PlaceholderRun:
    """An atomic caller-supplied element substituted for ``{key}``."""

    key: str
    element: object
    style: TextStyle


@dataclass(frozen=True, slots=True)
class ScriptRun:
    """Superscript or subscript text laid out as one baseline-shifted unit.

    ``baseline_offset`` is the vertical shift in logical pixels; negative
    values move the text up.
    """

    text: str
    style: TextStyle
    baseline_offset: float
    superscript: bool

    @property
    def padding(self) -> float:
        """Space reserved on the side the text moves away from."""
        return abs(self.baseline_offset) * SCRIPT_PADDING_FACTOR


type InlineRun = TextRun | LinkRun | PlaceholderRun | ScriptRun


def is_atomic(run: InlineRun) -> bool:
    """True if run must be laid out as one indivisible unit."""
    return not isinstance(run, TextRun)


__all__ = [
    "InlineRun",
    "LinkInteraction",
    "LinkRun",
    "PlaceholderRun",
    "ScriptRun",
    "TextRun",
    "is_atomic",
]
