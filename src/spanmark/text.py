"""Extract plain text from built runs.

Example:
    >>> from spanmark import extract_text, render_spans
    >>> extract_text(render_spans("Hello **World**"))
    'Hello World'
"""

from collections.abc import Iterable
from typing import assert_never

from spanmark.runs import InlineRun, LinkRun, PlaceholderRun, ScriptRun, TextRun


def extract_text(runs: Iterable[InlineRun], placeholder_text: str = "") -> str:
    """Concatenate the visible text of runs.

    Args:
        runs: Output of a span builder
        placeholder_text: Stand-in for each placeholder element, which has
            no text of its own

    """
    parts: list[str] = []
    for run in runs:
        match run:
            case TextRun(text=text) | ScriptRun(text=text) | LinkRun(text=text):
                parts.append(text)
            case PlaceholderRun():
                parts.append(placeholder_text)
            case _:
                assert_never(run)
    return "".join(parts)


def visible_length(runs: Iterable[InlineRun]) -> int:
    """Number of characters of visible text (placeholders count as one)."""
    return len(extract_text(runs, placeholder_text="￼"))


__all__ = ["extract_text", "visible_length"]
