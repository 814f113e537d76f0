"""Tests for extract_text and run helpers."""

from spanmark import (
    LinkRun,
    PlaceholderRun,
    ScriptRun,
    TextRun,
    TextStyle,
    extract_text,
    is_atomic,
    render_spans,
    visible_length,
)

STYLE = TextStyle()


class TestExtractText:
    def test_empty(self) -> None:
        assert extract_text([]) == ""

    def test_all_run_kinds(self) -> None:
        runs = [
            TextRun("a", STYLE),
            ScriptRun("2", STYLE, 1.0, superscript=False),
            LinkRun("http://x", "link", STYLE, (TextRun("link", STYLE),), None),
            PlaceholderRun("k", object(), STYLE),
        ]
        assert extract_text(runs) == "a2link"
        assert extract_text(runs, placeholder_text="?") == "a2link?"
        assert visible_length(runs) == 7

    def test_rendered_markup(self) -> None:
        assert extract_text(render_spans("Hello **World**")) == "Hello World"


class TestIsAtomic:
    def test_only_text_runs_break(self) -> None:
        assert not is_atomic(TextRun("a", STYLE))
        assert is_atomic(ScriptRun("a", STYLE, 0.0, superscript=True))
        assert is_atomic(PlaceholderRun("k", None, STYLE))
