"""Tests for the edit-preserving span builder."""

import pytest

from spanmark import (
    Color,
    Decoration,
    DefaultStyleResolver,
    EditSpanBuilder,
    FontStyle,
    FontWeight,
    Parser,
    TextRun,
    TextStyle,
    edit_spans,
)
from spanmark.builders.edit import (
    HIDDEN_FONT_SIZE,
    MARKER_OPACITY,
    inactive_marker_style,
    marker_style,
)

BASE = TextStyle(font_size=16, color=Color(10, 20, 30))
RESOLVER = DefaultStyleResolver()


@pytest.fixture
def builder() -> EditSpanBuilder:
    return EditSpanBuilder(Parser())


def texts(runs: list[TextRun]) -> list[str]:
    return [run.text for run in runs]


class TestMarkerStyles:
    """Marker style helpers."""

    def test_marker_style_dims_base_color(self) -> None:
        """Visible markers use the base colour at reduced alpha."""
        assert marker_style(BASE).color == Color(10, 20, 30, MARKER_OPACITY)

    def test_marker_style_without_color_uses_black(self) -> None:
        """A base style without colour dims black."""
        assert marker_style(TextStyle()).color == Color(0, 0, 0, MARKER_OPACITY)

    def test_inactive_full_opacity_matches_marker_style(self) -> None:
        """Opacity 1.0 is indistinguishable from the active style."""
        assert inactive_marker_style(BASE, 1.0) == marker_style(BASE)

    def test_inactive_partial_opacity(self) -> None:
        """Intermediate opacity scales alpha at normal size."""
        style = inactive_marker_style(BASE, 0.5)
        assert style.color.alpha == pytest.approx(0.5 * MARKER_OPACITY)
        assert style.font_size == 16

    def test_inactive_zero_opacity_hides(self) -> None:
        """Opacity 0.0 collapses the marker visually."""
        style = inactive_marker_style(BASE, 0.0)
        assert style.color.alpha == 0.0
        assert style.font_size == HIDDEN_FONT_SIZE
        assert style.letter_spacing == pytest.approx(-0.02)


class TestBuild:
    """Run construction."""

    def test_empty(self, builder: EditSpanBuilder) -> None:
        """Empty text has no runs."""
        assert builder.build("", BASE, RESOLVER) == []

    def test_markers_are_kept(self, builder: EditSpanBuilder) -> None:
        """Valid markers appear as their own runs."""
        runs = builder.build("hi **bold** bye", BASE, RESOLVER)
        assert texts(runs) == ["hi ", "**", "bold", "**", " bye"]
        assert runs[1].style == marker_style(BASE)
        assert runs[2].style.font_weight is FontWeight.BOLD
        assert runs[0].style == BASE

    def test_cursor_outside_pair_hides_markers(self, builder: EditSpanBuilder) -> None:
        """With the cursor away and opacity 0 the markers vanish."""
        runs = builder.build("hi **bold** bye", BASE, RESOLVER, cursor_position=0, marker_opacity=0.0)
        assert sum(len(run.text) for run in runs) == 15
        for marker in (runs[1], runs[3]):
            assert marker.style.color.alpha == 0.0
            assert marker.style.font_size == HIDDEN_FONT_SIZE
        assert runs[2].style.font_weight is FontWeight.BOLD

    @pytest.mark.parametrize("cursor", [3, 5, 11])
    def test_cursor_inside_pair_shows_markers(self, builder: EditSpanBuilder, cursor: int) -> None:
        """Boundaries are inclusive: the cursor at either end activates the pair."""
        runs = builder.build(
            "hi **bold** bye", BASE, RESOLVER, cursor_position=cursor, marker_opacity=0.0
        )
        assert runs[1].style == marker_style(BASE)
        assert runs[3].style == marker_style(BASE)

    def test_cursor_only_affects_enclosing_pair(self, builder: EditSpanBuilder) -> None:
        """Each pair checks the cursor against its own span."""
        runs = builder.build("*a* *b*", BASE, RESOLVER, cursor_position=1, marker_opacity=0.0)
        assert texts(runs) == ["*", "a", "*", " ", "*", "b", "*"]
        assert runs[0].style == marker_style(BASE)
        assert runs[4].style.color.alpha == 0.0

    def test_opacity_is_clamped(self, builder: EditSpanBuilder) -> None:
        """Out-of-range opacity is clamped rather than rejected."""
        runs = builder.build("**b** x", BASE, RESOLVER, cursor_position=7, marker_opacity=5.0)
        assert runs[0].style == marker_style(BASE)

    def test_unpaired_marker_is_plain_text(self, builder: EditSpanBuilder) -> None:
        """Unpaired markers stay in the text run."""
        assert builder.build("a ** b", BASE, RESOLVER) == [TextRun("a ** b", BASE)]

    def test_placeholder_is_literal(self, builder: EditSpanBuilder) -> None:
        """Placeholders are shown as typed."""
        assert texts(builder.build("Hi {name}", BASE, RESOLVER)) == ["Hi {name}"]

    def test_link_parts(self, builder: EditSpanBuilder) -> None:
        """Links show every structural character, only the text in link style."""
        runs = builder.build("see [x](u.com)", BASE, RESOLVER)
        assert texts(runs) == ["see ", "[", "x", "](", "u.com", ")"]
        assert runs[2].style == RESOLVER.resolve_link_style(BASE)
        for index in (1, 3, 4, 5):
            assert runs[index].style == marker_style(BASE)

    def test_link_markers_follow_cursor(self, builder: EditSpanBuilder) -> None:
        """Link syntax hides when the cursor is outside the link."""
        runs = builder.build("[x](u) tail", BASE, RESOLVER, cursor_position=10, marker_opacity=0.0)
        assert runs[0].style.color.alpha == 0.0
        assert runs[1].style == RESOLVER.resolve_link_style(BASE)

    def test_empty_link_keeps_length(self, builder: EditSpanBuilder) -> None:
        """Empty link text and URL still reproduce the source."""
        assert "".join(texts(builder.build("[]()", BASE, RESOLVER))) == "[]()"

    def test_escapes_keep_backslashes(self, builder: EditSpanBuilder) -> None:
        """Escape backslashes are separate dimmed runs."""
        runs = builder.build("\\*a\\*", BASE, RESOLVER)
        assert texts(runs) == ["\\", "*a", "\\", "*"]
        assert runs[0].style == marker_style(BASE)
        assert runs[1].style == BASE

    def test_excess_depth_markers_stay_in_text(self, builder: EditSpanBuilder) -> None:
        """A format past the depth limit keeps its markers inside the enclosing run."""
        runs = builder.build("**level1 _level2 ~~level3~~_**", BASE, RESOLVER)
        assert texts(runs) == ["**", "level1 ", "_", "level2 ~~level3~~", "_", "**"]
        inner = runs[3].style
        assert inner.font_weight is FontWeight.BOLD
        assert inner.font_style is FontStyle.ITALIC
        assert Decoration.LINE_THROUGH not in (inner.decoration or Decoration.NONE)
        for index in (0, 2, 4, 5):
            assert runs[index].style == marker_style(BASE)

    def test_script_shrinks_without_shift(self, builder: EditSpanBuilder) -> None:
        """Script text in the editor is smaller but stays a plain run."""
        runs = builder.build("x^2^", BASE, RESOLVER)
        assert texts(runs) == ["x", "^", "2", "^"]
        assert runs[2].style.font_size == pytest.approx(16 * 0.6)


class TestComposing:
    """IME composing segments."""

    def test_composing_segment_is_underlined(self, builder: EditSpanBuilder) -> None:
        """The composing range gets an underline merged into its style."""
        runs = builder.build_segments("abcdef", BASE, RESOLVER, composing=(2, 4))
        assert texts(runs) == ["ab", "cd", "ef"]
        assert runs[1].style.decoration == Decoration.UNDERLINE
        assert runs[0].style == BASE

    def test_markers_do_not_pair_across_segments(self, builder: EditSpanBuilder) -> None:
        """A pair straddling the composing boundary is unpaired."""
        runs = builder.build_segments("ab**cd**", BASE, RESOLVER, composing=(2, 4))
        assert texts(runs) == ["ab", "**", "cd**"]
        assert runs[2].style == BASE

    def test_invalid_range_builds_whole_text(self, builder: EditSpanBuilder) -> None:
        """An empty or out-of-range composing range is ignored."""
        whole = builder.build("a **b**", BASE, RESOLVER)
        assert builder.build_segments("a **b**", BASE, RESOLVER, composing=(3, 3)) == whole
        assert builder.build_segments("a **b**", BASE, RESOLVER, composing=(2, 99)) == whole
        assert builder.build_segments("a **b**", BASE, RESOLVER, composing=None) == whole

    def test_cursor_is_rebased_per_segment(self, builder: EditSpanBuilder) -> None:
        """The cursor offset is relative to each segment's start."""
        runs = builder.build_segments(
            "x **b**", BASE, RESOLVER, composing=(0, 1), cursor_position=4, marker_opacity=0.0
        )
        assert texts(runs) == ["x", " ", "**", "b", "**"]
        assert runs[2].style == marker_style(BASE)

    def test_module_helper_preserves_length(self) -> None:
        """edit_spans reproduces the input with composing applied."""
        text = "**hi** there"
        runs = edit_spans(text, cursor_position=0, marker_opacity=0.0, composing=(7, 12))
        assert "".join(run.text for run in runs) == text
