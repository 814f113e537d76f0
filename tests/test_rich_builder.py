"""Tests for the rich (read-only display) span builder."""

import pytest

from spanmark import (
    DefaultStyleResolver,
    FontStyle,
    FontWeight,
    FunctionStyleResolver,
    LinkInteraction,
    LinkRun,
    Parser,
    PlaceholderRun,
    RichSpanBuilder,
    ScriptRun,
    StyleResolutionError,
    TextRun,
    TextStyle,
    extract_text,
    is_atomic,
    normalize_url,
    tokenize,
)
from spanmark.parsing.nesting import resolve_pairs
from spanmark.profiling import profiled_parse
from spanmark.styling.defaults import CODE_FONT_FAMILY, LIGHT_THEME, code_style

BASE = TextStyle(font_size=20)
RESOLVER = DefaultStyleResolver()
BOLD = BASE.copy_with(font_weight=FontWeight.BOLD)
ITALIC = BASE.copy_with(font_style=FontStyle.ITALIC)


@pytest.fixture
def builder() -> RichSpanBuilder:
    return RichSpanBuilder(Parser())


class TestFormatting:
    """Markers become styled runs."""

    def test_empty_text(self, builder: RichSpanBuilder) -> None:
        """Empty input produces no runs."""
        assert builder.build("", BASE, RESOLVER) == []

    def test_plain_text(self, builder: RichSpanBuilder) -> None:
        """Unformatted text is one run in the base style."""
        assert builder.build("hello", BASE, RESOLVER) == [TextRun("hello", BASE)]

    def test_bold(self, builder: RichSpanBuilder) -> None:
        """Bold markers are removed and their content is bold."""
        assert builder.build("**bold**", BASE, RESOLVER) == [TextRun("bold", BOLD)]

    def test_surrounding_text(self, builder: RichSpanBuilder) -> None:
        """Text outside the markers keeps the base style."""
        assert builder.build("say *hi* now", BASE, RESOLVER) == [
            TextRun("say ", BASE),
            TextRun("hi", ITALIC),
            TextRun(" now", BASE),
        ]

    def test_nested_styles_compose(self, builder: RichSpanBuilder) -> None:
        """Inner formats apply on top of outer ones."""
        runs = builder.build("**a _b_**", BASE, RESOLVER)
        assert runs == [
            TextRun("a ", BOLD),
            TextRun("b", BOLD.copy_with(font_style=FontStyle.ITALIC)),
        ]

    def test_crossing_markers_render_literally(self, builder: RichSpanBuilder) -> None:
        """Invalid pairs leave the input untouched in one run."""
        text = "**bold *and italic** is wrong*"
        assert builder.build(text, BASE, RESOLVER) == [TextRun(text, BASE)]

    def test_excess_depth_is_literal(self, builder: RichSpanBuilder) -> None:
        """The third nested format shows its markers."""
        runs = builder.build("**a _b ~~c~~_**", BASE, RESOLVER)
        assert extract_text(runs) == "a b ~~c~~"

    def test_unpaired_marker_merges_with_text(self, builder: RichSpanBuilder) -> None:
        """An unpaired marker does not split the surrounding run."""
        assert builder.build("a ** b", BASE, RESOLVER) == [TextRun("a ** b", BASE)]

    def test_escapes_resolved(self, builder: RichSpanBuilder) -> None:
        """Escaped markers display without backslashes."""
        runs = builder.build("\\*not italic\\*", BASE, RESOLVER)
        assert runs == [TextRun("*not italic*", BASE)]

    def test_code_uses_theme(self, builder: RichSpanBuilder) -> None:
        """Code spans get the monospace theme style."""
        runs = builder.build("`x`", BASE, RESOLVER)
        assert runs == [TextRun("x", code_style(BASE, LIGHT_THEME))]
        assert runs[0].style.font_family == CODE_FONT_FAMILY

    def test_build_from_tokens(self, builder: RichSpanBuilder) -> None:
        """Pre-resolved tokens and pairs build the same runs."""
        tokens = tokenize("**bold**")
        runs = builder.build_from_tokens(tokens, resolve_pairs(tokens), BASE, RESOLVER)
        assert runs == [TextRun("bold", BOLD)]

    def test_custom_resolver_function(self, builder: RichSpanBuilder) -> None:
        """A plain callable can supply marker styles."""
        resolver = FunctionStyleResolver(lambda marker_type, style: style.copy_with(font_size=99))
        runs = builder.build("**x**", BASE, resolver)
        assert runs[0].style.font_size == 99

    def test_resolver_returning_none_raises(self, builder: RichSpanBuilder) -> None:
        """A resolver that returns no style is a contract violation."""
        resolver = FunctionStyleResolver(lambda marker_type, style: None)
        with pytest.raises(StyleResolutionError):
            builder.build("**x**", BASE, resolver)


class TestLinks:
    """Link rendering."""

    def test_link_without_callback_is_plain_link_styled_text(
        self, builder: RichSpanBuilder
    ) -> None:
        """With no callback a link is a non-interactive run in link style."""
        runs = builder.build("[click](https://x.com)", BASE, RESOLVER)
        assert runs == [TextRun("click", RESOLVER.resolve_link_style(BASE))]

    def test_link_with_callback(self, builder: RichSpanBuilder) -> None:
        """The callback receives url and display text; its result is attached."""
        calls: list[tuple[str, str]] = []
        interaction = LinkInteraction()

        def on_link(url: str, text: str) -> LinkInteraction:
            calls.append((url, text))
            return interaction

        runs = builder.build("go [there](x.com) now", BASE, RESOLVER, link_callback=on_link)
        assert calls == [("http://x.com", "there")]
        link = runs[1]
        assert isinstance(link, LinkRun)
        assert link.url == "http://x.com"
        assert link.text == "there"
        assert link.interaction is interaction
        assert link.style == RESOLVER.resolve_link_style(BASE)
        assert link.hover_style == RESOLVER.resolve_link_hover_style(BASE)
        assert is_atomic(link)

    def test_link_inherits_outer_format(self, builder: RichSpanBuilder) -> None:
        """A link inside bold resolves its style from the bold style."""
        runs = builder.build("**[x](https://a.b)**", BASE, RESOLVER)
        assert runs == [TextRun("x", RESOLVER.resolve_link_style(BOLD))]

    def test_formatted_link_text(self, builder: RichSpanBuilder) -> None:
        """Markers inside link text format the link's children."""
        runs = builder.build(
            "[**bold** link](https://a.b)", BASE, RESOLVER, link_callback=lambda u, t: None
        )
        link = runs[0]
        assert isinstance(link, LinkRun)
        link_style = RESOLVER.resolve_link_style(BASE)
        assert link.children == (
            TextRun("bold", link_style.copy_with(font_weight=FontWeight.BOLD)),
            TextRun(" link", link_style),
        )
        assert link.text == "bold link"

    def test_link_text_is_not_cached_separately(self, builder: RichSpanBuilder) -> None:
        """Formatted link text does not add cache entries or parse calls."""
        text = "see [**bold** link](https://a.b)"
        with profiled_parse() as acc:
            builder.build(text, BASE, RESOLVER, link_callback=lambda u, t: None)
        assert builder.parser.cache.keys() == [text]
        assert acc.parse_calls == 1

    def test_escaped_link_text(self, builder: RichSpanBuilder) -> None:
        """Escapes inside link text are resolved for display."""
        runs = builder.build("[a\\*b](https://a.b)", BASE, RESOLVER)
        assert extract_text(runs) == "a*b"

    def test_placeholder_in_link_text_stays_literal(self, builder: RichSpanBuilder) -> None:
        """Link children never contain embedded elements."""
        runs = builder.build(
            "[hi {name}](https://a.b)", BASE, RESOLVER, placeholders={"name": object()}
        )
        assert extract_text(runs) == "hi {name}"

    def test_empty_link_text(self, builder: RichSpanBuilder) -> None:
        """An empty link with no callback renders nothing."""
        assert builder.build("[](https://a.b)", BASE, RESOLVER) == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("example.com", "http://example.com"),
            ("  example.com  ", "http://example.com"),
            ("localhost", "http://localhost"),
            ("https://x.com", "https://x.com"),
            ("mailto:a@b.c", "mailto:a@b.c"),
            ("/relative/path", "/relative/path"),
            ("#section", "#section"),
            ("word", "word"),
        ],
    )
    def test_normalize_url(self, raw: str, expected: str) -> None:
        """Bare domains get a scheme; everything else is trimmed only."""
        assert normalize_url(raw) == expected


class TestPlaceholders:
    """Placeholder substitution."""

    def test_known_placeholder(self, builder: RichSpanBuilder) -> None:
        """A known key becomes an atomic run carrying the element."""
        element = object()
        runs = builder.build("Hi {name}!", BASE, RESOLVER, placeholders={"name": element})
        assert runs == [
            TextRun("Hi ", BASE),
            PlaceholderRun("name", element, BASE),
            TextRun("!", BASE),
        ]

    def test_unknown_placeholder_is_literal(self, builder: RichSpanBuilder) -> None:
        """An unknown key stays in the text without splitting the run."""
        assert builder.build("Hi {name}!", BASE, RESOLVER) == [TextRun("Hi {name}!", BASE)]

    def test_lookup_is_case_sensitive(self, builder: RichSpanBuilder) -> None:
        """Keys must match exactly."""
        runs = builder.build("{Name}", BASE, RESOLVER, placeholders={"name": 1})
        assert runs == [TextRun("{Name}", BASE)]

    def test_placeholder_carries_active_style(self, builder: RichSpanBuilder) -> None:
        """An element inside bold is given the bold style."""
        runs = builder.build("**{x}**", BASE, RESOLVER, placeholders={"x": "el"})
        assert runs == [PlaceholderRun("x", "el", BOLD)]


class TestScripts:
    """Superscript and subscript."""

    def test_subscript_is_atomic_run(self, builder: RichSpanBuilder) -> None:
        """Subscript text sits between ordinary runs as a script run."""
        runs = builder.build("H~2~O", BASE, RESOLVER)
        assert [type(run) for run in runs] == [TextRun, ScriptRun, TextRun]
        script = runs[1]
        assert isinstance(script, ScriptRun)
        assert script.text == "2"
        assert not script.superscript
        assert script.style.font_size == pytest.approx(20 * 0.6)
        assert script.baseline_offset == pytest.approx(20 * 0.6 * 0.4)
        assert script.padding == pytest.approx(abs(script.baseline_offset) * 2)

    def test_superscript_moves_up(self, builder: RichSpanBuilder) -> None:
        """Superscript offsets are negative."""
        runs = builder.build("x^2^", BASE, RESOLVER)
        script = runs[1]
        assert isinstance(script, ScriptRun)
        assert script.superscript
        assert script.baseline_offset < 0

    def test_formatting_inside_script(self, builder: RichSpanBuilder) -> None:
        """Bold inside superscript is kept on the script run."""
        runs = builder.build("^**bold**^", BASE, RESOLVER)
        assert len(runs) == 1
        script = runs[0]
        assert isinstance(script, ScriptRun)
        assert script.text == "bold"
        assert script.style.font_weight is FontWeight.BOLD
        assert script.style.font_size == pytest.approx(12.0)

    def test_default_font_size_when_unset(self, builder: RichSpanBuilder) -> None:
        """Scripts scale from 14 when the base style has no size."""
        runs = builder.build("^a^", TextStyle(), RESOLVER)
        assert runs[0].style.font_size == pytest.approx(14 * 0.6)
