"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from spanmark.parsing.charsets import TRIGGER_CHARS

    if char in TRIGGER_CHARS:  # O(1) lookup
        ...
"""

# Characters that can open or close a format marker
MARKER_CHARS: frozenset[str] = frozenset("*_~`^+=")

# Characters that start any non-text token
TRIGGER_CHARS: frozenset[str] = MARKER_CHARS | frozenset("\\[{")

# Characters a backslash can escape; anything else keeps its backslash
ESCAPABLE_CHARS: frozenset[str] = MARKER_CHARS | frozenset("\\[](){}")

# Markers that only count when doubled; a single one is plain text
DOUBLED_ONLY_CHARS: frozenset[str] = frozenset("+=")

# Placeholder keys: ASCII letters, digits, underscore
PLACEHOLDER_KEY_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)

# A URL containing none of these is treated as a bare domain
URL_SCHEME_HINT_CHARS: frozenset[str] = frozenset(":/#")

ESCAPE_CHAR = "\\"


def has_formatting(text: str) -> bool:
    """Return True if text contains any character that could start a token.

    False means the whole text is one plain run and tokenizing can be skipped.

    """
    return not TRIGGER_CHARS.isdisjoint(text)


def has_marker_chars(text: str) -> bool:
    """Return True if text contains a format marker or escape character.

    Used to decide whether link display text needs a nested formatting pass.

    """
    return ESCAPE_CHAR in text or not MARKER_CHARS.isdisjoint(text)


def is_placeholder_key(key: str) -> bool:
    """Return True if key is a non-empty run of placeholder key characters."""
    return bool(key) and all(c in PLACEHOLDER_KEY_CHARS for c in key)


__all__ = [
    "DOUBLED_ONLY_CHARS",
    "ESCAPABLE_CHARS",
    "ESCAPE_CHAR",
    "MARKER_CHARS",
    "PLACEHOLDER_KEY_CHARS",
    "TRIGGER_CHARS",
    "URL_SCHEME_HINT_CHARS",
    "has_formatting",
    "has_marker_chars",
    "is_placeholder_key",
]
