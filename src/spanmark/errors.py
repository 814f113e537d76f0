"""Exception classes for spanmark.

Malformed markup never raises: unpaired markers, broken links and unknown
placeholders all degrade to literal text. Exceptions are reserved for
misconfiguration and for collaborators that break their contract.
"""

from __future__ import annotations


class SpanmarkError(Exception):
    """Base exception for all spanmark errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(SpanmarkError, ValueError):
    """Invalid configuration value.

    Raised at construction time so a bad limit fails before any text is parsed.
    """

    def __init__(self, field: str, value: object, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending setting (e.g., "max_cache_entries")
            value: The rejected value
            message: Description of the constraint that was violated
        """
        self.field = field
        self.value = value
        super().__init__(f"{field}={value!r}: {message}")


class StyleResolutionError(SpanmarkError):
    """A style resolver returned no style for a marker type."""

    def __init__(self, marker_type: object) -> None:
        self.marker_type = marker_type
        super().__init__(f"style resolver returned None for {marker_type!r}")


__all__ = [
    "ConfigError",
    "SpanmarkError",
    "StyleResolutionError",
]
