"""ContextVar-based parse configuration for spanmark.

Provides per-context configuration using Python's ContextVars (PEP 567).
A Parser captures the active config when it is constructed, so a config set
inside ``parse_config_context`` shapes every parser and cache created there.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from spanmark.config import ParseConfig, parse_config_context
    from spanmark.parser import Parser

    with parse_config_context(ParseConfig(max_nesting_depth=3)):
        parser = Parser()

    result = parser.parse("**a _b ~~c~~_**")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from spanmark.errors import ConfigError

DEFAULT_MAX_CACHE_ENTRIES = 200
DEFAULT_MAX_CACHE_KEY_LENGTH = 1000
DEFAULT_MAX_NESTING_DEPTH = 2


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        max_cache_entries: LRU capacity of a parser's token/pair cache
        max_cache_key_length: Texts longer than this are never cached
        max_nesting_depth: Number of formats that may be open at once

    Raises:
        ConfigError: If any limit is out of range.

    """

    max_cache_entries: int = DEFAULT_MAX_CACHE_ENTRIES
    max_cache_key_length: int = DEFAULT_MAX_CACHE_KEY_LENGTH
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def __post_init__(self) -> None:
        if self.max_cache_entries < 1:
            raise ConfigError("max_cache_entries", self.max_cache_entries, "must be >= 1")
        if self.max_cache_key_length < 0:
            raise ConfigError(
                "max_cache_key_length", self.max_cache_key_length, "must be >= 0"
            )
        if self.max_nesting_depth < 1:
            raise ConfigError("max_nesting_depth", self.max_nesting_depth, "must be >= 1")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "max_nesting_depth": 3,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.max_nesting_depth
            3

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "spanmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(max_cache_entries=10)):
        ...     get_parse_config().max_cache_entries
        10

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_MAX_CACHE_ENTRIES",
    "DEFAULT_MAX_CACHE_KEY_LENGTH",
    "DEFAULT_MAX_NESTING_DEPTH",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
