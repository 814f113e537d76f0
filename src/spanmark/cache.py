"""Bounded LRU cache of parse results.

Parsing the same string twice yields the same tokens and pairs, so a Parser
keeps recent results keyed by the exact input text. Inputs longer than
``max_key_length`` are never stored: long documents are rarely repeated
verbatim and would dominate memory.

Thread Safety:
    LRUParseCache guards its map with a threading.Lock. A read promotes the
    entry to most-recently-used, so reads mutate too and take the lock.

Example:
    >>> cache = LRUParseCache(max_entries=2)
    >>> parser = Parser(cache=cache)
    >>> _ = parser.parse("**a**")
    >>> "**a**" in cache
    True
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from spanmark.config import (
    DEFAULT_MAX_CACHE_ENTRIES,
    DEFAULT_MAX_CACHE_KEY_LENGTH,
    DEFAULT_MAX_NESTING_DEPTH,
)
from spanmark.errors import ConfigError
from spanmark.tokens import Token
from spanmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Tokens and validated pairs for one input string.

    ``pairs`` is a read-only mapping so a cached result can be shared by
    every caller without copying. ``max_depth`` is the nesting limit the
    pairs were validated under; a cached result only answers a parse that
    uses the same limit.
    """

    tokens: tuple[Token, ...]
    pairs: Mapping[int, int]
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH


@dataclass(slots=True)
class CacheStats:
    """Counters for cache effectiveness."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    bypasses: int = 0


class ParseCache(Protocol):
    """Protocol for parse result caches keyed by raw text."""

    def get(self, text: str) -> ParseResult | None:
        """Return the cached result for text, or None."""
        ...

    def put(self, text: str, result: ParseResult) -> bool:
        """Store result; return False if text is not cacheable."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...


class LRUParseCache:
    """In-memory LRU cache with an entry limit and a key-length limit.

    Args:
        max_entries: Entries kept before the least recently used is evicted
        max_key_length: Longer texts are refused by ``put``

    Raises:
        ConfigError: If max_entries < 1 or max_key_length < 0.

    """

    __slots__ = ("_data", "_lock", "max_entries", "max_key_length", "stats")

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_CACHE_ENTRIES,
        max_key_length: int = DEFAULT_MAX_CACHE_KEY_LENGTH,
    ) -> None:
        if max_entries < 1:
            raise ConfigError("max_entries", max_entries, "must be >= 1")
        if max_key_length < 0:
            raise ConfigError("max_key_length", max_key_length, "must be >= 0")
        self.max_entries = max_entries
        self.max_key_length = max_key_length
        self.stats = CacheStats()
        self._data: OrderedDict[str, ParseResult] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, text: object) -> bool:
        """Membership test without promoting the entry."""
        return text in self._data

    def keys(self) -> list[str]:
        """Cached texts, least recently used first."""
        with self._lock:
            return list(self._data)

    def get(self, text: str) -> ParseResult | None:
        with self._lock:
            result = self._data.get(text)
            if result is None:
                self.stats.misses += 1
                return None
            self._data.move_to_end(text)
            self.stats.hits += 1
            return result

    def put(self, text: str, result: ParseResult) -> bool:
        if len(text) > self.max_key_length:
            self.stats.bypasses += 1
            logger.debug(
                "not caching %d-char text (limit %d)", len(text), self.max_key_length
            )
            return False
        with self._lock:
            if text in self._data:
                self._data.move_to_end(text)
            elif len(self._data) >= self.max_entries:
                self._data.popitem(last=False)
                self.stats.evictions += 1
                logger.debug("evicted least recently used entry (limit %d)", self.max_entries)
            self._data[text] = result
        return True

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class NullParseCache:
    """A cache that stores nothing; every parse tokenizes afresh."""

    __slots__ = ()

    def get(self, text: str) -> ParseResult | None:
        return None

    def put(self, text: str, result: ParseResult) -> bool:
        return False

    def clear(self) -> None:
        pass


__all__ = [
    "CacheStats",
    "LRUParseCache",
    "NullParseCache",
    "ParseCache",
    "ParseResult",
]
