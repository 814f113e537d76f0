"""Opt-in profiling for parsing and span building.

Accumulates counters across every parse and build inside a
``profiled_parse()`` block. Zero overhead when disabled
(get_parse_accumulator() returns None).

Example:
    from spanmark import render_spans
    from spanmark.profiling import profiled_parse

    with profiled_parse() as metrics:
        render_spans("**Hello** _World_")

    print(metrics.summary())
    # {"total_ms": 0.4, "parse_calls": 1, "source_length": 17, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ParseAccumulator:
    """Accumulated metrics during parsing and building.

    Attributes:
        start_time: Profiling start timestamp.
        parse_calls: Number of Parser.parse() calls.
        source_length: Total characters parsed.
        token_count: Tokens produced by fresh (uncached) tokenization.
        cache_hits: Parses answered from the cache.
        cache_misses: Parses that tokenized and were cacheable.
        cache_bypasses: Parses of text too long to cache.
        run_count: Runs emitted by span builders.

    """

    start_time: float = field(default_factory=perf_counter)
    parse_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    cache_bypasses: int = 0
    run_count: int = 0

    def record_parse(self, source_length: int) -> None:
        self.parse_calls += 1
        self.source_length += source_length

    def record_tokens(self, token_count: int) -> None:
        self.token_count += token_count

    def record_runs(self, run_count: int) -> None:
        self.run_count += run_count

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "parse_calls": self.parse_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "cache_bypasses": self.cache_bypasses,
            "run_count": self.run_count,
        }


_accumulator: ContextVar[ParseAccumulator | None] = ContextVar(
    "spanmark_parse_accumulator",
    default=None,
)


def get_parse_accumulator() -> ParseAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_parse() -> Iterator[ParseAccumulator]:
    """Context manager for profiled parsing.

    Creates a ParseAccumulator and makes it available via
    get_parse_accumulator() for the duration of the with block.

    Yields:
        ParseAccumulator that will be populated during parse and build calls.

    """
    acc = ParseAccumulator()
    token: Token[ParseAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = ["ParseAccumulator", "get_parse_accumulator", "profiled_parse"]
