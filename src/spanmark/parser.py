"""Cache-mediated parse pipeline: tokenize, pair, validate.

Parser turns raw text into a ParseResult (tokens plus validated pairs). Both
span builders start from a ParseResult, so one Parser, and its cache, can
serve rich display and editing alike.

Fast paths skip the cache entirely: empty text has no tokens, and text with
no trigger character is a single text token.

Thread Safety:
    Parser holds only its tokenizer, cache and config. Concurrent parse()
    calls are safe when the cache is (LRUParseCache is).

Example:
    >>> parser = Parser()
    >>> result = parser.parse("**bold**")
    >>> dict(result.pairs)
    {0: 2, 2: 0}

"""

from __future__ import annotations

from types import MappingProxyType
from typing import Protocol

from spanmark.cache import LRUParseCache, ParseCache, ParseResult
from spanmark.config import ParseConfig, get_parse_config
from spanmark.parsing.charsets import has_formatting
from spanmark.parsing.nesting import resolve_pairs
from spanmark.parsing.tokenizer import Tokenizer
from spanmark.profiling import get_parse_accumulator
from spanmark.tokens import TextToken, Token
from spanmark.utils.logger import get_logger

logger = get_logger(__name__)

_EMPTY_PAIRS: MappingProxyType[int, int] = MappingProxyType({})
_EMPTY_RESULT = ParseResult(tokens=(), pairs=_EMPTY_PAIRS)


class TokenizerLike(Protocol):
    def tokenize(self, text: str) -> list[Token]: ...


class Parser:
    """Tokenizes and pairs text, reusing results for repeated input.

    Args:
        tokenizer: Tokenizer to use (default: a new Tokenizer)
        cache: Result cache (default: an LRUParseCache sized from config)
        config: Limits to apply (default: the active context's ParseConfig)

    A cache may be shared between parsers. Results are stored with the
    nesting limit they were validated under, and a parser whose
    ``max_nesting_depth`` differs re-parses and replaces the entry instead
    of reusing it.

    """

    __slots__ = ("_cache", "_config", "_tokenizer")

    def __init__(
        self,
        *,
        tokenizer: TokenizerLike | None = None,
        cache: ParseCache | None = None,
        config: ParseConfig | None = None,
    ) -> None:
        self._config = config if config is not None else get_parse_config()
        self._tokenizer = tokenizer if tokenizer is not None else Tokenizer()
        if cache is None:
            cache = LRUParseCache(
                max_entries=self._config.max_cache_entries,
                max_key_length=self._config.max_cache_key_length,
            )
        self._cache = cache

    @property
    def config(self) -> ParseConfig:
        return self._config

    @property
    def cache(self) -> ParseCache:
        return self._cache

    def parse(self, text: str) -> ParseResult:
        """Return tokens and validated pairs for text."""
        acc = get_parse_accumulator()
        if acc is not None:
            acc.record_parse(len(text))

        if not text:
            return _EMPTY_RESULT
        if not has_formatting(text):
            return ParseResult(tokens=(TextToken(text, 0, len(text)),), pairs=_EMPTY_PAIRS)

        depth = self._config.max_nesting_depth
        cacheable = len(text) <= self._config.max_cache_key_length
        if cacheable:
            cached = self._cache.get(text)
            if cached is not None and cached.max_depth == depth:
                if acc is not None:
                    acc.cache_hits += 1
                return cached

        tokens = tuple(self._tokenizer.tokenize(text))
        pairs = resolve_pairs(tokens, depth)
        result = ParseResult(tokens=tokens, pairs=MappingProxyType(pairs), max_depth=depth)

        if acc is not None:
            acc.record_tokens(len(tokens))
        if cacheable:
            self._cache.put(text, result)
            if acc is not None:
                acc.cache_misses += 1
        else:
            logger.debug("text of %d chars parsed without caching", len(text))
            if acc is not None:
                acc.cache_bypasses += 1
        return result

    def clear_cache(self) -> None:
        """Drop every cached result; the next parse of any text tokenizes again."""
        self._cache.clear()


__all__ = ["Parser", "TokenizerLike"]
