"""Tokenizing and pair resolution for inline markup."""

from spanmark.parsing.charsets import has_formatting
from spanmark.parsing.format_stack import FormatStack, FormatStackEntry
from spanmark.parsing.nesting import resolve_pairs, validate_pairs
from spanmark.parsing.pairing import identify_pairs
from spanmark.parsing.tokenizer import Tokenizer, tokenize

__all__ = [
    "FormatStack",
    "FormatStackEntry",
    "Tokenizer",
    "has_formatting",
    "identify_pairs",
    "resolve_pairs",
    "tokenize",
    "validate_pairs",
]
