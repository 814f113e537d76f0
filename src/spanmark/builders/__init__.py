"""Span builders: rich display runs and length-preserving edit runs."""

from spanmark.builders.edit import EditSpanBuilder
from spanmark.builders.rich import LinkCallback, RichSpanBuilder, normalize_url

__all__ = ["EditSpanBuilder", "LinkCallback", "RichSpanBuilder", "normalize_url"]
