"""Collect parse and cache counters for a batch of renders."""

from spanmark import DefaultStyleResolver, ParseConfig, Parser, RichSpanBuilder, TextStyle
from spanmark.profiling import profiled_parse

builder = RichSpanBuilder(Parser(config=ParseConfig(max_cache_entries=8)))
style = TextStyle(font_size=16)
resolver = DefaultStyleResolver()

with profiled_parse() as metrics:
    for i in range(100):
        builder.build(f"row **{i % 10}** of _many_", style, resolver)

for key, value in metrics.summary().items():
    print(f"{key}: {value}")
