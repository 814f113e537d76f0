"""Render inline markup to styled runs in a few lines with no configuration."""

from spanmark import extract_text, render_spans

runs = render_spans("Hello **World**, H~2~O and x^2^")
print(extract_text(runs))
for run in runs:
    print(type(run).__name__, repr(extract_text([run])))
