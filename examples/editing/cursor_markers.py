"""Edit-mode runs: every character kept, markers fade away from the cursor."""

from spanmark import edit_spans

text = "plain **bold** and _italic_"

for cursor in (0, 9, 22):
    runs = edit_spans(text, cursor_position=cursor, marker_opacity=0.0)
    assert "".join(run.text for run in runs) == text
    hidden = [run.text for run in runs if run.style.color and run.style.color.alpha == 0.0]
    print(f"cursor={cursor:2d} hidden markers: {hidden}")

# IME composing region is underlined and parsed on its own
runs = edit_spans(text, composing=(6, 14))
print([run.text for run in runs])
