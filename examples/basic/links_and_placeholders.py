"""Attach link interactions and embed elements for {placeholders}."""

from spanmark import LinkInteraction, LinkRun, PlaceholderRun, render_spans


def on_link(url: str, text: str) -> LinkInteraction:
    return LinkInteraction(on_tap=lambda: print("open", url))


runs = render_spans(
    "Hi {user}, see [the **docs**](example.com) for more.",
    link_callback=on_link,
    placeholders={"user": "<avatar widget>"},
)

for run in runs:
    if isinstance(run, LinkRun):
        print("link:", run.url, "->", run.text, f"({len(run.children)} children)")
        if isinstance(run.interaction, LinkInteraction) and run.interaction.on_tap:
            run.interaction.on_tap()
    elif isinstance(run, PlaceholderRun):
        print("element:", run.element)
    else:
        print("text:", repr(run.text))
