"""Thread safe: render 1000 strings in parallel through one shared cache."""

from concurrent.futures import ThreadPoolExecutor

from spanmark import extract_text, render_spans

texts = [f"Item **{i % 50}** is ==highlighted== and ~~done~~" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(render_spans, texts))

print(f"Rendered {len(results)} strings in parallel")
print("First:", extract_text(results[0]))
print("Last:", extract_text(results[-1]))
