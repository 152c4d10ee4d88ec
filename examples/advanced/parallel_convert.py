"""One shared style table, 1000 documents converted in parallel."""

from concurrent.futures import ThreadPoolExecutor

from markdown2pdf import Converter

converter = Converter({"heading": {"1": {"size": 24}}, "link": {"textcolor": "#cc0000"}})
docs = ["# Doc " + str(i) + "\n\nSee [item " + str(i) + "](https://example.com)" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(converter, docs))

print(f"Converted {len(results)} documents in parallel")
print("Elements in first doc:", len(results[0]))
