"""Markdown to styled elements in 3 lines, with the built-in styles."""

from markdown2pdf import TextRenderer, convert

elements = convert("# Hello **World**\n\n- one\n- [two](https://example.com)")
for element in elements:
    print(element)
print(TextRenderer().render(elements))
