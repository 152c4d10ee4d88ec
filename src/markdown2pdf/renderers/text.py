"""Plain-text renderer for styled elements.

Useful for previews, debugging and tests: layout survives (blank lines
between blocks, indented list markers) while styles are dropped. Link URLs
and code languages are labeled explicitly.

Example:
    >>> from markdown2pdf import convert
    >>> TextRenderer().render(convert("# Hi\\n\\n- [docs](https://x.io)"))
    'Hi\\n\\n• docs <https://x.io>\\n'
"""

from collections.abc import Sequence

from markdown2pdf.renderers.elements import (
    BlockBreak,
    CodeBlockElement,
    ImageElement,
    IndentBegin,
    IndentEnd,
    LineBreakElement,
    LinkRun,
    RuleElement,
    StyledElement,
    TextRun,
)
from markdown2pdf.utils.stringbuilder import StringBuilder

INDENT = "  "


class TextRenderer:
    """Render styled elements to structured plain text."""

    __slots__ = ("_sb", "_depth")

    def __init__(self) -> None:
        self._sb = StringBuilder()
        self._depth = 0

    def render(self, elements: Sequence[StyledElement]) -> str:
        """Render elements to plain text ending in one newline."""
        self._sb = StringBuilder()
        self._depth = 0
        for element in elements:
            self._render_element(element)
        text = self._sb.build().strip("\n")
        return text + "\n" if text else ""

    def _render_element(self, element: StyledElement) -> None:
        sb = self._sb
        match element:
            case TextRun(text=text):
                sb.append(text)
            case LinkRun(text=text, url=url):
                sb.append(text if text == url else f"{text} <{url}>")
            case ImageElement(alt=alt, url=url):
                sb.append(f"[image: {alt}]({url})" if alt else f"[image]({url})")
            case LineBreakElement():
                sb.append("\n" + INDENT * self._depth)
            case CodeBlockElement(content=content, language=language):
                sb.end_line().append_line(f"[code:{language}]" if language else "[code]")
                sb.append(content).end_line().append_line("[/code]")
            case RuleElement():
                sb.end_line().append_line("---")
            case IndentBegin(level=level, marker=marker):
                sb.end_line().append(INDENT * (level - 1) + marker + " ")
                self._depth = level
            case IndentEnd(level=level):
                sb.end_line()
                self._depth = level - 1
            case BlockBreak(edge="end"):
                sb.end_line()
                if self._depth == 0:
                    sb.append("\n")
            case BlockBreak():
                pass
