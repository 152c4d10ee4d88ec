"""Document builder: token tree to styled elements.

Walks the tree in document order with an explicit work stack and emits a
flat tuple of styled elements. Closing elements (block end breaks, indent
ends) are pushed beneath a token's children so they pop after them.

Style layering for a token:
    text defaults -> each ancestor's resolved style -> the token's own
    -> filled from the base ResolvedStyle

Plain text (Text, Literal, breaks) adds no layer of its own; it draws in
the style of its context.

Example:
    >>> from markdown2pdf import parse
    >>> elements = build_document(parse("Hello *world*"))
    >>> [type(e).__name__ for e in elements]
    ['BlockBreak', 'TextRun', 'TextRun', 'BlockBreak']

Thread Safety:
    A DocumentBuilder holds only a resolver cache. Share the StyleMatch,
    not the builder.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

from markdown2pdf.errors import BuildError
from markdown2pdf.renderers.elements import (
    BlockBreak,
    CodeBlockElement,
    Element,
    ImageElement,
    IndentBegin,
    IndentEnd,
    LineBreakElement,
    LinkRun,
    RuleElement,
    StyledElement,
    TextRun,
)
from markdown2pdf.styling.resolver import StyleResolver
from markdown2pdf.styling.style import BASE_STYLE, ResolvedStyle, Style
from markdown2pdf.styling.table import StyleMatch
from markdown2pdf.tokens import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Literal,
    Paragraph,
    SoftBreak,
    Text,
    ThematicBreak,
    Token,
    child_tokens,
)
from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)

BULLET = "•"

_TEXT_KEYS = ("text",)


class _Pending(NamedTuple):
    """A token waiting on the work stack, with its context."""

    token: Token
    ancestry: tuple[Token, ...]
    layer: Style
    marker: str = ""


def as_style_table(table: StyleMatch | Mapping[str, Any] | None) -> StyleMatch:
    """Accept a StyleMatch, raw TOML-shaped data, or None (defaults only)."""
    if table is None:
        return StyleMatch.default()
    if isinstance(table, StyleMatch):
        return table
    return StyleMatch.from_dict(table)


class DocumentBuilder:
    """Lay out a token tree as styled elements.

    Usage:
        >>> builder = DocumentBuilder(StyleMatch.from_dict({"heading": {"1": {"size": 24}}}))
        >>> elements = builder.build(doc)

    """

    __slots__ = ("_resolver", "_base", "_text_layer")

    def __init__(
        self,
        table: StyleMatch | Mapping[str, Any] | None = None,
        *,
        base: ResolvedStyle = BASE_STYLE,
    ) -> None:
        self._resolver = StyleResolver(as_style_table(table))
        self._base = base
        self._text_layer = self._resolver.resolve("text")

    @property
    def table(self) -> StyleMatch:
        return self._resolver.table

    def build(self, root: Token) -> tuple[StyledElement, ...]:
        """Walk root in document order and return its styled elements.

        Raises:
            BuildError: If the tree holds a token the builder cannot lay out.
        """
        elements: list[StyledElement] = []
        stack: list[_Pending | Element] = [_Pending(root, (), self._text_layer)]

        while stack:
            item = stack.pop()
            if isinstance(item, Element):
                elements.append(item)  # type: ignore[arg-type]
                continue
            self._enter(item, elements, stack)

        logger.debug("Built %d styled elements", len(elements))
        return tuple(elements)

    def _layer(self, pending: _Pending) -> Style:
        if pending.token.style_keys == _TEXT_KEYS:
            return pending.layer
        return pending.layer.merged(self._resolver.resolve(pending.token, pending.ancestry))

    def _enter(
        self,
        pending: _Pending,
        elements: list[StyledElement],
        stack: list[_Pending | Element],
    ) -> None:
        token = pending.token
        layer = self._layer(pending)
        style = layer.resolve_against(self._base)
        loc = token.location
        child_ancestry = (*pending.ancestry, token)

        match token:
            case Text(content=content) | Literal(content=content) | CodeSpan(content=content):
                if content:
                    elements.append(TextRun(content, style, location=loc))
            case SoftBreak():
                elements.append(TextRun(" ", style, location=loc))
            case LineBreak():
                elements.append(LineBreakElement(location=loc))
            case Image(alt=alt, url=url):
                elements.append(ImageElement(alt, url, style, location=loc))
            case Link():
                elements.append(self._link_run(token, pending.ancestry, layer, style))
            case Document(children=children) | Emphasis(children=children):
                _push_children(stack, children, child_ancestry, layer)
            case ListItem(children=children):
                level = sum(1 for a in pending.ancestry if isinstance(a, List))
                elements.append(IndentBegin(level, pending.marker, style, location=loc))
                stack.append(IndentEnd(level, location=loc))
                _push_children(stack, children, child_ancestry, layer)
            case Heading(children=children) | Paragraph(children=children) | BlockQuote(
                children=children
            ):
                _open_block(token, style, elements, stack)
                _push_children(stack, children, child_ancestry, layer)
            case CodeBlock(content=content, language=language):
                _open_block(token, style, elements, stack)
                elements.append(CodeBlockElement(content, language, style, location=loc))
            case ThematicBreak():
                _open_block(token, style, elements, stack)
                elements.append(RuleElement(style, location=loc))
            case List(ordered=ordered, items=items):
                _open_block(token, style, elements, stack)
                for index in range(len(items) - 1, -1, -1):
                    marker = f"{index + 1}." if ordered else BULLET
                    stack.append(_Pending(items[index], child_ancestry, layer, marker))
            case _:
                raise BuildError(
                    f"Cannot lay out {type(token).__name__} token", loc.offset or None
                )

    def _link_run(
        self,
        link: Link,
        ancestry: tuple[Token, ...],
        layer: Style,
        style: ResolvedStyle,
    ) -> LinkRun:
        """Flatten a link label into one LinkRun with per-style segments."""
        segments: list[TextRun] = []
        link_ancestry = (*ancestry, link)
        stack = [_Pending(child, link_ancestry, layer) for child in reversed(link.label)]

        while stack:
            pending = stack.pop()
            token = pending.token
            token_layer = self._layer(pending)
            match token:
                case Text(content=text) | Literal(content=text) | CodeSpan(content=text):
                    pass
                case Image(alt=text):
                    pass
                case SoftBreak() | LineBreak():
                    text = " "
                case _:
                    child_ancestry = (*pending.ancestry, token)
                    for child in reversed(child_tokens(token)):
                        stack.append(_Pending(child, child_ancestry, token_layer))
                    continue
            if not text:
                continue
            run_style = token_layer.resolve_against(self._base)
            if segments and segments[-1].style == run_style:
                last = segments[-1]
                segments[-1] = TextRun(last.text + text, run_style, location=last.location)
            else:
                segments.append(TextRun(text, run_style, location=token.location))

        text = "".join(segment.text for segment in segments)
        if not text:
            # [](url) shows its URL
            text = link.url
            segments = [TextRun(text, style, location=link.location)]
        return LinkRun(text, link.url, style, tuple(segments), location=link.location)


def _open_block(
    token: Token,
    style: ResolvedStyle,
    elements: list[StyledElement],
    stack: list[_Pending | Element],
) -> None:
    elements.append(BlockBreak(token.kind, "start", location=token.location))
    stack.append(BlockBreak(token.kind, "end", style.after_spacing, location=token.location))


def _push_children(
    stack: list[_Pending | Element],
    children: tuple[Token, ...],
    ancestry: tuple[Token, ...],
    layer: Style,
) -> None:
    for child in reversed(children):
        stack.append(_Pending(child, ancestry, layer))


def build_document(
    root: Token,
    table: StyleMatch | Mapping[str, Any] | None = None,
) -> tuple[StyledElement, ...]:
    """Lay out a token tree against a style table.

    Args:
        root: Usually the Document from ``build``/``parse``
        table: StyleMatch, raw TOML-shaped mapping, or None for defaults

    Returns:
        Flat tuple of styled elements in document order.

    """
    return DocumentBuilder(table).build(root)
