"""Styled elements: the flat output of the document builder.

Each element is one drawing instruction for a page-layout renderer. Styles
are fully resolved; the renderer never consults the style table.

Element Stream Shape:
    BlockBreak(start) .. content .. BlockBreak(end, spacing)
    IndentBegin(level, marker) .. item content .. IndentEnd(level)

Every BlockBreak(start) has a matching BlockBreak(end) and every
IndentBegin a matching IndentEnd, properly nested.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from markdown2pdf.location import UNKNOWN_LOCATION, SourceLocation
from markdown2pdf.styling.style import BASE_STYLE, ResolvedStyle


@dataclass(frozen=True, slots=True)
class Element:
    """Base class for styled elements."""

    location: SourceLocation = field(
        default=UNKNOWN_LOCATION, kw_only=True, compare=False, repr=False
    )


@dataclass(frozen=True, slots=True)
class BlockBreak(Element):
    """Vertical boundary of a block.

    ``block`` is the block's kind (``paragraph``, ``heading-2``, ...).
    ``spacing`` is the gap after the block and is only set on the end edge.
    """

    block: str
    edge: Literal["start", "end"]
    spacing: float = 0.0


@dataclass(frozen=True, slots=True)
class TextRun(Element):
    """Run of text drawn in one style."""

    text: str
    style: ResolvedStyle


@dataclass(frozen=True, slots=True)
class LinkRun(Element):
    """Clickable text region.

    Text and URL travel together so the renderer can place the link
    annotation over exactly the drawn label. ``segments`` holds the label's
    differently styled pieces (a bold word inside a link); their texts
    concatenate to ``text``.

    """

    text: str
    url: str
    style: ResolvedStyle
    segments: tuple[TextRun, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlockElement(Element):
    """Verbatim code. ``language`` is a hint only; nothing is highlighted."""

    content: str
    language: str | None
    style: ResolvedStyle


@dataclass(frozen=True, slots=True)
class IndentBegin(Element):
    """Start of a list item at a nesting level, with its marker text."""

    level: int
    marker: str
    style: ResolvedStyle = BASE_STYLE


@dataclass(frozen=True, slots=True)
class IndentEnd(Element):
    level: int


@dataclass(frozen=True, slots=True)
class LineBreakElement(Element):
    """Forced line break inside a block."""


@dataclass(frozen=True, slots=True)
class RuleElement(Element):
    """Horizontal rule across the text width."""

    style: ResolvedStyle = BASE_STYLE


@dataclass(frozen=True, slots=True)
class ImageElement(Element):
    """Image placeholder; fetching and embedding belong to the renderer."""

    alt: str
    url: str
    style: ResolvedStyle


type StyledElement = (
    BlockBreak
    | TextRun
    | LinkRun
    | CodeBlockElement
    | IndentBegin
    | IndentEnd
    | LineBreakElement
    | RuleElement
    | ImageElement
)

ELEMENT_TYPES: tuple[type[Element], ...] = (
    BlockBreak,
    TextRun,
    LinkRun,
    CodeBlockElement,
    IndentBegin,
    IndentEnd,
    LineBreakElement,
    RuleElement,
    ImageElement,
)
