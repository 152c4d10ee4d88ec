"""markdown2pdf renderers.

The document builder lays a token tree out as styled elements; renderers
consume those elements.

Available:
- DocumentBuilder / build_document: token tree to styled elements
- TextRenderer: styled elements to plain text (reference ElementRenderer)

Page-layout backends (PDF byte encoding, fonts, link annotations) live
outside this package and implement ElementRenderer.

Thread Safety:
build_document and TextRenderer.render keep all state local to one call.

"""

from markdown2pdf.renderers.document import BULLET, DocumentBuilder, as_style_table, build_document
from markdown2pdf.renderers.elements import (
    ELEMENT_TYPES,
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
from markdown2pdf.renderers.protocol import ElementRenderer
from markdown2pdf.renderers.text import TextRenderer

__all__ = [
    "BULLET",
    "ELEMENT_TYPES",
    "BlockBreak",
    "CodeBlockElement",
    "DocumentBuilder",
    "Element",
    "ElementRenderer",
    "ImageElement",
    "IndentBegin",
    "IndentEnd",
    "LineBreakElement",
    "LinkRun",
    "RuleElement",
    "StyledElement",
    "TextRenderer",
    "TextRun",
    "as_style_table",
    "build_document",
]
