"""
markdown2pdf: Markdown to styled page elements.

Turns Markdown text into a flat sequence of styled drawing elements (text
runs, block breaks, code blocks, link regions, list indents) ready for a
page-layout backend such as a PDF writer.

Pipeline:
    text -> scan -> units -> build -> Document -> build_document -> elements

Quick Start:
    >>> from markdown2pdf import convert
    >>> elements = convert("# Hello **World**")

    >>> # With a style table (TOML-shaped data or a StyleMatch)
    >>> elements = convert(text, {"heading": {"1": {"size": 24}}})

    >>> # Reusable converter
    >>> from markdown2pdf import Converter
    >>> converter = Converter({"link": {"textcolor": "#cc0000"}})
    >>> elements = converter("See [docs](https://example.com)")

Installation:
    pip install markdown2pdf           # Core (zero deps)
    pip install markdown2pdf[test]     # + pytest, hypothesis
"""

from collections.abc import Mapping
from typing import Any

from markdown2pdf.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from markdown2pdf.errors import BuildError, Markdown2PdfError, ScanError
from markdown2pdf.lexer import Scanner, scan
from markdown2pdf.location import SourceLocation
from markdown2pdf.parsing import TokenBuilder, build
from markdown2pdf.renderers import (
    DocumentBuilder,
    ElementRenderer,
    StyledElement,
    TextRenderer,
    as_style_table,
    build_document,
)
from markdown2pdf.serialization import from_dict, from_json, to_dict, to_json
from markdown2pdf.styling import (
    BASE_STYLE,
    DEFAULT_STYLES,
    ResolvedStyle,
    Style,
    StyleMatch,
    StyleResolver,
    resolve,
)
from markdown2pdf.tokens import (
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    Heading,
    Image,
    Inline,
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
)
from markdown2pdf.units import LexicalUnit, UnitKind
from markdown2pdf.visitor import BaseVisitor, plain_text, walk

__version__ = "0.1.0"


def parse(
    source: str | bytes,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Markdown source into a token tree.

    Args:
        source: Markdown text (or UTF-8 bytes)
        source_file: Optional source file path for error messages
        config: Parse configuration; the current context's config if None

    Returns:
        Document root token

    Raises:
        ScanError: If bytes are not valid UTF-8. Malformed Markdown never raises.

    Example:
        >>> doc = parse("# Hello **World**")
        >>> doc.children[0].level
        1
    """
    if config is None:
        return build(scan(source, source_file=source_file))
    with parse_config_context(config):
        return build(scan(source, source_file=source_file))


def convert(
    source: str | bytes,
    table: StyleMatch | Mapping[str, Any] | None = None,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> tuple[StyledElement, ...]:
    """Parse Markdown and lay it out as styled elements.

    Args:
        source: Markdown text (or UTF-8 bytes)
        table: StyleMatch, raw TOML-shaped style data, or None for defaults
        source_file: Optional source file path for error messages
        config: Parse configuration; the current context's config if None

    Returns:
        Styled elements in document order

    Example:
        >>> [type(e).__name__ for e in convert("Hi")]
        ['BlockBreak', 'TextRun', 'BlockBreak']
    """
    doc = parse(source, source_file=source_file, config=config)
    return build_document(doc, table)


class Converter:
    """Reusable Markdown to styled-element converter.

    Holds a parse config and a style table, so repeated conversions share
    one parsed table and one resolver cache per call.

    Usage:
        >>> converter = Converter({"heading": {"1": {"size": 24}}})
        >>> elements = converter("# Title")

        >>> # Access the token tree
        >>> doc = converter.parse("# Heading")
        >>> doc.children[0].level
        1

    Thread Safety:
        Uses ContextVar for configuration and an immutable style table.
        Safe to share one Converter across threads.

    """

    __slots__ = ("_config", "_table")

    def __init__(
        self,
        table: StyleMatch | Mapping[str, Any] | None = None,
        *,
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize converter.

        Args:
            table: StyleMatch or TOML-shaped style data (defaults if None)
            config: Parse configuration (defaults if None)
        """
        self._table = as_style_table(table)
        self._config = config or ParseConfig()

    @property
    def table(self) -> StyleMatch:
        return self._table

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(
        self, source: str | bytes, *, source_file: str | None = None
    ) -> tuple[StyledElement, ...]:
        """Convert Markdown to styled elements."""
        return self.layout(self.parse(source, source_file=source_file))

    def parse(self, source: str | bytes, *, source_file: str | None = None) -> Document:
        """Parse Markdown to a token tree using this converter's config."""
        return parse(source, source_file=source_file, config=self._config)

    def layout(self, doc: Document) -> tuple[StyledElement, ...]:
        """Lay out a parsed document with this converter's style table."""
        return DocumentBuilder(self._table).build(doc)

    def render(self, source: str | bytes, renderer: ElementRenderer[Any]) -> Any:
        """Convert and hand the elements to a renderer."""
        return renderer.render(self(source))

    def resolve(self, token: Token | str, ancestry: tuple[Token | str, ...] = ()) -> Style:
        """Resolve one token's style against this converter's table."""
        return resolve(token, ancestry, self._table)


__all__ = [
    "BASE_STYLE",
    "DEFAULT_STYLES",
    "BaseVisitor",
    "Block",
    "BlockQuote",
    "BuildError",
    "CodeBlock",
    "CodeSpan",
    "Converter",
    "Document",
    "DocumentBuilder",
    "ElementRenderer",
    "Emphasis",
    "Heading",
    "Image",
    "Inline",
    "LexicalUnit",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Literal",
    "Markdown2PdfError",
    "Paragraph",
    "ParseConfig",
    "ResolvedStyle",
    "ScanError",
    "Scanner",
    "SoftBreak",
    "SourceLocation",
    "Style",
    "StyleMatch",
    "StyleResolver",
    "StyledElement",
    "Text",
    "TextRenderer",
    "ThematicBreak",
    "Token",
    "TokenBuilder",
    "UnitKind",
    "__version__",
    "build",
    "build_document",
    "convert",
    "from_dict",
    "from_json",
    "get_parse_config",
    "parse",
    "parse_config_context",
    "plain_text",
    "reset_parse_config",
    "resolve",
    "scan",
    "set_parse_config",
    "to_dict",
    "to_json",
    "walk",
]
