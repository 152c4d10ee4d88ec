"""Token builder producing the typed token tree.

Consumes the unit list from the scanner and builds a Document of frozen
tokens.

Architecture:
The builder uses a mixin-based design for separation of concerns:
- `UnitNavigationMixin`: Unit stream traversal
- `InlineBuilderMixin`: Inline content (emphasis, links, code spans)
- `ListBuilderMixin`: Lists and nested lists
- `BlockBuilderMixin`: Block dispatch (headings, paragraphs, fences, quotes)

Thread Safety:
- TokenBuilder produces an immutable tree (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share the tree across threads

"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from markdown2pdf.config import ParseConfig, get_parse_config
from markdown2pdf.errors import BuildError
from markdown2pdf.location import SourceLocation
from markdown2pdf.parsing.blocks import BlockBuilderMixin, ListBuilderMixin
from markdown2pdf.parsing.inline import InlineBuilderMixin
from markdown2pdf.parsing.unit_nav import UnitNavigationMixin
from markdown2pdf.tokens import Block, Document
from markdown2pdf.units import LexicalUnit, UnitKind
from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)


class TokenBuilder(
    UnitNavigationMixin,
    InlineBuilderMixin,
    ListBuilderMixin,
    BlockBuilderMixin,
):
    """Builds a Document from scanner units.

    Usage:
        >>> from markdown2pdf.lexer import scan
        >>> doc = TokenBuilder(scan("# Hello")).build()
        >>> doc.children[0]
        Heading(level=1, children=(Text(content='Hello'),))

    Thread Safety:
        TokenBuilder instances are single-use and not thread-safe. Create one
        per build. The resulting tree is immutable and thread-safe.

    """

    __slots__ = (
        "_units",
        "_units_len",
        "_pos",
        "_current",
    )

    def __init__(self, units: Sequence[LexicalUnit]) -> None:
        """Initialize builder with a unit stream.

        Configuration is read from ContextVar, not passed as parameters.

        Args:
            units: Units produced by the scanner, ending with EOF
        """
        self._units = units
        self._units_len = len(units)
        self._pos = 0
        self._current: LexicalUnit | None = units[0] if units else None

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def _text_transformer(self) -> Callable[[str], str] | None:
        """Optional callback applied to each plain text token."""
        return self._config.text_transformer

    def build(self) -> Document:
        """Build the token tree.

        Returns:
            Document wrapping the top-level blocks.

        Raises:
            BuildError: If the unit stream is empty or does not end with EOF
        """
        if not self._units or self._units[-1].kind != UnitKind.EOF:
            raise BuildError("Unit stream must end with an EOF unit")

        blocks: list[Block] = []
        while not self._at_end():
            block = self._build_block()
            if block is not None:
                blocks.append(block)

        if self._current is None:
            raise BuildError("Unit stream exhausted before EOF")

        logger.debug("Built %d blocks from %d units", len(blocks), self._units_len)
        return Document(tuple(blocks), location=SourceLocation(lineno=1, col_offset=1))


def build(units: Sequence[LexicalUnit]) -> Document:
    """Build a Document token tree from scanner units.

    Malformed Markdown never raises: unmatched markers, unclosed brackets
    and empty link URLs come back as Literal tokens.

    Raises:
        BuildError: Only when the unit stream breaks the scanner's contract
    """
    return TokenBuilder(units).build()
