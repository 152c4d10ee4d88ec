"""Block-level token building.

Dispatches on the unit that starts each line: headings, paragraphs, fenced
code, block quotes, thematic breaks and comments. Lists live in
``parsing.blocks.list``.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from markdown2pdf.errors import BuildError
from markdown2pdf.parsing.unit_nav import trailing_units
from markdown2pdf.tokens import (
    Block,
    BlockQuote,
    CodeBlock,
    Heading,
    Inline,
    List,
    Paragraph,
    ThematicBreak,
)
from markdown2pdf.units import LexicalUnit, UnitKind
from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)


class BlockBuilderMixin:
    """Mixin for block-level building.

    Required Host Attributes:
        - _current: LexicalUnit | None

    Required Host Methods:
        - _require(), _advance(), _read_line() (UnitNavigationMixin)
        - _build_inline(units, base_level) (InlineBuilderMixin)
        - _build_list() (ListBuilderMixin)

    """

    _current: LexicalUnit | None

    def _require(self) -> LexicalUnit:
        raise NotImplementedError

    def _advance(self) -> LexicalUnit | None:
        raise NotImplementedError

    def _read_line(self) -> tuple[list[LexicalUnit], LexicalUnit]:
        raise NotImplementedError

    def _build_inline(
        self, units: Sequence[LexicalUnit], base_level: int = 0
    ) -> tuple[Inline, ...]:
        raise NotImplementedError

    def _build_list(self) -> List:
        raise NotImplementedError

    def _build_block(self) -> Block | None:
        """Build the block starting at the current unit.

        Returns:
            The block, or None for lines that contribute nothing (blank
            lines, comments).
        """
        unit = self._require()
        kind = unit.kind

        if kind == UnitKind.BLANK_LINE:
            self._advance()
            return None

        if kind == UnitKind.COMMENT:
            logger.debug("Dropping comment at %s", unit.location)
            self._advance()
            return None

        if kind == UnitKind.PARAGRAPH_LINE:
            return self._build_paragraph()

        if kind == UnitKind.HEADING_MARKER:
            self._advance()
            units, line_break = self._read_line()
            units.extend(trailing_units(line_break))
            return Heading(unit.level, self._build_inline(units), location=unit.location)  # type: ignore[arg-type]

        if kind == UnitKind.LIST_MARKER:
            return self._build_list()

        if kind == UnitKind.FENCE_OPEN:
            return self._build_code_block()

        if kind == UnitKind.BLOCK_QUOTE_MARKER:
            return self._build_block_quote()

        if kind == UnitKind.THEMATIC_BREAK:
            self._advance()
            return ThematicBreak(location=unit.location)

        raise BuildError(f"Unexpected {kind.name} unit at block level", unit.offset)

    def _build_paragraph(self) -> Paragraph:
        """Consecutive text lines, joined by their line breaks."""
        first = self._require()
        collected: list[LexicalUnit] = []
        pending_break: LexicalUnit | None = None

        while self._current is not None and self._current.kind == UnitKind.PARAGRAPH_LINE:
            self._advance()
            units, line_break = self._read_line()
            if pending_break is not None:
                collected.append(pending_break)
            collected.extend(units)
            pending_break = line_break

        collected.extend(trailing_units(pending_break))
        return Paragraph(self._build_inline(collected), location=first.location)

    def _build_block_quote(self) -> BlockQuote:
        """Consecutive ``>`` lines plus lazy continuation lines.

        An empty ``>`` line inside the quote becomes a hard break.
        """
        first = self._require()
        collected: list[LexicalUnit] = []
        pending_break: LexicalUnit | None = None

        while self._current is not None and self._current.kind in (
            UnitKind.BLOCK_QUOTE_MARKER,
            UnitKind.PARAGRAPH_LINE,
        ):
            if self._current.kind == UnitKind.PARAGRAPH_LINE and pending_break is None:
                break
            self._advance()
            units, line_break = self._read_line()
            if not units:
                if pending_break is not None and pending_break.kind == UnitKind.SOFT_BREAK:
                    pending_break = dataclasses.replace(line_break, kind=UnitKind.HARD_BREAK)
                continue
            if pending_break is not None and collected:
                collected.append(pending_break)
            collected.extend(units)
            pending_break = line_break

        collected.extend(trailing_units(pending_break))
        return BlockQuote(self._build_inline(collected), location=first.location)

    def _build_code_block(self) -> CodeBlock:
        """Fence open, verbatim lines, then a close fence or end of input."""
        opener = self._require()
        self._advance()

        lines: list[str] = []
        unit = self._require()
        while unit.kind == UnitKind.RAW_TEXT:
            lines.append(unit.value)
            self._advance()
            unit = self._require()

        if unit.kind == UnitKind.FENCE_CLOSE:
            self._advance()
        elif unit.kind == UnitKind.EOF:
            logger.debug("Unterminated code fence at %s closed at end of input", opener.location)
        else:
            raise BuildError(f"Code fence interrupted by {unit.kind.name}", unit.offset)

        return CodeBlock(opener.info or None, "".join(lines), location=opener.location)
