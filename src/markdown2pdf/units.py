"""LexicalUnit and UnitKind definitions for the markdown2pdf scanner.

The scanner produces a flat list of LexicalUnit objects that the token
builder consumes. Each unit has a kind, the raw substring, source
coordinates, and a handful of kind-specific attributes.

Thread Safety:
LexicalUnit is frozen (immutable) and safe to share across threads.

Performance Note:
Units store raw coordinates and create SourceLocation lazily, since most
units never have their location read.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from markdown2pdf.location import SourceLocation


class UnitKind(Enum):
    """Unit kinds produced by the scanner.

    Organized by category:
    - Document structure (EOF, BLANK_LINE, line breaks)
    - Block markers (headings, lists, quotes, fences, rules, comments)
    - Inline content (text, emphasis, code spans, links)

    """

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()
    SOFT_BREAK = auto()  # Line end inside a block
    HARD_BREAK = auto()  # Two trailing spaces or backslash before newline
    PARAGRAPH_LINE = auto()  # Zero-width start of a plain text line

    # Block markers
    HEADING_MARKER = auto()  # # .. ######
    LIST_MARKER = auto()  # -, *, +, 1., 1)
    BLOCK_QUOTE_MARKER = auto()  # >
    THEMATIC_BREAK = auto()  # ---, ***, ___
    FENCE_OPEN = auto()  # ``` or ~~~ with optional language
    FENCE_CLOSE = auto()
    RAW_TEXT = auto()  # Verbatim fence line or code span body
    COMMENT = auto()  # <!-- ... -->

    # Inline
    TEXT = auto()
    EMPHASIS_MARKER = auto()  # run of * or _
    CODE_SPAN_MARKER = auto()  # run of `
    LINK_OPEN = auto()  # [
    IMAGE_OPEN = auto()  # ![
    LINK_CLOSE = auto()  # ] not followed by a destination
    LINK_DESTINATION = auto()  # ](url){attrs}


BLOCK_MARKERS = frozenset(
    {
        UnitKind.HEADING_MARKER,
        UnitKind.LIST_MARKER,
        UnitKind.BLOCK_QUOTE_MARKER,
        UnitKind.THEMATIC_BREAK,
        UnitKind.FENCE_OPEN,
        UnitKind.COMMENT,
        UnitKind.BLANK_LINE,
        UnitKind.EOF,
    }
)


@dataclass(frozen=True, slots=True)
class LexicalUnit:
    """A classified span of the input.

    Attributes:
        kind: The unit kind (from UnitKind enum)
        value: The raw substring from source
        _lineno: Start line number (1-indexed)
        _col: Start column (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        level: Heading level (HEADING_MARKER)
        indent: Leading indentation in columns (LIST_MARKER, PARAGRAPH_LINE)
        ordered: True for numbered list markers
        char: Delimiter character (EMPHASIS_MARKER, fences), or the
            escaped character for a backslash escape TEXT unit
        can_open: Emphasis run may open a span
        can_close: Emphasis run may close a span
        info: Fence language tag
        url: Link destination (LINK_DESTINATION)
        attrs: Raw ``{...}`` attribute text after a link destination

    Transient: discarded once the token builder has consumed the list.

    """

    kind: UnitKind
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    level: int = 0
    indent: int = 0
    ordered: bool = False
    char: str = ""
    can_open: bool = False
    can_close: bool = False
    info: str = ""
    url: str = ""
    attrs: str = ""
    _source_file: str | None = None
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from markdown2pdf.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def offset(self) -> int:
        return self._start_offset

    @property
    def lineno(self) -> int:
        return self._lineno

    @property
    def col(self) -> int:
        return self._col

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"LexicalUnit({self.kind.name}, {val!r}, {self._lineno}:{self._col})"
