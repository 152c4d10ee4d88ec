"""Line-window scanner with O(n) guaranteed performance.

Scans one line at a time: find the line end, classify the line, then
commit. Position only moves forward, so every call makes progress.

No regex in the hot path.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from markdown2pdf.config import get_parse_config
from markdown2pdf.errors import ScanError
from markdown2pdf.lexer.classifiers import (
    FenceClassifierMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
    ThematicClassifierMixin,
)
from markdown2pdf.lexer.modes import ScannerMode
from markdown2pdf.lexer.scanners import (
    BlockScannerMixin,
    FenceScannerMixin,
    InlineScannerMixin,
)
from markdown2pdf.units import LexicalUnit, UnitKind
from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)


class Scanner(
    # Classifiers (pure logic, no position mutation)
    HeadingClassifierMixin,
    FenceClassifierMixin,
    ThematicClassifierMixin,
    ListClassifierMixin,
    # Scanners (mode-specific scanning logic). InlineScannerMixin must precede
    # BlockScannerMixin so the real _scan_inline wins over the stub.
    InlineScannerMixin,
    BlockScannerMixin,
    FenceScannerMixin,
):
    """Line-window scanner producing LexicalUnit objects.

    Usage:
        >>> scanner = Scanner("# Hello\\n\\nWorld")
        >>> for unit in scanner.tokenize():
        ...     print(unit)
        LexicalUnit(HEADING_MARKER, '#', 1:1)
        LexicalUnit(TEXT, 'Hello', 1:3)
        LexicalUnit(SOFT_BREAK, '\\n', 1:8)
        LexicalUnit(BLANK_LINE, '', 2:1)
        LexicalUnit(PARAGRAPH_LINE, '', 3:1)
        LexicalUnit(TEXT, 'World', 3:1)
        LexicalUnit(SOFT_BREAK, '', 3:6)
        LexicalUnit(EOF, '', 3:6)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_line_start",
        "_mode",
        "_source_file",
        "_fence_char",
        "_fence_count",
        "_fence_info",
        "_fence_indent",
        "_consumed_newline",
        "_saved_lineno",
        "_saved_line_start",
        "_link_attributes",
        "_html_comments",
        "_tab_width",
    )

    def __init__(self, source: str | bytes, source_file: str | None = None) -> None:
        """Initialize scanner with source text.

        Args:
            source: Markdown source, as text or UTF-8 bytes
            source_file: Optional source file path for error messages

        Raises:
            ScanError: If the input is not valid UTF-8 (or holds lone
                surrogates when given as str)
        """
        self._source_file = source_file
        text = _decode(source, source_file)
        self._source = text.replace("\r\n", "\n").replace("\r", "\n")
        self._source_len = len(self._source)
        self._pos = 0
        self._lineno = 1
        self._line_start = 0
        self._mode = ScannerMode.BLOCK

        config = get_parse_config()
        self._link_attributes = config.link_attributes
        self._html_comments = config.html_comments
        self._tab_width = config.tab_width

        # Fenced code state
        self._fence_char: str = ""
        self._fence_count: int = 0
        self._fence_info: str = ""
        self._fence_indent: int = 0

        self._consumed_newline: bool = False
        self._saved_lineno: int = 1
        self._saved_line_start: int = 0

    @property
    def source(self) -> str:
        """The normalized source text the units index into."""
        return self._source

    def tokenize(self) -> Iterator[LexicalUnit]:
        """Scan the source into a unit stream ending with EOF.

        An open code fence at end of input is left unclosed; the builder
        closes it implicitly.
        """
        source_len = self._source_len
        while self._pos < source_len:
            if self._mode == ScannerMode.BLOCK:
                yield from self._scan_block()
            else:
                yield from self._scan_code_fence_content()

        if self._mode == ScannerMode.CODE_FENCE:
            logger.debug("Code fence opened with %r not closed before EOF", self._fence_char)

        self._save_location()
        yield self._make_unit(UnitKind.EOF, "", self._pos, self._pos)

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent width and content start position.

        Spaces count as 1, tabs expand to the next multiple of tab_width.

        Returns:
            (indent_columns, content_start_index)
        """
        tab_width = self._tab_width
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
            elif char == "\t":
                indent += tab_width - (indent % tab_width)
            else:
                break
            pos += 1
        return indent, pos

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end, consuming the newline if present.

        line_end may lie several lines ahead (comment blocks); line tracking
        follows any newlines in the skipped segment.
        """
        segment = self._source[self._pos : line_end]
        newline_count = segment.count("\n")
        if newline_count > 0:
            self._lineno += newline_count
            self._line_start = self._pos + segment.rfind("\n") + 1

        self._pos = line_end
        self._consumed_newline = False
        if self._pos < self._source_len and self._source[self._pos] == "\n":
            self._pos += 1
            self._lineno += 1
            self._line_start = self._pos
            self._consumed_newline = True

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save the current line for O(1) unit location creation.

        Call this at the START of scanning a line, before any position changes.
        """
        self._saved_lineno = self._lineno
        self._saved_line_start = self._line_start

    def _make_unit(
        self,
        kind: UnitKind,
        value: str,
        start_pos: int,
        end_pos: int,
        **attrs: Any,
    ) -> LexicalUnit:
        """Create a LexicalUnit with raw coordinates (lazy SourceLocation).

        Columns are derived from the saved line start, so units on the line
        being scanned need no extra bookkeeping.
        """
        return LexicalUnit(
            kind,
            value,
            self._saved_lineno,
            start_pos - self._saved_line_start + 1,
            start_pos,
            end_pos,
            _source_file=self._source_file,
            **attrs,
        )


def _decode(source: str | bytes, source_file: str | None) -> str:
    """Return source as validated text, raising ScanError on bad encoding."""
    if isinstance(source, bytes | bytearray):
        try:
            return bytes(source).decode("utf-8")
        except UnicodeDecodeError as e:
            prefix = bytes(source[: e.start])
            lineno = prefix.count(b"\n") + 1
            col = e.start - (prefix.rfind(b"\n") + 1) + 1
            raise ScanError(
                f"Invalid UTF-8 byte 0x{source[e.start]:02x}",
                lineno=lineno,
                col_offset=col,
                source_file=source_file,
            ) from e

    try:
        source.encode("utf-8")
    except UnicodeEncodeError as e:
        prefix = source[: e.start]
        lineno = prefix.count("\n") + 1
        col = e.start - (prefix.rfind("\n") + 1) + 1
        raise ScanError(
            f"Unpaired surrogate U+{ord(source[e.start]):04X}",
            lineno=lineno,
            col_offset=col,
            source_file=source_file,
        ) from e
    return source


def scan(source: str | bytes, source_file: str | None = None) -> list[LexicalUnit]:
    """Scan Markdown source into a flat list of lexical units.

    The list always ends with exactly one EOF unit. Each unit's value is
    the substring of the normalized source it covers, and offsets never
    decrease from one unit to the next.

    Args:
        source: Markdown source, as text or UTF-8 bytes
        source_file: Optional source file path for error messages

    Returns:
        Units in source order.

    Raises:
        ScanError: If the input is not valid UTF-8

    Example:
        >>> [u.kind.name for u in scan("*hi*")]
        ['PARAGRAPH_LINE', 'EMPHASIS_MARKER', 'TEXT', 'EMPHASIS_MARKER', 'SOFT_BREAK', 'EOF']

    """
    return list(Scanner(source, source_file).tokenize())
